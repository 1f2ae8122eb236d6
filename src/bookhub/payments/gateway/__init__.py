"""The active payment gateway.

Checkout charges through ``get_gateway()`` unless it is handed an adapter
explicitly. A FakeGateway is installed on first use; a provider adapter
implementing ``PaymentGateway`` replaces it through ``set_gateway()``.
"""

from collections.abc import Iterator
from contextlib import contextmanager

from bookhub.payments.gateway.fake_adapter import FakeGateway
from bookhub.payments.gateway.port import PaymentGateway

_active: PaymentGateway | None = None


def get_gateway() -> PaymentGateway:
    global _active
    if _active is None:
        _active = FakeGateway()
    return _active


def set_gateway(gateway: PaymentGateway) -> None:
    global _active
    _active = gateway


def reset_gateway() -> None:
    """Drop the active adapter; the next ``get_gateway()`` installs a fresh FakeGateway."""
    global _active
    _active = None


@contextmanager
def gateway_override(gateway: PaymentGateway) -> Iterator[PaymentGateway]:
    """Use ``gateway`` inside the block, then restore whatever was active before."""
    global _active
    previous = _active
    _active = gateway
    try:
        yield gateway
    finally:
        _active = previous
