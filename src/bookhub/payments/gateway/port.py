"""Payment gateway port (abstract interface).

The storefront never talks to a payment provider directly. It hands a
``PaymentRequest`` to a gateway adapter, which later invokes exactly one
terminal callback: ``on_success`` with the provider's payment reference, or
``on_failure`` with a reason. Orders are created only from ``on_success``.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field


@dataclass(frozen=True)
class PaymentRequest:
    """What the gateway needs to collect a payment."""

    amount_minor_units: int
    currency: str
    payer_info: dict = field(default_factory=dict)


@dataclass(frozen=True)
class PaymentSucceeded:
    payment_reference: str


@dataclass(frozen=True)
class PaymentDeclined:
    reason: str


SuccessCallback = Callable[[PaymentSucceeded], object]
FailureCallback = Callable[[PaymentDeclined], object]


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    @abstractmethod
    def request_payment(
        self,
        request: PaymentRequest,
        on_success: SuccessCallback,
        on_failure: FailureCallback,
    ) -> None:
        """Start collecting a payment; call exactly one of the callbacks when it settles."""
        ...
