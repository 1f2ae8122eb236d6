"""Configurable fake payment gateway for development and testing.

Simulates a hosted checkout widget without any external calls. It can be set
to succeed or fail, and to settle immediately or hold payments until
``settle_pending()`` is called, which mimics the asynchronous provider callback.
"""

from uuid import uuid4

from bookhub.payments.gateway.port import (
    FailureCallback,
    PaymentDeclined,
    PaymentGateway,
    PaymentRequest,
    PaymentSucceeded,
    SuccessCallback,
)


class FakeGateway(PaymentGateway):
    """Configurable fake payment gateway."""

    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Payment declined by issuer"
        self.settle_immediately: bool = True
        self.calls: list[dict] = []
        self._pending: list[tuple[PaymentRequest, SuccessCallback, FailureCallback]] = []

    def configure(
        self,
        should_succeed: bool,
        failure_reason: str = "Payment declined by issuer",
        settle_immediately: bool = True,
    ) -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason
        self.settle_immediately = settle_immediately

    def request_payment(
        self,
        request: PaymentRequest,
        on_success: SuccessCallback,
        on_failure: FailureCallback,
    ) -> None:
        self.calls.append(
            {
                "method": "request_payment",
                "amount_minor_units": request.amount_minor_units,
                "currency": request.currency,
                "payer_info": dict(request.payer_info),
            }
        )
        self._pending.append((request, on_success, on_failure))

        if self.settle_immediately:
            self.settle_pending()

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def settle_pending(self) -> list:
        """Settle every held payment with the configured outcome; returns what the callbacks returned."""
        pending, self._pending = self._pending, []
        outcomes = []
        for _request, on_success, on_failure in pending:
            if self.should_succeed:
                outcomes.append(on_success(PaymentSucceeded(payment_reference=f"fake_pay_{uuid4().hex[:14]}")))
            else:
                outcomes.append(on_failure(PaymentDeclined(reason=self.failure_reason)))
        return outcomes
