"""Checkout: turns the active cart into an order once payment succeeds.

Flow:
    1. begin_checkout() checks the session, the cart and the shipping address,
       prices the cart and returns a PendingCheckout holding the payment request.
    2. The payment gateway collects the payment and calls back exactly once.
    3a. Success -> OrderStore.create_order() with the priced snapshot, then
        CartStore.clear_cart().
    3b. Failure -> nothing changes; the cart stays as it was.

No order is ever created before the success callback fires.
"""

import structlog
from protean.exceptions import ValidationError

from bookhub.identity.store import IdentityStore
from bookhub.ordering.cart.store import CartStore
from bookhub.ordering.checkout.pricing import CheckoutPricing, price_cart
from bookhub.ordering.order.order import ShippingAddress
from bookhub.ordering.order.store import OrderStore
from bookhub.payments.gateway import get_gateway
from bookhub.payments.gateway.port import PaymentDeclined, PaymentGateway, PaymentRequest, PaymentSucceeded
from bookhub.shared.config import DEFAULT_CURRENCY, DEFAULT_TAX_RATE
from bookhub.shared.results import ErrorKind, Result

logger = structlog.get_logger(__name__)


class PendingCheckout:
    """A priced cart waiting for the payment gateway's terminal callback."""

    def __init__(
        self,
        cart: CartStore,
        orders: OrderStore,
        user_id: str,
        items: list[dict],
        pricing: CheckoutPricing,
        shipping_address: ShippingAddress,
        request: PaymentRequest,
    ) -> None:
        self._cart = cart
        self._orders = orders
        self.user_id = user_id
        self.items = items
        self.pricing = pricing
        self.shipping_address = shipping_address
        self.request = request
        self.outcome: Result | None = None

    @property
    def settled(self) -> bool:
        return self.outcome is not None

    def succeed(self, payment_reference: str) -> Result:
        if self.settled:
            return Result.fail(ErrorKind.ALREADY_SETTLED, "This checkout has already been settled")

        order = self._orders.create_order(
            user_id=self.user_id,
            items=self.items,
            total_amount=self.pricing.total,
            shipping_address=self.shipping_address,
            payment_id=payment_reference,
        )
        self._cart.clear_cart()

        self.outcome = Result.ok(order)
        logger.info("Checkout completed", order_id=order.id, user_id=self.user_id, total=self.pricing.total)
        return self.outcome

    def fail(self, reason: str) -> Result:
        if self.settled:
            return Result.fail(ErrorKind.ALREADY_SETTLED, "This checkout has already been settled")

        self.outcome = Result.fail(ErrorKind.PAYMENT_FAILED, reason)
        logger.warning("Checkout payment failed", user_id=self.user_id, reason=reason)
        return self.outcome

    # Gateway-facing callbacks
    def on_success(self, payment: PaymentSucceeded) -> Result:
        return self.succeed(payment.payment_reference)

    def on_failure(self, payment: PaymentDeclined) -> Result:
        return self.fail(payment.reason)


class CheckoutService:
    """Composes identity, cart and orders at checkout time without owning any of them."""

    def __init__(
        self,
        identity: IdentityStore,
        cart: CartStore,
        orders: OrderStore,
        tax_rate: float = DEFAULT_TAX_RATE,
        currency: str = DEFAULT_CURRENCY,
    ) -> None:
        self._identity = identity
        self._cart = cart
        self._orders = orders
        self.tax_rate = tax_rate
        self.currency = currency

    def quote(self) -> CheckoutPricing:
        """Price the cart as it is right now."""
        return price_cart(self._cart.get_total(), self.tax_rate)

    def begin_checkout(self, shipping_address: dict) -> Result:
        user = self._identity.current_user
        if user is None:
            return Result.fail(ErrorKind.NO_ACTIVE_SESSION, "Please log in to check out")

        if self._cart.is_empty:
            return Result.fail(ErrorKind.EMPTY_CART, "Your cart is empty")

        try:
            address = ShippingAddress.from_record(shipping_address)
        except ValidationError as exc:
            return Result.fail(ErrorKind.VALIDATION_ERROR, "Please fill in all required fields", exc.messages)

        pricing = self.quote()
        request = PaymentRequest(
            amount_minor_units=pricing.amount_minor_units,
            currency=self.currency,
            payer_info={"name": address.name, "email": address.email, "contact": address.phone},
        )
        pending = PendingCheckout(
            cart=self._cart,
            orders=self._orders,
            user_id=user["id"],
            items=self._cart.snapshot(),
            pricing=pricing,
            shipping_address=address,
            request=request,
        )

        logger.info(
            "Checkout started",
            user_id=user["id"],
            subtotal=pricing.subtotal,
            tax=pricing.tax,
            total=pricing.total,
            amount_minor_units=request.amount_minor_units,
        )
        return Result.ok(pending)

    def pay(self, shipping_address: dict, gateway: PaymentGateway | None = None) -> Result:
        """Begin checkout and hand the payment request to ``gateway``.

        Returns the PendingCheckout; its ``outcome`` is set once the gateway
        calls back, which may already have happened when this returns.
        """
        started = self.begin_checkout(shipping_address)
        if not started:
            return started

        pending = started.value
        (gateway or get_gateway()).request_payment(pending.request, pending.on_success, pending.on_failure)
        return started
