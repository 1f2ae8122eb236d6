"""Order store: order creation, status transitions and per-user history."""

from collections.abc import Callable

import structlog
from protean.exceptions import ValidationError

from bookhub.ordering.order.order import Order, ShippingAddress
from bookhub.shared.config import DEFAULT_DELIVERY_DAYS
from bookhub.shared.results import ErrorKind, Result
from bookhub.shared.storage import KeyValueStore

logger = structlog.get_logger(__name__)

ORDERS_KEY = "orders"


def _copy(order: Order) -> Order:
    return Order.from_record(order.to_record())


class OrderStore:
    """Persisted orders in insertion order.

    Two authority levels change an order's status: ``cancel_order`` is the
    customer transition and follows the state machine; ``advance_order`` and
    ``update_order_status`` are administrative, the latter an unconditional
    override.
    """

    def __init__(self, storage: KeyValueStore, delivery_days: int = DEFAULT_DELIVERY_DAYS) -> None:
        self._storage = storage
        self._delivery_days = delivery_days
        self._orders = [Order.from_record(record) for record in storage.get(ORDERS_KEY) or []]

    @property
    def orders(self) -> list[Order]:
        return [_copy(order) for order in self._orders]

    def get_order(self, order_id: str) -> Order | None:
        order = self._find(order_id)
        return _copy(order) if order is not None else None

    def get_user_orders(self, user_id: str) -> list[Order]:
        """Orders placed by ``user_id`` in the order they were created; callers sort for display."""
        return [_copy(order) for order in self._orders if str(order.user_id) == str(user_id)]

    def create_order(
        self,
        user_id: str,
        items: list[dict],
        total_amount: float,
        shipping_address: ShippingAddress | dict,
        payment_id: str,
    ) -> Order:
        """Record a paid order.

        Must be called only after the payment gateway has confirmed success.
        The items are deep-copied into the order, so clearing the cart
        afterwards leaves the order intact.
        """
        order = Order.place(
            user_id=user_id,
            items=items,
            total_amount=total_amount,
            shipping_address=shipping_address,
            payment_id=payment_id,
            delivery_days=self._delivery_days,
        )
        self._persist([*self._orders, order])

        logger.info(
            "Order created",
            order_id=order.id,
            user_id=user_id,
            item_count=len(order.items),
            total_amount=order.total_amount,
            payment_id=payment_id,
        )
        return _copy(order)

    def cancel_order(self, order_id: str) -> Result:
        result = self._transition(order_id, lambda order: order.cancel(), ErrorKind.CANNOT_CANCEL)
        if result:
            logger.info("Order cancelled", order_id=order_id)
        return result

    def advance_order(self, order_id: str) -> Result:
        result = self._transition(order_id, lambda order: order.advance(), ErrorKind.INVALID_TRANSITION)
        if result:
            logger.info("Order advanced", order_id=order_id, status=result.value.status)
        return result

    def update_order_status(self, order_id: str, new_status: str) -> Result:
        result = self._transition(
            order_id,
            lambda order: order.override_status(new_status),
            ErrorKind.VALIDATION_ERROR,
        )
        if result:
            logger.info("Order status overridden", order_id=order_id, status=new_status)
        return result

    def _transition(self, order_id: str, change: Callable[[Order], None], failure: ErrorKind) -> Result:
        index = self._index_of(order_id)
        if index is None:
            return Result.fail(ErrorKind.NOT_FOUND, f"Order {order_id} not found")

        order = _copy(self._orders[index])
        try:
            change(order)
        except ValidationError as exc:
            message = "; ".join(exc.messages.get("status", [])) or "Invalid status change"
            logger.info("Order status change rejected", order_id=order_id, reason=message)
            return Result.fail(failure, message, exc.messages)

        orders = list(self._orders)
        orders[index] = order
        self._persist(orders)
        return Result.ok(_copy(order))

    def _index_of(self, order_id: str) -> int | None:
        return next((i for i, order in enumerate(self._orders) if str(order.id) == str(order_id)), None)

    def _find(self, order_id: str) -> Order | None:
        index = self._index_of(order_id)
        return self._orders[index] if index is not None else None

    def _persist(self, orders: list[Order]) -> None:
        self._storage.set(ORDERS_KEY, [order.to_record() for order in orders])
        self._orders = orders
