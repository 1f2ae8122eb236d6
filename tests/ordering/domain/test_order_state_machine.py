"""Order status transitions.

PENDING --cancel--> CANCELLED
PENDING --advance--> SHIPPED --advance--> DELIVERED
Any status --override--> any known status
"""

import pytest
from bookhub.ordering.order.order import Order, OrderStatus
from protean.exceptions import ValidationError


@pytest.fixture
def order(shipping_address):
    return Order.place(
        user_id="user-1",
        items=[{"id": "1", "title": "Pride and Prejudice", "price": 299.0, "quantity": 1}],
        total_amount=352.82,
        shipping_address=shipping_address,
        payment_id="pay_1",
    )


def _in_status(order, status):
    order.status = status.value
    return order


class TestCancel:
    def test_pending_can_be_cancelled(self, order):
        assert order.is_cancellable
        order.cancel()
        assert order.status == OrderStatus.CANCELLED.value

    @pytest.mark.parametrize("status", [OrderStatus.SHIPPED, OrderStatus.DELIVERED, OrderStatus.CANCELLED])
    def test_only_pending_can_be_cancelled(self, order, status):
        _in_status(order, status)
        assert not order.is_cancellable
        with pytest.raises(ValidationError) as exc:
            order.cancel()
        assert "status" in exc.value.messages
        assert order.status == status.value


class TestAdvance:
    def test_full_path(self, order):
        order.advance()
        assert order.status == OrderStatus.SHIPPED.value
        order.advance()
        assert order.status == OrderStatus.DELIVERED.value

    @pytest.mark.parametrize("status", [OrderStatus.DELIVERED, OrderStatus.CANCELLED])
    def test_terminal_states_cannot_advance(self, order, status):
        _in_status(order, status)
        with pytest.raises(ValidationError):
            order.advance()
        assert order.status == status.value


class TestOverride:
    def test_any_known_status(self, order):
        order.override_status("delivered")
        order.override_status("pending")
        assert order.status == OrderStatus.PENDING.value

    def test_override_revives_cancelled_order(self, order):
        order.cancel()
        order.override_status("shipped")
        assert order.status == OrderStatus.SHIPPED.value

    def test_unknown_status_rejected(self, order):
        with pytest.raises(ValidationError):
            order.override_status("lost")
        assert order.status == OrderStatus.PENDING.value

    def test_transition_touches_updated_at_only(self, order):
        created_at = order.created_at
        order.updated_at = "2000-01-01T00:00:00.000Z"
        order.override_status("shipped")
        assert order.updated_at != "2000-01-01T00:00:00.000Z"
        assert order.created_at == created_at
