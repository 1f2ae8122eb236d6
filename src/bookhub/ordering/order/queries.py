"""Read-side helpers for order history and the admin order list."""

from bookhub.ordering.order.order import Order


def newest_first(orders: list[Order]) -> list[Order]:
    return sorted(orders, key=lambda order: (order.created_at or "", str(order.id)), reverse=True)


def search_orders(orders: list[Order], query: str = "") -> list[Order]:
    """Orders whose id contains ``query`` (case-insensitive), newest first."""
    needle = query.strip().lower()
    matches = [order for order in orders if needle in str(order.id).lower()]
    return newest_first(matches)
