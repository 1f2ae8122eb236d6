"""Cart store: persists the process-wide shopping cart."""

from collections.abc import Callable

import structlog

from bookhub.catalogue.book import Book
from bookhub.ordering.cart.cart import CartItem, ShoppingCart
from bookhub.shared.storage import KeyValueStore

logger = structlog.get_logger(__name__)

CART_KEY = "cart.items"


class CartStore:
    """Basket operations for the active session.

    Every mutation runs on a working copy of the cart that replaces the live
    cart only after it has been persisted. Totals and counts are recomputed
    from the lines on every call.
    """

    def __init__(self, storage: KeyValueStore) -> None:
        self._storage = storage
        self._cart = ShoppingCart.restore(storage.get(CART_KEY) or [])

    @property
    def items(self) -> list[CartItem]:
        return [CartItem.from_record(record) for record in self._cart.to_records()]

    @property
    def is_empty(self) -> bool:
        return not self._cart.items

    def snapshot(self) -> list[dict]:
        """Detached records of the current lines, safe to keep after the cart changes."""
        return self._cart.to_records()

    def add_to_cart(self, book: Book | dict, quantity: int = 1) -> None:
        record = book.to_record() if isinstance(book, Book) else dict(book)
        self._mutate(lambda cart: cart.add_item(record, quantity))
        logger.info("Added to cart", book_id=record["id"], quantity=quantity, item_count=self.get_item_count())

    def update_quantity(self, item_id: str, new_quantity: int) -> None:
        self._mutate(lambda cart: cart.update_item_quantity(item_id, new_quantity))
        logger.info("Cart quantity updated", book_id=item_id, quantity=max(new_quantity, 0))

    def remove_from_cart(self, item_id: str) -> None:
        self._mutate(lambda cart: cart.remove_item(item_id))
        logger.info("Removed from cart", book_id=item_id)

    def clear_cart(self) -> None:
        self._mutate(lambda cart: cart.clear())
        logger.info("Cart cleared")

    def get_total(self) -> float:
        return self._cart.total()

    def get_item_count(self) -> int:
        return self._cart.item_count()

    def _mutate(self, change: Callable[[ShoppingCart], object]) -> None:
        cart = ShoppingCart.restore(self._cart.to_records())
        change(cart)
        self._storage.set(CART_KEY, cart.to_records())
        self._cart = cart
