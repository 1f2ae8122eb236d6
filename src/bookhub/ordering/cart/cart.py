"""Shopping cart aggregate: the working basket before checkout.

There is one process-wide cart. Each line is a snapshot of a book's public
fields plus a quantity, identified by the book id, so a book appears at most
once. Quantities never drop below one: a change to zero or less removes the
line instead.
"""

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, Float, HasMany, Identifier, Integer, String

from bookhub.domain import bookhub
from bookhub.shared.records import fields_from_record, record_from_fields

ACTIVE_CART_ID = "active"

LINE_FIELDS = (
    "title",
    "author",
    "category",
    "price",
    "rating",
    "bestseller",
    "cover_image",
    "quantity",
)


@bookhub.entity(part_of="ShoppingCart")
class CartItem:
    id = Identifier(identifier=True)  # the book id
    title = String(required=True, max_length=255)
    author = String(max_length=255)
    category = String(max_length=100)
    price = Float(required=True, min_value=0.0)
    rating = Float(min_value=0.0, max_value=5.0)
    bestseller = Boolean(default=False)
    cover_image = String(max_length=1000)
    quantity = Integer(required=True, min_value=1)

    @property
    def line_total(self) -> float:
        return self.price * self.quantity

    def to_record(self) -> dict:
        return record_from_fields(self, ("id", *LINE_FIELDS))

    @classmethod
    def from_record(cls, record):
        return cls(**fields_from_record(record, {"id", *LINE_FIELDS}))


@bookhub.aggregate
class ShoppingCart:
    id = Identifier(identifier=True)
    items = HasMany(CartItem)

    @invariant.post
    def one_line_per_book(self):
        book_ids = [str(item.id) for item in self.items]
        if len(book_ids) != len(set(book_ids)):
            raise ValidationError({"items": ["A book can appear only once in the cart"]})

    @classmethod
    def restore(cls, records):
        """Rebuild the cart from stored line records."""
        return cls(id=ACTIVE_CART_ID, items=[CartItem.from_record(record) for record in records])

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def find_item(self, book_id):
        return next((i for i in self.items if str(i.id) == str(book_id)), None)

    def add_item(self, book_record, quantity=1):
        """Add a book to the cart, or increase the quantity of its existing line."""
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        existing = self.find_item(book_record["id"])
        if existing is not None:
            existing.quantity += quantity
            return existing

        item = CartItem.from_record({**book_record, "quantity": quantity})
        self.add_items(item)
        return item

    def update_item_quantity(self, book_id, new_quantity):
        """Set a line's quantity. Zero or less removes the line; unknown ids are ignored."""
        item = self.find_item(book_id)
        if item is None:
            return

        if new_quantity <= 0:
            self.remove_items(item)
        else:
            item.quantity = new_quantity

    def remove_item(self, book_id):
        item = self.find_item(book_id)
        if item is not None:
            self.remove_items(item)

    def clear(self):
        for item in list(self.items):
            self.remove_items(item)

    # -------------------------------------------------------------------
    # Derived figures, always computed from the current lines
    # -------------------------------------------------------------------
    def total(self) -> float:
        return sum((item.line_total for item in self.items), 0.0)

    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    def to_records(self) -> list[dict]:
        return [item.to_record() for item in self.items]
