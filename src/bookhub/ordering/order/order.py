"""Order aggregate: an immutable snapshot of a paid cart plus a mutable lifecycle status.

State Machine:
    PENDING --cancel (customer)--> CANCELLED
    PENDING --advance (admin)--> SHIPPED --advance (admin)--> DELIVERED

Every state other than PENDING is terminal for customer actions. Administrators
may also override the status to any value, bypassing the graph entirely.

Items and the total amount are fixed at creation. Later catalogue edits (price
changes, deletions) never reach an existing order.
"""

from datetime import timedelta
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import Boolean, Float, HasMany, Identifier, Integer, String, ValueObject

from bookhub.domain import bookhub
from bookhub.shared.ids import isoformat, next_id, utc_now
from bookhub.shared.records import fields_from_record, record_from_fields


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


# Forward steps an administrator can take along the graph
_NEXT_STATUS = {
    OrderStatus.PENDING: OrderStatus.SHIPPED,
    OrderStatus.SHIPPED: OrderStatus.DELIVERED,
}

_CANCELLABLE_STATES = {OrderStatus.PENDING}

ADDRESS_FIELDS = ("name", "email", "phone", "address", "city", "state", "pincode")

ITEM_FIELDS = (
    "title",
    "author",
    "category",
    "price",
    "rating",
    "bestseller",
    "cover_image",
    "quantity",
)

ORDER_FIELDS = (
    "id",
    "user_id",
    "total_amount",
    "status",
    "payment_id",
    "created_at",
    "estimated_delivery",
    "updated_at",
)


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@bookhub.value_object(part_of="Order")
class ShippingAddress:
    """Where and to whom an order ships, captured at checkout.

    All fields are mandatory. Once recorded on an order the address never
    changes, whatever happens to the customer's profile later.
    """

    name = String(required=True, max_length=255)
    email = String(required=True, max_length=254)
    phone = String(required=True, max_length=30)
    address = String(required=True, max_length=500)
    city = String(required=True, max_length=100)
    state = String(required=True, max_length=100)
    pincode = String(required=True, max_length=20)

    def to_record(self) -> dict:
        return record_from_fields(self, ADDRESS_FIELDS)

    @classmethod
    def from_record(cls, record):
        return cls(**fields_from_record(record, set(ADDRESS_FIELDS)))


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@bookhub.entity(part_of="Order")
class OrderItem:
    """A purchased line: the book's details and price as they were at checkout."""

    id = Identifier(identifier=True)  # the book id
    title = String(required=True, max_length=255)
    author = String(max_length=255)
    category = String(max_length=100)
    price = Float(required=True, min_value=0.0)
    rating = Float(min_value=0.0, max_value=5.0)
    bestseller = Boolean(default=False)
    cover_image = String(max_length=1000)
    quantity = Integer(required=True, min_value=1)

    def to_record(self) -> dict:
        return record_from_fields(self, ("id", *ITEM_FIELDS))

    @classmethod
    def from_record(cls, record):
        return cls(**fields_from_record(record, {"id", *ITEM_FIELDS}))


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@bookhub.aggregate
class Order:
    id = Identifier(identifier=True)
    user_id = Identifier(required=True)
    items = HasMany(OrderItem)
    total_amount = Float(required=True, min_value=0.0)
    shipping_address = ValueObject(ShippingAddress)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    payment_id = String(max_length=255)
    created_at = String(max_length=40)
    estimated_delivery = String(max_length=40)
    updated_at = String(max_length=40)

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, user_id, items, total_amount, shipping_address, payment_id, delivery_days=7):
        """Create a pending order from checkout data.

        Args:
            user_id: The customer placing the order.
            items: Cart line records. Copied field by field into new OrderItem
                   entities, so the order shares nothing with the live cart.
            total_amount: The amount charged, tax included. Never recomputed.
            shipping_address: A ShippingAddress or a record with all its fields.
            payment_id: The payment reference confirmed by the gateway.
            delivery_days: Offset from creation to the estimated delivery date.
        """
        now = utc_now()
        if not isinstance(shipping_address, ShippingAddress):
            shipping_address = ShippingAddress.from_record(shipping_address)

        return cls(
            id=next_id("ORD"),
            user_id=user_id,
            items=[OrderItem.from_record(record) for record in items],
            total_amount=total_amount,
            shipping_address=shipping_address,
            status=OrderStatus.PENDING.value,
            payment_id=payment_id,
            created_at=isoformat(now),
            estimated_delivery=isoformat(now + timedelta(days=delivery_days)),
            updated_at=isoformat(now),
        )

    # -------------------------------------------------------------------
    # Lifecycle transitions
    # -------------------------------------------------------------------
    def cancel(self):
        """Customer cancellation, allowed only while the order is pending."""
        current = OrderStatus(self.status)
        if current not in _CANCELLABLE_STATES:
            raise ValidationError({"status": [f"Cannot cancel an order that is {current.value}"]})

        self._set_status(OrderStatus.CANCELLED)

    def advance(self):
        """Administrative forward step: pending to shipped, shipped to delivered."""
        current = OrderStatus(self.status)
        target = _NEXT_STATUS.get(current)
        if target is None:
            raise ValidationError({"status": [f"Cannot advance an order that is {current.value}"]})

        self._set_status(target)

    def override_status(self, new_status):
        """Administrative override: set any known status regardless of the current one."""
        try:
            target = OrderStatus(new_status)
        except ValueError:
            raise ValidationError({"status": [f"Unknown order status {new_status!r}"]}) from None

        self._set_status(target)

    def _set_status(self, status):
        self.status = status.value
        self.updated_at = isoformat(utc_now())

    @property
    def is_cancellable(self) -> bool:
        return OrderStatus(self.status) in _CANCELLABLE_STATES

    # -------------------------------------------------------------------
    # Records
    # -------------------------------------------------------------------
    def to_record(self) -> dict:
        record = record_from_fields(self, ORDER_FIELDS)
        record["items"] = [item.to_record() for item in self.items]
        record["shippingAddress"] = self.shipping_address.to_record() if self.shipping_address else None
        return record

    @classmethod
    def from_record(cls, record):
        address = record.get("shippingAddress")
        return cls(
            items=[OrderItem.from_record(item) for item in record.get("items") or []],
            shipping_address=ShippingAddress.from_record(address) if address else None,
            **fields_from_record(record, set(ORDER_FIELDS)),
        )
