"""Book aggregate: a sellable title in the catalogue."""

from protean.fields import Boolean, Float, Identifier, String, Text

from bookhub.domain import bookhub
from bookhub.shared.ids import isoformat, next_id, utc_now
from bookhub.shared.records import fields_from_record, record_from_fields

BOOK_FIELDS = (
    "id",
    "title",
    "author",
    "category",
    "price",
    "rating",
    "bestseller",
    "cover_image",
    "description",
    "created_at",
)


@bookhub.aggregate
class Book:
    id = Identifier(identifier=True)
    title = String(required=True, max_length=255)
    author = String(required=True, max_length=255)
    category = String(required=True, max_length=100)
    price = Float(required=True, min_value=0.0)
    rating = Float(default=0.0, min_value=0.0, max_value=5.0)
    bestseller = Boolean(default=False)
    cover_image = String(max_length=1000)
    description = Text()
    created_at = String(max_length=40)

    @classmethod
    def create(cls, **details):
        """A new catalogue entry with a fresh time-based id and creation timestamp."""
        details.pop("id", None)
        details.pop("created_at", None)
        return cls(id=next_id(), created_at=isoformat(utc_now()), **details)

    def to_record(self) -> dict:
        return record_from_fields(self, BOOK_FIELDS)

    @classmethod
    def from_record(cls, record):
        return cls(**fields_from_record(record, set(BOOK_FIELDS)))
