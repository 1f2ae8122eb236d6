"""Catalogue browsing: search, category filter and sort orders."""

from enum import Enum

from bookhub.catalogue.book import Book

ALL_CATEGORIES = "All"

CATEGORIES = (
    ALL_CATEGORIES,
    "Fiction",
    "Non-Fiction",
    "Mystery",
    "Romance",
    "Science",
    "Science Fiction",
    "Fantasy",
)


class SortOrder(Enum):
    NEWEST = "newest"
    PRICE_LOW = "price-low"
    PRICE_HIGH = "price-high"
    RATING = "rating"
    BESTSELLER = "bestseller"


_SORT_KEYS = {
    SortOrder.PRICE_LOW: (lambda book: book.price, False),
    SortOrder.PRICE_HIGH: (lambda book: book.price, True),
    SortOrder.RATING: (lambda book: book.rating or 0.0, True),
    SortOrder.BESTSELLER: (lambda book: bool(book.bestseller), True),
}


def browse_books(
    books: list[Book],
    query: str = "",
    category: str = ALL_CATEGORIES,
    sort_by: SortOrder | str = SortOrder.NEWEST,
) -> list[Book]:
    """Filter and order a catalogue snapshot for display.

    ``query`` matches title or author, case-insensitively. ``newest`` keeps the
    stored order. Sorting is stable, so ties keep their stored order too.
    """
    needle = query.strip().lower()
    if needle:
        books = [book for book in books if needle in book.title.lower() or needle in book.author.lower()]

    if category != ALL_CATEGORIES:
        books = [book for book in books if book.category == category]

    order = SortOrder(sort_by)
    if order is SortOrder.NEWEST:
        return list(books)

    key, reverse = _SORT_KEYS[order]
    return sorted(books, key=key, reverse=reverse)
