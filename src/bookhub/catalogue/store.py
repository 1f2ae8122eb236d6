"""Catalogue store: the mutable, persisted set of sellable books."""

import structlog

from bookhub.catalogue.book import BOOK_FIELDS, Book
from bookhub.catalogue.seed import DEFAULT_CATALOG
from bookhub.shared.records import fields_from_record
from bookhub.shared.storage import KeyValueStore

logger = structlog.get_logger(__name__)

BOOKS_KEY = "catalog.books"

_EDITABLE_FIELDS = set(BOOK_FIELDS) - {"id", "created_at"}


def _copy(book: Book) -> Book:
    return Book.from_record(book.to_record())


class CatalogStore:
    """Administrative CRUD over the catalogue, keyed by book id.

    On first start (nothing persisted under ``catalog.books``) the seed catalogue
    is written to storage immediately. Later starts load the persisted copy and
    never re-apply the seed, even if the seed itself has changed.
    """

    def __init__(self, storage: KeyValueStore, seed: list[dict] | None = None) -> None:
        self._storage = storage

        records = storage.get(BOOKS_KEY)
        if records is None:
            books = [Book.from_record(record) for record in (DEFAULT_CATALOG if seed is None else seed)]
            self._persist(books)
            logger.info("Catalogue seeded", count=len(books))
        else:
            self._books = [Book.from_record(record) for record in records]

    @property
    def books(self) -> list[Book]:
        return [_copy(book) for book in self._books]

    def __len__(self) -> int:
        return len(self._books)

    def get_book_by_id(self, book_id: str) -> Book | None:
        book = self._find(book_id)
        return _copy(book) if book is not None else None

    def add_book(self, details: dict) -> Book:
        """Append a new book. Raises protean ``ValidationError`` for invalid details."""
        book = Book.create(**fields_from_record(details, _EDITABLE_FIELDS))
        self._persist([*self._books, book])

        logger.info("Book added", book_id=book.id, title=book.title, price=book.price)
        return _copy(book)

    def update_book(self, book_id: str, patch: dict) -> Book | None:
        """Merge ``patch`` into the book with ``book_id``.

        An unknown id is a silent no-op and returns None. Invalid values raise
        protean ``ValidationError`` and leave the catalogue untouched.
        """
        index = self._index_of(book_id)
        if index is None:
            logger.debug("Book update skipped, unknown id", book_id=book_id)
            return None

        current = self._books[index]
        merged = {
            **fields_from_record(current.to_record(), set(BOOK_FIELDS)),
            **fields_from_record(patch, _EDITABLE_FIELDS),
        }
        updated = Book(**merged)

        books = list(self._books)
        books[index] = updated
        self._persist(books)

        logger.info("Book updated", book_id=book_id, fields=sorted(patch))
        return _copy(updated)

    def delete_book(self, book_id: str) -> bool:
        """Remove the book with ``book_id``. Returns False when there was nothing to remove."""
        index = self._index_of(book_id)
        if index is None:
            logger.debug("Book delete skipped, unknown id", book_id=book_id)
            return False

        self._persist(self._books[:index] + self._books[index + 1 :])

        logger.info("Book deleted", book_id=book_id)
        return True

    def _index_of(self, book_id: str) -> int | None:
        return next((i for i, book in enumerate(self._books) if str(book.id) == str(book_id)), None)

    def _find(self, book_id: str) -> Book | None:
        index = self._index_of(book_id)
        return self._books[index] if index is not None else None

    def _persist(self, books: list[Book]) -> None:
        self._storage.set(BOOKS_KEY, [book.to_record() for book in books])
        self._books = books
