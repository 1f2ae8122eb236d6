"""Infrastructure exceptions.

Business-rule failures are never raised; stores return them as ``Result``
values. These exceptions signal that the storefront itself cannot proceed.
"""


class BookhubError(Exception):
    """Base class for infrastructure failures in the storefront."""


class StorageError(BookhubError):
    """The persistence medium is unavailable, unwritable or holds corrupt data."""
