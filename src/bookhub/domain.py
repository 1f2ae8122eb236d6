"""BookHub domain: session/identity, catalogue, cart and orders.

A single protean domain hosts the four bounded contexts of the storefront.
Aggregates are persisted as JSON records through the key-value port in
``bookhub.shared.storage`` rather than through protean repositories, so the
domain only needs the in-memory defaults for its own infrastructure.
"""

import importlib
import logging

import structlog
from protean.domain import Domain

bookhub = Domain(name="bookhub")

logger = structlog.get_logger(__name__)

# Suppress noisy library loggers
logging.getLogger("protean").setLevel(logging.WARNING)

_ELEMENT_MODULES = (
    "bookhub.catalogue.book",
    "bookhub.identity.user",
    "bookhub.ordering.cart.cart",
    "bookhub.ordering.order.order",
)

_initialized = False


def init_domain() -> Domain:
    """Register every domain element and initialize the domain once per process."""
    global _initialized
    if _initialized:
        return bookhub

    # Element modules register themselves with the domain on import
    for module in _ELEMENT_MODULES:
        importlib.import_module(module)

    bookhub.init(traverse=False)
    _initialized = True
    logger.debug("Domain initialized", domain=bookhub.name)
    return bookhub
