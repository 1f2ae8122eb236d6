"""Storefront composition root.

Builds the four stores and the checkout service once, over one shared storage
medium, and hands them out by reference. Nothing in the package keeps a
module-level store; whoever needs a store receives it from here.
"""

from protean.domain import Domain

from bookhub.catalogue.store import CatalogStore
from bookhub.domain import init_domain, logger
from bookhub.identity.roles import role_policy_for
from bookhub.identity.store import IdentityStore
from bookhub.ordering.cart.store import CartStore
from bookhub.ordering.checkout.service import CheckoutService
from bookhub.ordering.order.store import OrderStore
from bookhub.shared.config import Settings
from bookhub.shared.logging import add_context, clear_context, configure_logging
from bookhub.shared.storage import InMemoryStore, JsonFileStore, KeyValueStore


class Storefront:
    def __init__(self, storage: KeyValueStore, settings: Settings | None = None) -> None:
        self.settings = settings or Settings()
        self.storage = storage

        self.identity = IdentityStore(storage, role_policy=role_policy_for(self.settings.role_policy))
        self.catalog = CatalogStore(storage)
        self.cart = CartStore(storage)
        self.orders = OrderStore(storage, delivery_days=self.settings.delivery_days)
        self.checkout = CheckoutService(
            identity=self.identity,
            cart=self.cart,
            orders=self.orders,
            tax_rate=self.settings.tax_rate,
            currency=self.settings.currency,
        )


def storage_for(settings: Settings) -> KeyValueStore:
    if settings.data_dir is None:
        return InMemoryStore()
    return JsonFileStore(settings.data_dir)


class StorefrontApp:
    """Process-level wrapper: domain context, logging and the storefront container.

    Usable as a context manager::

        with StorefrontApp() as storefront:
            storefront.identity.login(...)
    """

    def __init__(self, settings: Settings | None = None, storage: KeyValueStore | None = None) -> None:
        self.settings = settings or Settings.from_env()
        self._storage = storage
        self._domain: Domain | None = None
        self._context = None
        self.storefront: Storefront | None = None

    def open(self) -> Storefront:
        configure_logging(self.settings.log_dir)
        add_context(data_dir=str(self.settings.data_dir) if self.settings.data_dir else None)

        self._domain = init_domain()
        self._context = self._domain.domain_context()
        self._context.push()

        storage = self._storage or storage_for(self.settings)
        self.storefront = Storefront(storage, self.settings)

        logger.info(
            "Storefront opened",
            storage=type(storage).__name__,
            books=len(self.storefront.catalog),
            orders=len(self.storefront.orders.orders),
        )
        return self.storefront

    def close(self) -> None:
        if self._context is not None:
            self._context.pop()
            self._context = None
        self.storefront = None
        clear_context()

    def __enter__(self) -> Storefront:
        return self.open()

    def __exit__(self, *exc_info) -> None:
        self.close()
