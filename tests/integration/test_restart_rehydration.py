"""Every collection survives a restart over the same data directory."""

import logging

import pytest
from bookhub.catalogue.seed import DEFAULT_CATALOG
from bookhub.shared.config import Settings
from bookhub.shared.storage import InMemoryStore
from bookhub.storefront import Storefront, StorefrontApp


def _shop(storefront, shipping_address):
    storefront.identity.register({"email": "reader@example.com", "name": "Reader", "password": "s3cret"})
    storefront.catalog.add_book(
        {"title": "Dracula", "author": "Bram Stoker", "category": "Fiction", "price": 259.0}
    )
    storefront.cart.add_to_cart(storefront.catalog.get_book_by_id("1"), 2)
    storefront.cart.add_to_cart(storefront.catalog.get_book_by_id("3"))
    pending = storefront.checkout.begin_checkout(shipping_address).value
    order = pending.succeed("pay_restart").value
    storefront.cart.add_to_cart(storefront.catalog.get_book_by_id("5"))
    return order


class TestRestart:
    def test_collections_round_trip(self, open_storefront, shipping_address):
        first = open_storefront()
        order = _shop(first, shipping_address)

        second = open_storefront()

        assert second.identity.current_user == first.identity.current_user
        assert second.identity.registered_users == first.identity.registered_users
        assert [b.to_record() for b in second.catalog.books] == [b.to_record() for b in first.catalog.books]
        assert second.cart.snapshot() == first.cart.snapshot()
        assert [o.to_record() for o in second.orders.orders] == [o.to_record() for o in first.orders.orders]
        assert second.orders.get_order(order.id).total_amount == 940.46

    def test_derived_figures_recomputed(self, open_storefront, shipping_address):
        first = open_storefront()
        _shop(first, shipping_address)

        second = open_storefront()
        assert second.cart.get_total() == first.cart.get_total() == 179.0
        assert second.cart.get_item_count() == 1

    def test_registered_user_logs_in_after_restart(self, open_storefront, shipping_address):
        first = open_storefront()
        _shop(first, shipping_address)
        first.identity.logout()

        second = open_storefront()
        assert not second.identity.is_authenticated
        assert second.identity.login("reader@example.com", "s3cret").success

    def test_seed_not_reapplied(self, open_storefront):
        first = open_storefront()
        first.catalog.delete_book("1")
        first.catalog.update_book("2", {"price": 99.0})

        second = open_storefront()
        assert len(second.catalog) == len(DEFAULT_CATALOG) - 1
        assert second.catalog.get_book_by_id("1") is None
        assert second.catalog.get_book_by_id("2").price == 99.0

    def test_status_changes_persist(self, open_storefront, shipping_address):
        first = open_storefront()
        order = _shop(first, shipping_address)
        first.orders.advance_order(order.id)

        assert open_storefront().orders.get_order(order.id).status == "shipped"


class TestStorefrontApp:
    @pytest.fixture(autouse=True)
    def restore_logging(self):
        root = logging.getLogger()
        handlers, level = list(root.handlers), root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_open_and_reopen(self, data_dir):
        settings = Settings(data_dir=data_dir, delivery_days=3)

        with StorefrontApp(settings) as storefront:
            assert storefront.identity.login("admin@bookhub.com", "admin123").success
            assert storefront.settings.delivery_days == 3
            assert len(storefront.catalog) == len(DEFAULT_CATALOG)

        assert (data_dir / "catalog.books.json").exists()

        with StorefrontApp(settings) as storefront:
            assert storefront.identity.is_admin

    def test_close_is_idempotent(self, data_dir):
        app = StorefrontApp(Settings(data_dir=data_dir))
        app.open()
        app.close()
        app.close()
        assert app.storefront is None

    def test_in_memory_without_data_dir(self):
        with StorefrontApp(Settings()) as storefront:
            storefront.cart.add_to_cart(storefront.catalog.get_book_by_id("1"))

        with StorefrontApp(Settings()) as storefront:
            assert storefront.cart.is_empty


class TestStorefrontSettings:
    def test_role_policy_from_settings(self):
        storefront = Storefront(InMemoryStore(), Settings(role_policy="user"))
        storefront.identity.register({"email": "admin-wannabe@example.com", "name": "W", "password": "pw"})
        assert not storefront.identity.is_admin

    def test_tax_rate_from_settings(self):
        storefront = Storefront(InMemoryStore(), Settings(tax_rate=0.05))
        storefront.cart.add_to_cart(storefront.catalog.get_book_by_id("1"))
        assert storefront.checkout.quote().total == 313.95
