import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Initialize the domain and push its domain_context. The activated domain can then be referred to elsewhere as `current_domain`
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env

    from bookhub.domain import init_domain

    domain = init_domain()
    domain.domain_context().push()


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture
def storage():
    from bookhub.shared.storage import InMemoryStore

    return InMemoryStore()


@pytest.fixture
def storefront(storage):
    from bookhub.storefront import Storefront

    return Storefront(storage)


@pytest.fixture(autouse=True)
def run_around_tests():
    """Reset the payment gateway factory after every test"""
    yield

    from bookhub.payments.gateway import reset_gateway

    reset_gateway()


@pytest.fixture
def make_book():
    from bookhub.catalogue.book import Book

    def _make_book(title="Test Book", price=100.0, **details):
        details.setdefault("author", "Test Author")
        details.setdefault("category", "Fiction")
        return Book.create(title=title, price=price, **details)

    return _make_book


@pytest.fixture
def shipping_address():
    return {
        "name": "Asha Rao",
        "email": "asha@example.com",
        "phone": "9876543210",
        "address": "12 MG Road",
        "city": "Bengaluru",
        "state": "Karnataka",
        "pincode": "560001",
    }
