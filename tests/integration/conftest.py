"""Fixtures for tests that persist to a data directory and reopen it."""

import pytest
from bookhub.shared.storage import JsonFileStore
from bookhub.storefront import Storefront


@pytest.fixture
def data_dir(tmp_path):
    return tmp_path / "bookhub-data"


@pytest.fixture
def open_storefront(data_dir):
    """Build a fresh Storefront over the same data directory, as a restarted process would."""

    def _open():
        return Storefront(JsonFileStore(data_dir))

    return _open
