from __future__ import annotations

import pytest

from storefront.app.services.cart_sessions import reset_cart_sessions
from storefront.app.services.document_store import JsonFileStore, reset_store


@pytest.fixture(autouse=True)
def _isolated_store(tmp_path):
    """Fresh file-backed store and no cart sessions for every test."""
    store = JsonFileStore(tmp_path / ".store")
    reset_store(store)
    reset_cart_sessions()
    yield store
    reset_store(None)
    reset_cart_sessions()
