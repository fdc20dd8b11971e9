"""Shared fixtures: isolated settings, in-memory storage, a fixed clock."""

import json
from datetime import date

import pytest

from expense_tracker.config import get_settings
from expense_tracker.ledger import LedgerStore
from expense_tracker.services.storage import InMemoryStorage


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Run every test in an empty directory with default settings."""
    monkeypatch.chdir(tmp_path)
    for var in (
        "EXPENSE_TRACKER_DATA_FILE",
        "EXPENSE_TRACKER_LOG_LEVEL",
        "EXPENSE_TRACKER_LOG_JSON",
        "EXPENSE_TRACKER_JSON_INDENT",
    ):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def today():
    return date(2024, 5, 2)


@pytest.fixture
def memory_storage():
    return InMemoryStorage("[]")


@pytest.fixture
def ledger(memory_storage, today):
    return LedgerStore(memory_storage, today=lambda: today)


@pytest.fixture
def store_text():
    """Serialize raw expense dicts the way the tool writes them."""
    def _make(*records: dict) -> str:
        return json.dumps(list(records), indent=2)
    return _make
