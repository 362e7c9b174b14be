"""Global pytest fixtures for recordgate."""

from __future__ import annotations

import pytest

from recordgate.adapters.store.memory import InMemoryStore

pytest_plugins = [
    "tests.fixtures.sqlite",
    "tests.fixtures.records",
]


@pytest.fixture
def memory_store() -> InMemoryStore:
    """A fresh, empty in-memory store."""
    return InMemoryStore()
