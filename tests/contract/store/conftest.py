"""Pytest fixtures for Store contract tests."""

from __future__ import annotations

from collections.abc import Iterable

import pytest

from recordgate.adapters.store.memory import InMemoryStore
from recordgate.domain.records import RecordType
from recordgate.interfaces.store import Store

# pylint: disable=redefined-outer-name


@pytest.fixture(params=["memory", "sqlite"])
def record_store(request: pytest.FixtureRequest) -> Iterable[Store]:
    """Return a fresh store instance for the requested backend.

    Current params:
      - `"memory"` → `InMemoryStore` (non-durable, in-memory)
      - `"sqlite"` → `SqlAlchemyStore` (SQLite in-memory via SQLAlchemy)

    Extend by adding new identifiers to `params` and branching below to
    construct the corresponding backend.
    """
    match request.param:
        case "memory":
            yield InMemoryStore()
        case "sqlite":
            yield request.getfixturevalue("sqlite_store")
        case _:
            raise ValueError(f"unknown store type: {request.param}")


@pytest.fixture(scope="session")
def notes() -> RecordType:
    """A small record type covering every column type."""
    return (
        RecordType.declare("notes")
        .columns(body="string", weight="float", rank="int", pinned="bool")
        .build()
    )
