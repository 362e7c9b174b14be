"""Contract tests for the Store port.

This module verifies backend-agnostic behavior:
- table lifecycle (create is idempotent; reset empties)
- insert identities (positive, increasing, never reused after reset)
- update and get semantics
- error mapping (TableNotFoundError, RecordNotFoundError)
"""

from __future__ import annotations

import pytest

from recordgate.interfaces.store import RecordNotFoundError, Store, TableNotFoundError

# pylint: disable=magic-value-comparison

ROW = {"body": "hello", "weight": 0.5, "rank": 3, "pinned": True}


# ===========================================================================
#                              Tables
# ===========================================================================


def test_new_table_is_empty(record_store: Store, notes):
    """A freshly created table has no rows."""
    record_store.create_table(notes)
    assert record_store.count(notes) == 0


def test_create_table_is_idempotent(record_store: Store, notes):
    """Creating an existing table again keeps its rows."""
    record_store.create_table(notes)
    record_store.insert(notes, ROW)
    record_store.create_table(notes)
    assert record_store.count(notes) == 1


def test_create_table_with_reset_drops_rows(record_store: Store, notes):
    """reset=True recreates the table empty."""
    record_store.create_table(notes)
    record_store.insert(notes, ROW)
    record_store.create_table(notes, reset=True)
    assert record_store.count(notes) == 0


@pytest.mark.parametrize(
    "operation",
    [
        lambda store, rt: store.count(rt),
        lambda store, rt: store.insert(rt, ROW),
        lambda store, rt: store.update(rt, 1, ROW),
        lambda store, rt: store.get(rt, 1),
    ],
    ids=["count", "insert", "update", "get"],
)
def test_missing_table_raises(record_store: Store, notes, operation):
    """Every operation on an uncreated table raises TableNotFoundError."""
    with pytest.raises(TableNotFoundError) as exc:
        operation(record_store, notes)
    assert exc.value.table == "notes"
    assert "create_table" in str(exc.value)


# ===========================================================================
#                              Writes
# ===========================================================================


def test_insert_assigns_increasing_identities(record_store: Store, notes):
    """Identities are positive and strictly increasing."""
    record_store.create_table(notes)
    first = record_store.insert(notes, ROW)
    second = record_store.insert(notes, ROW)
    assert isinstance(first, int) and first >= 1
    assert second > first
    assert record_store.count(notes) == 2


def test_insert_stores_missing_fields_as_none(record_store: Store, notes):
    """Fields absent from the values are stored as NULL."""
    record_store.create_table(notes)
    identity = record_store.insert(notes, {"body": "only body"})
    assert record_store.get(notes, identity) == {
        "id": identity,
        "body": "only body",
        "weight": None,
        "rank": None,
        "pinned": None,
    }


def test_get_round_trips_values(record_store: Store, notes):
    """Stored values come back unchanged, keyed by field, plus the id."""
    record_store.create_table(notes)
    identity = record_store.insert(notes, ROW)
    assert record_store.get(notes, identity) == {"id": identity, **ROW}


def test_get_unknown_identity_returns_none(record_store: Store, notes):
    """Reading an identity that was never assigned yields None."""
    record_store.create_table(notes)
    assert record_store.get(notes, 999) is None


def test_update_replaces_values(record_store: Store, notes):
    """update() overwrites the row without changing the count."""
    record_store.create_table(notes)
    identity = record_store.insert(notes, ROW)
    record_store.update(notes, identity, {**ROW, "body": "edited", "pinned": False})
    row = record_store.get(notes, identity)
    assert row is not None
    assert row["body"] == "edited"
    assert row["pinned"] is False
    assert record_store.count(notes) == 1


def test_update_unknown_identity_raises(record_store: Store, notes):
    """Updating a row that does not exist raises RecordNotFoundError."""
    record_store.create_table(notes)
    with pytest.raises(RecordNotFoundError) as exc:
        record_store.update(notes, 42, ROW)
    assert exc.value.identity == 42
    assert exc.value.table == "notes"
