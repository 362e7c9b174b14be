"""Store interface for recordgate.

This module defines:
- The `Store` port (framework-free ABC) the persistence gate writes through.
- A small, adapter-agnostic exception hierarchy for precise error handling.

Layering & dependency rules:
- Lives under `recordgate.interfaces`. Do NOT import from adapters or entrypoints.
- Safe to import from the service layer and adapters.

Contract overview
-----------------
Tables:
- `create_table(record_type, reset=False)`: idempotent; one table per record type,
  named after the type, with an integer `id` identity plus one column per field.
  `reset=True` drops an existing table (and its rows) first.

Writes:
- `insert(record_type, values)`: atomic; returns the store-assigned identity.
  Identities are positive integers, unique per record type.
- `update(record_type, identity, values)`: atomic; replaces the stored values.

Reads:
- `count(record_type)`: number of persisted rows.
- `get(record_type, identity)`: stored values (including `id`), or None.

Errors:
- `TableNotFoundError`: the type's table was never created.
- `RecordNotFoundError`: `update` targeted an identity that does not exist.
- `StoreIntegrityError`: the backend rejected the row (constraint violation).
- `StoreUnavailableError`: transient driver/DB issues; callers may retry.

The store never validates records; the persistence gate does that before
any write reaches it.
"""

from __future__ import annotations

import abc
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from recordgate.domain.records import RecordType

# --- Exceptions to standardize adapter behavior ---


class StoreError(Exception):
    """Base class for recordgate store errors."""


class TableNotFoundError(StoreError):
    """Raised when a record type's table has not been created."""

    def __init__(self, table: str) -> None:
        super().__init__(f"Table '{table}' does not exist; call create_table() first.")
        self.table = table


class RecordNotFoundError(StoreError):
    """Raised when an update targets an identity that is not stored."""

    def __init__(self, table: str, identity: int) -> None:
        super().__init__(f"No row with id={identity} in table '{table}'.")
        self.table = table
        self.identity = identity


class StoreIntegrityError(StoreError):
    """Raised when the backend rejects a row (constraint violation, bad data)."""


class StoreUnavailableError(StoreError):
    """Raised for operational failures (connection, timeout, locking)."""


# --- Port ---


class Store(abc.ABC):
    """An abstract base class for a record store."""

    @abc.abstractmethod
    def create_table(self, record_type: RecordType, *, reset: bool = False) -> None:
        """Create the table backing `record_type` if it does not exist.

        Args:
            record_type: The declared type to store.
            reset: If True, drop any existing table (and rows) first.

        Raises:
            StoreUnavailableError: for operational errors.
        """

    @abc.abstractmethod
    def count(self, record_type: RecordType) -> int:
        """Return the number of persisted rows for `record_type`.

        Raises:
            TableNotFoundError: if the table has not been created.
        """

    @abc.abstractmethod
    def insert(self, record_type: RecordType, values: Mapping[str, Any]) -> int:
        """Persist a new row and return its assigned identity.

        Args:
            record_type: The declared type of the row.
            values: Field values keyed by field name; missing fields store NULL.

        Raises:
            TableNotFoundError: if the table has not been created.
            StoreIntegrityError: if the backend rejects the row.
            StoreUnavailableError: for operational errors; callers may retry.
        """

    @abc.abstractmethod
    def update(
        self, record_type: RecordType, identity: int, values: Mapping[str, Any]
    ) -> None:
        """Replace the stored values of an existing row.

        Raises:
            TableNotFoundError: if the table has not been created.
            RecordNotFoundError: if no row has `identity`.
            StoreIntegrityError: if the backend rejects the row.
            StoreUnavailableError: for operational errors; callers may retry.
        """

    @abc.abstractmethod
    def get(self, record_type: RecordType, identity: int) -> dict[str, Any] | None:
        """Return the stored values for `identity` (with an `id` key), or None.

        Raises:
            TableNotFoundError: if the table has not been created.
        """
