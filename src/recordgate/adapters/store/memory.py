"""In memory store implementation.

All rows are kept in memory and lost when the instance is discarded.
Use for unit tests, prototyping, or scenarios where durability is not required.

This implementation passes all contract tests for the Store interface.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from recordgate.interfaces.store import RecordNotFoundError, Store, TableNotFoundError

if TYPE_CHECKING:
    from recordgate.domain.records import RecordType


class _Table:
    def __init__(self, field_names: tuple[str, ...]):
        self.field_names = field_names
        self.rows: dict[int, dict[str, Any]] = {}
        self.next_id = 1

    def row_from(self, values: Mapping[str, Any]) -> dict[str, Any]:
        return {name: values.get(name) for name in self.field_names}


class InMemoryStore(Store):
    """In-memory Store for testing and non-durable use cases.

    - Non-durable: all data is lost when the instance is discarded.
    - Identities are assigned from 1 per table and never reused.
    """

    def __init__(self):
        self._tables: dict[str, _Table] = {}

    # --------------------------------------------------------------------- #
    # Interface implementation
    # --------------------------------------------------------------------- #

    def create_table(self, record_type: RecordType, *, reset: bool = False) -> None:
        if reset or record_type.name not in self._tables:
            self._tables[record_type.name] = _Table(record_type.field_names)

    def count(self, record_type: RecordType) -> int:
        return len(self._table(record_type).rows)

    def insert(self, record_type: RecordType, values: Mapping[str, Any]) -> int:
        table = self._table(record_type)
        identity = table.next_id
        table.next_id += 1
        table.rows[identity] = table.row_from(values)
        return identity

    def update(
        self, record_type: RecordType, identity: int, values: Mapping[str, Any]
    ) -> None:
        table = self._table(record_type)
        if identity not in table.rows:
            raise RecordNotFoundError(record_type.name, identity)
        table.rows[identity] = table.row_from(values)

    def get(self, record_type: RecordType, identity: int) -> dict[str, Any] | None:
        row = self._table(record_type).rows.get(identity)
        if row is None:
            return None
        return {"id": identity, **row}

    # --------------------------------------------------------------------- #
    # Internals
    # --------------------------------------------------------------------- #

    def _table(self, record_type: RecordType) -> _Table:
        try:
            return self._tables[record_type.name]
        except KeyError:
            raise TableNotFoundError(record_type.name) from None
