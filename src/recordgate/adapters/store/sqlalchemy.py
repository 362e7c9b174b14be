"""SQLAlchemy-backed Store adapter for recordgate.

This module provides a relational implementation of the Store interface using
SQLAlchemy Core. Tables are derived from record types at runtime (see
`recordgate.adapters.db.schema`); every write runs in its own transaction, so
a failed write leaves no partial row behind. Driver errors are mapped to the
store exceptions defined in `recordgate.interfaces.store`.

Usage:
    store = SqlAlchemyStore.configure("sqlite:///records.db", reset=True)
    store.create_table(Task)
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from sqlalchemy import MetaData, Table, func, inspect, insert, select, update
from sqlalchemy.exc import DataError, DBAPIError, IntegrityError

from recordgate.adapters.db.engine import make_engine
from recordgate.adapters.db.metadata import make_metadata
from recordgate.adapters.db.schema import ID_COLUMN, build_table
from recordgate.interfaces.store import (
    RecordNotFoundError,
    Store,
    StoreIntegrityError,
    StoreUnavailableError,
    TableNotFoundError,
)

if TYPE_CHECKING:
    from sqlalchemy.engine import URL, Engine

    from recordgate.domain.records import RecordType

logger = logging.getLogger(__name__)


class SqlAlchemyStore(Store):
    """SQLAlchemy-backed Store.

    - One table per record type, created on demand by `create_table`.
    - Tables created by another process are picked up by reflection on first use.
    - Each write is its own transaction (`Engine.begin()`).
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self.metadata = make_metadata()
        self._tables: dict[str, Table] = {}

    @classmethod
    def configure(
        cls, url: str | URL, *, reset: bool = False, echo: bool = False
    ) -> SqlAlchemyStore:
        """Build a store for `url` using `make_engine` (SQLite PRAGMAs applied).

        Args:
            url: SQLAlchemy database URL.
            reset: If True, drop every existing table in the database first.
            echo: If True, log SQL statements.

        Raises:
            sqlalchemy.exc.ArgumentError: if `url` cannot be parsed.
            sqlalchemy.exc.NoSuchModuleError: if the URL names an unknown dialect.
            StoreUnavailableError: if `reset` cannot reach the database. The
                engine is disposed before the error propagates.
        """
        store = cls(make_engine(url, echo=echo))
        if reset:
            try:
                store.reset()
            except StoreUnavailableError:
                store.dispose()
                raise
        return store

    def reset(self) -> None:
        """Drop every table in the database, including ones this store did not create."""
        reflected = MetaData()
        with self._translate_errors(), self.engine.begin() as conn:
            reflected.reflect(conn)
            reflected.drop_all(conn)
        self.metadata = make_metadata()
        self._tables.clear()
        logger.info("Reset database: dropped %d table(s)", len(reflected.tables))

    def dispose(self) -> None:
        self.engine.dispose()

    # --------------------------------------------------------------------- #
    # Interface implementation
    # --------------------------------------------------------------------- #

    def create_table(self, record_type: RecordType, *, reset: bool = False) -> None:
        table = build_table(record_type, self.metadata)
        with self._translate_errors(), self.engine.begin() as conn:
            if reset:
                table.drop(conn, checkfirst=True)
            table.create(conn, checkfirst=True)
        self._tables[record_type.name] = table
        logger.debug("Table %s ready (reset=%s)", record_type.name, reset)

    def count(self, record_type: RecordType) -> int:
        table = self._table(record_type)
        stmt = select(func.count()).select_from(table)
        with self._translate_errors(), self.engine.connect() as conn:
            return int(conn.execute(stmt).scalar_one())

    def insert(self, record_type: RecordType, values: Mapping[str, Any]) -> int:
        table = self._table(record_type)
        row = self._row(record_type, values)
        with self._translate_errors(), self.engine.begin() as conn:
            result = conn.execute(insert(table).values(**row))
            identity = int(result.inserted_primary_key[0])
        logger.debug("Inserted %s id=%s", record_type.name, identity)
        return identity

    def update(
        self, record_type: RecordType, identity: int, values: Mapping[str, Any]
    ) -> None:
        table = self._table(record_type)
        stmt = (
            update(table)
            .where(table.c[ID_COLUMN] == identity)
            .values(**self._row(record_type, values))
        )
        with self._translate_errors(), self.engine.begin() as conn:
            if conn.execute(stmt).rowcount == 0:
                raise RecordNotFoundError(record_type.name, identity)
        logger.debug("Updated %s id=%s", record_type.name, identity)

    def get(self, record_type: RecordType, identity: int) -> dict[str, Any] | None:
        table = self._table(record_type)
        stmt = select(table).where(table.c[ID_COLUMN] == identity)
        with self._translate_errors(), self.engine.connect() as conn:
            row = conn.execute(stmt).mappings().one_or_none()
        return None if row is None else dict(row)

    # --------------------------------------------------------------------- #
    # Internals
    # --------------------------------------------------------------------- #

    def _table(self, record_type: RecordType) -> Table:
        """Return the table for `record_type`, discovering existing tables lazily.

        Raises:
            TableNotFoundError: if the table exists neither here nor in the database.
        """
        if (table := self._tables.get(record_type.name)) is not None:
            return table
        with self._translate_errors():
            exists = inspect(self.engine).has_table(record_type.name)
        if not exists:
            raise TableNotFoundError(record_type.name)
        table = build_table(record_type, self.metadata)
        self._tables[record_type.name] = table
        return table

    @staticmethod
    def _row(record_type: RecordType, values: Mapping[str, Any]) -> dict[str, Any]:
        return {name: values.get(name) for name in record_type.field_names}

    @staticmethod
    @contextmanager
    def _translate_errors() -> Iterator[None]:
        """Map SQLAlchemy errors raised inside the block to store errors."""
        try:
            yield
        except (IntegrityError, DataError) as e:
            raise StoreIntegrityError(str(e.orig or e)) from e
        except DBAPIError as e:  # OperationalError, InterfaceError, etc.
            raise StoreUnavailableError(str(e)) from e
