"""Table definitions derived from record types.

Each record type maps to one table named after the type:

| Column   | Type                                   |
|----------|----------------------------------------|
| id       | BIGINT identity (INTEGER rowid on SQLite) |
| <field>  | String / Float / Integer / Boolean, nullable |

Columns are nullable: whether a value is required is a validation concern,
decided before the row ever reaches the database.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import (
    BigInteger,
    Boolean,
    Column,
    Float,
    Identity,
    Integer,
    String,
    Table,
)

from recordgate.domain.fields import FieldType

if TYPE_CHECKING:
    from sqlalchemy import MetaData
    from sqlalchemy.types import TypeEngine

    from recordgate.domain.records import RecordType

__all__ = ["ID_COLUMN", "build_table", "column_type"]

ID_COLUMN = "id"

# Portable auto-increment primary key:
# - Postgres: BIGINT IDENTITY
# - SQLite: rowid-backed autoincrement (primary_key=True is sufficient)
BIGINT_PK = BigInteger().with_variant(Integer(), "sqlite")

_COLUMN_TYPES: dict[FieldType, type[TypeEngine]] = {
    FieldType.STRING: String,
    FieldType.FLOAT: Float,
    FieldType.INT: Integer,
    FieldType.BOOL: Boolean,
}


def column_type(field_type: FieldType) -> TypeEngine:
    """Return a SQLAlchemy type instance for a semantic field type."""
    return _COLUMN_TYPES[field_type]()


def build_table(record_type: RecordType, metadata: MetaData) -> Table:
    """Return the table for `record_type`, defining it on `metadata` if needed."""
    if record_type.name in metadata.tables:
        return metadata.tables[record_type.name]

    return Table(
        record_type.name,
        metadata,
        Column(
            ID_COLUMN,
            BIGINT_PK,
            Identity(start=1),
            primary_key=True,
            nullable=False,
            comment="Store-assigned identity.",
        ),
        *(
            Column(field.name, column_type(field.type), nullable=True)
            for field in record_type.fields
        ),
        comment=f"Rows of record type {record_type.name}.",
    )
