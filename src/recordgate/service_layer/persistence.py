"""Validation-gated persistence.

The `PersistenceGate` is the only path from a record to a store. Every save
attempt follows the same state machine:

    Unvalidated -> Validating -> Valid   -> Persisted
                              -> Invalid -> Rejected

The attempt itself is a single operation returning a `SaveOutcome`; the
public call forms only differ in how they surface a rejection:

- `save()` returns ``False``.
- `save_or_raise()` raises `RecordInvalidError`.
- `create()` builds a record, then behaves like `save()` and hands the record
  back either way so callers can inspect its errors and retry.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from recordgate.domain.errors import RecordInvalidError
from recordgate.domain.results import VALID, ValidationResult

if TYPE_CHECKING:
    from recordgate.domain.records import Record, RecordType
    from recordgate.interfaces.store import Store

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SaveOutcome:
    """Result of one save attempt."""

    record: Record
    result: ValidationResult
    saved: bool

    @property
    def identity(self) -> int | None:
        return self.record.id


class PersistenceGate:
    """Runs validation before any write reaches the store."""

    def __init__(self, store: Store):
        self.store = store

    def attempt(self, record: Record, *, validate: bool = True) -> SaveOutcome:
        """Validate `record` and, if it passes, insert or update it.

        Args:
            record: The record to persist. New records are inserted and
                receive an identity; persisted records are updated in place.
            validate: If False, skip validation and write unconditionally.

        Returns:
            The outcome; `saved` is False iff validation rejected the record.

        Raises:
            StoreError: if the store fails while writing a valid record.
        """
        if validate:
            valid = record.is_valid()
            result = record.errors
        else:
            valid, result = True, VALID

        if not valid:
            logger.info(
                "Rejected %s record: %s",
                record.record_type.name,
                "; ".join(result.messages),
            )
            return SaveOutcome(record=record, result=result, saved=False)

        if record.is_persisted:
            self.store.update(record.record_type, record.id, record.values)  # type: ignore[arg-type]
            logger.info("Updated %s id=%s", record.record_type.name, record.id)
        else:
            identity = self.store.insert(record.record_type, record.values)
            record.mark_persisted(identity)
            logger.info("Inserted %s id=%s", record.record_type.name, identity)
        return SaveOutcome(record=record, result=result, saved=True)

    def save(self, record: Record, *, validate: bool = True) -> bool:
        """Persist `record` if it is valid; return whether it was written."""
        return self.attempt(record, validate=validate).saved

    def save_or_raise(self, record: Record, *, validate: bool = True) -> None:
        """Persist `record` or raise if it is invalid.

        Raises:
            RecordInvalidError: carrying the record and its validation result.
        """
        outcome = self.attempt(record, validate=validate)
        if not outcome.saved:
            raise RecordInvalidError(record, outcome.result)

    def create(self, record_type: RecordType, /, **attributes: Any) -> Record:
        """Build a record from `attributes` and `save()` it.

        The record is returned whether or not it was persisted; check
        `record.is_persisted` or `record.error_messages`.
        """
        record = record_type.new(attributes)
        self.save(record)
        return record

    def count(self, record_type: RecordType) -> int:
        return self.store.count(record_type)

    def find(self, record_type: RecordType, identity: int) -> Record | None:
        """Load a persisted record by identity, or None."""
        row = self.store.get(record_type, identity)
        if row is None:
            return None
        row.pop("id", None)
        record = record_type.new(row)
        record.mark_persisted(identity)
        return record
