"""Validation outcome value objects."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class ValidationError:
    """One failing rule invocation on one field."""

    field: str
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Aggregated outcome of running rules against a set of field values.

    Errors are kept in report order: fields by rule-declaration order, then
    rules within a field by declaration order. A result with no errors is
    valid.
    """

    errors: tuple[ValidationError, ...] = field(default=())

    @classmethod
    def from_errors(cls, errors: Iterable[ValidationError]) -> ValidationResult:
        return cls(errors=tuple(errors))

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def by_field(self) -> Mapping[str, tuple[ValidationError, ...]]:
        """Errors grouped by field; only fields with errors appear."""
        grouped: dict[str, list[ValidationError]] = {}
        for error in self.errors:
            grouped.setdefault(error.field, []).append(error)
        return {name: tuple(errors) for name, errors in grouped.items()}

    @property
    def messages(self) -> list[str]:
        """All messages, flattened in report order."""
        return [error.message for error in self.errors]

    def messages_for(self, field_name: str) -> list[str]:
        """Messages for one field; empty if the field has no errors."""
        return [error.message for error in self.errors if error.field == field_name]


#: Shared result for "nothing failed".
VALID = ValidationResult()
