"""Domain-layer error definitions."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .records import Record
    from .results import ValidationResult

# ============================================================================
#                           General domain errors
# ============================================================================


class DomainError(Exception):
    """Base class for domain-layer errors."""


# ============================================================================
#                   Declaration (configuration) errors
# ============================================================================


class DeclarationError(DomainError):
    """Raised when a record type or one of its rules is declared incorrectly.

    These are configuration errors: they surface while a record type is being
    built, never while a record is being validated.
    """


class RuleDeclarationError(DeclarationError):
    """Raised when a validation rule has an unknown kind or malformed parameters."""

    def __init__(self, field: str, kind: str, reason: str) -> None:
        super().__init__(f"Invalid {kind} rule for field '{field}': {reason}")
        self.field = field
        self.kind = kind
        self.reason = reason


class UnknownFieldError(DeclarationError):
    """Raised when a field name is not part of the record type."""

    def __init__(self, type_name: str, field: str) -> None:
        super().__init__(f"{type_name} has no field named '{field}'.")
        self.type_name = type_name
        self.field = field


# ============================================================================
#                               Value errors
# ============================================================================


class FieldTypeError(DomainError):
    """Raised by `FieldType.coerce` when a value does not fit the field type.

    Records catch it on assignment and keep the raw value; validation then
    reports the mismatch as an ordinary error message.
    """

    def __init__(self, field: str, type_name: str, value: object) -> None:
        super().__init__(f"Cannot assign {value!r} to {type_name} field '{field}'.")
        self.field = field
        self.type_name = type_name
        self.value = value


# ============================================================================
#                           Persistence errors
# ============================================================================


class RecordInvalidError(DomainError):
    """Raised by the strict save path when a record fails validation."""

    def __init__(self, record: Record, result: ValidationResult) -> None:
        messages = "; ".join(result.messages)
        super().__init__(
            f"{record.record_type.name} record failed validation: {messages}"
        )
        self.record = record
        self.result = result
