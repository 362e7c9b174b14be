"""Domain layer: record declarations, validation rules and the validation engine."""

from .declarations import record_type_from_dict
from .errors import (
    DeclarationError,
    DomainError,
    FieldTypeError,
    RecordInvalidError,
    RuleDeclarationError,
    UnknownFieldError,
)
from .fields import Field, FieldType
from .records import Record, RecordType, RecordTypeBuilder
from .results import ValidationError, ValidationResult
from .rules import RuleKind, RuleRegistry, ValidationRule

__all__ = [
    "DeclarationError",
    "DomainError",
    "Field",
    "FieldType",
    "FieldTypeError",
    "Record",
    "RecordInvalidError",
    "RecordType",
    "RecordTypeBuilder",
    "RuleDeclarationError",
    "RuleKind",
    "RuleRegistry",
    "UnknownFieldError",
    "ValidationError",
    "ValidationResult",
    "ValidationRule",
    "record_type_from_dict",
]
