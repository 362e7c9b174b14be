"""Record types and records.

A `RecordType` is declared once, usually at import time, with a builder:

```py
Task = (
    RecordType.declare("tasks")
    .columns(name="string", email="string", some_float="float")
    .validate("name", presence=True, length=(2, 10))
    .validate("email", email=True)
    .build()
)

task = Task(name="bob", email="bob@domain.com", some_float=1.5)
task.is_valid()  # True
```

The built type is immutable and its rules are frozen. Records are the mutable
in-memory instances: they hold a value per declared field, an identity once
the store has persisted them, and the result of their last validation.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Self

from . import engine
from .errors import DeclarationError, FieldTypeError, UnknownFieldError
from .fields import Field, FieldType
from .results import VALID, ValidationResult
from .rules import RuleKind, RuleRegistry

__all__ = ["Record", "RecordType", "RecordTypeBuilder"]

_TYPE_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


# --------------------------------------------------------------------------- #
# Declaration
# --------------------------------------------------------------------------- #


class RecordTypeBuilder:
    """Collects columns and validation declarations for one record type.

    Declarations are replayed into a `RuleRegistry` by `build()`, so columns
    and validations may be declared in any order. All declaration errors are
    raised no later than `build()`.
    """

    def __init__(self, name: str):
        if not isinstance(name, str) or not _TYPE_NAME.fullmatch(name):
            raise DeclarationError(f"Invalid record type name: {name!r}")
        self.name = name
        self._fields: dict[str, Field] = {}
        self._validations: list[tuple[str, RuleKind | str, Any]] = []

    def column(self, name: str, field_type: FieldType | str) -> Self:
        if name in self._fields:
            raise DeclarationError(f"{self.name} already declares a field named '{name}'.")
        if hasattr(Record, name):
            raise DeclarationError(f"Field name '{name}' is reserved by Record.")
        self._fields[name] = Field(name, field_type)  # type: ignore[arg-type]
        return self

    def columns(self, **columns: FieldType | str) -> Self:
        """Declare several columns at once, in keyword order."""
        for name, field_type in columns.items():
            self.column(name, field_type)
        return self

    def validate(self, field_name: str, **kinds: Any) -> Self:
        """Declare one rule per keyword, in keyword order.

        ``validate("name", presence=True, length=(2, 10))`` registers a
        presence rule then a length rule. Flag kinds given as ``False`` are
        skipped.
        """
        if not kinds:
            raise DeclarationError(
                f"validate('{field_name}') needs at least one rule kind."
            )
        for kind, spec in kinds.items():
            if spec is False:
                continue
            self._validations.append((field_name, kind, spec))
        return self

    def build(self) -> RecordType:
        if not self._fields:
            raise DeclarationError(f"{self.name} declares no columns.")
        registry = RuleRegistry(self.name, self._fields)
        for field_name, kind, spec in self._validations:
            registry.register(field_name, kind, spec)
        registry.freeze()
        return RecordType(
            name=self.name, fields=tuple(self._fields.values()), rules=registry
        )


@dataclass(frozen=True, slots=True, eq=False)
class RecordType:
    """Immutable declaration of a record type: its columns and its rules.

    The type name doubles as the table name in relational stores.
    """

    name: str
    fields: tuple[Field, ...]
    rules: RuleRegistry

    @staticmethod
    def declare(name: str) -> RecordTypeBuilder:
        return RecordTypeBuilder(name)

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    def has_field(self, name: str) -> bool:
        return any(f.name == name for f in self.fields)

    def field(self, name: str) -> Field:
        for f in self.fields:
            if f.name == name:
                return f
        raise UnknownFieldError(self.name, name)

    def new(self, values: Mapping[str, Any] | None = None, /, **kwargs: Any) -> Record:
        return Record(self, values, **kwargs)

    __call__ = new

    def validate(self, values: Mapping[str, Any]) -> ValidationResult:
        return engine.validate(self, values)

    def __repr__(self) -> str:
        cols = ", ".join(f"{f.name}:{f.type.value}" for f in self.fields)
        return f"RecordType({self.name!r}, [{cols}], rules={len(self.rules)})"


# --------------------------------------------------------------------------- #
# Instances
# --------------------------------------------------------------------------- #


class Record:
    """A mutable, in-memory instance of a `RecordType`.

    Field values are exposed as attributes (``task.name = "bob"``) and by
    item access (``task["name"]``). Assigned values are coerced to the
    declared field type; a value that does not fit is kept as given and
    makes the record invalid.
    """

    __slots__ = ("_type", "_values", "_id", "_errors")

    def __init__(
        self,
        record_type: RecordType,
        values: Mapping[str, Any] | None = None,
        /,
        **kwargs: Any,
    ):
        object.__setattr__(self, "_type", record_type)
        object.__setattr__(self, "_values", dict.fromkeys(record_type.field_names))
        object.__setattr__(self, "_id", None)
        object.__setattr__(self, "_errors", None)
        self.update({**(values or {}), **kwargs})

    # --- field access ---

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._values[name]
        except KeyError:
            raise AttributeError(
                f"{self._type.name} record has no field '{name}'"
            ) from None

    def __setattr__(self, name: str, value: Any) -> None:
        self[name] = value

    def __getitem__(self, name: str) -> Any:
        if name not in self._values:
            raise UnknownFieldError(self._type.name, name)
        return self._values[name]

    def __setitem__(self, name: str, value: Any) -> None:
        field = self._type.field(name)
        try:
            value = field.type.coerce(name, value)
        except FieldTypeError:
            pass  # kept raw; validation reports the mismatch
        self._values[name] = value

    def update(self, values: Mapping[str, Any]) -> None:
        """Assign several fields; unknown names raise `UnknownFieldError`."""
        for name, value in values.items():
            self[name] = value

    @property
    def record_type(self) -> RecordType:
        return self._type

    @property
    def values(self) -> dict[str, Any]:
        """A copy of the current field values, in declaration order."""
        return dict(self._values)

    # --- identity ---

    @property
    def id(self) -> int | None:  # pylint: disable=invalid-name
        """Store-assigned identity; ``None`` until the record is persisted."""
        return self._id

    @property
    def is_persisted(self) -> bool:
        return self._id is not None

    def mark_persisted(self, identity: int) -> None:
        """Record the identity the store assigned on insert."""
        object.__setattr__(self, "_id", identity)

    # --- validation ---

    def validate(self) -> ValidationResult:
        """Compute a fresh result for the current values without storing it."""
        return engine.validate(self._type, self._values)

    def is_valid(self) -> bool:
        """Validate the current values, replacing the stored result."""
        result = self.validate()
        object.__setattr__(self, "_errors", result)
        return result.is_valid

    @property
    def errors(self) -> ValidationResult:
        """Result of the last `is_valid()` call (valid if never validated)."""
        return VALID if self._errors is None else self._errors

    @property
    def error_messages(self) -> list[str]:
        return self.errors.messages

    def error_messages_for(self, field_name: str) -> list[str]:
        return self.errors.messages_for(field_name)

    def validate_for(self, field_name: str, value: Any) -> bool:
        """Check a candidate value against one field's rules only.

        Neither the record's values nor its stored result are touched.
        """
        return engine.validate_value(self._type, field_name, value).is_valid

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v!r}" for k, v in self._values.items())
        return f"<{self._type.name} id={self._id!r} {fields}>"
