"""Field types and field declarations for record types.

Centralizing the semantic column types as an Enum avoids scattering string
literals ("string", "float", ...) through declarations and store adapters,
and gives each type a single place to coerce assigned values.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .errors import DeclarationError, FieldTypeError

_TRUE_STRINGS = frozenset({"true", "t", "yes", "y", "1"})
_FALSE_STRINGS = frozenset({"false", "f", "no", "n", "0"})


class FieldType(str, Enum):
    """Enumeration of supported semantic column types.

    Attributes:
        STRING: Text column (``"string"``).
        FLOAT:  Floating point column (``"float"``).
        INT:    Integer column (``"int"``).
        BOOL:   Boolean column (``"bool"``).
    """

    STRING = "string"
    FLOAT = "float"
    INT = "int"
    BOOL = "bool"

    @classmethod
    def from_string(cls, type_str: str) -> FieldType:
        """Normalize and convert a type name to a FieldType.

        Accepts common aliases (e.g., 'str', 'text', 'integer', 'double',
        'boolean').

        Args:
            type_str: a raw type name

        Returns:
            The corresponding FieldType enum member.

        Raises:
            DeclarationError: if the type name is not recognized.
        """
        if not isinstance(type_str, str):
            raise DeclarationError(f"Unsupported field type: {type_str!r}")
        raw = type_str.strip().lower()

        if raw in {"string", "str", "text"}:
            return cls.STRING
        if raw in {"float", "double", "real"}:
            return cls.FLOAT
        if raw in {"int", "integer"}:
            return cls.INT
        if raw in {"bool", "boolean"}:
            return cls.BOOL

        raise DeclarationError(f"Unsupported field type: {type_str!r}")

    @property
    def is_numeric(self) -> bool:
        return self in (FieldType.FLOAT, FieldType.INT)

    def coerce(self, field: str, value: Any) -> Any:
        """Convert an assigned value to this type.

        ``None`` is always kept as ``None``. For non-string types a blank
        string also becomes ``None`` so that presence rules see it as unset.

        Raises:
            FieldTypeError: if the value cannot be represented by this type.
        """
        if value is None:
            return None
        if self is FieldType.STRING:
            return value if isinstance(value, str) else str(value)
        if isinstance(value, str) and not value.strip():
            return None

        try:
            match self:
                case FieldType.FLOAT:
                    if isinstance(value, bool):
                        raise TypeError("bool is not a float")
                    return float(value)
                case FieldType.INT:
                    return self._coerce_int(value)
                case FieldType.BOOL:
                    return self._coerce_bool(value)
        except (TypeError, ValueError) as e:
            raise FieldTypeError(field, self.value, value) from e
        raise FieldTypeError(field, self.value, value)  # pragma: no cover

    @staticmethod
    def _coerce_int(value: Any) -> int:
        if isinstance(value, bool):
            raise TypeError("bool is not an int")
        if isinstance(value, float) and not value.is_integer():
            raise ValueError("non-integral float")
        if isinstance(value, str):
            return int(value.strip())
        return int(value)

    @staticmethod
    def _coerce_bool(value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, int) and value in (0, 1):
            return bool(value)
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in _TRUE_STRINGS:
                return True
            if lowered in _FALSE_STRINGS:
                return False
        raise ValueError(f"not a boolean: {value!r}")


@dataclass(frozen=True, slots=True)
class Field:
    """A named, typed column of a record type."""

    name: str
    type: FieldType

    def __post_init__(self) -> None:
        if (
            not isinstance(self.name, str)
            or not self.name.isidentifier()
            or self.name.startswith("_")
        ):
            raise DeclarationError(
                f"Field name must be a public Python identifier, got {self.name!r}"
            )
        if self.name == "id":
            raise DeclarationError("Field name 'id' is reserved for the identity.")
        if not isinstance(self.type, FieldType):
            object.__setattr__(self, "type", FieldType.from_string(self.type))
