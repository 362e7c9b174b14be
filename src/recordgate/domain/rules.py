"""Declarative validation rules and the per-type rule registry.

A record type owns exactly one `RuleRegistry`. Rules are appended while the
type is being declared and the registry is frozen when the type is built;
from then on it is shared, read-only, by every record of that type.

Rule parameters are normalized and checked at registration time so that a
malformed declaration fails immediately instead of at the first validation.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any

from .errors import RuleDeclarationError, UnknownFieldError

__all__ = ["RuleKind", "ValidationRule", "RuleRegistry"]


class RuleKind(str, Enum):
    """Supported validation rule kinds."""

    PRESENCE = "presence"
    LENGTH = "length"
    FORMAT = "format"
    EMAIL = "email"

    @classmethod
    def from_string(cls, kind: str) -> RuleKind:
        """Normalize a kind name (case/whitespace-insensitive).

        Raises:
            ValueError: if the kind is not recognized.
        """
        return cls((kind or "").strip().lower())


@dataclass(frozen=True, slots=True)
class ValidationRule:
    """Immutable declaration of one validation requirement on one field."""

    field: str
    kind: RuleKind
    params: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "params", MappingProxyType(dict(self.params)))

    def __repr__(self) -> str:
        return f"ValidationRule({self.field!r}, {self.kind.value}, {dict(self.params)!r})"


# --------------------------------------------------------------------------- #
# Parameter normalization
# --------------------------------------------------------------------------- #


def _length_params(field_name: str, spec: Any) -> dict[str, int]:
    if isinstance(spec, range):
        if spec.step != 1 or len(spec) == 0:
            raise RuleDeclarationError(
                field_name, "length", "range must be non-empty with step 1"
            )
        low, high = spec.start, spec[-1]
    elif isinstance(spec, (tuple, list)) and len(spec) == 2:  # pylint: disable=magic-value-comparison
        low, high = spec
    else:
        raise RuleDeclarationError(
            field_name, "length", f"expected (min, max) or range, got {spec!r}"
        )

    if not all(isinstance(v, int) and not isinstance(v, bool) for v in (low, high)):
        raise RuleDeclarationError(field_name, "length", "bounds must be integers")
    if low < 0 or low > high:
        raise RuleDeclarationError(
            field_name, "length", f"invalid bounds {low}..{high}"
        )
    return {"min": low, "max": high}


def _format_params(field_name: str, spec: Any) -> dict[str, re.Pattern[str]]:
    if isinstance(spec, re.Pattern):
        return {"pattern": spec}
    if not isinstance(spec, str):
        raise RuleDeclarationError(
            field_name, "format", f"expected a pattern string, got {spec!r}"
        )
    try:
        return {"pattern": re.compile(spec)}
    except re.error as e:
        raise RuleDeclarationError(field_name, "format", str(e)) from e


def _flag_params(field_name: str, kind: RuleKind, spec: Any) -> dict[str, Any]:
    if spec is not True:
        raise RuleDeclarationError(
            field_name, kind.value, f"expected True, got {spec!r}"
        )
    return {}


def normalize_params(field_name: str, kind: RuleKind, spec: Any) -> dict[str, Any]:
    """Turn a raw declaration value into the rule's parameter mapping.

    Raises:
        RuleDeclarationError: if the value is not acceptable for the kind.
    """
    match kind:
        case RuleKind.LENGTH:
            return _length_params(field_name, spec)
        case RuleKind.FORMAT:
            return _format_params(field_name, spec)
        case _:
            return _flag_params(field_name, kind, spec)


# --------------------------------------------------------------------------- #
# Registry
# --------------------------------------------------------------------------- #


class RuleRegistry:
    """Ordered, per-type collection of validation rules.

    Rules are kept grouped by field. Fields are ordered by their first rule
    declaration and rules within a field by declaration order, which is also
    the order in which validation errors are reported.
    """

    def __init__(self, type_name: str, field_names: Iterable[str]):
        self.type_name = type_name
        self._field_names = frozenset(field_names)
        self._rules: dict[str, list[ValidationRule]] = {}
        self._frozen = False

    def register(
        self, field_name: str, kind: RuleKind | str, spec: Any = True
    ) -> ValidationRule:
        """Append a rule for `field_name`.

        Args:
            field_name: A field declared on the record type.
            kind: The rule kind, as a RuleKind or its string value.
            spec: The raw parameter: ``True`` for presence/email, a
                ``(min, max)`` tuple or ``range`` for length, a pattern
                string or compiled pattern for format.

        Returns:
            The registered rule.

        Raises:
            RuleDeclarationError: if the registry is frozen or the rule is malformed.
            UnknownFieldError: if the field is not declared on the type.
        """
        if not isinstance(kind, RuleKind):
            try:
                kind = RuleKind.from_string(kind)
            except ValueError:
                raise RuleDeclarationError(
                    field_name, str(kind), "unknown rule kind"
                ) from None
        if self._frozen:
            raise RuleDeclarationError(
                field_name, kind.value, f"rules for {self.type_name} are frozen"
            )
        if field_name not in self._field_names:
            raise UnknownFieldError(self.type_name, field_name)

        rule = ValidationRule(
            field=field_name, kind=kind, params=normalize_params(field_name, kind, spec)
        )
        self._rules.setdefault(field_name, []).append(rule)
        return rule

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def fields(self) -> tuple[str, ...]:
        """Fields that carry at least one rule, in first-declaration order."""
        return tuple(self._rules)

    def rules_for(self, field_name: str) -> tuple[ValidationRule, ...]:
        """Return the rules for `field_name` in declaration order."""
        return tuple(self._rules.get(field_name, ()))

    def __iter__(self) -> Iterator[ValidationRule]:
        for rules in self._rules.values():
            yield from rules

    def __len__(self) -> int:
        return sum(len(rules) for rules in self._rules.values())

    def __repr__(self) -> str:
        return f"RuleRegistry({self.type_name!r}, rules={len(self)})"
