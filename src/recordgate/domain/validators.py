"""Field validators.

Each validator is a pure function ``(field, value, params) -> message | None``
returning the error message when the value fails the check, or ``None`` when
it passes. A validator produces at most one message per invocation.

Message wording is part of the public contract; callers (and UIs) match on it.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping, Sized
from typing import Any, TypeAlias

from .errors import FieldTypeError
from .fields import FieldType
from .rules import RuleKind

__all__ = [
    "EMAIL_PATTERN",
    "VALIDATORS",
    "Validator",
    "is_blank",
    "validate_email",
    "validate_format",
    "validate_length",
    "validate_presence",
    "validate_type",
]

Validator: TypeAlias = Callable[[str, Any, Mapping[str, Any]], str | None]

MESSAGE_PREFIX = "incorrect value supplied for {field} -- "  # pragma: no mutate

#: local@domain.tld, no whitespace, at least one dot in the domain part.
EMAIL_PATTERN = re.compile(
    r"[A-Za-z0-9!#$%&'*+/=?^_`{|}~.-]+@[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?"
    r"(?:\.[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?)*\.[A-Za-z]{2,}"
)


def _message(field: str, detail: str) -> str:
    return MESSAGE_PREFIX.format(field=field) + detail


def is_blank(value: Any) -> bool:
    """Return True if `value` counts as "not supplied".

    ``None``, whitespace-only strings and empty collections are blank.
    Numbers are never blank, so ``0`` and ``0.0`` are real values.
    """
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (bool, int, float)):
        return False
    if isinstance(value, Sized):
        return len(value) == 0
    return False


def validate_presence(field: str, value: Any, params: Mapping[str, Any]) -> str | None:  # pylint: disable=unused-argument
    if is_blank(value):
        return _message(field, "should be non-empty.")
    return None


def validate_length(field: str, value: Any, params: Mapping[str, Any]) -> str | None:
    # An absent value is measured as the empty string.
    length = 0 if value is None else len(str(value))
    low, high = params["min"], params["max"]
    if not low <= length <= high:
        return _message(field, f"should be between {low} and {high} characters long.")
    return None


def validate_format(field: str, value: Any, params: Mapping[str, Any]) -> str | None:
    text = "" if value is None else str(value)
    if params["pattern"].fullmatch(text) is None:
        return _message(field, "invalid format.")
    return None


def validate_email(field: str, value: Any, params: Mapping[str, Any]) -> str | None:  # pylint: disable=unused-argument
    # Surrounding whitespace is not part of a valid address.
    if is_blank(value) or EMAIL_PATTERN.fullmatch(str(value)) is None:
        return _message(field, "invalid email address.")
    return None


def validate_type(field: str, value: Any, field_type: FieldType) -> str | None:
    """Report a value that was assigned raw because it does not fit `field_type`.

    Runs for every declared field, independently of the registered rules.
    """
    try:
        field_type.coerce(field, value)
    except FieldTypeError:
        return _message(field, f"should be a valid {field_type.value}.")
    return None


VALIDATORS: dict[RuleKind, Validator] = {
    RuleKind.PRESENCE: validate_presence,
    RuleKind.LENGTH: validate_length,
    RuleKind.FORMAT: validate_format,
    RuleKind.EMAIL: validate_email,
}
