"""Validation engine.

Runs a record type's rules against field values and aggregates the failures
into a `ValidationResult`. The engine is stateless: every call computes a
fresh result, so re-validating unchanged values always yields an equal result.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from itertools import chain
from typing import TYPE_CHECKING, Any

from .results import ValidationError, ValidationResult
from .validators import VALIDATORS, validate_type

if TYPE_CHECKING:
    from .fields import Field
    from .records import RecordType
    from .rules import ValidationRule

logger = logging.getLogger(__name__)


def _run(rules: Iterable[ValidationRule], value_of) -> Iterator[ValidationError]:
    for rule in rules:
        message = VALIDATORS[rule.kind](rule.field, value_of(rule.field), rule.params)
        if message is not None:
            yield ValidationError(field=rule.field, message=message)


def _type_errors(fields: Iterable[Field], value_of) -> Iterator[ValidationError]:
    for field in fields:
        message = validate_type(field.name, value_of(field.name), field.type)
        if message is not None:
            yield ValidationError(field=field.name, message=message)


def validate(record_type: RecordType, values: Mapping[str, Any]) -> ValidationResult:
    """Run every rule of `record_type` against `values`.

    Args:
        record_type: The declared type whose rules apply.
        values: Current field values; missing keys are treated as ``None``.

    Returns:
        A new ValidationResult; valid iff no rule failed and every value
        fits its declared field type.
    """
    result = ValidationResult.from_errors(
        chain(
            _run(record_type.rules, values.get),
            _type_errors(record_type.fields, values.get),
        )
    )
    logger.debug(
        "Validated %s: %d error(s) from %d rule(s)",
        record_type.name,
        len(result.errors),
        len(record_type.rules),
    )
    return result


def validate_value(
    record_type: RecordType, field_name: str, value: Any
) -> ValidationResult:
    """Run only the rules for `field_name` against a candidate `value`.

    The candidate is checked in isolation; no record state is read or written.

    Raises:
        UnknownFieldError: if `field_name` is not declared on `record_type`.
    """
    field = record_type.field(field_name)
    return ValidationResult.from_errors(
        chain(
            _run(record_type.rules.rules_for(field_name), lambda _: value),
            _type_errors([field], lambda _: value),
        )
    )
