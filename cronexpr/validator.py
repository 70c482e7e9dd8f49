"""Validation of cron fields against their domain bounds.

Validation stops at the first invalid field, in minute, hour, day, month,
weekday order, and reports only that field's error.

Numbers are parsed strictly (see fields.parse_int). Text that a lenient
prefix parse would accept, such as "5abc", "1-5,7" or "*/5/2", is rejected
here on purpose.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from cronexpr.fields import FIELD_SPECS, FieldPattern, PatternKind, classify
from cronexpr.parser import CronExpression, ParseError, parse

logger = logging.getLogger(__name__)


class FieldErrorKind(Enum):
    STEP = "step"
    RANGE = "range"
    VALUE = "value"


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating a field or a whole expression.

    Attributes:
        valid: Whether validation passed.
        error: Human-readable diagnostic, e.g. "Invalid minute value: 60".
        field: Name of the offending field, if a field failed.
        fragment: The raw text that failed (entry, range or step).
        kind: Which rule failed, if a field failed.
    """

    valid: bool
    error: str | None = None
    field: str | None = None
    fragment: str | None = None
    kind: FieldErrorKind | None = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(valid=True)

    @classmethod
    def field_error(cls, kind: FieldErrorKind, name: str, fragment: str) -> "ValidationResult":
        return cls(
            valid=False,
            error=f"Invalid {name} {kind.value}: {fragment}",
            field=name,
            fragment=fragment,
            kind=kind,
        )

    def __bool__(self) -> bool:
        return self.valid


def _range_ok(start: int | None, end: int | None, minimum: int, maximum: int) -> bool:
    if start is None or end is None:
        return False
    return minimum <= start <= end <= maximum


def _value_ok(value: int | None, minimum: int, maximum: int) -> bool:
    return value is not None and minimum <= value <= maximum


def check_pattern(pattern: FieldPattern, minimum: int, maximum: int, name: str) -> ValidationResult:
    """Validate an already classified field pattern."""
    kind = pattern.kind

    if kind is PatternKind.WILDCARD:
        return ValidationResult.ok()

    if kind is PatternKind.STEPPED:
        if pattern.base != "*" and not _range_ok(pattern.start, pattern.end, minimum, maximum):
            return ValidationResult.field_error(FieldErrorKind.RANGE, name, pattern.base)
        if pattern.step is None or pattern.step <= 0:
            return ValidationResult.field_error(FieldErrorKind.STEP, name, pattern.step_text)
        return ValidationResult.ok()

    if kind is PatternKind.RANGE:
        if not _range_ok(pattern.start, pattern.end, minimum, maximum):
            return ValidationResult.field_error(FieldErrorKind.RANGE, name, pattern.text)
        return ValidationResult.ok()

    if kind is PatternKind.LIST:
        for entry, value in zip(pattern.entries, pattern.values):
            if not _value_ok(value, minimum, maximum):
                return ValidationResult.field_error(FieldErrorKind.VALUE, name, entry)
        return ValidationResult.ok()

    if not _value_ok(pattern.values[0], minimum, maximum):
        return ValidationResult.field_error(FieldErrorKind.VALUE, name, pattern.text)
    return ValidationResult.ok()


def validate_field(text: str, minimum: int, maximum: int, name: str) -> ValidationResult:
    """Check that a raw field string is valid for the given bounds."""
    return check_pattern(classify(text), minimum, maximum, name)


def validate(expression: CronExpression) -> ValidationResult:
    """Validate all five fields, stopping at the first failure."""
    for spec, pattern in zip(FIELD_SPECS, expression.patterns):
        result = check_pattern(pattern, spec.min, spec.max, spec.name)
        if not result.valid:
            logger.debug("Expression '%s' invalid: %s", expression, result.error)
            return result
    return ValidationResult.ok()


def validate_text(raw: str) -> ValidationResult:
    """Parse and validate raw text, reporting arity errors as a result."""
    try:
        expression = parse(raw)
    except ParseError as e:
        return ValidationResult(valid=False, error=str(e))
    return validate(expression)


def is_valid(raw: str) -> bool:
    return validate_text(raw).valid
