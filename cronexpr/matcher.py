"""Matching calendar instants against cron fields.

Assumes the expression has already been validated. All five fields are
ANDed, including day-of-month and day-of-week when both are restricted.
"""

from datetime import datetime

from cronexpr.fields import FieldPattern, PatternKind, classify
from cronexpr.parser import CronExpression


def field_matches(value: int, pattern: str | FieldPattern) -> bool:
    """Check if a single calendar value satisfies a field pattern.

    A wildcard step ('*/n') matches multiples of n counted from zero, not from
    the field minimum: day '*/2' matches 2, 4, ... 30 and never 1. A range
    step ('a-b/n') counts from a.
    """
    if isinstance(pattern, str):
        pattern = classify(pattern)

    kind = pattern.kind
    if kind is PatternKind.WILDCARD:
        return True
    if kind is PatternKind.STEPPED:
        if pattern.is_wildcard_step:
            return value % pattern.step == 0
        return pattern.start <= value <= pattern.end and (value - pattern.start) % pattern.step == 0
    if kind is PatternKind.RANGE:
        return pattern.start <= value <= pattern.end
    # LIST and LITERAL
    return value in pattern.values


def calendar_values(instant: datetime) -> tuple[int, int, int, int, int]:
    """Extract (minute, hour, day, month, weekday) with 0=Sunday."""
    # Python weekday: 0=Monday; cron weekday: 0=Sunday
    return (
        instant.minute,
        instant.hour,
        instant.day,
        instant.month,
        instant.isoweekday() % 7,
    )


def matches(instant: datetime, expression: CronExpression) -> bool:
    """Check if an instant satisfies every field of the expression."""
    return all(
        field_matches(value, pattern)
        for value, pattern in zip(calendar_values(instant), expression.patterns)
    )
