"""Splitting raw cron text into its five fields."""

import logging
from dataclasses import dataclass
from functools import cached_property

from cronexpr.fields import FIELD_NAMES, FieldPattern, classify

logger = logging.getLogger(__name__)

ARITY_ERROR = "Must have exactly 5 fields"


class CronError(ValueError):
    """Base class for cron expression errors."""


class ParseError(CronError):
    """Raised when the raw text does not have exactly 5 fields."""

    def __init__(self, raw: str, field_count: int) -> None:
        self.raw = raw
        self.field_count = field_count
        super().__init__(ARITY_ERROR)


@dataclass(frozen=True)
class CronExpression:
    """A parsed cron expression: five raw field strings in canonical order."""

    minute: str
    hour: str
    day: str
    month: str
    weekday: str

    @property
    def fields(self) -> tuple[str, str, str, str, str]:
        return (self.minute, self.hour, self.day, self.month, self.weekday)

    @cached_property
    def patterns(self) -> tuple[FieldPattern, ...]:
        """Classified patterns, computed once per expression."""
        return tuple(classify(text) for text in self.fields)

    def pattern(self, name: str) -> FieldPattern:
        return self.patterns[FIELD_NAMES.index(name)]

    def __str__(self) -> str:
        return " ".join(self.fields)


def parse(raw: str) -> CronExpression:
    """Split trimmed input on runs of whitespace into a CronExpression.

    Raises:
        ParseError: If the text does not contain exactly 5 fields.
    """
    parts = raw.split()
    if len(parts) != 5:
        logger.debug("Rejected %r: %d fields", raw, len(parts))
        raise ParseError(raw, len(parts))
    return CronExpression(*parts)
