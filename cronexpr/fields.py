"""Field bounds and pattern classification for 5-field cron expressions.

Each raw field string is classified once into a FieldPattern: one of five
shapes (wildcard, stepped, range, list, literal) carrying its parsed numbers.
The validator and the matcher both work from the same FieldPattern, so they
always agree on which shape a field has.

Shape precedence is by separator: '/' first, then '-', then ',', else literal.
"""

import re
from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class FieldSpec:
    name: str
    min: int
    max: int


# Canonical field order: minute hour day month weekday (0=Sunday)
FIELD_SPECS: tuple[FieldSpec, ...] = (
    FieldSpec("minute", 0, 59),
    FieldSpec("hour", 0, 23),
    FieldSpec("day", 1, 31),
    FieldSpec("month", 1, 12),
    FieldSpec("weekday", 0, 6),
)

FIELD_NAMES: tuple[str, ...] = tuple(spec.name for spec in FIELD_SPECS)

_INT_RE = re.compile(r"\d+", re.ASCII)


class PatternKind(Enum):
    WILDCARD = "wildcard"
    STEPPED = "stepped"
    RANGE = "range"
    LIST = "list"
    LITERAL = "literal"


@dataclass(frozen=True)
class FieldPattern:
    """A classified field.

    Numbers that failed to parse are left as None; the validator reports
    them, the matcher assumes they are present.

    Attributes:
        kind: The shape of the field.
        text: The raw field text.
        start: Range start (RANGE, or STEPPED with a range base).
        end: Range end (RANGE, or STEPPED with a range base).
        step: Step value (STEPPED).
        values: Parsed entries (LIST, LITERAL).
        base: Text before the '/' (STEPPED).
        step_text: Text after the '/' (STEPPED).
        entries: Raw comma-separated entries (LIST).
    """

    kind: PatternKind
    text: str
    start: int | None = None
    end: int | None = None
    step: int | None = None
    values: tuple[int | None, ...] = ()
    base: str = ""
    step_text: str = ""
    entries: tuple[str, ...] = ()

    @property
    def is_wildcard_step(self) -> bool:
        return self.kind is PatternKind.STEPPED and self.base == "*"


def parse_int(text: str) -> int | None:
    """Parse a non-negative decimal integer, or return None.

    Only ASCII digits are accepted; signs, decimals and trailing junk fail.
    """
    text = text.strip()
    if not _INT_RE.fullmatch(text):
        return None
    return int(text)


def parse_range(text: str) -> tuple[int | None, int | None]:
    """Split 'a-b' into its two endpoints. A missing '-' gives no end."""
    start, sep, end = text.partition("-")
    if not sep:
        return parse_int(start), None
    return parse_int(start), parse_int(end)


def classify(text: str) -> FieldPattern:
    """Classify a raw field string into its pattern shape."""
    if text == "*":
        return FieldPattern(PatternKind.WILDCARD, text)

    if "/" in text:
        base, _, step_text = text.partition("/")
        start = end = None
        if base != "*":
            start, end = parse_range(base)
        return FieldPattern(
            PatternKind.STEPPED,
            text,
            start=start,
            end=end,
            step=parse_int(step_text),
            base=base,
            step_text=step_text,
        )

    if "-" in text:
        start, end = parse_range(text)
        return FieldPattern(PatternKind.RANGE, text, start=start, end=end)

    if "," in text:
        entries = tuple(text.split(","))
        return FieldPattern(
            PatternKind.LIST,
            text,
            values=tuple(parse_int(entry) for entry in entries),
            entries=entries,
        )

    return FieldPattern(PatternKind.LITERAL, text, values=(parse_int(text),))


def field_spec(name: str) -> FieldSpec:
    """Look up the bounds for a field by name."""
    for spec in FIELD_SPECS:
        if spec.name == name:
            return spec
    raise KeyError(f"Unknown cron field: {name}")
