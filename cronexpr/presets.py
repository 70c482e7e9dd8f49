"""Preset expressions and builder helpers.

The builder is plain string composition: the five field inputs are joined
with spaces and nothing is interpreted until the result is validated.
"""

from dataclasses import dataclass

from cronexpr.fields import FIELD_NAMES

DEFAULT_EXPRESSION = "* * * * *"

LEGEND_LABELS = ("min", "hour", "day", "month", "week")


@dataclass(frozen=True)
class Preset:
    label: str
    expression: str


PRESETS: tuple[Preset, ...] = (
    Preset("Every minute", "* * * * *"),
    Preset("Every 5 minutes", "*/5 * * * *"),
    Preset("Every 15 minutes", "*/15 * * * *"),
    Preset("Every hour", "0 * * * *"),
    Preset("Every day at midnight", "0 0 * * *"),
    Preset("Weekdays at 9 AM", "0 9 * * 1-5"),
    Preset("Every Sunday at midnight", "0 0 * * 0"),
    Preset("First of month", "0 0 1 * *"),
    Preset("Twice daily", "0 0,12 * * *"),
)


def compose(minute: str, hour: str, day: str, month: str, weekday: str) -> str:
    """Join five raw field strings into one expression."""
    return " ".join((minute, hour, day, month, weekday))


def split_fields(raw: str) -> dict[str, str] | None:
    """Split raw text into named fields, or None if it is not 5 tokens."""
    parts = raw.split()
    if len(parts) != 5:
        return None
    return dict(zip(FIELD_NAMES, parts))


def field_legend(raw: str) -> list[tuple[str, str]]:
    """Pair each field value with its short label, e.g. ("*/5", "min")."""
    parts = raw.split()
    if len(parts) != 5:
        return []
    return list(zip(parts, LEGEND_LABELS))


def find_preset(raw: str, presets: tuple[Preset, ...] = PRESETS) -> Preset | None:
    """Return the preset whose expression equals the trimmed raw text."""
    raw = raw.strip()
    for preset in presets:
        if preset.expression == raw:
            return preset
    return None
