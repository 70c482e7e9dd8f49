"""Full analysis of a raw expression, as shown to a user while typing."""

import logging
from dataclasses import dataclass, field
from datetime import datetime

from cronexpr.describer import describe
from cronexpr.occurrences import DEFAULT_COUNT, MAX_PROBES, next_occurrences
from cronexpr.parser import parse
from cronexpr.presets import PRESETS, Preset, field_legend, find_preset, split_fields
from cronexpr.validator import validate_text

logger = logging.getLogger(__name__)

INVALID_DESCRIPTION = "Please enter a valid cron expression to see the description."


@dataclass
class Analysis:
    """Everything derived from one raw expression."""

    expression: str
    valid: bool
    error: str | None = None
    description: str = INVALID_DESCRIPTION
    occurrences: list[datetime] = field(default_factory=list)
    legend: list[tuple[str, str]] = field(default_factory=list)
    fields: dict[str, str] | None = None
    preset: Preset | None = None


def analyze(
    raw: str,
    reference: datetime,
    count: int = DEFAULT_COUNT,
    max_probes: int = MAX_PROBES,
    presets: tuple[Preset, ...] = PRESETS,
) -> Analysis:
    """Validate raw text and, when valid, describe it and list next runs."""
    text = raw.strip()
    result = validate_text(text)
    analysis = Analysis(
        expression=text,
        valid=result.valid,
        error=result.error,
        legend=field_legend(text),
        fields=split_fields(text),
        preset=find_preset(text, presets),
    )
    if not result.valid:
        return analysis

    expression = parse(text)
    analysis.description = describe(expression)
    analysis.occurrences = next_occurrences(expression, reference, count, max_probes)
    logger.debug("Analyzed '%s': %d occurrences", text, len(analysis.occurrences))
    return analysis
