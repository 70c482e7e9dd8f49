"""Upcoming occurrences of a cron expression.

Occurrences are found by probing one minute at a time from the reference
instant, for at most `max_probes` minutes. Sparse expressions therefore
return fewer results than requested, possibly none; that is not an error.
"""

import logging
from datetime import datetime, timedelta, timezone
from itertools import islice
from typing import Iterator

from cronexpr.matcher import matches
from cronexpr.parser import CronExpression

logger = logging.getLogger(__name__)

MAX_PROBES = 100
DEFAULT_COUNT = 5

_MINUTE = timedelta(minutes=1)


def iter_occurrences(
    expression: CronExpression,
    reference: datetime,
    max_probes: int = MAX_PROBES,
) -> Iterator[datetime]:
    """Yield matching instants from the reference minute onwards.

    The reference minute itself is included. Seconds and microseconds of the
    reference are dropped. Aware references advance in absolute minutes, so
    a skipped DST hour is never yielded and a repeated one is visited twice.
    """
    start = reference.replace(second=0, microsecond=0)
    zone = start.tzinfo
    if zone is not None:
        start = start.astimezone(timezone.utc)
    for k in range(max_probes):
        candidate = start + k * _MINUTE
        if zone is not None:
            candidate = candidate.astimezone(zone)
        if matches(candidate, expression):
            yield candidate


def next_occurrences(
    expression: CronExpression,
    reference: datetime,
    count: int = DEFAULT_COUNT,
    max_probes: int = MAX_PROBES,
) -> list[datetime]:
    """Return up to `count` matching instants within the probe window."""
    if count <= 0:
        return []
    runs = list(islice(iter_occurrences(expression, reference, max_probes), count))
    if len(runs) < count:
        logger.debug(
            "Found %d of %d occurrences for '%s' within %d minutes",
            len(runs), count, expression, max_probes,
        )
    return runs
