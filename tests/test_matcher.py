"""Tests for cronexpr.matcher."""

from datetime import datetime

import pytest

from cronexpr.fields import FIELD_SPECS, classify
from cronexpr.matcher import calendar_values, field_matches, matches
from cronexpr.parser import parse


@pytest.mark.parametrize("spec", FIELD_SPECS, ids=lambda s: s.name)
def test_wildcard_matches_whole_domain(spec):
    assert all(field_matches(v, "*") for v in range(spec.min, spec.max + 1))


def test_literal_round_trip():
    """A literal matches itself and not its neighbour."""
    for n in range(0, 59):
        assert field_matches(n, str(n))
        assert not field_matches(n + 1, str(n))


def test_wildcard_step():
    assert field_matches(0, "*/15")
    assert field_matches(15, "*/15")
    assert field_matches(45, "*/15")
    assert not field_matches(7, "*/15")


def test_wildcard_step_ignores_field_minimum():
    """'*/2' on the day field counts from zero: 1 never matches, 2 does."""
    assert not field_matches(1, "*/2")
    assert field_matches(2, "*/2")
    assert field_matches(30, "*/2")
    assert not field_matches(31, "*/2")


def test_range_step_counts_from_start():
    assert field_matches(1, "1-31/2")
    assert field_matches(31, "1-31/2")
    assert not field_matches(2, "1-31/2")
    assert not field_matches(0, "10-20/5")
    assert field_matches(15, "10-20/5")
    assert not field_matches(25, "10-20/5")


def test_range():
    assert field_matches(1, "1-5")
    assert field_matches(5, "1-5")
    assert not field_matches(0, "1-5")
    assert not field_matches(6, "1-5")


def test_list():
    assert field_matches(15, "0,15,30")
    assert not field_matches(16, "0,15,30")


def test_accepts_classified_pattern():
    pattern = classify("*/10")
    assert field_matches(20, pattern)
    assert not field_matches(25, pattern)


# ── Instants ───────────────────────────────────────────

def test_calendar_values_sunday_is_zero():
    # 2024-01-07 was a Sunday
    assert calendar_values(datetime(2024, 1, 7, 13, 45)) == (45, 13, 7, 1, 0)
    assert calendar_values(datetime(2024, 1, 6, 0, 0))[4] == 6
    assert calendar_values(datetime(2024, 1, 1, 0, 0))[4] == 1


def test_matches_all_fields():
    expr = parse("0 9 * * 1-5")
    assert matches(datetime(2024, 1, 1, 9, 0), expr)
    assert not matches(datetime(2024, 1, 1, 9, 1), expr)
    assert not matches(datetime(2024, 1, 7, 9, 0), expr)


def test_day_and_weekday_are_anded():
    """Both day-of-month and day-of-week must match when both are set."""
    expr = parse("0 0 1 * 1")
    # 2024-01-01: day 1, Monday
    assert matches(datetime(2024, 1, 1), expr)
    # 2024-02-01: day 1, Thursday
    assert not matches(datetime(2024, 2, 1), expr)
    # 2024-01-08: Monday, day 8
    assert not matches(datetime(2024, 1, 8), expr)
