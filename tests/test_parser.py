"""Tests for cronexpr.parser."""

import pytest

from cronexpr.fields import PatternKind
from cronexpr.parser import CronError, CronExpression, ParseError, parse


def test_parse_five_fields():
    """Parse should split on whitespace into five fields."""
    expr = parse("0 9 * * 1-5")
    assert expr.fields == ("0", "9", "*", "*", "1-5")
    assert expr.minute == "0"
    assert expr.weekday == "1-5"


def test_parse_collapses_whitespace():
    """Runs of whitespace and surrounding space should be ignored."""
    expr = parse("  */5 \t 0   1  *  * \n")
    assert expr.fields == ("*/5", "0", "1", "*", "*")
    assert str(expr) == "*/5 0 1 * *"


@pytest.mark.parametrize("raw", ["", "   ", "* * * *", "* * * * * *", "0 0 1 1 * 2024"])
def test_parse_wrong_arity(raw):
    """Anything other than 5 tokens is a parse error."""
    with pytest.raises(ParseError) as exc_info:
        parse(raw)
    assert str(exc_info.value) == "Must have exactly 5 fields"
    assert exc_info.value.field_count == len(raw.split())


def test_parse_error_is_value_error():
    assert issubclass(ParseError, CronError)
    assert issubclass(ParseError, ValueError)


def test_parse_does_not_interpret_fields():
    """Field contents are only checked by the validator."""
    expr = parse("a b c d e")
    assert expr.fields == ("a", "b", "c", "d", "e")


def test_patterns_are_cached():
    expr = parse("*/15 9 * * 1")
    assert expr.patterns is expr.patterns
    assert expr.pattern("minute").kind is PatternKind.STEPPED
    assert expr.pattern("weekday").values == (1,)


def test_expression_is_immutable():
    expr = CronExpression("*", "*", "*", "*", "*")
    with pytest.raises(AttributeError):
        expr.minute = "5"
