"""English descriptions of validated cron expressions."""

from cronexpr.fields import FieldPattern, PatternKind
from cronexpr.parser import CronExpression

DAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")

MONTH_NAMES = (
    "", "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def _minute_clause(pattern: FieldPattern) -> str:
    if pattern.kind is PatternKind.WILDCARD:
        return "every minute"
    if pattern.kind is PatternKind.STEPPED:
        return f"every {pattern.step_text} minutes"
    if pattern.kind is PatternKind.LIST:
        return f"minute {', '.join(pattern.entries)}"
    return f"minute {pattern.text}"


def _weekday_clause(pattern: FieldPattern) -> str:
    if pattern.text == "1-5":
        return ", on weekdays (Monday through Friday)"
    if pattern.is_wildcard_step:
        return f", every {pattern.step} days of the week"
    if pattern.kind in (PatternKind.RANGE, PatternKind.STEPPED):
        return f", from {DAY_NAMES[pattern.start]} through {DAY_NAMES[pattern.end]}"
    names = [DAY_NAMES[value] for value in pattern.values]
    return f", on {', '.join(names)}"


def _month_clause(pattern: FieldPattern) -> str:
    if pattern.is_wildcard_step:
        return f", every {pattern.step} months"
    if pattern.kind in (PatternKind.RANGE, PatternKind.STEPPED):
        return f", from {MONTH_NAMES[pattern.start]} through {MONTH_NAMES[pattern.end]}"
    names = [MONTH_NAMES[value] for value in pattern.values]
    return f", in {', '.join(names)}"


def describe(expression: CronExpression) -> str:
    """Render a validated expression as one English sentence.

    Weekday wins over day-of-month when both are restricted. The hour is
    always rendered from its raw text ("past hour */6"), unlike the minute.
    """
    minute, hour, day, month, weekday = expression.patterns

    text = "At " + _minute_clause(minute)

    if hour.kind is not PatternKind.WILDCARD:
        text += f" past hour {hour.text}"

    if weekday.kind is not PatternKind.WILDCARD:
        text += _weekday_clause(weekday)
    elif day.kind is not PatternKind.WILDCARD:
        text += f", on day {day.text} of the month"

    if month.kind is not PatternKind.WILDCARD:
        text += _month_clause(month)

    return text + "."
