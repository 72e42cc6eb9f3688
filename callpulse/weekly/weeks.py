"""ISO week arithmetic and score rounding shared by the weekly engine."""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal

_ONE_DECIMAL = Decimal("0.1")


def iso_week(day: date) -> tuple[int, int]:
    """Return (week_number, year) for a date on the ISO-8601 calendar.

    Weeks start on Monday; week 1 is the week holding the year's first
    Thursday. The year is the ISO year, so 2021-01-01 belongs to week 53
    of 2020.
    """
    iso = day.isocalendar()
    return iso[1], iso[0]


def previous_week(week_number: int, year: int) -> tuple[int, int]:
    """Return the (week_number, year) reported immediately before this one.

    Week 1 always rolls back to week 52 of the prior year. A 53rd ISO week,
    when a year has one, is never used as a predecessor.
    """
    if not 1 <= week_number <= 53:
        raise ValueError(f"week_number must be between 1 and 53, got {week_number}")
    if week_number == 1:
        return 52, year - 1
    return week_number - 1, year


def round_half_up(value: Decimal | int | float) -> Decimal:
    """Round to one decimal place, halves away from zero."""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP)
