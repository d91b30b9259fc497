from __future__ import annotations

from datetime import datetime

from .errors import (
    InvalidCalendarDate,
    MissingUnit,
    MonthNameUnrecognized,
    MonthOutOfRange,
    MonthUnderflow,
    YearNotNumeric,
)
from .lexicon import month_number
from .types import ScanResult, Unit

# Two-digit years are read as 19YY; there is no pivot year.
TWO_DIGIT_CENTURY = 1900


def _is_number(s: str) -> bool:
    return bool(s) and s.isascii() and s.isdigit()


def day_value(text: str) -> int:
    """Day of month; layouts without a day token (2014.03) default to 1."""
    return int(text) if _is_number(text) else 1


def month_value(text: str) -> int:
    if _is_number(text):
        m = int(text)
        if m < 1:
            raise MonthUnderflow(m)
        if m > 12:
            raise MonthOutOfRange(m)
        return m

    m = month_number(text)
    if m is None:
        raise MonthNameUnrecognized(text)
    return m


def year_value(text: str) -> int:
    if not _is_number(text):
        raise YearNotNumeric(text)
    y = int(text)
    if len(text) == 2:
        y += TWO_DIGIT_CENTURY
    return y


def assemble(result: ScanResult) -> datetime:
    """Turn finalized spans into a datetime at midnight."""

    if result.year is None:
        raise MissingUnit(Unit.YEAR.value, result.text)
    if result.month is None:
        raise MissingUnit(Unit.MONTH.value, result.text)

    d = day_value(result.field_text(Unit.DAY))
    m = month_value(result.field_text(Unit.MONTH))
    y = year_value(result.field_text(Unit.YEAR))

    try:
        return datetime(y, m, d)
    except ValueError:
        raise InvalidCalendarDate(y, m, d) from None
