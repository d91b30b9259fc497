"""Guess the layout of a date string and parse it without a format string.

Layouts are recognized from their lexical shape (03/31/2014, 2014-03-31,
29-Jun-2016, oct. 7, '70, Tuesday April 8th, 2009, ...). Ambiguous numeric
layouts are always read month-first.
"""

from .errors import (
    InvalidCalendarDate,
    MissingUnit,
    MonthNameUnrecognized,
    MonthOutOfRange,
    MonthUnderflow,
    ParseError,
    StartCharacterInvalid,
    UnexpectedCharacterAt,
    UnitLengthInvalid,
    YearNotNumeric,
)
from .lines import count_dated, first_date
from .parser import DateParser, parse, try_parse
from .types import LineMatch, ScanPolicy, ScanResult, Span, State, Unit
