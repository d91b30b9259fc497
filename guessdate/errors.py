from __future__ import annotations


class ParseError(ValueError):
    """Base class for every reason a date string could not be parsed."""


class StartCharacterInvalid(ParseError):
    def __init__(self, char: str = "") -> None:
        self.char = char
        super().__init__(f"Unexpected date start char: {char!r}.")


class UnexpectedCharacterAt(ParseError):
    def __init__(self, position: int) -> None:
        self.position = position
        super().__init__(f"Unexpected char at {position} position.")


class UnitLengthInvalid(ParseError):
    def __init__(self, unit: str, got: int) -> None:
        self.unit = unit
        self.got = got
        super().__init__(f"Unexpected the {unit} unit length. Got {got}.")


class MissingUnit(ParseError):
    def __init__(self, unit: str, text: str = "") -> None:
        self.unit = unit
        self.text = text
        super().__init__(f"Missing unit {unit} in '{text}'.")


class MonthOutOfRange(ParseError):
    def __init__(self, got: int) -> None:
        self.got = got
        super().__init__(f"Overflow of the month: max 12, got {got}")


class MonthUnderflow(ParseError):
    def __init__(self, got: int) -> None:
        self.got = got
        super().__init__(f"Underflow of the month: min 1, got {got}")


class YearNotNumeric(ParseError):
    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__(f"Got invalid textual value of year: '{text}'.")


class MonthNameUnrecognized(ParseError):
    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__(f"Got invalid textual value of month: '{text}'.")


class InvalidCalendarDate(ParseError):
    def __init__(self, year: int, month: int, day: int) -> None:
        self.year = year
        self.month = month
        self.day = day
        super().__init__(f"Not a calendar date: year={year} month={month} day={day}")
