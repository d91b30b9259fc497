from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from dotenv import load_dotenv


class Unit(str, Enum):
    YEAR = "year"
    MONTH = "month"
    DAY = "day"


# Allowed span lengths when a span is closed by counting characters.
UNIT_LENGTHS: dict[Unit, frozenset[int]] = {
    Unit.YEAR: frozenset({2, 4}),
    Unit.MONTH: frozenset({1, 2, 3, 4}),
    Unit.DAY: frozenset({1, 2}),
}


class State(Enum):
    """Cursor states of the layout scanner.

    Names spell out the shape consumed so far, e.g. DIGIT_WS is
    "digits then whitespace" and ALPHA_WS_DIGIT is "letters, space, digits".
    """

    START_OVER = "start_over"
    START = "start"
    ALPHA = "alpha"
    DIGIT = "digit"
    YEAR_DASH = "year_dash"
    DIGIT_DASH = "digit_dash"
    DIGIT_SLASH = "digit_slash"
    DIGIT_COLON = "digit_colon"
    DIGIT_DOT = "digit_dot"
    DIGIT_WS = "digit_ws"
    YEAR_DASH_DASH = "year_dash_dash"
    YEAR_DASH_DASH_T = "year_dash_dash_t"
    YEAR_DASH_DASH_WS = "year_dash_dash_ws"
    DIGIT_DASH_ALPHA = "digit_dash_alpha"
    YEAR_DASH_ALPHA_DASH = "year_dash_alpha_dash"
    DIGIT_DASH_ALPHA_DASH = "digit_dash_alpha_dash"
    DIGIT_DOT_DOT = "digit_dot_dot"
    ALPHA_WS = "alpha_ws"
    ALPHA_WS_MONTH = "alpha_ws_month"
    ALPHA_WS_MORE = "alpha_ws_more"
    WEEKDAY_ABBR_COMMA = "weekday_abbr_comma"
    WEEKDAY_COMMA = "weekday_comma"
    ALPHA_PERIOD_WS_DIGIT = "alpha_period_ws_digit"
    ALPHA_WS_ALPHA = "alpha_ws_alpha"
    ALPHA_WS_DIGIT = "alpha_ws_digit"
    ALPHA_WS_DIGIT_MORE = "alpha_ws_digit_more"
    ALPHA_WS_DIGIT_YEAR_POSSIBLE = "alpha_ws_digit_year_possible"
    ALPHA_WS_MONTH_SUFFIX = "alpha_ws_month_suffix"
    ALPHA_WS_DIGIT_MORE_WS = "alpha_ws_digit_more_ws"
    ALPHA_WS_DIGIT_MORE_WS_YEAR = "alpha_ws_digit_more_ws_year"
    ALPHA_WS_MONTH_MORE = "alpha_ws_month_more"
    DIGIT_WS_MONTH_LONG = "digit_ws_month_long"
    DIGIT_WS_MONTH_YEAR = "digit_ws_month_year"


@dataclass(frozen=True)
class Span:
    """Location of one field inside the character buffer.

    An open span knows only where the field starts (length is None);
    a closed span also knows how long it is.
    """

    pos: int
    length: int | None = None

    @property
    def is_open(self) -> bool:
        return self.length is None


@dataclass(frozen=True)
class ScanResult:
    """Finalized output of one successful scan."""

    state: State
    text: str  # buffer contents after any edits
    year: Span | None
    month: Span | None
    day: Span | None
    restarts: int = 0

    def field_text(self, unit: Unit) -> str:
        span = getattr(self, unit.value)
        if span is None or span.length is None:
            return ""
        return self.text[span.pos : span.pos + span.length]


@dataclass(frozen=True)
class LineMatch:
    """A date found while scanning a block of text lines."""

    index: int  # position among the non-empty lines
    source: str
    value: datetime


@dataclass(frozen=True)
class ScanPolicy:
    """Controls how a block of lines is searched for a date.

    - max_lines: only the first N non-empty lines are tried.
    - strip_chars: trailing punctuation removed from a line before parsing.
    """

    max_lines: int = 10
    strip_chars: str = ".;:!"

    def __post_init__(self) -> None:
        if self.max_lines < 1:
            raise ValueError(f"max_lines must be >= 1, got {self.max_lines}")

    @classmethod
    def from_env(cls) -> "ScanPolicy":
        load_dotenv()
        raw_lines = os.environ.get("GUESSDATE_MAX_LINES", "").strip()
        strip_chars = os.environ.get("GUESSDATE_STRIP_CHARS")

        max_lines = cls.max_lines
        if raw_lines:
            try:
                max_lines = int(raw_lines)
            except ValueError:
                raise ValueError(f"GUESSDATE_MAX_LINES must be an integer, got {raw_lines!r}") from None

        return cls(
            max_lines=max_lines,
            strip_chars=cls.strip_chars if strip_chars is None else strip_chars,
        )
