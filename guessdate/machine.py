"""Layout scanner: walks the buffer once per pass and locates year/month/day.

Each state owns one transition function in TRANSITIONS. A transition gets the
current character and its index, may update spans, and returns the index of
the next character to read (None means "the next one"). Returning the same
index re-reads the character in the new state.

A transition that edits the buffer moves to State.START_OVER; the driver then
throws the pass away and rescans the shorter buffer with fresh spans.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from . import lexicon
from .buffer import CharacterBuffer
from .errors import MissingUnit, StartCharacterInvalid, UnexpectedCharacterAt, UnitLengthInvalid
from .types import UNIT_LENGTHS, ScanResult, Span, State, Unit

# " Sep": a space plus a three-letter month abbreviation.
ABBREVIATED_MONTH_WIDTH = 4

# "  2018": the tail after a full month name in "8 January 2018".
LONG_MONTH_TAIL = 6

# " 31, 2018" is 9 chars; anything longer after a full month name carries extra text.
SHORT_MONTH_REMAINDER = 10

# Ordinal suffix first letter -> accepted second letters.
SUFFIX_PAIRS = {
    "t": "hH",
    "T": "hH",
    "r": "dD",
    "R": "dD",
    "n": "dD",
    "N": "dD",
    "s": "tT",
    "S": "tT",
}


def is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def is_alpha(ch: str) -> bool:
    return ch.isascii() and ch.isalpha()


@dataclass
class Scan:
    """Mutable state of a single pass over the buffer."""

    buffer: CharacterBuffer
    state: State = State.START
    year: Span | None = None
    month: Span | None = None
    day: Span | None = None
    first_part_len: int = 0
    full_month: str = ""
    skip_pos: int = 0

    def span(self, unit: Unit) -> Span | None:
        return getattr(self, unit.value)

    def is_open(self, unit: Unit) -> bool:
        s = self.span(unit)
        return s is not None and s.is_open

    def is_closed(self, unit: Unit) -> bool:
        s = self.span(unit)
        return s is not None and not s.is_open

    def open(self, unit: Unit, pos: int) -> None:
        setattr(self, unit.value, Span(pos))

    def set(self, unit: Unit, pos: int, length: int) -> None:
        _check_length(unit, length)
        setattr(self, unit.value, Span(pos, length))

    def close(self, unit: Unit, end: int) -> None:
        s = self.span(unit)
        if s is None:
            raise MissingUnit(unit.value, self.buffer.text)
        self.set(unit, s.pos, end - s.pos)

    def restart(self) -> None:
        self.state = State.START_OVER


def _check_length(unit: Unit, length: int) -> None:
    if length not in UNIT_LENGTHS[unit]:
        raise UnitLengthInvalid(unit.value, length)


Transition = Callable[[Scan, str, int], "int | None"]


def _start(scan: Scan, ch: str, i: int) -> int | None:
    if is_digit(ch):
        scan.state = State.DIGIT
    elif is_alpha(ch):
        scan.state = State.ALPHA
    else:
        raise StartCharacterInvalid(ch)
    return None


def _year_first(scan: Scan, i: int) -> None:
    scan.set(Unit.YEAR, 0, i)
    scan.open(Unit.MONTH, i + 1)


def _month_first(scan: Scan, i: int) -> None:
    scan.set(Unit.MONTH, 0, i)
    scan.open(Unit.DAY, i + 1)


def _digit(scan: Scan, ch: str, i: int) -> int | None:
    # 2006-01-02, 2013-Feb-03, 29-Jun-2016, 03/31/2005, 2014/02/24,
    # 3.31.2014, 2014.05, 8 jan 2018, 18 January 2018
    if ch == "-":
        if i == 4:
            scan.state = State.YEAR_DASH
            _year_first(scan, i)
        else:
            scan.state = State.DIGIT_DASH
            scan.set(Unit.DAY, 0, i)
    elif ch == "/":
        scan.state = State.DIGIT_SLASH
        if i == 4:
            _year_first(scan, i)
        else:
            _month_first(scan, i)
    elif ch == ":":
        scan.state = State.DIGIT_COLON
        if i == 4:
            _year_first(scan, i)
        else:
            _month_first(scan, i)
    elif ch == ".":
        scan.state = State.DIGIT_DOT
        if i == 4:
            _year_first(scan, i)
        else:
            _month_first(scan, i)
    elif ch == " ":
        scan.state = State.DIGIT_WS
        scan.set(Unit.DAY, 0, i)
    scan.first_part_len = i
    return None


def _year_dash(scan: Scan, ch: str, i: int) -> int | None:
    if ch == "-":
        scan.close(Unit.MONTH, i)
        scan.open(Unit.DAY, i + 1)
        scan.state = State.YEAR_DASH_DASH
    elif is_alpha(ch):
        scan.state = State.YEAR_DASH_ALPHA_DASH
    return None


def _year_dash_dash(scan: Scan, ch: str, i: int) -> int | None:
    # 2006-01-02T15:04:05Z07:00, 2013-04-01 22:43:22
    if ch in "Tt":
        scan.close(Unit.DAY, i)
        scan.state = State.YEAR_DASH_DASH_T
    elif ch == " ":
        scan.close(Unit.DAY, i)
        scan.state = State.YEAR_DASH_DASH_WS
    return None


def _year_dash_alpha_dash(scan: Scan, ch: str, i: int) -> int | None:
    if ch == "-" and scan.is_open(Unit.MONTH):
        scan.close(Unit.MONTH, i)
        scan.open(Unit.DAY, i + 1)
    return None


def _digit_dash(scan: Scan, ch: str, i: int) -> int | None:
    if not is_alpha(ch):
        raise UnexpectedCharacterAt(i)
    scan.state = State.DIGIT_DASH_ALPHA
    scan.open(Unit.MONTH, i)
    return None


def _digit_dash_alpha(scan: Scan, ch: str, i: int) -> int | None:
    if ch == "-":
        scan.close(Unit.MONTH, i)
        scan.open(Unit.YEAR, i + 1)
        scan.state = State.DIGIT_DASH_ALPHA_DASH
    return None


def _digit_slash(scan: Scan, ch: str, i: int) -> int | None:
    if ch != "/":
        return None
    if scan.is_closed(Unit.YEAR):
        # 2014/07/10
        if scan.is_open(Unit.MONTH):
            scan.close(Unit.MONTH, i)
            scan.open(Unit.DAY, i + 1)
    elif scan.is_open(Unit.DAY):
        # 03/19/2012
        scan.close(Unit.DAY, i)
        scan.open(Unit.YEAR, i + 1)
    return None


def _digit_dot(scan: Scan, ch: str, i: int) -> int | None:
    if ch != ".":
        return None
    if scan.month is not None and scan.month.pos == 0:
        # 3.31.2014
        scan.close(Unit.DAY, i)
        scan.open(Unit.YEAR, i + 1)
    else:
        # 2018.09.30
        scan.close(Unit.MONTH, i)
        scan.open(Unit.DAY, i + 1)
    scan.state = State.DIGIT_DOT_DOT
    return None


def _digit_ws(scan: Scan, ch: str, i: int) -> int | None:
    if ch != " ":
        return None
    day_len = scan.first_part_len
    scan.open(Unit.YEAR, i + 1)
    scan.set(Unit.DAY, 0, day_len)
    if i > day_len + ABBREVIATED_MONTH_WIDTH:
        # 18 January 2018: month sized at finalization
        scan.state = State.DIGIT_WS_MONTH_LONG
    else:
        scan.set(Unit.MONTH, day_len + 1, i - (day_len + 1))
        scan.state = State.DIGIT_WS_MONTH_YEAR
    return None


def _digit_ws_month_year(scan: Scan, ch: str, i: int) -> int | None:
    # 02 Jan 2018 23:59, 12 Feb 2006, 19:17
    if ch in ", " and scan.is_open(Unit.YEAR):
        scan.close(Unit.YEAR, i)
        if ch == ",":
            return i + 2
    return None


def _skip_spaces(buffer: CharacterBuffer, pos: int) -> int:
    while pos < len(buffer) and buffer[pos] == " ":
        pos += 1
    return pos


def _drop_weekday(scan: Scan, pos: int) -> None:
    # "Tue  3/31/2014": the rescan must start on the date, not on a space
    scan.buffer.truncate_prefix(_skip_spaces(scan.buffer, pos))
    scan.restart()


def _alpha(scan: Scan, ch: str, i: int) -> int | None:
    if ch == " ":
        token = scan.buffer.slice(0, i)
        if i > 3:
            if lexicon.is_full_month(token):
                scan.full_month = token.lower()
                if scan.buffer.remaining(i) < SHORT_MONTH_REMAINDER:
                    scan.state = State.ALPHA_WS_MONTH
                else:
                    scan.state = State.ALPHA_WS_MORE
                scan.open(Unit.DAY, i + 1)
            elif lexicon.is_weekday_name(token):
                _drop_weekday(scan, i + 1)
        elif lexicon.is_weekday_name(token):
            # Tue 05 May 2020
            _drop_weekday(scan, i + 1)
        else:
            scan.state = State.ALPHA_WS
    elif ch == ",":
        token = scan.buffer.slice(0, i)
        if lexicon.is_weekday_name(token) and _skip_spaces(scan.buffer, i + 1) < len(scan.buffer):
            # Mon, 02 Jan 2006 / Monday, 02-Jan-06
            _drop_weekday(scan, i + 1)
        elif i == 3:
            scan.state = State.WEEKDAY_ABBR_COMMA
            scan.set(Unit.MONTH, 0, i)
        else:
            scan.state = State.WEEKDAY_COMMA
            scan.skip_pos = i + 2
            return i + 2
    elif ch == ".":
        # oct. 7, 1970 / sept. 28, 2017
        if i == 3:
            scan.state = State.ALPHA_PERIOD_WS_DIGIT
            scan.set(Unit.MONTH, 0, i)
        elif i == 4:
            scan.buffer.delete_range(i, 1)
            scan.restart()
        else:
            raise UnexpectedCharacterAt(i)
    return None


def _alpha_ws(scan: Scan, ch: str, i: int) -> int | None:
    if is_alpha(ch):
        # "Xyz Jan ...": the day check rejects the three-letter token.
        scan.set(Unit.MONTH, i, 3)
        scan.set(Unit.DAY, 0, 3)
        scan.state = State.ALPHA_WS_ALPHA
    elif is_digit(ch):
        scan.set(Unit.MONTH, 0, 3)
        scan.open(Unit.DAY, i)
        scan.state = State.ALPHA_WS_DIGIT
    return None


def _alpha_ws_digit(scan: Scan, ch: str, i: int) -> int | None:
    # May 8, 2009 / May 8 2009 / oct 7, '70
    if ch == ",":
        scan.close(Unit.DAY, i)
        scan.state = State.ALPHA_WS_DIGIT_MORE
    elif ch == " ":
        scan.close(Unit.DAY, i)
        scan.open(Unit.YEAR, i + 1)
        scan.state = State.ALPHA_WS_DIGIT_YEAR_POSSIBLE
    elif is_alpha(ch):
        scan.state = State.ALPHA_WS_MONTH_SUFFIX
        return i
    return None


def _alpha_ws_digit_more(scan: Scan, ch: str, i: int) -> int | None:
    if ch == " ":
        scan.open(Unit.YEAR, i + 1)
        scan.state = State.ALPHA_WS_DIGIT_MORE_WS
    return None


def _alpha_ws_digit_more_ws(scan: Scan, ch: str, i: int) -> int | None:
    if ch == "'":
        scan.open(Unit.YEAR, i + 1)
    elif ch in " ,":
        # May 8, 2009 5:57:51 PM / May 8, 2009, 5:57:51 PM
        scan.close(Unit.YEAR, i)
        scan.state = State.ALPHA_WS_DIGIT_MORE_WS_YEAR
    return None


def _alpha_ws_month(scan: Scan, ch: str, i: int) -> int | None:
    # April 8, 2009 / April 8 2009
    if ch in " ,":
        if scan.is_open(Unit.DAY):
            scan.close(Unit.DAY, i)
    elif ch in SUFFIX_PAIRS:
        scan.state = State.ALPHA_WS_MONTH_SUFFIX
        return i
    elif scan.is_closed(Unit.DAY) and scan.year is None:
        scan.open(Unit.YEAR, i)
    return None


def _alpha_period_ws_digit(scan: Scan, ch: str, i: int) -> int | None:
    if is_digit(ch):
        scan.open(Unit.DAY, i)
        scan.state = State.ALPHA_WS_DIGIT
    return None


def _alpha_ws_month_suffix(scan: Scan, ch: str, i: int) -> int | None:
    # April 8th, 2009
    seconds = SUFFIX_PAIRS.get(ch)
    if seconds and scan.buffer.next_char_is(i, *seconds) and len(scan.buffer) > i + 2:
        scan.buffer.delete_range(i, 2)
        scan.restart()
    return None


def _alpha_ws_more(scan: Scan, ch: str, i: int) -> int | None:
    # January 02, 2006, 15:04:05 / January 02 2006, 15:04:05 / January 2nd, 2006
    if ch == ",":
        if scan.buffer.next_char_is(i, " "):
            scan.close(Unit.DAY, i)
            scan.open(Unit.YEAR, i + 2)
            scan.state = State.ALPHA_WS_MONTH_MORE
            return i + 2
    elif ch == " ":
        scan.close(Unit.DAY, i)
        scan.open(Unit.YEAR, i + 1)
        scan.state = State.ALPHA_WS_MONTH_MORE
    elif is_alpha(ch):
        scan.close(Unit.DAY, i)
        scan.state = State.ALPHA_WS_MONTH_SUFFIX
        return i
    return None


def _alpha_ws_month_more(scan: Scan, ch: str, i: int) -> int | None:
    # September 17, 2012 at 5:00pm UTC-05
    if ch in " ," and scan.is_open(Unit.YEAR):
        scan.close(Unit.YEAR, i)
    return None


# States missing here (DIGIT_COLON, DIGIT_DOT_DOT, the *_WS_YEAR tails, ...)
# ignore every character.
TRANSITIONS: dict[State, Transition] = {
    State.START: _start,
    State.DIGIT: _digit,
    State.YEAR_DASH: _year_dash,
    State.YEAR_DASH_DASH: _year_dash_dash,
    State.YEAR_DASH_ALPHA_DASH: _year_dash_alpha_dash,
    State.DIGIT_DASH: _digit_dash,
    State.DIGIT_DASH_ALPHA: _digit_dash_alpha,
    State.DIGIT_SLASH: _digit_slash,
    State.DIGIT_DOT: _digit_dot,
    State.DIGIT_WS: _digit_ws,
    State.DIGIT_WS_MONTH_YEAR: _digit_ws_month_year,
    State.ALPHA: _alpha,
    State.ALPHA_WS: _alpha_ws,
    State.ALPHA_WS_DIGIT: _alpha_ws_digit,
    State.ALPHA_WS_DIGIT_MORE: _alpha_ws_digit_more,
    State.ALPHA_WS_DIGIT_MORE_WS: _alpha_ws_digit_more_ws,
    State.ALPHA_WS_MONTH: _alpha_ws_month,
    State.ALPHA_PERIOD_WS_DIGIT: _alpha_period_ws_digit,
    State.ALPHA_WS_MONTH_SUFFIX: _alpha_ws_month_suffix,
    State.ALPHA_WS_MORE: _alpha_ws_more,
    State.ALPHA_WS_MONTH_MORE: _alpha_ws_month_more,
}


def run_pass(scan: Scan) -> None:
    """Feed every character of the buffer through the transition table once."""
    i = 0
    while i < len(scan.buffer):
        step = TRANSITIONS.get(scan.state)
        nxt = step(scan, scan.buffer[i], i) if step else None
        if scan.state is State.START_OVER:
            return
        i = i + 1 if nxt is None else nxt


def finalize(scan: Scan) -> None:
    end = len(scan.buffer)

    for unit in Unit:
        if scan.is_open(unit):
            scan.close(unit, end)

    if scan.full_month and scan.month is None:
        scan.month = Span(0, len(scan.full_month))

    if scan.state is State.YEAR_DASH_ALPHA_DASH:
        # 2013-Feb-03 / 2013-Feb-3
        scan.close(Unit.DAY, end)
    elif scan.state is State.DIGIT_WS_MONTH_LONG and scan.day is not None:
        # 18 January 2018 / 8 January 2018
        day_len = scan.day.length or 0
        month_len = end - LONG_MONTH_TAIL - day_len
        if month_len < 1:
            raise UnitLengthInvalid(Unit.MONTH.value, month_len)
        scan.month = Span(day_len + 1, month_len)


def scan(buffer: CharacterBuffer) -> ScanResult:
    """Scan the buffer until a pass completes without editing it.

    Edits (ordinal suffix, weekday prefix, redundant period) shrink the buffer
    in place, so the loop runs at most len(buffer) + 1 passes.
    """
    restarts = 0
    while True:
        current = Scan(buffer)
        run_pass(current)
        if current.state is not State.START_OVER:
            break
        restarts += 1

    finalize(current)
    return ScanResult(
        state=current.state,
        text=buffer.text,
        year=current.year,
        month=current.month,
        day=current.day,
        restarts=restarts,
    )
