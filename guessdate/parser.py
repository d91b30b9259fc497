from __future__ import annotations

from datetime import datetime

from .assemble import assemble
from .buffer import CharacterBuffer
from .errors import ParseError
from .machine import scan
from .types import ScanResult


class DateParser:
    """Parse one date string whose layout is not known up front.

    The instance owns the character buffer and edits it while scanning
    (ordinal suffixes, weekday prefixes), so do not share one instance
    between threads. The module-level parse()/try_parse() build a new
    instance per call.
    """

    def __init__(self, raw: str) -> None:
        self.raw = raw
        self._buffer = CharacterBuffer.decompose(raw)

    @classmethod
    def from_string(cls, raw: str) -> "DateParser":
        return cls(raw)

    @property
    def text(self) -> str:
        """Buffer contents, including any edits made by a scan."""
        return self._buffer.text

    def scan(self) -> ScanResult:
        return scan(self._buffer)

    def parse(self) -> datetime:
        """Return the date at midnight. Raises ParseError when the layout is not recognized."""
        return assemble(self.scan())

    def try_parse(self) -> datetime | None:
        try:
            return self.parse()
        except ParseError:
            return None


def parse(raw: str) -> datetime:
    return DateParser(raw).parse()


def try_parse(raw: str) -> datetime | None:
    return DateParser(raw).try_parse()
