from __future__ import annotations

from .parser import try_parse
from .types import LineMatch, ScanPolicy


def _candidates(lines: list[str], policy: ScanPolicy) -> list[tuple[str, str]]:
    """(original line, text to parse) for the leading non-empty lines."""
    lines = [ln.strip() for ln in lines if ln and ln.strip()]
    out: list[tuple[str, str]] = []
    for ln in lines[: policy.max_lines]:
        text = ln.rstrip(policy.strip_chars).rstrip() if policy.strip_chars else ln
        out.append((ln, text))
    return out


def first_date(lines: list[str], policy: ScanPolicy | None = None) -> LineMatch | None:
    """Return the first of the leading non-empty lines that parses as a date.

    Meant for headers of log chunks, feed items, notes: the date is usually on
    one of the first few lines, optionally followed by punctuation
    ("Tuesday, 05 May 2020." / "oct 7, 1970:").
    """

    policy = policy or ScanPolicy()
    for idx, (source, text) in enumerate(_candidates(lines, policy)):
        if not text:
            continue
        d = try_parse(text)
        if d is None:
            continue
        return LineMatch(index=idx, source=source, value=d)
    return None


def count_dated(lines: list[str], policy: ScanPolicy | None = None) -> int:
    """Number of leading non-empty lines (up to policy.max_lines) that parse as dates."""

    policy = policy or ScanPolicy()
    return sum(1 for _, text in _candidates(lines, policy) if text and try_parse(text) is not None)
