from __future__ import annotations

from datetime import datetime

import pytest

from guessdate import ScanPolicy, count_dated, first_date


def test_first_date_skips_blank_and_undated_lines() -> None:
    lines = ["", "Meeting notes", "   ", "Tuesday, 05 May 2020.", "3/31/2014"]
    m = first_date(lines)
    assert m is not None
    assert m.index == 1
    assert m.source == "Tuesday, 05 May 2020."
    assert m.value == datetime(2020, 5, 5)


def test_first_date_honors_max_lines() -> None:
    lines = ["Meeting notes", "oct 7, 1970"]
    assert first_date(lines, ScanPolicy(max_lines=1)) is None
    assert first_date(lines, ScanPolicy(max_lines=2)).value == datetime(1970, 10, 7)


def test_strip_chars_can_be_disabled() -> None:
    lines = ["2014-04-26:"]
    assert first_date(lines).value == datetime(2014, 4, 26)
    assert first_date(lines, ScanPolicy(strip_chars="")) is None


def test_count_dated() -> None:
    assert count_dated(["3/31/2014", "hello", "2014-04-26", ""]) == 2
    assert count_dated([]) == 0


def test_policy_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GUESSDATE_MAX_LINES", "3")
    monkeypatch.setenv("GUESSDATE_STRIP_CHARS", ".")
    p = ScanPolicy.from_env()
    assert p == ScanPolicy(max_lines=3, strip_chars=".")


def test_policy_from_env_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("GUESSDATE_MAX_LINES", raising=False)
    monkeypatch.delenv("GUESSDATE_STRIP_CHARS", raising=False)
    assert ScanPolicy.from_env() == ScanPolicy()


@pytest.mark.parametrize("raw", ["abc", "0", "-2"])
def test_policy_from_env_rejects_bad_values(monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
    monkeypatch.setenv("GUESSDATE_MAX_LINES", raw)
    with pytest.raises(ValueError):
        ScanPolicy.from_env()


@pytest.mark.parametrize("max_lines", [0, -1])
def test_policy_rejects_nonpositive_max_lines(max_lines: int) -> None:
    with pytest.raises(ValueError, match="max_lines must be >= 1"):
        ScanPolicy(max_lines=max_lines)
