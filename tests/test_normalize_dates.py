from __future__ import annotations

import importlib.util
import io
import json
import sys
from pathlib import Path

import pytest

SCRIPT = Path(__file__).resolve().parents[1] / "scripts" / "normalize_dates.py"


@pytest.fixture()
def script():
    spec = importlib.util.spec_from_file_location("normalize_dates", SCRIPT)
    mod = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(mod)
    return mod


def _run(script, monkeypatch: pytest.MonkeyPatch, argv: list[str], stdin: str | None = None) -> None:
    monkeypatch.setattr(sys, "argv", ["normalize_dates.py", *argv])
    if stdin is not None:
        monkeypatch.setattr(sys, "stdin", io.StringIO(stdin))
    script.main()


def test_tsv_rows_leave_date_empty_on_failure(script, monkeypatch, capsys, tmp_path: Path) -> None:
    inp = tmp_path / "in.txt"
    inp.write_text("3/31/2014\nnot a date\n\noct 7, '70\n", encoding="utf-8")
    out = tmp_path / "out" / "dates.tsv"

    _run(script, monkeypatch, ["--in", str(inp), "--out", str(out)])

    assert out.read_text(encoding="utf-8") == "3/31/2014\t2014-03-31\nnot a date\t\noct 7, '70\t1970-10-07\n"
    cap = capsys.readouterr()
    assert "OK: parsed=2 failed=1" in cap.out
    assert "SKIP unparseable: 'not a date'" in cap.err


def test_jsonl_to_stdout(script, monkeypatch, capsys) -> None:
    _run(script, monkeypatch, ["--format", "jsonl"], stdin="2013-Feb-03\n31/12/2014\n")

    cap = capsys.readouterr()
    rows = [json.loads(ln) for ln in cap.out.splitlines()]
    assert rows[0] == {"input": "2013-Feb-03", "date": "2013-02-03", "error": None}
    assert rows[1]["input"] == "31/12/2014"
    assert rows[1]["date"] is None
    assert rows[1]["error"] == "Overflow of the month: max 12, got 31"
    # status goes to stderr when the rows own stdout
    assert "OK: parsed=1 failed=1" in cap.err


def test_strict_exits_nonzero_on_failure(script, monkeypatch, capsys) -> None:
    with pytest.raises(SystemExit) as ei:
        _run(script, monkeypatch, ["--strict"], stdin="3/31/2014\nFrostbloom 8th, 2009\n")
    assert ei.value.code == 1

    _run(script, monkeypatch, ["--strict"], stdin="3/31/2014\n")
    assert "OK: parsed=1 failed=0" in capsys.readouterr().err


def test_find_in_block_flags_win_over_env(script, monkeypatch, capsys) -> None:
    monkeypatch.setenv("GUESSDATE_MAX_LINES", "abc")
    _run(
        script,
        monkeypatch,
        ["--find-in-block", "--max-lines", "5", "--strip-chars", "."],
        stdin="Meeting notes\nTuesday, 05 May 2020.\n3/31/2014\n",
    )

    cap = capsys.readouterr()
    assert cap.out == "Tuesday, 05 May 2020.\t2020-05-05\n"
    assert "OK: dated_lines=2" in cap.err


def test_find_in_block_uses_env_for_missing_flag(script, monkeypatch, capsys) -> None:
    monkeypatch.setenv("GUESSDATE_MAX_LINES", "1")
    _run(script, monkeypatch, ["--find-in-block", "--strip-chars", "."], stdin="Meeting notes\noct 7, 1970\n")

    cap = capsys.readouterr()
    assert cap.out == ""
    assert "WARN: no date in the first 1 non-empty lines" in cap.err


def test_find_in_block_bad_env_for_missing_flag_exits(script, monkeypatch) -> None:
    monkeypatch.setenv("GUESSDATE_MAX_LINES", "abc")
    with pytest.raises(SystemExit) as ei:
        _run(script, monkeypatch, ["--find-in-block", "--strip-chars", "."], stdin="oct 7, 1970\n")
    assert "GUESSDATE_MAX_LINES" in str(ei.value.code)


@pytest.mark.parametrize("value", ["0", "-1"])
def test_find_in_block_rejects_nonpositive_max_lines(script, monkeypatch, value: str) -> None:
    with pytest.raises(SystemExit) as ei:
        _run(
            script,
            monkeypatch,
            ["--find-in-block", "--max-lines", value, "--strip-chars", "."],
            stdin="oct 7, 1970\n",
        )
    assert "max_lines must be >= 1" in str(ei.value.code)


def test_missing_input_file_exits(script, monkeypatch, tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as ei:
        _run(script, monkeypatch, ["--in", str(tmp_path / "nope.txt")])
    assert "Missing input" in str(ei.value.code)
