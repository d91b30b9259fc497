#!/usr/bin/env python3
"""Normalize a file of free-form date strings to ISO dates.

One date per input line. Output is TSV (input<TAB>YYYY-MM-DD, empty date when
the line could not be parsed) or JSONL ({"input", "date", "error"}).

With --find-in-block the whole input is treated as one text block (a log
chunk, a note) and only the first date among its leading lines is reported.
--max-lines/--strip-chars default to GUESSDATE_MAX_LINES/GUESSDATE_STRIP_CHARS
(env or .env).

Usage:
  PYTHONPATH=. python3 scripts/normalize_dates.py --in dates.txt --out dates.tsv
  cat note.md | PYTHONPATH=. python3 scripts/normalize_dates.py --find-in-block
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from guessdate import DateParser, ParseError, ScanPolicy, count_dated, first_date


def _read_lines(inp: str | None) -> list[str]:
    if not inp or inp == "-":
        return sys.stdin.read().splitlines()
    p = Path(inp)
    if not p.exists():
        raise SystemExit(f"Missing input: {p}")
    return p.read_text(encoding="utf-8", errors="replace").splitlines()


def _row(raw: str, fmt: str) -> tuple[str, bool]:
    """Render one output row; the flag is True when the line parsed."""
    error: str | None = None
    iso = ""
    try:
        iso = DateParser(raw).parse().date().isoformat()
    except ParseError as e:
        error = str(e)

    if fmt == "jsonl":
        return json.dumps({"input": raw, "date": iso or None, "error": error}, ensure_ascii=False), error is None
    return f"{raw}\t{iso}", error is None


def _policy(args: argparse.Namespace) -> ScanPolicy:
    """Flags win; the environment (.env) only fills in what was not given."""
    max_lines = args.max_lines
    strip_chars = args.strip_chars
    try:
        if max_lines is None or strip_chars is None:
            env = ScanPolicy.from_env()
            max_lines = env.max_lines if max_lines is None else max_lines
            strip_chars = env.strip_chars if strip_chars is None else strip_chars
        return ScanPolicy(max_lines=max_lines, strip_chars=strip_chars)
    except ValueError as e:
        raise SystemExit(str(e))


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("--in", dest="inp", default=None, help="Input file (default: stdin)")
    ap.add_argument("--out", default=None, help="Output file (default: stdout)")
    ap.add_argument("--format", choices=["tsv", "jsonl"], default="tsv")
    ap.add_argument("--strict", action="store_true", help="Exit with status 1 if any line failed to parse")
    ap.add_argument("--find-in-block", action="store_true")
    ap.add_argument("--max-lines", type=int, default=None)
    ap.add_argument("--strip-chars", default=None)
    args = ap.parse_args()

    lines = _read_lines(args.inp)
    out_path = Path(args.out) if args.out else None
    status = sys.stderr if out_path is None else sys.stdout

    rows: list[str] = []
    parsed = failed = 0

    if args.find_in_block:
        policy = _policy(args)
        m = first_date(lines, policy)
        if m is None:
            failed = 1
            print(f"WARN: no date in the first {policy.max_lines} non-empty lines", file=sys.stderr)
        else:
            parsed = 1
            if args.format == "jsonl":
                rows.append(
                    json.dumps(
                        {"input": m.source, "date": m.value.date().isoformat(), "line": m.index},
                        ensure_ascii=False,
                    )
                )
            else:
                rows.append(f"{m.source}\t{m.value.date().isoformat()}")
            print(f"OK: dated_lines={count_dated(lines, policy)}", file=status)
    else:
        for raw in lines:
            if not raw.strip():
                continue
            row, ok = _row(raw, args.format)
            rows.append(row)
            if ok:
                parsed += 1
            else:
                failed += 1
                print(f"SKIP unparseable: {raw!r}", file=sys.stderr)

    text = "\n".join(rows) + ("\n" if rows else "")
    if out_path is None:
        sys.stdout.write(text)
    else:
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(text, encoding="utf-8")

    print(f"OK: parsed={parsed} failed={failed}", file=status)

    if args.strict and failed:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
