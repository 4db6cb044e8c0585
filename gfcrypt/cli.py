"""Command line entry point: run a JSON file of testcases and print the responses."""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Sequence
from pathlib import Path

from gfcrypt.actions import run_testcases


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gfcrypt",
        description="Run the testcases of a JSON file and print the responses as JSON.",
    )
    parser.add_argument("testcases", type=Path, help="path of the testcase file")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Read the testcase file, run it and print the responses; returns the exit status."""
    args = _parser().parse_args(argv)
    path: Path = args.testcases
    try:
        document = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        print(f"gfcrypt: cannot read {path}: {exc}", file=sys.stderr)
        return 1
    except ValueError as exc:
        print(f"gfcrypt: invalid JSON in {path}: {exc}", file=sys.stderr)
        return 1
    try:
        result = run_testcases(document)
    except (TypeError, ValueError) as exc:
        print(f"gfcrypt: malformed testcase file {path}: {exc}", file=sys.stderr)
        return 1
    print(json.dumps(result, separators=(",", ":"), sort_keys=True, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())