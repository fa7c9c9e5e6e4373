"""Query a stored interpolation table from the command line."""

from __future__ import annotations

import argparse
import json
import math
import sys
from typing import Optional, Sequence

import numpy as np

from .config import IOConfig
from .file_io import FileIOError
from .interpolator import InterpolationError, Interpolator
from .table_io import interpolator_from_csv, load_interpolator


def _json_number(value: float) -> float | str:
    """Non-finite floats as ``"nan"``/``"inf"``/``"-inf"`` so the output stays strict JSON."""
    return value if math.isfinite(value) else str(value)


def _query_record(interp: Interpolator, x: float) -> dict:
    try:
        x_matched, y = interp.interpolate(x)
    except InterpolationError as exc:
        return {"x": _json_number(x), "error": str(exc)}
    if isinstance(y, np.ndarray):
        y = [_json_number(v) for v in y.tolist()]
    else:
        y = _json_number(y)
    return {"x": _json_number(x), "x_matched": _json_number(x_matched), "y": y}


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="scifile", description="Linearly interpolate values from a stored table.")
    ap.add_argument("table", help="JSON table with x_vals/y_vals, or a CSV file with --csv")
    ap.add_argument("x", type=float, nargs="+", help="Query value(s)")
    ap.add_argument("--csv", action="store_true", help="Read the table from CSV columns")
    ap.add_argument("--x-column", type=int, default=0, help="CSV column holding the breakpoints")
    ap.add_argument("--indent", type=int, default=None, help="Indent the JSON output")
    return ap


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = IOConfig.from_env()
    try:
        if args.csv:
            interp = interpolator_from_csv(args.table, x_column=args.x_column, config=config)
        else:
            interp = load_interpolator(args.table, config=config)
    except (FileIOError, InterpolationError) as exc:
        print(f"scifile: {exc}", file=sys.stderr)
        return 2

    records = [_query_record(interp, x) for x in args.x]
    for rec in records:
        print(json.dumps(rec, indent=args.indent, allow_nan=False))
    return 1 if any("error" in rec for rec in records) else 0


if __name__ == "__main__":
    raise SystemExit(main())
