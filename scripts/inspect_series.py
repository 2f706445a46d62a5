#!/usr/bin/env python3
"""Summarize (and optionally plot) a saved series file.

Usage:
    python inspect_series.py logs/controller_2026_10_17-0930.txt
    python inspect_series.py logs/controller.txt --strict
    python inspect_series.py logs/controller.txt --plot controller.png

Prints one row per series (scalar series first, each group in file order):
name, dimension, entry count and basic statistics. Exits with status 1 if the file cannot be loaded.
"""

import argparse
import logging
import sys
from pathlib import Path

# Add src to path for imports
SCRIPT_DIR = Path(__file__).parent
PROJECT_ROOT = SCRIPT_DIR.parent
SRC_DIR = PROJECT_ROOT / "src"
sys.path.insert(0, str(SRC_DIR))

from serieslog.accumulator import load_series
from serieslog.analysis import plot_series, summarize
from serieslog.text_format import MalformedInputError


def _format_stat(value) -> str:
    if value is None:
        return "-"
    if isinstance(value, tuple):
        return "(" + ", ".join(f"{v:.4g}" for v in value) + ")"
    return f"{value:.4g}"


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Summarize a saved series file")
    parser.add_argument("file", help="Path to the saved .txt file")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Treat a missing terminator line as an error",
    )
    parser.add_argument(
        "--plot",
        metavar="PNG",
        help="Write a chart of every series to this image file",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s | %(levelname)s | %(message)s',
        datefmt='%H:%M:%S'
    )

    try:
        scalar, vector = load_series(args.file, strict=args.strict)
    except (OSError, MalformedInputError) as e:
        print(f"Error: could not load {args.file}: {e}")
        return 1

    summaries = summarize(scalar, vector)
    print(f"{args.file}: {len(summaries)} series")
    print(f"  {'name':<24} {'dim':>3} {'count':>8}  {'mean':<24} {'min':<24} {'max':<24}")
    for s in summaries:
        print(
            f"  {s.name:<24} {s.dimension:>3} {s.count:>8}  "
            f"{_format_stat(s.mean):<24} {_format_stat(s.minimum):<24} {_format_stat(s.maximum):<24}"
        )

    if args.plot:
        plot_series(scalar, vector, save_path=args.plot)

    return 0


if __name__ == "__main__":
    sys.exit(main())
