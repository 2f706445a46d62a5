#!/usr/bin/env python3
"""Run a simulated control loop that records series through a BatchSaver.

Usage:
    python run_demo_loop.py --cycles 1000 --interval 250
    python run_demo_loop.py --config logging.json
    python run_demo_loop.py --directory out --base-name demo --timestamped

Each cycle appends the loop time, a noisy tracking error, and the (x, y)
position of a point moving on a circle. The file is rewritten every
--interval cycles and once more at the end.
"""

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

import numpy as np

# Add src to path for imports
SCRIPT_DIR = Path(__file__).parent
PROJECT_ROOT = SCRIPT_DIR.parent
SRC_DIR = PROJECT_ROOT / "src"
sys.path.insert(0, str(SRC_DIR))

from serieslog.accumulator import SeriesAccumulator
from serieslog.batch_saver import BatchSaver
from serieslog.config import BatchConfig, Config, load_config
from serieslog.text_format import SaveError

logger = logging.getLogger(__name__)

CYCLE_PERIOD = 0.01  # seconds per simulated cycle


def run_loop(acc: SeriesAccumulator, saver: BatchSaver, cycles: int, seed: int = 0) -> None:
    """Append one set of measurements per cycle, saving on the interval."""
    rng = np.random.default_rng(seed)
    for cycle in range(1, cycles + 1):
        t = cycle * CYCLE_PERIOD
        acc.append("t", t)
        acc.append("tracking_error", float(rng.normal(0.0, 0.05)))
        acc.append("position", (np.cos(t), np.sin(t)))
        saver.maybe_save(cycle)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Simulated control loop with series logging")
    parser.add_argument("--config", "-c", help="Path to a JSON config file")
    parser.add_argument("--cycles", type=int, default=1000, help="Number of loop cycles")
    parser.add_argument("--interval", type=int, help="Save every N cycles (overrides config)")
    parser.add_argument("--directory", "-o", help="Output directory (overrides config)")
    parser.add_argument("--base-name", help="File base name (overrides config)")
    parser.add_argument("--timestamped", action="store_true", help="Add a timestamp to the file name")
    parser.add_argument("--seed", type=int, default=0, help="Random seed")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s | %(levelname)s | %(message)s',
        datefmt='%H:%M:%S'
    )

    config = load_config(args.config) if args.config else Config()

    overrides = {}
    if args.directory:
        overrides["directory"] = args.directory
    if args.base_name:
        overrides["base_name"] = args.base_name
    if args.timestamped:
        overrides["timestamped"] = True
    logger_config = replace(config.logger, **overrides)
    batch_config = config.batch
    if args.interval:
        batch_config = BatchConfig(save_interval=args.interval, clear_on_final=batch_config.clear_on_final)

    acc = SeriesAccumulator.from_config(logger_config)
    saver = BatchSaver.from_config(acc, batch_config)

    try:
        run_loop(acc, saver, args.cycles, seed=args.seed)
        path = saver.save_final()
    except SaveError as e:
        logger.error(f"{e}")
        return 1

    print(f"Recorded {len(acc)} series over {args.cycles} cycles ({saver.save_count} saves)")
    if path is not None:
        print(f"Output: {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
