"""Demo driver that exercises the progress bar with synthetic workloads."""

import argparse
import logging
import sys
import time

import numpy as np
import tracerite

from flexbar.config import BarConfig
from flexbar.progress import ProgressBar

tracerite.load()

__all__ = ["main"]


def fast(rng: np.random.Generator, config: BarConfig, limit: float):
    """Big steps with a burst of log lines early on."""
    target = 6000
    step = 50
    with ProgressBar(target, "Fast", config) as bar:
        for i in range(0, target, step):
            time.sleep(rng.integers(0, 10) / 1000)
            bar.advance(step)
            if 1000 < i < 1020:
                bar.log_line(f"Sweet {i} !!!")


def smooth(rng: np.random.Generator, config: BarConfig, limit: float):
    """Single steps; the label changes halfway."""
    target = 12550
    with ProgressBar(target, "Smooth...", config) as bar:
        for i in range(target):
            time.sleep(rng.integers(0, 10) / 10_000)
            bar.next()
            if i == target // 2:
                bar.set_label("Smooth part 2...")


def chunky(rng: np.random.Generator, config: BarConfig, limit: float):
    """Few large steps with long pauses."""
    target = 600
    step = 10
    with ProgressBar(target, "Chunky", config) as bar:
        for _ in range(0, target, step):
            time.sleep(rng.integers(0, 1000) / 1000)
            bar.advance(step)


def infinite(rng: np.random.Generator, config: BarConfig, limit: float):
    """No target: counts and throughput only, stops after limit seconds."""
    deadline = time.perf_counter() + limit
    with ProgressBar(0, "Infinite", config) as bar:
        while time.perf_counter() < deadline:
            time.sleep(rng.integers(0, 100) / 1000)
            bar.advance(int(rng.integers(0, 1000)))


SCENARIOS = {
    "fast": fast,
    "smooth": smooth,
    "chunky": chunky,
    "infinite": infinite,
}


def _main():
    """Internal main function that may raise exceptions."""
    parser = argparse.ArgumentParser(description="Show off the flexbar progress bar")
    parser.add_argument(
        "scenarios",
        nargs="*",
        metavar="SCENARIO",
        help=f"Scenarios to run in order: {', '.join(SCENARIOS)} (default: fast smooth)",
    )
    parser.add_argument("-s", "--seed", help="Random seed for the workload", type=int)
    parser.add_argument(
        "-l",
        "--limit",
        help="Seconds to run the infinite scenario (default: 5)",
        type=float,
        default=5.0,
    )
    parser.add_argument("--no-color", action="store_true", help="Disable colors")
    parser.add_argument(
        "--tick",
        help="Redraw interval in milliseconds (default: 50)",
        type=float,
        default=50.0,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose mode: debug logging on stderr",
    )

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr)

    names = args.scenarios or ["fast", "smooth"]
    unknown = [name for name in names if name not in SCENARIOS]
    if unknown:
        raise ValueError(f"Unknown scenario: {', '.join(unknown)}")
    if args.limit <= 0:
        raise ValueError("--limit must be positive")

    config = BarConfig(
        tick_interval=args.tick / 1000,
        color_enabled=not args.no_color and sys.stdout.isatty(),
    )
    rng = np.random.default_rng(args.seed)
    for name in names:
        SCENARIOS[name](rng, config, args.limit)


def main():
    """Main entry point for the CLI with exception handling."""
    try:
        _main()
    except (KeyboardInterrupt, BrokenPipeError):
        sys.exit(1)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
