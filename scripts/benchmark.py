#!/usr/bin/env python3
"""
PollWatch Benchmark Script.

Measures the cost of one polling cycle (snapshot and diff) for a tree.
Requires Python 3.11+.

Usage:
    python scripts/benchmark.py /path/to/project
"""

import argparse
import statistics
import sys
import time
from pathlib import Path
from typing import Callable, TypeVar

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

from snapshot.builder import SnapshotBuilder
from snapshot.change_detector import ChangeDetector
from utils.logger import configure_logging


configure_logging("WARNING")

T = TypeVar("T")


def benchmark(name: str, func: Callable[[], T], iterations: int = 5) -> tuple[T, dict]:
    """
    Benchmark a function.

    Returns:
        Tuple of (result, stats)
    """
    times = []
    result = None

    for _ in range(iterations):
        start = time.perf_counter()
        result = func()
        elapsed = time.perf_counter() - start
        times.append(elapsed * 1000)

    stats = {
        "name": name,
        "iterations": iterations,
        "min_ms": min(times),
        "max_ms": max(times),
        "mean_ms": statistics.mean(times),
        "median_ms": statistics.median(times),
        "stdev_ms": statistics.stdev(times) if len(times) > 1 else 0,
    }

    return result, stats


def print_stats(stats: dict) -> None:
    """Print benchmark statistics."""
    print(f"\n  {stats['name']}:")
    print(f"    Mean:   {stats['mean_ms']:.2f}ms")
    print(f"    Median: {stats['median_ms']:.2f}ms")
    print(f"    Min:    {stats['min_ms']:.2f}ms")
    print(f"    Max:    {stats['max_ms']:.2f}ms")
    if stats["stdev_ms"] > 0:
        print(f"    StdDev: {stats['stdev_ms']:.2f}ms")


def run_benchmarks(root: Path, iterations: int) -> None:
    """Run all benchmarks."""
    print("\n=== PollWatch Benchmarks ===")
    print(f"Root: {root}")

    builder = SnapshotBuilder()
    detector = ChangeDetector(root)

    snapshot, stats = benchmark("Build snapshot", lambda: builder.build(root), iterations)
    print_stats(stats)
    print(f"    Entries: {len(snapshot)}")

    baseline = builder.build(root)
    changes, stats = benchmark(
        "Diff against fresh snapshot",
        lambda: detector.detect_changes(baseline, builder.build(root)),
        iterations,
    )
    print_stats(stats)
    print(f"    Changed paths: {len(changes)}")

    print("\n=== Benchmark Complete ===\n")


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Run PollWatch polling-cycle benchmarks"
    )
    parser.add_argument(
        "path",
        type=Path,
        nargs="?",
        default=Path.cwd(),
        help="Directory tree to benchmark",
    )
    parser.add_argument(
        "--iterations",
        type=int,
        default=5,
        help="Runs per benchmark",
    )

    args = parser.parse_args()

    if not args.path.is_dir():
        print(f"Error: Path is not a directory: {args.path}")
        sys.exit(1)

    try:
        run_benchmarks(args.path.resolve(), args.iterations)
    except KeyboardInterrupt:
        print("\nCancelled by user")
        sys.exit(1)


if __name__ == "__main__":
    main()
