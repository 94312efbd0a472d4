"""
Performance Benchmark
=====================

Measures drop throughput and cycle detection time for performance tuning.

Usage:
    python -m tools.benchmark_speed [--rocks N] [--repeats R] [--input FILE]
"""

from __future__ import annotations

import argparse
import sys
import time
from typing import Optional
import numpy as np

from rockfall.rock_core.config_loader import load_config
from rockfall.rock_core.drop_simulator import DropSimulator
from rockfall.rock_core.extrapolator import LONG_RUN_ROCKS, Extrapolator
from rockfall.rock_core.jets import JetSequence

# Jet pattern from the published example
EXAMPLE_JETS = ">>><<><>><<<>><>>><<<>>><<<><<<>><>><<>>"


def benchmark_drops(
    jets: JetSequence,
    num_rocks: int = 10000,
    repeats: int = 3
) -> dict:
    """
    Benchmark raw DropSimulator without cycle detection.

    Args:
        jets: Jet pattern to simulate.
        num_rocks: Rocks dropped per repeat.
        repeats: Number of timed runs.

    Returns:
        Dict with timing results.
    """
    config = load_config()
    simulator = DropSimulator(jets, config)

    timings = []
    for _ in range(repeats):
        state = simulator.new_state()
        start = time.perf_counter()
        for _ in range(num_rocks):
            simulator.drop(state)
        timings.append(time.perf_counter() - start)

    elapsed = float(np.median(timings))
    return {
        "mode": "drops",
        "num_rocks": num_rocks,
        "elapsed_seconds": elapsed,
        "std_seconds": float(np.std(timings)),
        "rocks_per_second": num_rocks / elapsed,
        "us_per_rock": (elapsed * 1e6) / num_rocks
    }


def benchmark_extrapolation(
    jets: JetSequence,
    total_rocks: int = LONG_RUN_ROCKS,
    repeats: int = 3
) -> dict:
    """
    Benchmark a full Extrapolator run including cycle detection.

    Args:
        jets: Jet pattern to simulate.
        total_rocks: Target drop count.
        repeats: Number of timed runs.

    Returns:
        Dict with timing results.
    """
    extrapolator = Extrapolator(jets, load_config(), debug=False)

    timings = []
    result = None
    for _ in range(repeats):
        start = time.perf_counter()
        result = extrapolator.run(total_rocks)
        timings.append(time.perf_counter() - start)

    return {
        "mode": "extrapolate",
        "num_rocks": result.simulated_rocks,
        "height": result.height,
        "cycle_length": result.cycle.length if result.cycle else None,
        "elapsed_seconds": float(np.median(timings)),
        "std_seconds": float(np.std(timings)),
    }


def run_all_benchmarks(
    input_path: Optional[str] = None,
    num_rocks: int = 10000,
    repeats: int = 3
) -> list:
    """Run comprehensive benchmarks."""
    if input_path is None:
        jets = JetSequence(EXAMPLE_JETS)
    else:
        jets = JetSequence.from_file(input_path)

    results = []

    print("=" * 60)
    print("ROCKFALL PERFORMANCE BENCHMARK")
    print("=" * 60)
    print(f"Jets: {len(jets)}")
    print()

    print("Benchmarking DropSimulator (raw)...")
    result = benchmark_drops(jets, num_rocks=num_rocks, repeats=repeats)
    results.append(result)
    print(f"  Rocks/sec: {result['rocks_per_second']:.1f}")
    print(f"  us/rock:   {result['us_per_rock']:.2f}")
    print()

    print(f"Benchmarking Extrapolator ({LONG_RUN_ROCKS} rocks)...")
    result = benchmark_extrapolation(jets, repeats=repeats)
    results.append(result)
    print(f"  Height:          {result['height']}")
    print(f"  Simulated rocks: {result['num_rocks']}")
    print(f"  Cycle length:    {result['cycle_length']}")
    print(f"  Seconds:         {result['elapsed_seconds']:.3f} "
          f"(+/- {result['std_seconds']:.3f})")
    print()

    return results


def main():
    parser = argparse.ArgumentParser(description="Benchmark rockfall performance")
    parser.add_argument("--rocks", type=int, default=10000, help="Rocks per drop benchmark")
    parser.add_argument("--repeats", type=int, default=3, help="Timed runs per benchmark")
    parser.add_argument("--input", type=str, default=None,
                        help="Jet pattern file (uses the example pattern if omitted)")
    parser.add_argument("--quick", action="store_true", help="Quick benchmark (fewer rocks)")

    args = parser.parse_args()

    rocks = 1000 if args.quick else args.rocks

    run_all_benchmarks(
        input_path=args.input,
        num_rocks=rocks,
        repeats=args.repeats
    )

    return 0


if __name__ == "__main__":
    sys.exit(main())
