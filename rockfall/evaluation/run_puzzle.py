"""
Puzzle Runner
=============

Reads a jet pattern from an input file and reports stack heights.

Usage:
    python -m rockfall.evaluation.run_puzzle input.txt [--rocks 2022 1000000000000]
"""

from __future__ import annotations

import argparse
import json
import sys
import time
from dataclasses import dataclass
from typing import List, Optional

from rockfall.rock_core.config_loader import load_config
from rockfall.rock_core.extrapolator import (
    LONG_RUN_ROCKS,
    SHORT_RUN_ROCKS,
    ExtrapolationResult,
    Extrapolator,
)
from rockfall.rock_core.jets import JetSequence


@dataclass
class PuzzleReport:
    """Results for one input file."""
    input_path: str
    jet_count: int
    results: List[ExtrapolationResult]
    elapsed_times: List[float]


def run_puzzle(
    input_path: str,
    rock_counts: Optional[List[int]] = None,
    config_path: Optional[str] = None,
    debug: Optional[bool] = None,
    verbose: bool = True
) -> PuzzleReport:
    """
    Compute stack heights for an input file.

    Args:
        input_path: File holding the jet pattern.
        rock_counts: Drop counts to evaluate. Defaults to the puzzle's two.
        config_path: Path to chamber_config.yaml. Uses default if None.
        debug: Override the config's debug flag.
        verbose: If True, print each result.

    Returns:
        PuzzleReport with one result per drop count.
    """
    if rock_counts is None:
        rock_counts = [SHORT_RUN_ROCKS, LONG_RUN_ROCKS]

    config = load_config(config_path)
    jets = JetSequence.from_file(input_path)
    extrapolator = Extrapolator(jets, config, debug=debug)

    if verbose:
        print(f"Loaded {len(jets)} jets from {input_path}")

    results: List[ExtrapolationResult] = []
    elapsed_times: List[float] = []
    for rocks in rock_counts:
        start_time = time.time()
        result = extrapolator.run(rocks)
        elapsed = time.time() - start_time

        results.append(result)
        elapsed_times.append(elapsed)

        if verbose:
            line = f"  {rocks} rocks: height={result.height}, time={elapsed:.2f}s"
            if result.cycle is not None:
                line += (f", cycle={result.cycle.length} rocks "
                         f"(+{result.cycle.height_delta})")
            print(line)

    return PuzzleReport(
        input_path=str(input_path),
        jet_count=len(jets),
        results=results,
        elapsed_times=elapsed_times
    )


def save_results(report: PuzzleReport, output_path: str) -> None:
    """Save puzzle results to JSON."""
    data = {
        "input": report.input_path,
        "jet_count": report.jet_count,
        "timestamp": time.strftime("%Y-%m-%d %H:%M:%S"),
        "results": [
            {
                "rocks": r.total_rocks,
                "height": r.height,
                "simulated_rocks": r.simulated_rocks,
                "skipped_rocks": r.skipped_rocks,
                "cycle_length": r.cycle.length if r.cycle else None,
                "cycle_height_delta": r.cycle.height_delta if r.cycle else None,
                "elapsed_time": elapsed,
                "final_state": r.snapshot.to_dict(),
            }
            for r, elapsed in zip(report.results, report.elapsed_times)
        ]
    }

    with open(output_path, "w") as f:
        json.dump(data, f, indent=2)

    print(f"Results saved to {output_path}")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Compute falling-rock stack heights")
    parser.add_argument(
        "input",
        type=str,
        help="Path to the jet pattern input file"
    )
    parser.add_argument(
        "--rocks",
        type=int,
        nargs="+",
        default=None,
        help=f"Drop counts to evaluate (default: {SHORT_RUN_ROCKS} {LONG_RUN_ROCKS})"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to chamber config YAML (uses default if not specified)"
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Path to save results JSON"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=None,
        help="Print cycle detection diagnostics"
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Print heights only"
    )

    args = parser.parse_args(argv)

    try:
        report = run_puzzle(
            args.input,
            rock_counts=args.rocks,
            config_path=args.config,
            debug=args.debug,
            verbose=not args.quiet
        )
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}")
        return 1

    if args.quiet:
        for result in report.results:
            print(result.height)

    if args.output:
        save_results(report, args.output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
