"""
Extrapolator
============

Public entry point: stack height after any number of drops.

Rocks are simulated until the cycle detector reports a period. Whole
periods are then accounted for arithmetically and only the leftover rocks
are simulated, so a run for 10^12 drops costs about one period of work.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from rockfall.rock_core.config_loader import RockfallConfig, get_config
from rockfall.rock_core.cycle_detector import CycleDetector, CycleRecord
from rockfall.rock_core.drop_simulator import DropSimulator
from rockfall.rock_core.jets import JetSequence
from rockfall.rock_core.rock_catalog import RockCatalog
from rockfall.rock_core.state_snapshot import ChamberSnapshot, SnapshotBuilder


# Drop counts asked for by the puzzle
SHORT_RUN_ROCKS = 2022
LONG_RUN_ROCKS = 1_000_000_000_000


@dataclass
class ExtrapolationResult:
    """Outcome of one run."""
    total_rocks: int
    height: int
    simulated_rocks: int     # Rocks actually dropped
    skipped_rocks: int       # Rocks covered by whole cycles
    extra_height: int        # Height credited for the skipped rocks
    cycle: Optional[CycleRecord]
    snapshot: ChamberSnapshot   # Simulated chamber at the end of the run

    @property
    def extrapolated(self) -> bool:
        return self.skipped_rocks > 0


class Extrapolator:
    """
    Computes stack heights for a fixed jet pattern.

    Each call starts from an empty chamber, so results do not depend on
    earlier calls.
    """

    def __init__(
        self,
        jets: Union[str, JetSequence],
        config: Optional[RockfallConfig] = None,
        catalog: Optional[RockCatalog] = None,
        debug: Optional[bool] = None
    ):
        """
        Initialize extrapolator.

        Args:
            jets: Jet pattern text or an already parsed JetSequence.
            config: Engine configuration. Uses default if None.
            catalog: Rock catalog. Uses the shared catalog if None.
            debug: If True, print run diagnostics. Uses config if None.

        Raises:
            ConfigurationError: If the jet pattern is empty or malformed.
        """
        if config is None:
            config = get_config()
        if isinstance(jets, str):
            jets = JetSequence(jets)

        self._config = config
        self._jets = jets
        self._simulator = DropSimulator(jets, config, catalog)
        self._snapshot_builder = SnapshotBuilder(config)
        self._debug = config.debug.enabled if debug is None else debug

        if self._debug:
            print(f"[DEBUG] Extrapolator initialized")
            print(f"[DEBUG]   Jets: {len(jets)}")
            print(f"[DEBUG]   Fingerprint window: {config.detection.fingerprint_window}")
            print(f"[DEBUG]   Observation height: {config.detection.observation_height}")

    @property
    def jets(self) -> JetSequence:
        return self._jets

    @property
    def simulator(self) -> DropSimulator:
        return self._simulator

    def height_after(self, total_rocks: int) -> int:
        """Stack height once total_rocks rocks have settled."""
        return self.run(total_rocks).height

    def run(self, total_rocks: int) -> ExtrapolationResult:
        """
        Drop total_rocks rocks, skipping whole cycles once one is known.

        Args:
            total_rocks: Number of rocks to drop.

        Returns:
            ExtrapolationResult with the final height and run accounting.

        Raises:
            ValueError: If total_rocks is negative.
        """
        if total_rocks < 0:
            raise ValueError(f"total_rocks must be >= 0, got {total_rocks}")

        state = self._simulator.new_state()
        detector = CycleDetector(self._config, debug=self._debug)

        cycle: Optional[CycleRecord] = None
        skipped = 0
        extra_height = 0

        while state.rocks_dropped + skipped < total_rocks:
            self._simulator.drop(state)

            if cycle is None:
                cycle = detector.observe(state)
                if cycle is not None:
                    remaining = total_rocks - state.rocks_dropped
                    whole_cycles = remaining // cycle.length
                    skipped = whole_cycles * cycle.length
                    extra_height = whole_cycles * cycle.height_delta

                    if self._debug:
                        print(f"[DEBUG] Skipping {whole_cycles} cycles "
                              f"({skipped} rocks, +{extra_height} rows); "
                              f"{remaining - skipped} rocks left to simulate")

        height = state.chamber.height + extra_height

        if self._debug:
            print(f"[DEBUG] {total_rocks} rocks: height {height} "
                  f"({state.rocks_dropped} simulated)")

        return ExtrapolationResult(
            total_rocks=total_rocks,
            height=height,
            simulated_rocks=state.rocks_dropped,
            skipped_rocks=skipped,
            extra_height=extra_height,
            cycle=cycle,
            snapshot=self._snapshot_builder.build(state)
        )


def solve(
    jets: Union[str, JetSequence],
    config: Optional[RockfallConfig] = None
) -> Tuple[int, int]:
    """Heights after the puzzle's short and long runs."""
    extrapolator = Extrapolator(jets, config)
    return (
        extrapolator.height_after(SHORT_RUN_ROCKS),
        extrapolator.height_after(LONG_RUN_ROCKS),
    )
