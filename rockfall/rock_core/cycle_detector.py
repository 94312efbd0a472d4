"""
Cycle Detector
==============

Spots the periodic regime of a run by fingerprinting the stack surface
together with the rock and jet positions.

The number of rocks is unbounded but the pair (rock index, jet index) is
not, and the top of the stack settles into a repeating profile. Detection
runs in two phases:

1. Observation: until the stack passes observation_height, count which
   jet index is current each time a rock settles.
2. Matching: the most frequent of those becomes the anchor. Whenever a
   rock settles with the jet index on the anchor, fingerprint the top rows
   and look the fingerprint up; the first repeat gives the cycle.

The anchor is a heuristic alignment point. A jet pattern with accidental
sub-periods could produce a coincidental match.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Dict, NamedTuple, Optional, Tuple

from rockfall.rock_core.config_loader import RockfallConfig, get_config
from rockfall.rock_core.drop_simulator import SimulationState


class Fingerprint(NamedTuple):
    """Snapshot key: top rows plus rotation positions."""
    rows: bytes
    rock_index: int
    jet_index: int


@dataclass(frozen=True)
class CycleRecord:
    """A detected period of the run."""
    length: int          # Rocks per cycle
    height_delta: int    # Height gained per cycle
    start_rocks: int     # Rocks dropped when the first occurrence was seen
    start_height: int    # Height when the first occurrence was seen

    def __repr__(self) -> str:
        return f"CycleRecord(length={self.length}, height_delta={self.height_delta})"


class CycleDetector:
    """
    Observes a run after every settle and reports its cycle once found.

    One detector belongs to one run. After the cycle is recorded no more
    fingerprints are taken.
    """

    def __init__(
        self,
        config: Optional[RockfallConfig] = None,
        debug: bool = False
    ):
        """
        Initialize detector.

        Args:
            config: Engine configuration. Uses default if None.
            debug: If True, print anchor and cycle events.
        """
        if config is None:
            config = get_config()

        self._window = config.detection.fingerprint_window
        self._observation_height = config.detection.observation_height
        self._debug = debug

        self._jet_counts: Counter = Counter()
        self._anchor: Optional[int] = None
        self._seen: Dict[Fingerprint, Tuple[int, int]] = {}
        self._cycle: Optional[CycleRecord] = None

    @property
    def anchor(self) -> Optional[int]:
        """Anchor jet index, or None while still observing."""
        return self._anchor

    @property
    def cycle(self) -> Optional[CycleRecord]:
        return self._cycle

    @property
    def fingerprint_count(self) -> int:
        """Fingerprints stored so far."""
        return len(self._seen)

    def fingerprint(self, state: SimulationState) -> Fingerprint:
        """Fingerprint of the current state (fewer rows early in a run)."""
        return Fingerprint(
            rows=state.chamber.top_rows(self._window),
            rock_index=state.rock_index,
            jet_index=state.jet_index
        )

    def observe(self, state: SimulationState) -> Optional[CycleRecord]:
        """
        Inspect the state right after a rock settled.

        Args:
            state: Run state after the settle.

        Returns:
            The CycleRecord once one has been found, else None.
        """
        if self._cycle is not None:
            return self._cycle

        height = state.chamber.height
        if height <= self._observation_height:
            self._jet_counts[state.jet_index] += 1
            return None

        if self._anchor is None:
            self._anchor = self._choose_anchor(state)

        if state.jet_index != self._anchor:
            return None

        key = self.fingerprint(state)
        previous = self._seen.get(key)
        if previous is None:
            self._seen[key] = (height, state.rocks_dropped)
            return None

        start_height, start_rocks = previous
        self._cycle = CycleRecord(
            length=state.rocks_dropped - start_rocks,
            height_delta=height - start_height,
            start_rocks=start_rocks,
            start_height=start_height
        )
        # Detection is finished for this run
        self._seen.clear()

        if self._debug:
            print(f"[DEBUG] Cycle found at rock {state.rocks_dropped}, height {height}")
            print(f"[DEBUG]   First seen at rock {start_rocks}, height {start_height}")
            print(f"[DEBUG]   {self._cycle.length} rocks per cycle, "
                  f"+{self._cycle.height_delta} rows per cycle")

        return self._cycle

    def _choose_anchor(self, state: SimulationState) -> int:
        """Most frequent settle-time jet index; first seen wins ties."""
        if not self._jet_counts:
            # Nothing observed (observation_height of 0)
            anchor = state.jet_index
        else:
            anchor, hits = self._jet_counts.most_common(1)[0]
            if self._debug:
                print(f"[DEBUG] Anchor jet index {anchor} "
                      f"({hits} hits over {sum(self._jet_counts.values())} settles)")
        return anchor
