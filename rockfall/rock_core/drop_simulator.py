"""
Drop Simulator
==============

Drives one rock at a time from spawn to rest: jet push, then one-row fall,
until the fall is blocked.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from rockfall.rock_core.chamber import Chamber
from rockfall.rock_core.config_loader import RockfallConfig, get_config
from rockfall.rock_core.jets import JetSequence
from rockfall.rock_core.rock_catalog import RockCatalog, RockShape, get_catalog


@dataclass
class SimulationState:
    """
    Everything that changes during one run.

    Owned by a single caller and passed to the simulator and the cycle
    detector, so separate runs never share state.
    """
    chamber: Chamber
    rock_index: int = 0      # Catalog position of the next rock
    jet_index: int = 0       # Sequence position of the next push
    rocks_dropped: int = 0

    @property
    def height(self) -> int:
        return self.chamber.height


@dataclass
class SettleEvent:
    """Result of a single drop (spawn, pushes, falls, settle)."""
    shape: RockShape         # Positioned shape as it came to rest
    bottom_row: int
    pushes: int              # Jets consumed by this rock
    height_gain: int


@dataclass
class FallingRock:
    """A rock in flight: positioned shape plus the row under its bottom."""
    shape: RockShape
    bottom_row: int


class DropSimulator:
    """
    Rock-by-rock simulation against a chamber.

    One drop: spawn gap rows above the stack and offset columns from the
    left wall, then alternate jet push and fall until the fall is blocked.
    Every push consumes exactly one jet whether or not the rock moved.
    """

    def __init__(
        self,
        jets: JetSequence,
        config: Optional[RockfallConfig] = None,
        catalog: Optional[RockCatalog] = None
    ):
        """
        Initialize simulator.

        Args:
            jets: Parsed jet pattern.
            config: Engine configuration. Uses default if None.
            catalog: Rock catalog. Uses the shared catalog if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._jets = jets
        self._catalog = catalog if catalog is not None else get_catalog()

        self._width = config.chamber.width
        self._spawn_gap = config.chamber.spawn_gap
        self._spawn_offset = config.chamber.spawn_offset

    @property
    def jets(self) -> JetSequence:
        return self._jets

    @property
    def catalog(self) -> RockCatalog:
        return self._catalog

    def new_state(self) -> SimulationState:
        """Fresh state with an empty chamber."""
        return SimulationState(chamber=Chamber(self._config))

    def spawn(self, state: SimulationState) -> FallingRock:
        """Place the next rock at its spawn position without moving it."""
        shape = self._catalog.shape_at(state.rock_index).shifted(self._spawn_offset)
        return FallingRock(shape, state.chamber.height + self._spawn_gap)

    def drop(self, state: SimulationState) -> SettleEvent:
        """
        Drop the next rock until it settles.

        Advances the jet index once per push, the rock index once, and the
        drop counter once.

        Args:
            state: Run state, mutated in place.

        Returns:
            SettleEvent describing where the rock came to rest.
        """
        chamber = state.chamber
        jets = self._jets
        jet_count = len(jets)
        height_before = chamber.height

        rock = self.spawn(state)
        shape = rock.shape
        bottom_row = rock.bottom_row
        pushes = 0

        while True:
            pushed = shape.pushed(jets.direction_at(state.jet_index), self._width)
            state.jet_index = (state.jet_index + 1) % jet_count
            pushes += 1
            if pushed is not shape and not chamber.collides(pushed, bottom_row):
                shape = pushed

            if chamber.collides(shape, bottom_row - 1):
                break
            bottom_row -= 1

        chamber.settle(shape, bottom_row)
        state.rock_index = (state.rock_index + 1) % len(self._catalog)
        state.rocks_dropped += 1

        return SettleEvent(
            shape=shape,
            bottom_row=bottom_row,
            pushes=pushes,
            height_gain=chamber.height - height_before
        )

    def drop_many(self, state: SimulationState, count: int) -> List[SettleEvent]:
        """Drop several rocks in a row."""
        return [self.drop(state) for _ in range(count)]
