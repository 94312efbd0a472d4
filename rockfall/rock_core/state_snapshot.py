"""
State Snapshot
==============

Packs run state into numpy arrays for inspection, debugging and JSON export.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

import numpy as np

from rockfall.rock_core.config_loader import RockfallConfig, get_config
from rockfall.rock_core.drop_simulator import SimulationState

# Rows included in the surface grid
SURFACE_ROWS = 32


@dataclass
class ChamberSnapshot:
    """
    Frozen view of a run between drops.

    surface is the top of the stack (top row first); column_heights are
    measured from the floor.
    """
    height: int
    rocks_dropped: int
    rock_index: int
    jet_index: int

    surface: np.ndarray          # (<=SURFACE_ROWS, width) bool
    column_heights: np.ndarray   # (width,) int64
    surface_roughness: float     # Std dev of column heights

    @property
    def relative_profile(self) -> np.ndarray:
        """Depth of each column below the stack top."""
        return self.height - self.column_heights

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly dictionary."""
        return {
            "height": self.height,
            "rocks_dropped": self.rocks_dropped,
            "rock_index": self.rock_index,
            "jet_index": self.jet_index,
            "column_heights": self.column_heights.tolist(),
            "surface_roughness": self.surface_roughness,
            "surface": [
                "".join("#" if cell else "." for cell in line)
                for line in self.surface
            ],
        }


class SnapshotBuilder:
    """Builds snapshots of a SimulationState."""

    def __init__(
        self,
        config: Optional[RockfallConfig] = None,
        surface_rows: int = SURFACE_ROWS
    ):
        if config is None:
            config = get_config()

        self._width = config.chamber.width
        self._surface_rows = surface_rows

    def build(self, state: SimulationState) -> ChamberSnapshot:
        chamber = state.chamber
        height = chamber.height
        grid = chamber.to_array()

        column_heights = np.zeros(self._width, dtype=np.int64)
        if height > 0:
            occupied = grid.any(axis=0)
            # grid is top row first, so argmax finds the topmost cell
            top_index = grid.argmax(axis=0)
            column_heights = np.where(occupied, height - top_index, 0).astype(np.int64)

        return ChamberSnapshot(
            height=height,
            rocks_dropped=state.rocks_dropped,
            rock_index=state.rock_index,
            jet_index=state.jet_index,
            surface=grid[:self._surface_rows].copy(),
            column_heights=column_heights,
            surface_roughness=float(np.std(column_heights))
        )
