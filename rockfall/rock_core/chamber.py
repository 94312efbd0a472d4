"""
Chamber
=======

Occupancy storage and collision testing on packed byte rows.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from rockfall.rock_core.config_loader import RockfallConfig, get_config
from rockfall.rock_core.rock_catalog import RockShape


class Chamber:
    """
    Fixed-width, upward-growing stack of settled rock.

    Row 0 sits on the floor. Each row is one byte with bit x set when
    column x is occupied. Rows above the stack read as empty.
    """

    def __init__(self, config: Optional[RockfallConfig] = None):
        """
        Initialize an empty chamber.

        Args:
            config: Engine configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._width = config.chamber.width
        self._full_row = config.chamber.full_row
        self._rows = bytearray()

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        """Number of rows holding at least one settled cell."""
        return len(self._rows)

    def row(self, index: int) -> int:
        """Row bitmask; rows at or above the stack top are empty."""
        if index < 0:
            raise IndexError(f"Row index {index} is below the floor")
        if index >= len(self._rows):
            return 0
        return self._rows[index]

    def collides(self, shape: RockShape, bottom_row: int) -> bool:
        """
        Check whether a positioned shape overlaps the floor or settled rock.

        Args:
            shape: Shape already shifted to its column position.
            bottom_row: Chamber row under the shape's bottom row.
        """
        if bottom_row < 0:
            return True

        rows = self._rows
        height = len(rows)
        for offset, bits in enumerate(shape.rows):
            index = bottom_row + offset
            if index >= height:
                # Everything above is empty
                return False
            if rows[index] & bits:
                return True
        return False

    def settle(self, shape: RockShape, bottom_row: int) -> None:
        """
        Merge a resting shape into the stack, growing it if needed.

        Args:
            shape: Shape already shifted to its column position.
            bottom_row: Chamber row under the shape's bottom row.
        """
        assert bottom_row >= 0, f"{shape!r} settled below the floor at {bottom_row}"

        rows = self._rows
        for offset, bits in enumerate(shape.rows):
            assert bits & ~self._full_row == 0, f"{shape!r} crosses a wall"
            index = bottom_row + offset
            while index >= len(rows):
                rows.append(0)
            assert rows[index] & bits == 0, f"{shape!r} overlaps row {index}"
            rows[index] |= bits

    def top_rows(self, count: int) -> bytes:
        """The topmost rows, bottom first; fewer if the stack is shorter."""
        if count <= 0:
            return b""
        return bytes(self._rows[-count:])

    def to_array(self, max_rows: Optional[int] = None) -> np.ndarray:
        """
        Occupancy grid as a bool array, top row first.

        Args:
            max_rows: Only include this many rows from the top. All if None.

        Returns:
            (rows, width) bool array.
        """
        rows = bytes(self._rows) if max_rows is None else self.top_rows(max_rows)
        packed = np.frombuffer(rows, dtype=np.uint8)[::-1]
        columns = np.arange(self._width, dtype=np.uint8)
        return ((packed[:, None] >> columns) & 1).astype(bool)

    def render(self, max_rows: Optional[int] = None) -> str:
        """Text view of the stack, top row first ('#' rock, '.' air)."""
        grid = self.to_array(max_rows)
        return "\n".join(
            "".join("#" if cell else "." for cell in line) for line in grid
        )

    def __repr__(self) -> str:
        return f"Chamber(width={self._width}, height={self.height})"
