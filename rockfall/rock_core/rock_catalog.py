"""
Rock Catalog
============

The five fixed rock shapes, handed out round-robin.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional, Sequence, Tuple

from rockfall.rock_core.jets import JetDirection


# Shapes as drawn, top row first. Column 0 is the leftmost cell.
ROCK_PICTURES: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("bar", ("####",)),
    ("plus", (".#.",
              "###",
              ".#.")),
    ("corner", ("..#",
                "..#",
                "###")),
    ("pillar", ("#",
                "#",
                "#",
                "#")),
    ("square", ("##",
                "##")),
)


@dataclass(frozen=True)
class RockShape:
    """
    A rock footprint as packed row bitmasks.

    rows[0] is the bottom row, so rows[i] overlays chamber row
    bottom_row + i. Bit x set means column x is occupied.
    """
    name: str
    rows: Tuple[int, ...]

    @staticmethod
    def from_picture(name: str, picture: Sequence[str]) -> "RockShape":
        """Build a shape from text rows drawn top first ('#' = occupied)."""
        rows = []
        for line in reversed(picture):
            mask = 0
            for x, cell in enumerate(line):
                if cell == "#":
                    mask |= 1 << x
            rows.append(mask)
        return RockShape(name, tuple(rows))

    @property
    def height(self) -> int:
        return len(self.rows)

    @property
    def width(self) -> int:
        """Columns spanned from column 0 to the rightmost occupied cell."""
        return max(self.rows).bit_length()

    def shifted(self, columns: int) -> "RockShape":
        """Copy moved right by the given number of columns."""
        return RockShape(self.name, tuple(row << columns for row in self.rows))

    def pushed(self, direction: JetDirection, chamber_width: int) -> "RockShape":
        """
        Copy moved one column by a jet.

        Returns self unchanged if the move would cross a wall. Collisions
        with settled rock are the chamber's concern.
        """
        if direction is JetDirection.LEFT:
            if any(row & 1 for row in self.rows):
                return self
            return RockShape(self.name, tuple(row >> 1 for row in self.rows))

        right_wall = 1 << (chamber_width - 1)
        if any(row & right_wall for row in self.rows):
            return self
        return RockShape(self.name, tuple(row << 1 for row in self.rows))

    def __repr__(self) -> str:
        return f"RockShape({self.name})"


class RockCatalog:
    """
    Fixed, ordered collection of rock shapes.

    shape_at() wraps any natural index onto the catalog.
    """

    def __init__(self):
        self._shapes: Tuple[RockShape, ...] = tuple(
            RockShape.from_picture(name, picture) for name, picture in ROCK_PICTURES
        )

    def __len__(self) -> int:
        """Number of shapes in the rotation."""
        return len(self._shapes)

    def __getitem__(self, index: int) -> RockShape:
        """Get shape by catalog position."""
        if 0 <= index < len(self._shapes):
            return self._shapes[index]
        raise IndexError(f"Rock index {index} out of range [0, {len(self._shapes)})")

    def __iter__(self) -> Iterator[RockShape]:
        return iter(self._shapes)

    def shape_at(self, index: int) -> RockShape:
        """Shape dropped at the given position in the rotation."""
        return self._shapes[index % len(self._shapes)]

    def get_by_name(self, name: str) -> Optional[RockShape]:
        """Get shape by name (case-insensitive)."""
        name_lower = name.lower()
        for shape in self._shapes:
            if shape.name == name_lower:
                return shape
        return None


# Module-level singleton
_cached_catalog: Optional[RockCatalog] = None


def get_catalog() -> RockCatalog:
    """Get the rock catalog singleton."""
    global _cached_catalog
    if _cached_catalog is None:
        _cached_catalog = RockCatalog()
    return _cached_catalog
