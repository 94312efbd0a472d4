"""
Jet Sequence
============

Parses the jet pattern and serves pushes round-robin.
"""

from __future__ import annotations

import enum
from pathlib import Path
from typing import Iterator, Tuple, Union

from rockfall.rock_core.config_loader import ConfigurationError


class JetDirection(enum.Enum):
    """Horizontal push applied to a falling rock."""
    LEFT = "<"
    RIGHT = ">"

    def __repr__(self) -> str:
        return f"JetDirection({self.value})"


class JetSequence:
    """
    Immutable cyclic sequence of jet pushes.

    Indices wrap modulo the pattern length, so any natural index is valid.
    """

    def __init__(self, pattern: str):
        """
        Parse a jet pattern.

        Args:
            pattern: Text made of '<' and '>' characters. Surrounding
                whitespace is ignored.

        Raises:
            ConfigurationError: If the pattern is empty or contains any
                other character.
        """
        text = pattern.strip()
        if not text:
            raise ConfigurationError("Jet pattern contains no '<' or '>' characters")

        directions = []
        for position, char in enumerate(text):
            try:
                directions.append(JetDirection(char))
            except ValueError:
                raise ConfigurationError(
                    f"Invalid jet character {char!r} at position {position}"
                ) from None

        self._directions: Tuple[JetDirection, ...] = tuple(directions)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "JetSequence":
        """Read a jet pattern from a puzzle input file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Input file not found: {path}")
        return cls(path.read_text())

    def __len__(self) -> int:
        """Period of the sequence."""
        return len(self._directions)

    def __iter__(self) -> Iterator[JetDirection]:
        """Iterate over one period."""
        return iter(self._directions)

    def direction_at(self, index: int) -> JetDirection:
        """Jet direction for any natural index."""
        return self._directions[index % len(self._directions)]

    def __str__(self) -> str:
        return "".join(d.value for d in self._directions)

    def __repr__(self) -> str:
        return f"JetSequence(length={len(self)})"
