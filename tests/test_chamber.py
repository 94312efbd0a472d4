"""
Tests for chamber storage and collision checks.
"""

import numpy as np
import pytest

from rockfall.rock_core.chamber import Chamber
from rockfall.rock_core.config_loader import load_config
from rockfall.rock_core.rock_catalog import RockCatalog, RockShape


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def catalog():
    return RockCatalog()


@pytest.fixture
def chamber(config):
    return Chamber(config)


class TestChamberStorage:
    """Test rows, height and growth."""

    def test_initially_empty(self, chamber):
        """New chamber has no rows."""
        assert chamber.height == 0
        assert chamber.width == 7
        assert chamber.top_rows(25) == b""

    def test_rows_above_stack_are_empty(self, chamber, catalog):
        """Reading above the stack returns an empty row, not an error."""
        chamber.settle(catalog[0], 0)
        assert chamber.row(0) == 0b1111
        assert chamber.row(1) == 0
        assert chamber.row(1000) == 0

    def test_row_below_floor(self, chamber):
        """Negative row indices are a caller bug."""
        with pytest.raises(IndexError):
            chamber.row(-1)

    def test_settle_grows_height(self, chamber, catalog):
        """Settling a tall rock extends the stack."""
        chamber.settle(catalog[3], 0)
        assert chamber.height == 4

    def test_settle_merges_rows(self, chamber, catalog):
        """Settled cells are OR-merged into existing rows."""
        chamber.settle(catalog[4], 0)
        chamber.settle(catalog[4].shifted(2), 0)
        assert chamber.height == 2
        assert chamber.row(0) == 0b1111
        assert chamber.row(1) == 0b1111

    def test_settle_overlap_is_fatal(self, chamber, catalog):
        """Overlapping a settled cell is a programming error."""
        chamber.settle(catalog[0], 0)
        with pytest.raises(AssertionError):
            chamber.settle(catalog[4], 0)

    def test_settle_through_wall_is_fatal(self, chamber, catalog):
        """A shape crossing the right wall is a programming error."""
        with pytest.raises(AssertionError):
            chamber.settle(catalog[0].shifted(4), 0)

    def test_top_rows_window(self, chamber, catalog):
        """top_rows returns the last rows, fewer when the stack is short."""
        chamber.settle(catalog[2], 0)
        assert chamber.top_rows(2) == bytes([0b100, 0b100])
        assert chamber.top_rows(25) == bytes([0b111, 0b100, 0b100])
        assert chamber.top_rows(0) == b""


class TestCollision:
    """Test floor and rock collisions."""

    def test_floor_collision(self, chamber, catalog):
        """Any negative bottom row hits the floor."""
        assert chamber.collides(catalog[0], -1)
        assert not chamber.collides(catalog[0], 0)

    def test_rock_collision(self, chamber, catalog):
        """Overlapping bits collide; disjoint bits do not."""
        chamber.settle(catalog[0].shifted(2), 0)
        assert chamber.collides(catalog[3].shifted(3), 0)
        assert not chamber.collides(catalog[3].shifted(1), 0)
        assert not chamber.collides(catalog[3].shifted(3), 1)

    def test_plus_fits_in_notch(self, chamber, catalog):
        """Only the shape's occupied cells count toward collisions."""
        chamber.settle(RockShape("notch", (0b1110111,)), 0)
        plus = catalog[1].shifted(2)
        # The plus's bottom cell (column 3) drops into the gap
        assert not chamber.collides(plus, 0)
        assert chamber.collides(catalog[1].shifted(1), 0)


class TestRendering:
    """Test numpy grid and text views."""

    def test_to_array_top_first(self, chamber, catalog):
        """Grid rows run top first, columns left to right."""
        chamber.settle(catalog[2], 0)
        grid = chamber.to_array()

        assert grid.shape == (3, 7)
        assert grid.dtype == bool
        np.testing.assert_array_equal(grid[0], [0, 0, 1, 0, 0, 0, 0])
        np.testing.assert_array_equal(grid[2], [1, 1, 1, 0, 0, 0, 0])

    def test_empty_array(self, chamber):
        """Empty chamber gives an empty grid of the right width."""
        assert chamber.to_array().shape == (0, 7)

    def test_render(self, chamber, catalog):
        """Text view uses '#' for rock and '.' for air."""
        chamber.settle(catalog[0].shifted(2), 0)
        chamber.settle(catalog[4], 1)
        assert chamber.render() == "##.....\n##.....\n..####."

    def test_render_limited_rows(self, chamber, catalog):
        """max_rows keeps only the top of the stack."""
        chamber.settle(catalog[3], 0)
        assert chamber.render(max_rows=2) == "#......\n#......"
