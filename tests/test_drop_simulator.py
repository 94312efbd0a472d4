"""
Tests for rock-by-rock drop simulation.
"""

import pytest

from rockfall.rock_core.config_loader import load_config
from rockfall.rock_core.drop_simulator import DropSimulator
from rockfall.rock_core.jets import JetSequence

EXAMPLE_JETS = ">>><<><>><<<>><>>><<<>>><<<><<<>><>><<>>"


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def simulator(config):
    return DropSimulator(JetSequence(EXAMPLE_JETS), config)


@pytest.fixture
def state(simulator):
    return simulator.new_state()


class TestSpawn:
    """Test spawn placement."""

    def test_spawn_position(self, simulator, state):
        """New rocks start 2 columns in and 3 rows above the stack."""
        rock = simulator.spawn(state)
        assert rock.bottom_row == 3
        assert rock.shape.rows == (0b0111100,)

    def test_spawn_tracks_height(self, simulator, state):
        """Spawn height follows the stack top."""
        simulator.drop(state)
        rock = simulator.spawn(state)
        assert rock.bottom_row == state.height + 3
        assert rock.shape.name == "plus"


class TestExampleDrops:
    """Reproduce the published example step by step."""

    def test_first_rock(self, simulator, state):
        """The bar uses four jets and lands on the floor."""
        event = simulator.drop(state)

        assert event.bottom_row == 0
        assert event.pushes == 4
        assert event.height_gain == 1
        assert state.chamber.render() == "..####."
        assert state.jet_index == 4
        assert state.rock_index == 1
        assert state.rocks_dropped == 1

    def test_first_three_rocks(self, simulator, state):
        """The plus sits on the bar and the corner hooks onto the plus."""
        simulator.drop_many(state, 2)
        assert state.chamber.render() == "\n".join([
            "...#...",
            "..###..",
            "...#...",
            "..####.",
        ])

        simulator.drop(state)
        assert state.chamber.render() == "\n".join([
            "..#....",
            "..#....",
            "####...",
            "..###..",
            "...#...",
            "..####.",
        ])

    def test_height_after_ten_rocks(self, simulator, state):
        """Ten rocks make a 17-row tower."""
        simulator.drop_many(state, 10)
        assert state.height == 17

    def test_height_after_2022_rocks(self, simulator, state):
        """Brute force gives the published short-run answer."""
        simulator.drop_many(state, 2022)
        assert state.height == 3068


class TestInvariants:
    """Test bookkeeping invariants over many drops."""

    def test_indices_wrap(self, simulator, state):
        """Rock and jet indices stay inside their rotations."""
        for _ in range(500):
            event = simulator.drop(state)
            assert 0 <= state.rock_index < 5
            assert 0 <= state.jet_index < 40
            assert event.pushes >= 1
        assert state.rock_index == 500 % 5

    def test_jets_consumed_once_per_push(self, simulator, state):
        """Total pushes match the jet index advance."""
        pushes = sum(e.pushes for e in simulator.drop_many(state, 300))
        assert pushes % 40 == state.jet_index

    def test_no_cells_lost_or_shared(self, simulator, state):
        """Every settled cell lands on a distinct chamber bit."""
        placed = 0
        for event in simulator.drop_many(state, 1000):
            placed += sum(bin(row).count("1") for row in event.shape.rows)
            assert event.bottom_row >= 0
            assert all(row >> 7 == 0 for row in event.shape.rows)

        stored = sum(bin(state.chamber.row(i)).count("1") for i in range(state.height))
        assert stored == placed

    def test_height_never_decreases(self, simulator, state):
        """Each settle gains zero or more rows, at most the rock height."""
        for event in simulator.drop_many(state, 1000):
            assert 0 <= event.height_gain <= len(event.shape.rows)

    def test_states_are_independent(self, simulator):
        """Two states driven by one simulator do not interfere."""
        first = simulator.new_state()
        second = simulator.new_state()

        simulator.drop_many(first, 50)
        simulator.drop_many(second, 20)
        simulator.drop_many(second, 30)

        assert first.chamber.render() == second.chamber.render()
        assert (first.rock_index, first.jet_index) == (second.rock_index, second.jet_index)
