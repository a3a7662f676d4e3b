# tests/test_electron_shells.py
"""Tests for the electron shell slot table."""

import math

import pytest

from atomlayout.electron_shells import (
    NUM_ELECTRON_POSITIONS,
    ElectronAddMode,
    ElectronShellSlotTable,
    ShellKind,
    numpy_shuffle,
)
from atomlayout.exceptions import NoOpenPositionsError
from atomlayout.models import Particle, ParticleType, Vector2
from atomlayout.reactive import ObservableCollection, Property


@pytest.fixture
def electrons():
    return ObservableCollection(name="electrons")


@pytest.fixture
def center():
    return Property(Vector2.ZERO)


@pytest.fixture
def table(electrons, center):
    return ElectronShellSlotTable(electrons, center, inner_radius=85, outer_radius=130)


def add(electrons, table, x=0.0, y=0.0):
    """Add an electron the way the atom does: choose, claim, join, send."""
    electron = Particle(ParticleType.ELECTRON, Vector2(x, y))
    return join(electrons, table, table.choose_open_position(electron), electron)


def join(electrons, table, position, electron=None):
    """Put an electron in a specific slot."""
    electron = electron or Particle(ParticleType.ELECTRON)
    table.claim(position, electron)
    electrons.add(electron)
    table.send_to_slot(electron)
    return electron


class TestGeometry:
    def test_ten_positions(self, table):
        assert len(table.positions) == NUM_ELECTRON_POSITIONS == 10

    def test_inner_positions(self, table):
        inner = [p for p in table.positions if p.shell is ShellKind.INNER]
        assert [p.offset for p in inner] == [Vector2(85, 0), Vector2(-85, 0)]
        assert table.positions[:2] == inner

    def test_outer_positions_on_outer_shell(self, table):
        outer = table.positions[2:]
        assert len(outer) == 8
        for position in outer:
            assert position.shell is ShellKind.OUTER
            assert position.offset.magnitude() == pytest.approx(130)

    def test_outer_positions_are_staggered(self, table):
        first = table.positions[2].offset
        assert math.atan2(first.y, first.x) == pytest.approx(0.15 * math.pi)

    def test_absolute_position_follows_center(self, table, center):
        center.set(Vector2(10, 20))
        assert table.absolute_position(table.positions[0]) == Vector2(95, 20)

    def test_all_open_initially(self, table):
        assert len(table.open_positions) == 10
        assert table.occupied_positions == []


class TestPlacement:
    def test_inner_shell_fills_first(self, electrons, table):
        # Sitting right on top of an outer slot still lands in the inner shell
        outer_spot = table.positions[5].offset
        electron = add(electrons, table, outer_spot.x, outer_spot.y)
        assert table.slot_for(electron).shell is ShellKind.INNER

    def test_proximal_picks_nearest_inner(self, electrons, table):
        left = add(electrons, table, -300, 0)
        right = add(electrons, table, 300, 0)
        assert table.slot_for(left) is table.positions[1]
        assert table.slot_for(right) is table.positions[0]

    def test_proximal_picks_nearest_outer_once_inner_full(self, electrons, table):
        add(electrons, table)
        add(electrons, table)
        # (200, 0) is closest to the outer slot at -18 degrees
        electron = add(electrons, table, 200, 0)
        assert table.slot_for(electron) is table.positions[9]

    def test_sets_destination_not_position(self, electrons, table):
        electron = add(electrons, table, 300, 0)
        assert electron.destination == Vector2(85, 0)
        assert electron.position == Vector2(300, 0)

    def test_destination_uses_current_center(self, electrons, table, center):
        center.set(Vector2(100, 100))
        electron = add(electrons, table, 500, 100)
        assert electron.destination == Vector2(185, 100)

    def test_each_add_occupies_one_more_slot(self, electrons, table):
        for count in range(1, 11):
            electron = add(electrons, table, 7 * count, -3 * count)
            assert len(table.occupied_positions) == count
            assert table.slot_for(electron) is not None

    def test_full_table_raises(self, electrons, table):
        for _ in range(10):
            add(electrons, table)
        with pytest.raises(NoOpenPositionsError, match="No open positions"):
            table.choose_open_position(Particle(ParticleType.ELECTRON))

    def test_exhaustion_is_assertion_error(self, electrons, table):
        for _ in range(10):
            add(electrons, table)
        with pytest.raises(AssertionError):
            table.place(Particle(ParticleType.ELECTRON))

    def test_occupy_taken_slot_raises(self, electrons, table):
        add(electrons, table, 300, 0)
        with pytest.raises(NoOpenPositionsError):
            table.occupy(table.positions[0], Particle(ParticleType.ELECTRON))

    def test_claim_reserves_without_moving(self, electrons, table):
        electron = Particle(ParticleType.ELECTRON, Vector2(300, 0))
        table.claim(table.positions[0], electron)

        assert table.slot_for(electron) is table.positions[0]
        assert electron.destination == Vector2(300, 0)
        assert table.choose_open_position(Particle(ParticleType.ELECTRON)) is table.positions[1]

        table.send_to_slot(electron)
        assert electron.destination == Vector2(85, 0)

    def test_random_mode_uses_shuffle(self, electrons, center, reversing_shuffle):
        table = ElectronShellSlotTable(
            electrons,
            center,
            inner_radius=85,
            outer_radius=130,
            add_mode=ElectronAddMode.RANDOM,
            shuffle=reversing_shuffle,
        )
        first = add(electrons, table)
        second = add(electrons, table)
        third = add(electrons, table)
        # Reversed order, inner shell still first
        assert table.slot_for(first) is table.positions[1]
        assert table.slot_for(second) is table.positions[0]
        assert table.slot_for(third) is table.positions[9]

    def test_numpy_shuffle_is_seeded(self):
        items = list(range(10))
        assert numpy_shuffle(3)(items) == numpy_shuffle(3)(items)
        assert sorted(numpy_shuffle(3)(items)) == items


class TestBackfill:
    def test_removing_lone_inner_electron(self, electrons, table):
        electron = add(electrons, table, 300, 0)
        electrons.remove(electron)
        assert table.positions[0].is_open
        assert table.occupied_positions == []

    def test_outer_electron_moves_into_vacated_inner_slot(self, electrons, table):
        first = add(electrons, table, 300, 0)
        add(electrons, table, -300, 0)
        outer = add(electrons, table, 200, 0)

        electrons.remove(first)

        assert table.slot_for(outer) is table.positions[0]
        assert outer.destination == Vector2(85, 0)
        assert table.positions[9].is_open
        assert all(not p.is_open for p in table.positions[:2])

    def test_nearest_outer_electron_is_chosen(self, electrons, table):
        add(electrons, table, 300, 0)
        second = add(electrons, table, -300, 0)
        right = add(electrons, table, 200, 0)  # outer slot at -18 degrees
        left = add(electrons, table, -200, 0)  # outer slot at 162 degrees

        electrons.remove(second)

        assert table.slot_for(left) is table.positions[1]
        assert table.slot_for(right) is table.positions[9]

    def test_outer_removal_does_not_backfill(self, electrons, table):
        add(electrons, table, 300, 0)
        add(electrons, table, -300, 0)
        outer_a = add(electrons, table, 200, 0)
        outer_b = add(electrons, table, -200, 0)

        electrons.remove(outer_a)

        assert table.slot_for(outer_b) is table.positions[5]
        assert len(table.occupied_positions) == 3

    def test_occupants_stay_members(self, electrons, table):
        members = [add(electrons, table, 10 * i, 0) for i in range(6)]
        for electron in members[:3]:
            electrons.remove(electron)
        occupants = [p.electron for p in table.occupied_positions]
        assert all(electrons.contains(e) for e in occupants)
        assert len(occupants) == len(electrons)

    def test_release_backfills_before_removal(self, electrons, table):
        first = add(electrons, table, 300, 0)
        add(electrons, table, -300, 0)
        outer = add(electrons, table, 200, 0)

        table.release(first)

        assert electrons.contains(first)
        assert table.slot_for(first) is None
        assert table.slot_for(outer) is table.positions[0]

        electrons.remove(first)
        assert len(table.occupied_positions) == 2

    def test_equidistant_tie_goes_to_earliest_electron(self, electrons, table):
        positions = table.positions
        # Two outer slots mirrored about the first inner slot.
        positions[2].offset = Vector2(85, 40)
        positions[3].offset = Vector2(85, -40)
        vacating = join(electrons, table, positions[0])
        join(electrons, table, positions[1])
        earlier = join(electrons, table, positions[3])
        later = join(electrons, table, positions[2])

        electrons.remove(vacating)

        assert positions[0].electron is earlier
        assert positions[2].electron is later
        assert positions[3].is_open

    def test_equidistant_tie_ignores_slot_order(self, electrons, table):
        positions = table.positions
        positions[2].offset = Vector2(85, 40)
        positions[3].offset = Vector2(85, -40)
        vacating = join(electrons, table, positions[0])
        join(electrons, table, positions[1])
        earlier = join(electrons, table, positions[2])
        join(electrons, table, positions[3])

        electrons.remove(vacating)

        assert positions[0].electron is earlier
        assert positions[2].is_open
