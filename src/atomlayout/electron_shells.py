# src/atomlayout/electron_shells.py
"""Electron shell positions and the rules for filling them.

Only the first two shells are modeled: two positions on the inner shell and
eight on the outer shell. Electrons always fill the inner shell first, and
when an inner electron leaves, the nearest outer electron drops in to take
its place.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any

import numpy as np

from atomlayout.exceptions import NoOpenPositionsError
from atomlayout.models import Vector2

if TYPE_CHECKING:
    from atomlayout.models import Particle
    from atomlayout.reactive import ObservableCollection, ReadOnlyProperty

logger = logging.getLogger(__name__)

# Returns a new list holding the items in random order.
ShuffleSource = Callable[[Sequence[Any]], list[Any]]

NUM_INNER_SHELL_POSITIONS = 2
NUM_OUTER_SHELL_POSITIONS = 8
NUM_ELECTRON_POSITIONS = NUM_INNER_SHELL_POSITIONS + NUM_OUTER_SHELL_POSITIONS

# Outer positions are staggered against the inner ones, tweaked for label clearance.
OUTER_SHELL_START_ANGLE = math.pi / NUM_OUTER_SHELL_POSITIONS * 1.2

# Outer electrons closer than this to a vacated inner slot count as tied.
BACKFILL_TIE_TOLERANCE = 1e-9


class ElectronAddMode(StrEnum):
    """How an open shell position is chosen for a new electron."""

    PROXIMAL = "proximal"
    RANDOM = "random"


class ShellKind(StrEnum):
    INNER = "inner"
    OUTER = "outer"


@dataclass(eq=False)
class ElectronShellPosition:
    """One slot an electron can occupy.

    Attributes:
        offset: Slot position relative to the atom center.
        shell: Which shell the slot belongs to.
        radius: Nominal radius of that shell.
        electron: Occupying electron, or None when the slot is open.
    """

    offset: Vector2
    shell: ShellKind
    radius: float
    electron: Particle | None = None

    @property
    def is_open(self) -> bool:
        return self.electron is None


def numpy_shuffle(seed: int | None = None) -> ShuffleSource:
    """Build a shuffle source backed by a numpy random Generator."""
    rng = np.random.default_rng(seed)

    def shuffle(items: Sequence[Any]) -> list[Any]:
        return [items[int(i)] for i in rng.permutation(len(items))]

    return shuffle


class ElectronShellSlotTable:
    """Fixed table of ten electron positions, kept in sync with an electron collection.

    Placement is driven by the owner: ``choose_open_position`` picks a slot
    (raising if none is left), ``claim`` reserves it and ``send_to_slot`` sets
    the electron's destination. Claiming before the electron joins the
    collection keeps listeners on the collection from handing the same slot out
    twice. ``occupy`` does both steps at once.

    Owners should ``release`` an electron before removing it from the collection
    so that count and charge listeners never see it still holding a slot. The
    table also listens for removals and releases anything left behind.
    """

    def __init__(
        self,
        electrons: ObservableCollection[Particle],
        center_property: ReadOnlyProperty[Vector2],
        *,
        inner_radius: float,
        outer_radius: float,
        add_mode: ElectronAddMode | str = ElectronAddMode.PROXIMAL,
        shuffle: ShuffleSource | None = None,
    ) -> None:
        """Create the slot table.

        Args:
            electrons: Collection whose members occupy the slots.
            center_property: Atom center; slot offsets are relative to it.
            inner_radius: Inner shell radius.
            outer_radius: Outer shell radius.
            add_mode: Initial electron add mode.
            shuffle: Random ordering source for "random" mode.
        """
        self._electrons = electrons
        self._center_property = center_property
        self.inner_radius = inner_radius
        self.outer_radius = outer_radius
        self.add_mode = ElectronAddMode(add_mode)
        self._shuffle = shuffle if shuffle is not None else numpy_shuffle()

        self._positions: list[ElectronShellPosition] = [
            ElectronShellPosition(Vector2(inner_radius, 0), ShellKind.INNER, inner_radius),
            ElectronShellPosition(Vector2(-inner_radius, 0), ShellKind.INNER, inner_radius),
        ]
        angle = OUTER_SHELL_START_ANGLE
        for _ in range(NUM_OUTER_SHELL_POSITIONS):
            self._positions.append(
                ElectronShellPosition(
                    Vector2.from_polar(outer_radius, angle), ShellKind.OUTER, outer_radius
                )
            )
            angle += 2 * math.pi / NUM_OUTER_SHELL_POSITIONS

        electrons.add_item_removed_listener(self._on_electron_removed)

    @property
    def positions(self) -> list[ElectronShellPosition]:
        """All ten slots: the two inner ones first, then the eight outer ones."""
        return list(self._positions)

    @property
    def open_positions(self) -> list[ElectronShellPosition]:
        return [position for position in self._positions if position.is_open]

    @property
    def occupied_positions(self) -> list[ElectronShellPosition]:
        return [position for position in self._positions if not position.is_open]

    def absolute_position(self, position: ElectronShellPosition) -> Vector2:
        """Coordinates of a slot given the current atom center."""
        return self._center_property.get().plus(position.offset)

    def slot_for(self, electron: Particle) -> ElectronShellPosition | None:
        for position in self._positions:
            if position.electron is electron:
                return position
        return None

    def choose_open_position(self, electron: Particle) -> ElectronShellPosition:
        """Pick the slot a new electron should go to.

        Open slots are ordered by distance from the electron ("proximal") or
        shuffled ("random"), then stably re-ordered by shell so that inner
        slots always come first.

        Raises:
            NoOpenPositionsError: If all ten slots are occupied.
        """
        open_positions = self.open_positions
        if not open_positions:
            raise NoOpenPositionsError("No open positions found for electrons")

        if self.add_mode is ElectronAddMode.PROXIMAL:
            center = self._center_property.get()
            coords = np.array(
                [[center.x + p.offset.x, center.y + p.offset.y] for p in open_positions]
            )
            here = electron.position_property.get()
            distances = np.hypot(coords[:, 0] - here.x, coords[:, 1] - here.y)
            ordered = [open_positions[int(i)] for i in np.argsort(distances, kind="stable")]
        else:
            ordered = list(self._shuffle(open_positions))

        # Shell radius is the distance from the atom center, without float noise.
        ordered.sort(key=lambda p: p.radius)
        return ordered[0]

    def claim(self, position: ElectronShellPosition, electron: Particle) -> None:
        """Reserve ``position`` for ``electron`` without moving it.

        Raises:
            NoOpenPositionsError: If the position is already taken.
        """
        if not position.is_open:
            raise NoOpenPositionsError("Electron shell position is already occupied")
        position.electron = electron

    def send_to_slot(self, electron: Particle) -> None:
        """Point ``electron`` at the slot it currently holds, if any."""
        position = self.slot_for(electron)
        if position is not None:
            electron.destination_property.set(self.absolute_position(position))

    def occupy(self, position: ElectronShellPosition, electron: Particle) -> None:
        """Put ``electron`` in ``position`` and send it there."""
        self.claim(position, electron)
        self.send_to_slot(electron)

    def place(self, electron: Particle) -> ElectronShellPosition:
        position = self.choose_open_position(electron)
        self.occupy(position, electron)
        return position

    def translate_occupants(
        self, translation: Vector2, mover: Callable[[Particle, Vector2], None]
    ) -> None:
        """Apply ``mover`` to every placed electron."""
        for position in self._positions:
            if position.electron is not None:
                mover(position.electron, translation)

    def release(self, electron: Particle) -> None:
        """Free the slot held by ``electron`` and backfill the inner shell."""
        vacated = self.slot_for(electron)
        if vacated is None:
            return
        vacated.electron = None
        if vacated.shell is ShellKind.INNER:
            self._backfill(vacated)

    def _on_electron_removed(self, electron: Particle) -> None:
        self.release(electron)

    def _backfill(self, vacated: ElectronShellPosition) -> None:
        occupied_outer = [
            (p, p.electron)
            for p in self._positions
            if p.shell is ShellKind.OUTER and p.electron is not None
        ]
        if not occupied_outer:
            return

        def nearest_first(pair: tuple[ElectronShellPosition, Particle]) -> tuple[float, int]:
            position, occupant = pair
            distance = position.offset.distance(vacated.offset)
            # Ties go to the electron that joined the atom earliest.
            return (
                round(distance / BACKFILL_TIE_TOLERANCE) * BACKFILL_TIE_TOLERANCE,
                self._electrons.index_of(occupant),
            )

        source, electron = min(occupied_outer, key=nearest_first)
        source.electron = None
        vacated.electron = electron
        electron.destination_property.set(self.absolute_position(vacated))
        logger.debug("Moved outer shell electron %r into the inner shell", electron)
