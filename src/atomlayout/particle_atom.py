# src/atomlayout/particle_atom.py
"""An atom built from individually modeled protons, neutrons and electrons."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from atomlayout.electron_shells import (
    ElectronAddMode,
    ElectronShellPosition,
    ElectronShellSlotTable,
    ShuffleSource,
    numpy_shuffle,
)
from atomlayout.exceptions import ParticleNotInAtomError
from atomlayout.models import Particle, ParticleType, Vector2
from atomlayout.nucleus import configure_nucleus, interleave_nucleons
from atomlayout.reactive import (
    DerivedProperty,
    ObservableCollection,
    Property,
    ReadOnlyProperty,
)
from atomlayout.settings import AtomSettings

if TYPE_CHECKING:
    from atomlayout.nucleus import NucleusConfiguration

logger = logging.getLogger(__name__)

RemovalListener = Callable[[bool, bool | None], None]


class ParticleAtom:
    """Bookkeeping and layout for an atom made of discrete particles.

    The atom owns three particle collections, the electron shell slot table
    and a set of derived counts. It decides where each particle should go by
    setting the particle's destination; moving the particle there over time
    is left to the host's animation loop.

    Example:
        atom = ParticleAtom(AtomSettings(nucleon_radius=3))
        atom.add_particle(Particle(ParticleType.PROTON))
        atom.add_particle(Particle(ParticleType.ELECTRON, Vector2(200, 0)))
        atom.charge_property.get()  # 0
    """

    def __init__(
        self,
        settings: AtomSettings | None = None,
        *,
        shuffle: ShuffleSource | None = None,
    ) -> None:
        """Create an empty atom.

        Args:
            settings: Geometry and electron placement settings. Defaults to AtomSettings().
            shuffle: Random ordering source for "random" electron placement.
                     Defaults to a numpy Generator seeded with ``settings.random_seed``.
        """
        self._settings = settings if settings is not None else AtomSettings()
        self.nucleon_radius = self._settings.nucleon_radius
        self.inner_electron_shell_radius = self._settings.inner_electron_shell_radius
        self.outer_electron_shell_radius = self._settings.outer_electron_shell_radius

        self.position_property: Property[Vector2] = Property(Vector2.ZERO, name="position")
        self.nucleus_offset_property: Property[Vector2] = Property(
            Vector2.ZERO, name="nucleusOffset"
        )

        self.protons: ObservableCollection[Particle] = ObservableCollection(name="protons")
        self.neutrons: ObservableCollection[Particle] = ObservableCollection(name="neutrons")
        self.electrons: ObservableCollection[Particle] = ObservableCollection(name="electrons")

        # Counts
        self.proton_count_property: DerivedProperty[int] = DerivedProperty(
            [self.protons.length_property], lambda length: length, name="protonCount"
        )
        self.neutron_count_property: DerivedProperty[int] = DerivedProperty(
            [self.neutrons.length_property], lambda length: length, name="neutronCount"
        )
        self.electron_count_property: DerivedProperty[int] = DerivedProperty(
            [self.electrons.length_property], lambda length: length, name="electronCount"
        )

        # Quantities derived from the counts
        self.charge_property: DerivedProperty[int] = DerivedProperty(
            [self.proton_count_property, self.electron_count_property],
            lambda protons, electrons: protons - electrons,
            name="charge",
        )
        self.mass_number_property: DerivedProperty[int] = DerivedProperty(
            [self.proton_count_property, self.neutron_count_property],
            lambda protons, neutrons: protons + neutrons,
            name="massNumber",
        )
        self.particle_count_property: DerivedProperty[int] = DerivedProperty(
            [
                self.proton_count_property,
                self.neutron_count_property,
                self.electron_count_property,
            ],
            lambda protons, neutrons, electrons: protons + neutrons + electrons,
            name="particleCount",
        )

        # Written only by reconfigure_nucleus(); published through a read-only view.
        self._nucleus_radius: Property[float] = Property(self.nucleon_radius, name="nucleusRadius")
        self._nucleus_radius_property: ReadOnlyProperty[float] = DerivedProperty(
            [self._nucleus_radius], lambda radius: radius, name="nucleusRadius"
        )

        if shuffle is None:
            shuffle = numpy_shuffle(self._settings.random_seed)
        self._electron_shells = ElectronShellSlotTable(
            self.electrons,
            self.position_property,
            inner_radius=self.inner_electron_shell_radius,
            outer_radius=self.outer_electron_shell_radius,
            add_mode=self._settings.electron_add_mode,
            shuffle=shuffle,
        )

        # Watchers on each member's user-controlled flag, detached when it leaves.
        self._removal_listeners: dict[Particle, RemovalListener] = {}

        self.position_property.lazy_link(self._on_position_changed)
        self.nucleus_offset_property.lazy_link(self._on_nucleus_offset_changed)

    @classmethod
    def from_settings(
        cls, settings: AtomSettings, *, shuffle: ShuffleSource | None = None
    ) -> ParticleAtom:
        return cls(settings, shuffle=shuffle)

    @property
    def settings(self) -> AtomSettings:
        return self._settings

    @property
    def nucleus_radius_property(self) -> ReadOnlyProperty[float]:
        """Radius of the nucleus as of the last reconfiguration."""
        return self._nucleus_radius_property

    @property
    def electron_shells(self) -> ElectronShellSlotTable:
        return self._electron_shells

    @property
    def electron_shell_positions(self) -> list[ElectronShellPosition]:
        """The ten electron slots, inner shell first."""
        return self._electron_shells.positions

    @property
    def electron_add_mode(self) -> ElectronAddMode:
        return self._electron_shells.add_mode

    @electron_add_mode.setter
    def electron_add_mode(self, mode: ElectronAddMode | str) -> None:
        self._electron_shells.add_mode = ElectronAddMode(mode)

    @property
    def nucleus_center(self) -> Vector2:
        return self.position_property.get().plus(self.nucleus_offset_property.get())

    def contains_particle(self, particle: Particle) -> bool:
        return (
            self.protons.contains(particle)
            or self.neutrons.contains(particle)
            or self.electrons.contains(particle)
        )

    def add_particle(self, particle: Particle) -> None:
        """Add a particle and move it (via its destination) to its place in the atom.

        Adding a particle that is already a member is ignored; that happens when
        saved state is restored on top of a live atom.

        Raises:
            UnknownParticleTypeError: If the particle's type is not recognized.
            NoOpenPositionsError: If an electron is added while all shell slots are taken.
        """
        particle_type = ParticleType.parse(particle.type)

        if self.contains_particle(particle):
            logger.warning("Ignoring attempt to add %r, it is already in the atom", particle)
            return

        match particle_type:
            case ParticleType.PROTON | ParticleType.NEUTRON:
                collection = self._collection_for(particle_type)
                collection.add(particle)
                self._watch_user_control(particle)
                self.reconfigure_nucleus()
            case ParticleType.ELECTRON:
                # Pick and claim the slot first so a full shell fails before anything
                # changes and collection listeners that add electrons cannot take it.
                position = self._electron_shells.choose_open_position(particle)
                self._electron_shells.claim(position, particle)
                self.electrons.add(particle)
                # Listeners may have backfilled it into another slot.
                self._electron_shells.send_to_slot(particle)
                self._watch_user_control(particle)

        logger.debug(
            "Added %s, particle count is now %d",
            particle_type.value,
            self.particle_count_property.get(),
        )

    def remove_particle(self, particle: Particle) -> None:
        """Remove a particle from whichever collection holds it.

        The nucleus is not reconfigured here; callers removing nucleons should
        call reconfigure_nucleus() once they are done.

        Raises:
            ParticleNotInAtomError: If the particle is not a member of this atom.
        """
        if self.protons.contains(particle):
            self.protons.remove(particle)
        elif self.neutrons.contains(particle):
            self.neutrons.remove(particle)
        elif self.electrons.contains(particle):
            # Free the slot before the counts notify.
            self._electron_shells.release(particle)
            self.electrons.remove(particle)
        else:
            raise ParticleNotInAtomError(
                f"Attempt to remove particle that is not in this particle atom: {particle!r}"
            )
        self._unwatch_user_control(particle)
        logger.debug("Removed %r", particle)

    def extract_particle(self, particle_type: ParticleType | str) -> Particle | None:
        """Remove and return the most recently added particle of a type.

        Returns:
            The removed particle, or None if there is none of that type.

        Raises:
            UnknownParticleTypeError: If ``particle_type`` is not recognized.
        """
        collection = self._collection_for(ParticleType.parse(particle_type))
        if len(collection) == 0:
            return None
        particle = collection.get(len(collection) - 1)
        self.remove_particle(particle)
        logger.debug("Extracted %r", particle)
        return particle

    def clear(self) -> None:
        """Remove every particle without reconfiguring the nucleus per removal."""
        for collection in (self.protons, self.neutrons, self.electrons):
            for particle in collection:
                self.remove_particle(particle)
        # Nothing left to place, this only resets the nucleus radius.
        self.reconfigure_nucleus()
        logger.debug("Cleared atom")

    def move_all_particles_to_destination(self) -> None:
        """Snap every particle to its destination, for when animation is not wanted."""
        for collection in (self.protons, self.neutrons, self.electrons):
            for particle in collection:
                particle.move_immediately_to_destination()

    def get_weight(self) -> int:
        return self.proton_count_property.get() + self.neutron_count_property.get()

    def get_charge(self) -> int:
        return self.proton_count_property.get() - self.electron_count_property.get()

    def reconfigure_nucleus(self) -> NucleusConfiguration:
        """Lay out all nucleons around the nucleus center and update the nucleus radius."""
        nucleons = interleave_nucleons(self.protons.to_list(), self.neutrons.to_list())
        configuration = configure_nucleus(len(nucleons), self.nucleus_center, self.nucleon_radius)
        for nucleon, placement in zip(nucleons, configuration.placements, strict=True):
            nucleon.destination_property.set(placement.destination)
            nucleon.z_layer_property.set(placement.z_layer)
        self._nucleus_radius.set(configuration.radius)
        logger.debug(
            "Reconfigured nucleus with %d nucleons, radius %.3f",
            len(nucleons),
            configuration.radius,
        )
        return configuration

    def _collection_for(self, particle_type: ParticleType) -> ObservableCollection[Particle]:
        match particle_type:
            case ParticleType.PROTON:
                return self.protons
            case ParticleType.NEUTRON:
                return self.neutrons
            case ParticleType.ELECTRON:
                return self.electrons

    def _watch_user_control(self, particle: Particle) -> None:
        def on_user_controlled(user_controlled: bool, _old: bool | None) -> None:
            if user_controlled and self.contains_particle(particle):
                # Picked up by the user, so it leaves the atom.
                is_nucleon = not self.electrons.contains(particle)
                self.remove_particle(particle)
                if is_nucleon:
                    self.reconfigure_nucleus()
                logger.debug("Evicted %r after it was picked up", particle)

        particle.user_controlled_property.lazy_link(on_user_controlled)
        self._removal_listeners[particle] = on_user_controlled

    def _unwatch_user_control(self, particle: Particle) -> None:
        listener = self._removal_listeners.pop(particle, None)
        if listener is not None:
            particle.user_controlled_property.unlink(listener)
        particle.z_layer_property.set(0)

    @staticmethod
    def _translate_particle(particle: Particle, translation: Vector2) -> None:
        position = particle.position_property.get()
        destination = particle.destination_property.get()
        if position == destination:
            particle.set_position_and_destination(position.plus(translation))
        else:
            # In motion, only shift where it is heading.
            particle.destination_property.set(destination.plus(translation))

    def _translate_nucleons(self, translation: Vector2) -> None:
        for collection in (self.protons, self.neutrons):
            for particle in collection:
                self._translate_particle(particle, translation)

    def _on_position_changed(self, new_position: Vector2, old_position: Vector2 | None) -> None:
        translation = Vector2.ZERO if old_position is None else new_position.minus(old_position)
        self._translate_nucleons(translation)
        # Shell slots are relative to the atom center, so placed electrons follow.
        self._electron_shells.translate_occupants(translation, self._translate_particle)

    def _on_nucleus_offset_changed(self, new_offset: Vector2, old_offset: Vector2 | None) -> None:
        translation = Vector2.ZERO if old_offset is None else new_offset.minus(old_offset)
        self._translate_nucleons(translation)
