# src/atomlayout/models/particle.py
"""Particle type tags and a reference particle implementation."""

from __future__ import annotations

from enum import StrEnum

from atomlayout.exceptions import UnknownParticleTypeError
from atomlayout.models.vector import Vector2
from atomlayout.reactive import Property


class ParticleType(StrEnum):
    """The kinds of sub-atomic particle an atom can hold."""

    PROTON = "proton"
    NEUTRON = "neutron"
    ELECTRON = "electron"

    @property
    def is_nucleon(self) -> bool:
        return self is not ParticleType.ELECTRON

    @classmethod
    def parse(cls, value: object) -> ParticleType:
        """Coerce a tag such as ``"proton"`` to a ParticleType.

        Raises:
            UnknownParticleTypeError: If the tag names no known particle type.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError as e:
            raise UnknownParticleTypeError(value) from e


class Particle:
    """A sub-atomic particle as seen by the atom.

    The atom only ever holds references to particles owned by the host
    application. ``destination`` is written by the atom; ``position`` is
    advanced toward it by whatever animates the scene; ``user_controlled``
    is toggled by input handling.

    Particles compare by identity so the same particle can be tracked by the
    atom, a renderer and an animator at once.
    """

    def __init__(self, particle_type: ParticleType | str, position: Vector2 = Vector2.ZERO) -> None:
        self.type = ParticleType.parse(particle_type)
        self.position_property: Property[Vector2] = Property(position, name="position")
        self.destination_property: Property[Vector2] = Property(position, name="destination")
        self.user_controlled_property: Property[bool] = Property(False, name="userControlled")
        self.z_layer_property: Property[int] = Property(0, name="zLayer")

    @property
    def position(self) -> Vector2:
        return self.position_property.get()

    @property
    def destination(self) -> Vector2:
        return self.destination_property.get()

    @property
    def user_controlled(self) -> bool:
        return self.user_controlled_property.get()

    @property
    def z_layer(self) -> int:
        return self.z_layer_property.get()

    def is_at_destination(self) -> bool:
        return self.position_property.get() == self.destination_property.get()

    def set_position_and_destination(self, position: Vector2) -> None:
        self.destination_property.set(position)
        self.position_property.set(position)

    def move_immediately_to_destination(self) -> None:
        self.position_property.set(self.destination_property.get())

    def __repr__(self) -> str:
        return f"Particle({self.type.value}, position={self.position!r})"
