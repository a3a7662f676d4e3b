# src/atomlayout/exceptions.py
"""Exceptions raised by the particle atom."""


class AtomLayoutError(Exception):
    """Base class for atom layout errors."""


class UnknownParticleTypeError(AtomLayoutError, ValueError):
    """Raised when a particle type tag is not proton, neutron or electron."""

    def __init__(self, particle_type: object) -> None:
        super().__init__(f"Unexpected particle type: {particle_type!r}")
        self.particle_type = particle_type


class ParticleNotInAtomError(AtomLayoutError, LookupError):
    """Raised when removing a particle that is not a member of the atom."""


class NoOpenPositionsError(AtomLayoutError, AssertionError):
    """Raised when an electron is added while every shell position is occupied.

    Only the first two shells are modeled, so an eleventh electron has no
    defined place to go.
    """
