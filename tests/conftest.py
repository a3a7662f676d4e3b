"""Shared pytest fixtures."""

import pytest

from atomlayout import AtomSettings, Particle, ParticleAtom, ParticleType, Vector2


@pytest.fixture
def settings():
    """Compact geometry: nucleon radius 3, shells at 85 and 130."""
    return AtomSettings(
        nucleon_radius=3,
        inner_electron_shell_radius=85,
        outer_electron_shell_radius=130,
    )


@pytest.fixture
def atom(settings):
    """Create an empty atom with compact geometry."""
    return ParticleAtom(settings)


@pytest.fixture
def make_particle():
    """Factory for particles, optionally at a starting position."""

    def _make(particle_type: ParticleType | str, x: float = 0.0, y: float = 0.0) -> Particle:
        return Particle(particle_type, Vector2(x, y))

    return _make


@pytest.fixture
def reversing_shuffle():
    """A deterministic stand-in for the random shuffle source."""

    def shuffle(items):
        return list(reversed(items))

    return shuffle
