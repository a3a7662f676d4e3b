# tests/models/test_particle.py
"""Tests for Particle and ParticleType."""

import pytest

from atomlayout.exceptions import UnknownParticleTypeError
from atomlayout.models import Particle, ParticleType, Vector2


class TestParticleType:
    def test_parse_string(self):
        assert ParticleType.parse("proton") is ParticleType.PROTON
        assert ParticleType.parse("electron") is ParticleType.ELECTRON

    def test_parse_member(self):
        assert ParticleType.parse(ParticleType.NEUTRON) is ParticleType.NEUTRON

    def test_parse_unknown_raises(self):
        with pytest.raises(UnknownParticleTypeError, match="photon"):
            ParticleType.parse("photon")

    def test_unknown_type_is_value_error(self):
        with pytest.raises(ValueError):
            ParticleType.parse(42)

    def test_is_nucleon(self):
        assert ParticleType.PROTON.is_nucleon
        assert ParticleType.NEUTRON.is_nucleon
        assert not ParticleType.ELECTRON.is_nucleon


class TestParticle:
    def test_starts_at_rest(self):
        particle = Particle(ParticleType.PROTON, Vector2(3, 4))
        assert particle.position == Vector2(3, 4)
        assert particle.destination == Vector2(3, 4)
        assert particle.is_at_destination()
        assert particle.user_controlled is False
        assert particle.z_layer == 0

    def test_accepts_string_type(self):
        assert Particle("neutron").type is ParticleType.NEUTRON

    def test_rejects_unknown_type(self):
        with pytest.raises(UnknownParticleTypeError):
            Particle("quark")

    def test_set_position_and_destination(self):
        particle = Particle(ParticleType.ELECTRON)
        particle.set_position_and_destination(Vector2(5, 6))
        assert particle.position == Vector2(5, 6)
        assert particle.destination == Vector2(5, 6)

    def test_move_immediately_to_destination(self):
        particle = Particle(ParticleType.ELECTRON)
        particle.destination_property.set(Vector2(10, 0))
        assert not particle.is_at_destination()

        particle.move_immediately_to_destination()

        assert particle.position == Vector2(10, 0)
        assert particle.is_at_destination()

    def test_identity_semantics(self):
        a = Particle(ParticleType.PROTON)
        b = Particle(ParticleType.PROTON)
        assert a != b
        assert len({a, b}) == 2
