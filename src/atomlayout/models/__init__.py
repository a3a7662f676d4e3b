# src/atomlayout/models/__init__.py
"""Data models for atomlayout."""

from atomlayout.models.particle import Particle, ParticleType
from atomlayout.models.vector import Vector2

__all__ = ["Particle", "ParticleType", "Vector2"]
