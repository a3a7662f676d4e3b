# src/atomlayout/nucleus.py
"""Nucleon layout: where protons and neutrons sit inside the nucleus.

The layout is a visual heuristic, not a physical model. Small nuclei (one to
four nucleons) use hand-tuned closed-form arrangements; anything larger is
packed into concentric rings spiralling out from the center. The constants
below were chosen for appearance and the rendered layouts depend on them
exactly, so treat them as fixed.

Everything here is pure: the same count, center and nucleon radius always
produce bit-identical destinations.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TypeVar

from atomlayout.models import Vector2

T = TypeVar("T")

# Fixed orientations for the small-nucleus layouts.
TWO_NUCLEON_ANGLE = 0.2 * 2 * math.pi
THREE_NUCLEON_ANGLE = 0.7 * 2 * math.pi
FOUR_NUCLEON_ANGLE = 1.4 * 2 * math.pi

# Circumradius factor for three touching nucleons (2/sqrt(3), rounded).
TRIANGLE_CIRCUMRADIUS_FACTOR = 1.155

# Ring spacing scale is a linear map of nucleon radius through these points.
# Bigger nucleons are easier to see, so they get packed tighter.
SCALE_RADIUS_A = 3.0
SCALE_RADIUS_B = 10.0
SCALE_FACTOR_A = 2.4
SCALE_FACTOR_B = 1.35

# Angular offset applied each time the spiral moves out a ring.
RING_ANGLE_OFFSET = 2 * math.pi * 0.2


@dataclass(frozen=True)
class NucleonPlacement:
    """Destination and display layer for one nucleon."""

    destination: Vector2
    z_layer: int


@dataclass(frozen=True)
class NucleusConfiguration:
    """Result of configuring a nucleus.

    Attributes:
        placements: One placement per nucleon, in interleaved nucleon order.
        radius: Overall radius of the nucleus.
    """

    placements: tuple[NucleonPlacement, ...]
    radius: float


def interleave_nucleons(protons: Sequence[T], neutrons: Sequence[T]) -> list[T]:
    """Mix protons and neutrons so neither type clumps together.

    Walks the protons in order, emitting ``len(neutrons) / len(protons)``
    neutrons (accumulated, so fractional ratios even out) before each proton.
    With no protons every neutron is emitted in order.

    Args:
        protons: Protons in insertion order.
        neutrons: Neutrons in insertion order.

    Returns:
        All nucleons in configuration order.
    """
    total = len(protons) + len(neutrons)
    if not protons:
        return list(neutrons)

    nucleons: list[T] = []
    neutrons_per_proton = len(neutrons) / len(protons)
    neutrons_to_add = 0.0
    proton_index = 0
    neutron_index = 0
    while len(nucleons) < total:
        neutrons_to_add += neutrons_per_proton
        while neutrons_to_add >= 1 and neutron_index < len(neutrons):
            nucleons.append(neutrons[neutron_index])
            neutron_index += 1
            neutrons_to_add -= 1
        if proton_index < len(protons):
            nucleons.append(protons[proton_index])
            proton_index += 1
    return nucleons


def placement_scale_factor(nucleon_radius: float) -> float:
    """Ring spacing scale for a given nucleon radius (not clamped)."""
    slope = (SCALE_FACTOR_B - SCALE_FACTOR_A) / (SCALE_RADIUS_B - SCALE_RADIUS_A)
    return SCALE_FACTOR_A + slope * (nucleon_radius - SCALE_RADIUS_A)


def _offset(center: Vector2, distance: float, angle: float) -> Vector2:
    return Vector2(
        center.x + distance * math.cos(angle),
        center.y + distance * math.sin(angle),
    )


def configure_nucleus(count: int, center: Vector2, nucleon_radius: float) -> NucleusConfiguration:
    """Compute destinations and display layers for ``count`` nucleons.

    Args:
        count: Number of nucleons.
        center: Nucleus center (atom position plus nucleus offset).
        nucleon_radius: Radius of a single nucleon.

    Returns:
        NucleusConfiguration with ``count`` placements and the nucleus radius.
    """
    if count < 0:
        raise ValueError("count must be non-negative")

    r = nucleon_radius
    if count == 0:
        return NucleusConfiguration(placements=(), radius=r)

    if count == 1:
        return NucleusConfiguration(placements=(NucleonPlacement(center, 0),), radius=r)

    if count == 2:
        # Side by side, touching at the center.
        angle = TWO_NUCLEON_ANGLE
        return NucleusConfiguration(
            placements=(
                NucleonPlacement(_offset(center, r, angle), 0),
                NucleonPlacement(_offset(center, -r, angle), 0),
            ),
            radius=r * 2,
        )

    if count == 3:
        # Triangle where all three touch.
        angle = THREE_NUCLEON_ANGLE
        dist_from_center = r * TRIANGLE_CIRCUMRADIUS_FACTOR
        return NucleusConfiguration(
            placements=tuple(
                NucleonPlacement(_offset(center, dist_from_center, angle + k * 2 * math.pi / 3), 0)
                for k in range(3)
            ),
            radius=dist_from_center + r,
        )

    if count == 4:
        # Diamond with some overlap; the cross-axis pair sits on top.
        angle = FOUR_NUCLEON_ANGLE
        dist_from_center = r * 2 * math.cos(math.pi / 3)
        return NucleusConfiguration(
            placements=(
                NucleonPlacement(_offset(center, r, angle), 0),
                NucleonPlacement(_offset(center, dist_from_center, angle + math.pi / 2), 1),
                NucleonPlacement(_offset(center, -r, angle), 0),
                NucleonPlacement(_offset(center, -dist_from_center, angle + math.pi / 2), 1),
            ),
            radius=dist_from_center + r,
        )

    return _configure_rings(count, center, r)


def _configure_rings(count: int, center: Vector2, r: float) -> NucleusConfiguration:
    """Generalized spiral packing for five or more nucleons."""
    scale_factor = placement_scale_factor(r)
    placement_radius = 0.0
    num_at_this_radius = 1
    level = 0
    placement_angle = 0.0
    placement_angle_delta = 0.0

    placements: list[NucleonPlacement] = []
    for _ in range(count):
        destination = _offset(center, placement_radius, placement_angle)
        placements.append(NucleonPlacement(destination, level))
        num_at_this_radius -= 1
        if num_at_this_radius > 0:
            placement_angle += placement_angle_delta
        else:
            # Ring full, move out to the next one.
            level += 1
            placement_radius += r * scale_factor / level
            placement_angle += RING_ANGLE_OFFSET + level * math.pi
            # At least one slot per ring, even for degenerate scale factors.
            num_at_this_radius = max(1, math.floor(placement_radius * math.pi / r))
            placement_angle_delta = 2 * math.pi / num_at_this_radius

    return NucleusConfiguration(placements=tuple(placements), radius=placement_radius + r)
