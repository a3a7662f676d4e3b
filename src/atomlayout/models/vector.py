# src/atomlayout/models/vector.py
"""Two-dimensional vector value type."""

from __future__ import annotations

import math
from typing import ClassVar

from pydantic import BaseModel, ConfigDict


class Vector2(BaseModel):
    """An immutable 2-D point/vector with value equality."""

    model_config = ConfigDict(frozen=True)

    ZERO: ClassVar[Vector2]

    x: float = 0.0
    y: float = 0.0

    def __init__(self, x: float = 0.0, y: float = 0.0) -> None:
        super().__init__(x=x, y=y)

    @classmethod
    def from_polar(cls, magnitude: float, angle: float) -> Vector2:
        return cls(magnitude * math.cos(angle), magnitude * math.sin(angle))

    def plus(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def minus(self, other: Vector2) -> Vector2:
        return Vector2(self.x - other.x, self.y - other.y)

    def times(self, scalar: float) -> Vector2:
        return Vector2(self.x * scalar, self.y * scalar)

    def magnitude(self) -> float:
        return math.hypot(self.x, self.y)

    def distance(self, other: Vector2) -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def __add__(self, other: Vector2) -> Vector2:
        return self.plus(other)

    def __sub__(self, other: Vector2) -> Vector2:
        return self.minus(other)

    def __repr__(self) -> str:
        return f"Vector2({self.x}, {self.y})"


Vector2.ZERO = Vector2(0.0, 0.0)
