"""Core data models: Vector2, Room."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Vector2:
    """Immutable 2D integer coordinate."""

    x: int = 0
    y: int = 0

    def __add__(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2) -> Vector2:
        return Vector2(self.x - other.x, self.y - other.y)

    def manhattan(self, other: Vector2) -> int:
        return abs(self.x - other.x) + abs(self.y - other.y)

    def distance(self, other: Vector2) -> float:
        """Euclidean distance in grid cells."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def __repr__(self) -> str:
        return f"({self.x}, {self.y})"


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from negative infinity."""
    return math.floor(value + 0.5)


def world_to_grid(x: float, y: float) -> Vector2:
    """Map a continuous world position onto the grid cell it rounds to."""
    return Vector2(round_half_up(x), round_half_up(y))


@dataclass(frozen=True, slots=True)
class Room:
    """Axis-aligned rectangular room carved by the dungeon builder."""

    x: int
    y: int
    width: int
    height: int

    @property
    def center(self) -> Vector2:
        return Vector2(self.x + self.width // 2, self.y + self.height // 2)

    @property
    def right(self) -> int:
        """Exclusive right edge."""
        return self.x + self.width

    @property
    def bottom(self) -> int:
        """Exclusive bottom edge."""
        return self.y + self.height

    def contains(self, pos: Vector2) -> bool:
        return self.x <= pos.x < self.right and self.y <= pos.y < self.bottom

    def cells(self) -> list[Vector2]:
        """All cells inside the room, row-major."""
        return [
            Vector2(cx, cy)
            for cy in range(self.y, self.bottom)
            for cx in range(self.x, self.right)
        ]
