"""Labyrinth — seeded BSP dungeon generator and grid agent engine."""

__version__ = "0.1.0"
