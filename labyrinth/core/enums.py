"""Enumerations used throughout the engine."""

from __future__ import annotations

from enum import IntEnum, unique


@unique
class Tile(IntEnum):
    """Tile types on the dungeon grid."""

    FLOOR = 0
    WALL = 1


@unique
class AgentState(IntEnum):
    """Finite-state-machine states for agent AI."""

    WANDER = 0
    CHASE = 1


@unique
class Domain(IntEnum):
    """RNG domains for deterministic randomness isolation."""

    MAP_GEN = 0
    SPAWN = 1
    AGENT_DECISION = 2
