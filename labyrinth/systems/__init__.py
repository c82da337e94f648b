"""Engine systems: RNG, dungeon building, spawn placement."""

from labyrinth.systems.rng import DeterministicRNG, RngStream
from labyrinth.systems.builder import DungeonBuilder
from labyrinth.systems.spawner import SpawnPlanner

__all__ = ["DeterministicRNG", "DungeonBuilder", "RngStream", "SpawnPlanner"]
