"""Core data models and dungeon representation."""

from labyrinth.core.enums import AgentState, Domain, Tile
from labyrinth.core.models import Room, Vector2
from labyrinth.core.grid import Grid
from labyrinth.core.snapshot import AgentView, Snapshot

__all__ = [
    "AgentState",
    "AgentView",
    "Domain",
    "Grid",
    "Room",
    "Snapshot",
    "Tile",
    "Vector2",
]
