"""AI layer: perception, pathfinding, state machines and agent control."""

from labyrinth.ai.agent import Agent, AgentController, TrackedTarget
from labyrinth.ai.pathfinding import Pathfinder, find_path
from labyrinth.ai.perception import Perception

__all__ = ["Agent", "AgentController", "Pathfinder", "Perception", "TrackedTarget", "find_path"]
