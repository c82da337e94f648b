"""AI state handlers — class-based and registry-driven.

Architecture:
  - AgentContext bundles all data a handler needs (agent, dungeon view,
    target cell, rng, clearance radius, pathfinder).
  - Each handler is a class implementing the ``handle`` method and returns
    ``(next_state, Decision)``. A decision carries at most one step.
  - Handlers are registered in STATE_HANDLERS by AgentState key; the registry
    is checked for completeness when this module is imported.

Path convention: ``agent.path[0]`` is the cell the agent occupies (or is
moving into). The path is exhausted once it holds a single cell. Taking a
step pops the head, so the new head is the step's destination.

State machine:
  WANDER → CHASE (target in sight)
  CHASE → WANDER (reached the last known target cell, or it is unreachable)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

from labyrinth.ai.pathfinding import Pathfinder
from labyrinth.ai.perception import Perception
from labyrinth.core.enums import AgentState
from labyrinth.core.models import Vector2

if TYPE_CHECKING:
    from labyrinth.ai.agent import Agent
    from labyrinth.core.dungeon import DungeonView
    from labyrinth.systems.rng import RngStream


@dataclass(frozen=True, slots=True)
class Decision:
    """What a handler wants the controller to do this tick."""

    step: Vector2 | None = None
    reason: str = ""


# =====================================================================
# AI context passed to every handler
# =====================================================================

@dataclass(slots=True)
class AgentContext:
    """All data a state handler might need."""

    agent: Agent
    view: DungeonView
    target: Vector2 | None
    rng: RngStream
    clearance: int = 1
    pathfinder: Pathfinder | None = None

    def __post_init__(self) -> None:
        if self.pathfinder is None:
            self.pathfinder = Pathfinder(self.view.grid)

    @property
    def target_visible(self) -> bool:
        return Perception.in_sight(self.agent.grid_pos, self.target, self.agent.sight_range)

    def plan(self, goal: Vector2) -> list[Vector2] | None:
        """Path from the agent's anchor cell to *goal*."""
        return self.pathfinder.find_path(self.agent.anchor, goal)


# =====================================================================
# Shared helpers
# =====================================================================

def path_exhausted(path: list[Vector2] | None) -> bool:
    return path is None or len(path) <= 1


def path_is_stale(path: list[Vector2] | None, goal: Vector2) -> bool:
    return path_exhausted(path) or path[-1] != goal


def take_step(agent: Agent, reason: str) -> Decision:
    """Consume the next path cell if the agent is between moves."""
    if agent.in_transit or path_exhausted(agent.path):
        return Decision(reason=reason)
    step = agent.path[1]
    agent.path.pop(0)
    return Decision(step=step, reason=reason)


def pick_wander_goal(ctx: AgentContext) -> Vector2 | None:
    """Choose a destination near the centre of some other room."""
    rooms = ctx.view.rooms
    if not rooms:
        return None
    current = Perception.current_room_index(ctx.view, ctx.agent.anchor)
    candidates = [i for i in range(len(rooms)) if i != current]
    if not candidates:
        candidates = [current]
    room = rooms[ctx.rng.choice(candidates)]
    cells = Perception.wander_candidates(ctx.view, room, ctx.clearance)
    if not cells:
        return None
    return ctx.rng.choice(cells)


# =====================================================================
# Handler base
# =====================================================================

class StateHandler(ABC):
    """Abstract base for agent state handlers.

    Subclass and implement ``handle`` to define behaviour for an AgentState.
    """

    @abstractmethod
    def handle(self, ctx: AgentContext) -> tuple[AgentState, Decision]:
        ...


# =====================================================================
# Handler implementations
# =====================================================================

class WanderHandler(StateHandler):
    def handle(self, ctx: AgentContext) -> tuple[AgentState, Decision]:
        agent = ctx.agent

        if ctx.target_visible:
            agent.path = None
            agent.last_known_target = ctx.target
            return AgentState.CHASE, Decision(reason="Target in sight → chasing")

        if not agent.in_transit and path_exhausted(agent.path):
            goal = pick_wander_goal(ctx)
            if goal is None:
                return AgentState.WANDER, Decision(reason="No wander destination → idle")
            agent.path = ctx.plan(goal)
            if agent.path is None:
                return AgentState.WANDER, Decision(reason=f"No route to {goal} → idle")

        return AgentState.WANDER, take_step(agent, "Wandering")


class ChaseHandler(StateHandler):
    def handle(self, ctx: AgentContext) -> tuple[AgentState, Decision]:
        agent = ctx.agent

        if ctx.target_visible:
            target = ctx.target
            agent.last_known_target = target
            if path_is_stale(agent.path, target):
                agent.path = ctx.plan(target)
                if agent.path is None:
                    return AgentState.CHASE, Decision(reason="Target unreachable → idle")
            return AgentState.CHASE, take_step(agent, f"Chasing target at {target}")

        # Out of sight: head for the last known cell, then give up.
        last = agent.last_known_target
        if last is None:
            agent.path = None
            return AgentState.WANDER, Decision(reason="Lost target → back to wander")
        if path_is_stale(agent.path, last):
            agent.path = ctx.plan(last)
        if path_exhausted(agent.path):
            if agent.in_transit:
                return AgentState.CHASE, Decision(reason="Finishing move toward last known position")
            agent.path = None
            return AgentState.WANDER, Decision(reason="Reached last known position, target gone → wander")
        return AgentState.CHASE, take_step(agent, f"Searching last known position {last}")


# =====================================================================
# Registry
# =====================================================================

STATE_HANDLERS: dict[AgentState, StateHandler] = {
    AgentState.WANDER: WanderHandler(),
    AgentState.CHASE: ChaseHandler(),
}

_missing = set(AgentState) - STATE_HANDLERS.keys()
if _missing:
    raise RuntimeError(f"No state handler registered for {sorted(s.name for s in _missing)}")
