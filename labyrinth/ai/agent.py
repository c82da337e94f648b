"""Agents and the controller that ticks them.

An ``Agent`` is plain mutable state. An ``AgentController`` owns one agent,
its RNG stream and references to the dungeon and the tracked target; each
``tick(dt)`` advances the agent's current move and then runs the handler for
its state.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from labyrinth.ai.states import STATE_HANDLERS, AgentContext
from labyrinth.core.enums import AgentState
from labyrinth.core.models import Vector2, world_to_grid

if TYPE_CHECKING:
    from labyrinth.core.dungeon import DungeonSource
    from labyrinth.systems.rng import RngStream

logger = logging.getLogger(__name__)


class PositionSource(Protocol):
    """Anything that reports a continuous world position, or None when absent."""

    def position(self) -> tuple[float, float] | None: ...


class TrackedTarget:
    """Thread-safe holder for the target agents chase (the player)."""

    __slots__ = ("_lock", "_pos")

    def __init__(self, x: float | None = None, y: float | None = None) -> None:
        self._lock = threading.Lock()
        self._pos: tuple[float, float] | None = None
        if x is not None and y is not None:
            self._pos = (float(x), float(y))

    def position(self) -> tuple[float, float] | None:
        with self._lock:
            return self._pos

    def move_to(self, x: float, y: float) -> None:
        with self._lock:
            self._pos = (float(x), float(y))

    def remove(self) -> None:
        with self._lock:
            self._pos = None

    @property
    def cell(self) -> Vector2 | None:
        pos = self.position()
        return world_to_grid(*pos) if pos is not None else None


@dataclass(slots=True)
class Agent:
    """A dungeon dweller. World and grid coordinates share the same unit."""

    id: int
    grid_pos: Vector2
    x: float
    y: float
    speed: float = 3.0
    sight_range: float = 10.0
    state: AgentState = AgentState.WANDER
    path: list[Vector2] | None = None
    last_known_target: Vector2 | None = None

    # Current move (None when standing still)
    move_from: Vector2 | None = None
    move_to: Vector2 | None = None
    move_t: float = 0.0

    @classmethod
    def at(cls, agent_id: int, cell: Vector2, speed: float = 3.0, sight_range: float = 10.0) -> Agent:
        return cls(
            id=agent_id, grid_pos=cell, x=float(cell.x), y=float(cell.y),
            speed=speed, sight_range=sight_range,
        )

    @property
    def position(self) -> tuple[float, float]:
        return (self.x, self.y)

    @property
    def in_transit(self) -> bool:
        return self.move_to is not None

    @property
    def anchor(self) -> Vector2:
        """Cell paths are planned from: the move destination while moving."""
        return self.move_to if self.move_to is not None else self.grid_pos


@dataclass(frozen=True, slots=True)
class TickResult:
    """Outcome of one controller tick, consumed by the world loop."""

    agent_id: int
    old_state: AgentState
    new_state: AgentState
    step: Vector2 | None = None
    reason: str = ""

    @property
    def transitioned(self) -> bool:
        return self.old_state != self.new_state


class AgentController:
    """Drives a single agent. Touches only its own agent and RNG stream."""

    __slots__ = ("agent", "_dungeon", "_target", "_rng", "_clearance")

    def __init__(
        self,
        agent: Agent,
        dungeon: DungeonSource,
        target: PositionSource,
        rng: RngStream,
        clearance: int = 1,
    ) -> None:
        self.agent = agent
        self._dungeon = dungeon
        self._target = target
        self._rng = rng
        self._clearance = clearance

    def tick(self, dt: float) -> TickResult:
        agent = self.agent
        old_state = agent.state

        view = self._dungeon.view()
        if view is None:
            return TickResult(agent.id, old_state, old_state, reason="No dungeon → idle")

        self._advance(dt)

        pos = self._target.position()
        target_cell = world_to_grid(*pos) if pos is not None else None
        ctx = AgentContext(
            agent=agent, view=view, target=target_cell,
            rng=self._rng, clearance=self._clearance,
        )
        new_state, decision = STATE_HANDLERS[old_state].handle(ctx)
        agent.state = new_state

        if decision.step is not None:
            self._begin_move(decision.step)

        if new_state != old_state:
            logger.debug("Agent %d: %s → %s (%s)", agent.id, old_state.name, new_state.name, decision.reason)
        return TickResult(agent.id, old_state, new_state, decision.step, decision.reason)

    # -- movement --

    def _begin_move(self, dest: Vector2) -> None:
        agent = self.agent
        agent.move_from = agent.grid_pos
        agent.move_to = dest
        agent.move_t = 0.0

    def _advance(self, dt: float) -> None:
        """Interpolate toward the move destination; grid_pos follows the rounded position."""
        agent = self.agent
        if agent.move_to is None:
            return
        start, end = agent.move_from, agent.move_to
        distance = start.distance(end)
        if distance <= 0.0 or agent.speed <= 0.0:
            t = 1.0 if distance <= 0.0 else agent.move_t
        else:
            t = min(1.0, agent.move_t + dt * agent.speed / distance)

        if t >= 1.0:
            agent.x, agent.y = float(end.x), float(end.y)
            agent.grid_pos = end
            agent.move_from = None
            agent.move_to = None
            agent.move_t = 0.0
            return

        agent.move_t = t
        agent.x = start.x + (end.x - start.x) * t
        agent.y = start.y + (end.y - start.y) * t
        agent.grid_pos = world_to_grid(agent.x, agent.y)
