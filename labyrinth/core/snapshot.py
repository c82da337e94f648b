"""Immutable snapshot of the simulation for API readers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable

from labyrinth.core.enums import AgentState
from labyrinth.core.grid import Grid
from labyrinth.core.models import Room, Vector2

if TYPE_CHECKING:
    from labyrinth.ai.agent import Agent
    from labyrinth.core.dungeon import DungeonView


@dataclass(frozen=True, slots=True)
class AgentView:
    """Frozen copy of one agent's observable state."""

    id: int
    x: float
    y: float
    grid_pos: Vector2
    state: AgentState
    path: tuple[Vector2, ...]
    last_known_target: Vector2 | None

    @classmethod
    def from_agent(cls, agent: Agent) -> AgentView:
        return cls(
            id=agent.id,
            x=agent.x,
            y=agent.y,
            grid_pos=agent.grid_pos,
            state=agent.state,
            path=tuple(agent.path) if agent.path else (),
            last_known_target=agent.last_known_target,
        )


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Read-only view of the simulation, safe to share across threads.

    The grid is shared with the dungeon view it came from; grids are never
    mutated after generation.
    """

    tick: int
    seed: int | None
    generation: int
    grid: Grid | None
    rooms: tuple[Room, ...]
    agents: tuple[AgentView, ...]
    target: tuple[float, float] | None

    @classmethod
    def capture(
        cls,
        tick: int,
        view: DungeonView | None,
        agents: Iterable[Agent],
        target: tuple[float, float] | None,
    ) -> Snapshot:
        return cls(
            tick=tick,
            seed=view.seed if view else None,
            generation=view.generation if view else 0,
            grid=view.grid if view else None,
            rooms=view.rooms if view else (),
            agents=tuple(AgentView.from_agent(a) for a in sorted(agents, key=lambda a: a.id)),
            target=target,
        )

    def agent(self, agent_id: int) -> AgentView | None:
        for a in self.agents:
            if a.id == agent_id:
                return a
        return None
