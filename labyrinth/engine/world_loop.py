"""WorldLoop — the tick engine.

Each tick advances every agent controller by ``tick_seconds`` of simulated
time through the worker pool, turns state transitions into events and then
advances the tick counter. The loop never touches the grid; it only reads the
current dungeon view through the GridModel.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from labyrinth.core.enums import AgentState
from labyrinth.core.snapshot import Snapshot
from labyrinth.utils.event_log import SimEvent

if TYPE_CHECKING:
    from labyrinth.ai.agent import Agent, AgentController, TickResult, TrackedTarget
    from labyrinth.config import SimulationConfig
    from labyrinth.core.dungeon import GridModel
    from labyrinth.engine.worker_pool import WorkerPool

logger = logging.getLogger(__name__)


class WorldLoop:
    """The heartbeat of the simulation."""

    __slots__ = (
        "_config",
        "_dungeon",
        "_target",
        "_controllers",
        "_worker_pool",
        "_tick",
        "_tick_events",
        "_last_results",
    )

    def __init__(
        self,
        config: SimulationConfig,
        dungeon: GridModel,
        target: TrackedTarget,
        controllers: list[AgentController],
        worker_pool: WorkerPool,
    ) -> None:
        self._config = config
        self._dungeon = dungeon
        self._target = target
        self._controllers = sorted(controllers, key=lambda c: c.agent.id)
        self._worker_pool = worker_pool
        self._tick = 0
        self._tick_events: list[SimEvent] = []
        self._last_results: list[TickResult] = []

    @property
    def tick(self) -> int:
        return self._tick

    @property
    def dungeon(self) -> GridModel:
        return self._dungeon

    @property
    def target(self) -> TrackedTarget:
        return self._target

    @property
    def agents(self) -> list[Agent]:
        return [c.agent for c in self._controllers]

    @property
    def worker_pool(self) -> WorkerPool:
        return self._worker_pool

    @property
    def tick_events(self) -> list[SimEvent]:
        """Events emitted since the last ``drain_events`` call."""
        return self._tick_events

    @property
    def last_results(self) -> list[TickResult]:
        """Per-agent results of the most recent tick, sorted by agent id."""
        return self._last_results

    def emit(self, category: str, message: str, agent_ids: tuple[int, ...] = ()) -> None:
        self._tick_events.append(SimEvent(
            tick=self._tick, category=category, message=message, agent_ids=agent_ids,
        ))

    def drain_events(self) -> list[SimEvent]:
        events, self._tick_events = self._tick_events, []
        return events

    def clear_spawns(self) -> None:
        """Remove every agent and the target. Used once the dungeon is discarded."""
        removed = len(self._controllers)
        self._controllers = []
        self._last_results = []
        self._target.remove()
        logger.info("Tick %d: removed %d agents and the target", self._tick, removed)

    def tick_once(self) -> bool:
        """Execute a single tick. Returns False if the simulation should stop."""
        if self._tick >= self._config.max_ticks:
            logger.info("Tick %d: Max ticks reached.", self._tick)
            return False

        self._step()
        self._tick += 1
        return True

    def run(self) -> None:
        """Execute the simulation until max_ticks."""
        logger.info("=== Simulation started (seed=%s) ===", self._dungeon.seed)

        while self.tick_once():
            if self._tick % 100 == 0:
                chasing = sum(1 for a in self.agents if a.state == AgentState.CHASE)
                logger.info("Tick %d: %d/%d agents chasing", self._tick, chasing, len(self._controllers))

        logger.info("=== Simulation finished at tick %d ===", self._tick)

    def create_snapshot(self) -> Snapshot:
        """Create an immutable snapshot of the current state."""
        return Snapshot.capture(
            tick=self._tick,
            view=self._dungeon.view(),
            agents=self.agents,
            target=self._target.position(),
        )

    def _step(self) -> None:
        t0 = time.perf_counter()
        results = self._worker_pool.dispatch(self._controllers, self._config.tick_seconds)
        self._last_results = results

        for r in results:
            if r.transitioned:
                self.emit(
                    "state",
                    f"Agent {r.agent_id}: {r.old_state.name} → {r.new_state.name} ({r.reason})",
                    (r.agent_id,),
                )

        logger.debug(
            "Tick %d: %d agents in %.2fms",
            self._tick, len(results), (time.perf_counter() - t0) * 1000,
        )
