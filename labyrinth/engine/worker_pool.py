"""Parallel worker pool for agent ticks."""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor, TimeoutError, as_completed
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from labyrinth.ai.agent import AgentController, TickResult
    from labyrinth.config import SimulationConfig

logger = logging.getLogger(__name__)


class WorkerPool:
    """Runs agent controllers on a ThreadPoolExecutor.

    Every controller touches only its own agent and RNG stream, so ticks can
    run in any order; results are returned sorted by agent id.
    """

    __slots__ = ("_config", "_executor")

    def __init__(self, config: SimulationConfig) -> None:
        self._config = config
        self._executor: ThreadPoolExecutor | None = None
        if config.num_workers > 1:
            self._executor = ThreadPoolExecutor(
                max_workers=config.num_workers,
                thread_name_prefix="agent-worker",
            )

    def dispatch(self, controllers: list[AgentController], dt: float) -> list[TickResult]:
        """Tick every controller by *dt* and collect the results.

        Blocks until all workers finish or the timeout expires.
        Uses inline execution when num_workers <= 1 to avoid threading overhead.
        """
        if not controllers:
            return []

        results: list[TickResult] = []

        # Single-worker mode runs inline
        if self._executor is None:
            for ctrl in controllers:
                try:
                    results.append(ctrl.tick(dt))
                except Exception:
                    logger.exception("Tick failed for agent %d — skipping turn", ctrl.agent.id)
            return results

        futures: dict[Future[TickResult], int] = {
            self._executor.submit(ctrl.tick, dt): ctrl.agent.id for ctrl in controllers
        }

        timeout = self._config.worker_timeout_seconds
        try:
            for future in as_completed(futures, timeout=timeout):
                agent_id = futures[future]
                try:
                    results.append(future.result())
                except Exception:
                    logger.exception("Worker failed for agent %d — skipping turn", agent_id)
        except TimeoutError:
            pending = sorted(aid for f, aid in futures.items() if not f.done())
            logger.error("Workers timed out after %.1fs; agents %s skipped", timeout, pending)

        results.sort(key=lambda r: r.agent_id)
        return results

    def shutdown(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=False, cancel_futures=True)
