"""EngineManager — wrapper that runs the WorldLoop on a background thread.

The API reads from an atomically-swapped immutable Snapshot; agents are
mutated exclusively on the engine thread (and its worker pool).
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import replace
from typing import TYPE_CHECKING

from labyrinth.core.models import world_to_grid
from labyrinth.core.snapshot import Snapshot
from labyrinth.engine.bootstrap import build_world
from labyrinth.utils.event_log import EventLog, SimEvent

if TYPE_CHECKING:
    from labyrinth.config import SimulationConfig
    from labyrinth.core.dungeon import GridModel
    from labyrinth.core.grid import Grid
    from labyrinth.engine.world_loop import WorldLoop

logger = logging.getLogger(__name__)


class EngineManager:
    """Manages the simulation lifecycle on a background thread.

    Provides thread-safe access to:
      - latest snapshot (atomic reference swap)
      - event log (lock-guarded ring buffer)
      - control commands (start / pause / resume / step / stop / reset)
      - dungeon commands (regenerate / clear) and target movement
    """

    def __init__(self, config: SimulationConfig) -> None:
        self._config = config
        self._tick_rate: float = config.tick_seconds  # wall-clock seconds between ticks

        self._loop: WorldLoop | None = None

        # Thread-safe shared state
        self._snapshot_lock = threading.Lock()
        self._latest_snapshot: Snapshot | None = None
        self._event_log = EventLog()

        # Control
        self._thread: threading.Thread | None = None
        self._running = threading.Event()
        self._paused = threading.Event()
        self._step_requested = threading.Event()
        self._stop_requested = threading.Event()

        self._build()

    # -- public properties --

    @property
    def config(self) -> SimulationConfig:
        return self._config

    @property
    def running(self) -> bool:
        return self._running.is_set()

    @property
    def paused(self) -> bool:
        return self._paused.is_set()

    @property
    def tick_rate(self) -> float:
        return self._tick_rate

    @tick_rate.setter
    def tick_rate(self, value: float) -> None:
        self._tick_rate = max(0.01, min(value, 2.0))

    @property
    def event_log(self) -> EventLog:
        return self._event_log

    @property
    def dungeon(self) -> GridModel:
        assert self._loop is not None
        return self._loop.dungeon

    # -- snapshot access --

    def get_snapshot(self) -> Snapshot | None:
        with self._snapshot_lock:
            return self._latest_snapshot

    def get_grid(self) -> Grid | None:
        """Return the grid from the latest snapshot (None when cleared)."""
        snap = self.get_snapshot()
        return snap.grid if snap else None

    # -- lifecycle --

    def start(self) -> None:
        if self._running.is_set():
            return
        self._stop_requested.clear()
        self._paused.clear()
        self._running.set()
        self._thread = threading.Thread(target=self._run_loop, name="engine-loop", daemon=True)
        self._thread.start()
        logger.info("EngineManager started (tick_rate=%.3fs)", self._tick_rate)

    def pause(self) -> None:
        self._paused.set()
        logger.info("EngineManager paused at tick %d", self._current_tick())

    def resume(self) -> None:
        self._paused.clear()
        logger.info("EngineManager resumed at tick %d", self._current_tick())

    def step(self) -> None:
        """Execute exactly one tick (must be paused)."""
        if not self._paused.is_set():
            self.pause()
        self._step_requested.set()

    def stop(self) -> None:
        self._stop_requested.set()
        self._paused.clear()
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5.0)
        self._running.clear()
        self._thread = None
        logger.info("EngineManager stopped.")

    def shutdown(self) -> None:
        """Stop the engine thread and release the worker pool."""
        self.stop()
        if self._loop is not None:
            self._loop.worker_pool.shutdown()

    def reset(self) -> None:
        """Stop, rebuild from the current config, and leave stopped ready to start."""
        self.shutdown()
        self._event_log.clear()
        self._build()
        logger.info("EngineManager reset.")

    def tick_now(self) -> bool:
        """Run one tick on the calling thread. Only valid while stopped."""
        if self._running.is_set():
            raise RuntimeError("tick_now() called while the engine thread is running")
        assert self._loop is not None
        advanced = self._loop.tick_once()
        self._publish_snapshot_and_events()
        return advanced

    # -- dungeon commands --

    def regenerate(
        self,
        seed: int | None = None,
        width: int | None = None,
        height: int | None = None,
    ) -> Snapshot:
        """Generate a new dungeon and respawn everything.

        Omitted dimensions keep the current config; ``seed=None`` selects
        random-seed mode. The engine is restarted if it was running.
        """
        was_running = self.running
        self._config = replace(
            self._config,
            world_seed=seed,
            grid_width=width if width is not None else self._config.grid_width,
            grid_height=height if height is not None else self._config.grid_height,
        )
        self.reset()
        if was_running:
            self.start()
        snap = self.get_snapshot()
        assert snap is not None
        return snap

    def clear(self) -> None:
        """Stop the engine and discard the dungeon along with its agents and target."""
        self.stop()
        assert self._loop is not None
        self._loop.dungeon.clear_dungeon()
        self._loop.clear_spawns()
        self._loop.emit("generation", "Dungeon cleared, agents and target removed")
        self._publish_snapshot_and_events()

    def move_target(self, x: float, y: float) -> None:
        """Move the tracked target. Raises ValueError for a non-Floor cell."""
        assert self._loop is not None
        cell = world_to_grid(x, y)
        if not self._loop.dungeon.is_walkable(cell.x, cell.y):
            raise ValueError(f"target cell {cell} is not walkable")
        self._loop.target.move_to(x, y)
        self._event_log.append(SimEvent(self._current_tick(), "target", f"Target moved to {cell}"))
        if not self.running:
            self._publish_snapshot_and_events()

    # -- internals --

    def _build(self) -> None:
        """Construct all simulation components from config."""
        self._loop = build_world(self._config)
        self._publish_snapshot_and_events()

    def _run_loop(self) -> None:
        """Background thread main loop."""
        logger.info("Engine thread started.")
        assert self._loop is not None

        while not self._stop_requested.is_set():
            # Handle pause
            if self._paused.is_set() and not self._step_requested.is_set():
                time.sleep(0.01)
                continue

            single_step = self._step_requested.is_set()
            if single_step:
                self._step_requested.clear()

            can_continue = self._loop.tick_once()
            self._publish_snapshot_and_events()

            if not can_continue:
                logger.info("Simulation ended at tick %d.", self._loop.tick)
                break

            # Rate limiting
            if not single_step:
                time.sleep(self._tick_rate)

        self._running.clear()
        logger.info("Engine thread exited.")

    def _publish_snapshot_and_events(self) -> None:
        """Swap snapshot + push pending loop events."""
        assert self._loop is not None
        snap = self._loop.create_snapshot()
        with self._snapshot_lock:
            self._latest_snapshot = snap

        events = self._loop.drain_events()
        if events:
            self._event_log.append_many(events)

    def _current_tick(self) -> int:
        if self._loop:
            return self._loop.tick
        return 0
