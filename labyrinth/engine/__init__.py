"""Engine layer: world loop, worker pool, world assembly."""

from labyrinth.engine.worker_pool import WorkerPool
from labyrinth.engine.world_loop import WorldLoop
from labyrinth.engine.bootstrap import build_world

__all__ = ["WorkerPool", "WorldLoop", "build_world"]
