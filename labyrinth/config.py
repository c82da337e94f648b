"""Simulation configuration with sensible defaults."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoomParams:
    """Knobs for the BSP room carver and corridor connector."""

    bsp_depth: int = 5
    min_split_span: int = 5        # Rectangles narrower than this on either axis become leaves
    min_room_size: int = 2
    room_margin: int = 1           # Cells a room keeps free inside its leaf rectangle
    corridor_min_width: int = 2
    corridor_max_width: int = 3

    def normalized(self) -> RoomParams:
        """Return a copy with out-of-range values clamped (each fix is logged)."""
        fixes: dict[str, int] = {}
        if self.bsp_depth < 0:
            fixes["bsp_depth"] = 0
        if self.min_split_span < 2:
            fixes["min_split_span"] = 2
        if self.min_room_size < 1:
            fixes["min_room_size"] = 1
        if self.room_margin < 0:
            fixes["room_margin"] = 0
        lo = max(1, self.corridor_min_width)
        hi = max(lo, self.corridor_max_width)
        if lo != self.corridor_min_width:
            fixes["corridor_min_width"] = lo
        if hi != self.corridor_max_width:
            fixes["corridor_max_width"] = hi
        if not fixes:
            return self
        for name, value in fixes.items():
            logger.warning(
                "RoomParams.%s=%d out of range, clamped to %d",
                name, getattr(self, name), value,
            )
        return replace(self, **fixes)


@dataclass(frozen=True)
class SimulationConfig:
    """Immutable configuration for the simulation run."""

    # World (None = draw a random seed once and record it)
    world_seed: int | None = 42
    grid_width: int = 50
    grid_height: int = 50
    min_grid_size: int = 10

    # Generation
    room_params: RoomParams = field(default_factory=RoomParams)

    # Agents
    num_agents: int = 1
    agent_speed: float = 3.0         # Cells per second
    sight_range: float = 10.0        # Euclidean, in cells
    agent_clearance: int = 1         # 1 → 3x3 footprint

    # Timing
    tick_seconds: float = 0.05       # Simulated seconds advanced per tick
    max_ticks: int = 2000

    # Workers
    num_workers: int = 1
    worker_timeout_seconds: float = 2.0

    # Spawning
    max_placement_attempts: int = 50

    # Logging
    log_level: str = "INFO"
