"""GET /api/v1/config — expose simulation configuration."""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends

from labyrinth.api.dependencies import get_engine_manager
from labyrinth.api.engine_manager import EngineManager
from labyrinth.api.schemas import RoomParamsSchema, SimulationConfigResponse

router = APIRouter()


@router.get("/config", response_model=SimulationConfigResponse)
def get_config(
    manager: EngineManager = Depends(get_engine_manager),
) -> SimulationConfigResponse:
    cfg = manager.config
    return SimulationConfigResponse(
        world_seed=cfg.world_seed,
        grid_width=cfg.grid_width,
        grid_height=cfg.grid_height,
        min_grid_size=cfg.min_grid_size,
        room_params=RoomParamsSchema(**asdict(cfg.room_params)),
        num_agents=cfg.num_agents,
        agent_speed=cfg.agent_speed,
        sight_range=cfg.sight_range,
        agent_clearance=cfg.agent_clearance,
        tick_seconds=cfg.tick_seconds,
        max_ticks=cfg.max_ticks,
        num_workers=cfg.num_workers,
        tick_rate=manager.tick_rate,
    )
