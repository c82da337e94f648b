"""POST/DELETE /api/v1/dungeon — regenerate or discard the dungeon."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from labyrinth.api.dependencies import get_engine_manager
from labyrinth.api.engine_manager import EngineManager
from labyrinth.api.schemas import ControlResponse, RegenerateRequest

router = APIRouter()


@router.post("/dungeon/regenerate", response_model=ControlResponse)
def regenerate(
    body: RegenerateRequest,
    manager: EngineManager = Depends(get_engine_manager),
) -> ControlResponse:
    snapshot = manager.regenerate(seed=body.seed, width=body.width, height=body.height)
    return ControlResponse(
        status="ok",
        message=f"Dungeon regenerated (seed={snapshot.seed}, {len(snapshot.rooms)} rooms).",
        tick=snapshot.tick,
    )


@router.delete("/dungeon", response_model=ControlResponse)
def clear(manager: EngineManager = Depends(get_engine_manager)) -> ControlResponse:
    manager.clear()
    snapshot = manager.get_snapshot()
    return ControlResponse(
        status="ok",
        message="Dungeon cleared.",
        tick=snapshot.tick if snapshot else 0,
    )
