"""POST /api/v1/target — move the tracked target."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from labyrinth.api.dependencies import get_engine_manager
from labyrinth.api.engine_manager import EngineManager
from labyrinth.api.schemas import ControlResponse, TargetRequest

router = APIRouter()


@router.post("/target", response_model=ControlResponse)
def move_target(
    body: TargetRequest,
    manager: EngineManager = Depends(get_engine_manager),
) -> ControlResponse:
    if manager.get_grid() is None:
        raise HTTPException(status_code=503, detail="No dungeon generated.")
    try:
        manager.move_target(body.x, body.y)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    snapshot = manager.get_snapshot()
    return ControlResponse(
        status="ok",
        message=f"Target moved to ({body.x:g}, {body.y:g}).",
        tick=snapshot.tick if snapshot else 0,
    )
