"""GET /api/v1/path — one-off A* query against the current dungeon."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from labyrinth.ai.pathfinding import find_path
from labyrinth.api.dependencies import get_engine_manager
from labyrinth.api.engine_manager import EngineManager
from labyrinth.api.schemas import PathResponse, PointSchema
from labyrinth.core.models import Vector2

router = APIRouter()


@router.get("/path", response_model=PathResponse)
def get_path(
    sx: int = Query(..., description="Start x"),
    sy: int = Query(..., description="Start y"),
    gx: int = Query(..., description="Goal x"),
    gy: int = Query(..., description="Goal y"),
    manager: EngineManager = Depends(get_engine_manager),
) -> PathResponse:
    grid = manager.get_grid()
    if grid is None:
        raise HTTPException(status_code=503, detail="No dungeon generated.")

    path = find_path(grid, Vector2(sx, sy), Vector2(gx, gy))
    if path is None:
        return PathResponse(found=False)
    return PathResponse(
        found=True,
        length=len(path),
        path=[PointSchema(x=p.x, y=p.y) for p in path],
    )
