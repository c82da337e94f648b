"""GET /api/v1/map — grid and rooms of the current dungeon."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from labyrinth.api.dependencies import get_engine_manager
from labyrinth.api.engine_manager import EngineManager
from labyrinth.api.schemas import MapResponse, PointSchema, RoomSchema

router = APIRouter()


@router.get("/map", response_model=MapResponse)
def get_map(manager: EngineManager = Depends(get_engine_manager)) -> MapResponse:
    snapshot = manager.get_snapshot()
    if snapshot is None or snapshot.grid is None:
        raise HTTPException(status_code=503, detail="No dungeon generated.")

    grid = snapshot.grid
    rooms = [
        RoomSchema(
            x=r.x, y=r.y, width=r.width, height=r.height,
            center=PointSchema(x=r.center.x, y=r.center.y),
        )
        for r in snapshot.rooms
    ]
    return MapResponse(
        width=grid.width,
        height=grid.height,
        seed=snapshot.seed,
        generation=snapshot.generation,
        grid=grid.rle(),
        rooms=rooms,
    )
