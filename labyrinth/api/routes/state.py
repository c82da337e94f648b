"""GET /api/v1/state — agent, target & event data (polled by UI)."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from labyrinth.api.dependencies import get_engine_manager
from labyrinth.api.engine_manager import EngineManager
from labyrinth.api.schemas import (
    AgentSchema,
    EventSchema,
    PointSchema,
    StateResponse,
    TargetSchema,
)
from labyrinth.core.models import world_to_grid

router = APIRouter()


@router.get("/state", response_model=StateResponse)
def get_state(
    since_tick: int = Query(0, ge=0, description="Only return events since this tick"),
    limit: int = Query(100, ge=1, le=1000, description="Maximum number of events"),
    category: str | None = Query(None, description="Only return events of this category"),
    manager: EngineManager = Depends(get_engine_manager),
) -> StateResponse:
    snapshot = manager.get_snapshot()
    if snapshot is None:
        raise HTTPException(status_code=503, detail="No snapshot available yet.")

    agents = [
        AgentSchema(
            id=a.id,
            x=a.x,
            y=a.y,
            grid_x=a.grid_pos.x,
            grid_y=a.grid_pos.y,
            state=a.state.name.lower(),
            path_length=len(a.path),
            last_known_target=(
                PointSchema(x=a.last_known_target.x, y=a.last_known_target.y)
                if a.last_known_target is not None else None
            ),
        )
        for a in snapshot.agents
    ]

    target = None
    if snapshot.target is not None:
        tx, ty = snapshot.target
        cell = world_to_grid(tx, ty)
        target = TargetSchema(x=tx, y=ty, grid_x=cell.x, grid_y=cell.y)

    log = manager.event_log
    if category:
        recent = [ev for ev in log.by_category(category) if ev.tick >= since_tick]
    else:
        recent = log.since_tick(since_tick)
    events = [
        EventSchema(tick=ev.tick, category=ev.category, message=ev.message, agent_ids=list(ev.agent_ids))
        for ev in recent
    ][-limit:]

    return StateResponse(
        tick=snapshot.tick,
        seed=snapshot.seed,
        has_dungeon=snapshot.grid is not None,
        running=manager.running,
        paused=manager.paused,
        agents=agents,
        target=target,
        events=events,
    )
