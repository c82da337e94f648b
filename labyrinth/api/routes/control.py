"""POST /api/v1/control/{action} — simulation lifecycle controls."""

from __future__ import annotations

from enum import Enum

from fastapi import APIRouter, Depends, Query

from labyrinth.api.dependencies import get_engine_manager
from labyrinth.api.engine_manager import EngineManager
from labyrinth.api.schemas import ControlResponse

router = APIRouter()


class ControlAction(str, Enum):
    start = "start"
    pause = "pause"
    resume = "resume"
    step = "step"
    stop = "stop"
    reset = "reset"


def _tick(manager: EngineManager) -> int:
    snapshot = manager.get_snapshot()
    return snapshot.tick if snapshot else 0


@router.post("/control/{action}", response_model=ControlResponse)
def control(
    action: ControlAction,
    manager: EngineManager = Depends(get_engine_manager),
) -> ControlResponse:
    match action:
        case ControlAction.start:
            if manager.running:
                return ControlResponse(status="noop", message="Already running.", tick=_tick(manager))
            manager.start()
            return ControlResponse(status="ok", message="Simulation started.", tick=_tick(manager))

        case ControlAction.pause:
            if not manager.running:
                return ControlResponse(status="error", message="Not running.", tick=_tick(manager))
            manager.pause()
            return ControlResponse(status="ok", message="Simulation paused.", tick=_tick(manager))

        case ControlAction.resume:
            if not manager.running:
                return ControlResponse(status="error", message="Not running.", tick=_tick(manager))
            manager.resume()
            return ControlResponse(status="ok", message="Simulation resumed.", tick=_tick(manager))

        case ControlAction.step:
            # Stopped: tick synchronously so the response reflects the new tick.
            if not manager.running:
                advanced = manager.tick_now()
                if not advanced:
                    return ControlResponse(status="noop", message="Max ticks reached.", tick=_tick(manager))
                return ControlResponse(status="ok", message="Single tick executed.", tick=_tick(manager))
            manager.step()
            return ControlResponse(status="ok", message="Single tick requested.", tick=_tick(manager))

        case ControlAction.stop:
            manager.stop()
            return ControlResponse(status="ok", message="Simulation stopped.", tick=_tick(manager))

        case ControlAction.reset:
            manager.reset()
            return ControlResponse(status="ok", message="Simulation reset.", tick=_tick(manager))


@router.post("/speed", response_model=ControlResponse)
def set_speed(
    tps: float = Query(20.0, gt=0.5, le=100.0, description="Ticks per second"),
    manager: EngineManager = Depends(get_engine_manager),
) -> ControlResponse:
    manager.tick_rate = 1.0 / tps
    return ControlResponse(status="ok", message=f"Speed set to {tps:.1f} tps.", tick=_tick(manager))
