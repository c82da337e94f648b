"""Pydantic request/response models for the REST API."""

from __future__ import annotations

from pydantic import BaseModel, Field


# --- Map ---

class PointSchema(BaseModel):
    x: int
    y: int


class RoomSchema(BaseModel):
    x: int
    y: int
    width: int
    height: int
    center: PointSchema


class MapResponse(BaseModel):
    width: int
    height: int
    seed: int
    generation: int
    grid: list[int] = Field(description="Run-length encoded tiles [value, count, ...] in row-major order (0=Floor, 1=Wall)")
    rooms: list[RoomSchema] = Field(default_factory=list)


# --- State ---

class AgentSchema(BaseModel):
    id: int
    x: float
    y: float
    grid_x: int
    grid_y: int
    state: str
    path_length: int
    last_known_target: PointSchema | None = None


class TargetSchema(BaseModel):
    x: float
    y: float
    grid_x: int
    grid_y: int


class EventSchema(BaseModel):
    tick: int
    category: str
    message: str
    agent_ids: list[int] = Field(default_factory=list)


class StateResponse(BaseModel):
    tick: int
    seed: int | None = None
    has_dungeon: bool
    running: bool
    paused: bool
    agents: list[AgentSchema]
    target: TargetSchema | None = None
    events: list[EventSchema] = Field(default_factory=list)


# --- Path ---

class PathResponse(BaseModel):
    found: bool
    length: int = 0
    path: list[PointSchema] = Field(default_factory=list)


# --- Control ---

class ControlResponse(BaseModel):
    status: str
    message: str
    tick: int = 0


# --- Dungeon / target commands ---

class RegenerateRequest(BaseModel):
    seed: int | None = Field(None, description="Omit for random-seed mode")
    width: int | None = Field(None, ge=1, le=500)
    height: int | None = Field(None, ge=1, le=500)


class TargetRequest(BaseModel):
    x: float
    y: float


# --- Config ---

class RoomParamsSchema(BaseModel):
    bsp_depth: int
    min_split_span: int
    min_room_size: int
    room_margin: int
    corridor_min_width: int
    corridor_max_width: int


class SimulationConfigResponse(BaseModel):
    world_seed: int | None
    grid_width: int
    grid_height: int
    min_grid_size: int
    room_params: RoomParamsSchema
    num_agents: int
    agent_speed: float
    sight_range: float
    agent_clearance: int
    tick_seconds: float
    max_ticks: int
    num_workers: int
    tick_rate: float
