"""FastAPI application factory with lifespan management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from labyrinth.api.dependencies import set_engine_manager
from labyrinth.api.engine_manager import EngineManager
from labyrinth.api.routes import api_router
from labyrinth.config import SimulationConfig
from labyrinth.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def create_app(config: SimulationConfig | None = None, autostart: bool = True) -> FastAPI:
    """Build and return the fully-configured FastAPI application."""
    if config is None:
        config = SimulationConfig()

    _config = config

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging(_config.log_level)
        manager = EngineManager(_config)
        set_engine_manager(manager)
        if autostart:
            manager.start()
        logger.info("API server started (seed=%s).", manager.dungeon.seed)
        yield
        manager.shutdown()
        set_engine_manager(None)
        logger.info("API server shutting down.")

    app = FastAPI(
        title="Labyrinth",
        description=(
            "Seeded BSP dungeon generator and grid agent engine.\n\n"
            "## API Groups\n\n"
            "- **Map** — Grid (RLE) and rooms of the current dungeon\n"
            "- **State** — Agents, tracked target and recent events\n"
            "- **Path** — One-off A* queries\n"
            "- **Control** — Simulation lifecycle: start, pause, resume, step, stop, reset\n"
            "- **Dungeon** — Regenerate or clear the dungeon\n"
            "- **Target** — Move the tracked target\n"
            "- **Config** — Read-only simulation configuration\n"
        ),
        version="0.1.0",
        lifespan=lifespan,
    )

    # CORS: allow any origin in dev
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)
    return app
