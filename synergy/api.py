# -*- coding: utf-8 -*-
"""
Synergy planner API

Tasks, block-document notes, food log and workout schedule, with nutrition
estimates and workout plans from an external model.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .config import settings
from .deps import open_store
from .diet.api import router as diet_router
from .errors import StoreUnavailable
from .exercise.api import router as exercise_router
from .notes.api import router as notes_router
from .planner.api import router as planner_router
from .preferences.api import router as preferences_router
from .preferences.theme import ThemeContext

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        app.state.theme = ThemeContext.load(open_store(), default=settings.default_theme)
        logger.info("synergy started (theme=%s, db=%s)", app.state.theme.theme, settings.db_path)
    except StoreUnavailable as exc:
        # Requests retry the store lazily and report 503 while it is down.
        logger.error("document store unavailable at startup: %s", exc)
        app.state.theme = None
    yield
    theme = getattr(app.state, "theme", None)
    if theme is not None:
        theme.close()
        app.state.theme = None


app = FastAPI(
    title="Synergy",
    description="Planner, notes, diet and workout tracking",
    version=__version__,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_origins != ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(planner_router)
app.include_router(notes_router)
app.include_router(diet_router)
app.include_router(exercise_router)
app.include_router(preferences_router)


@app.get("/api/health")
def health_check():
    return {
        "status": "ok",
        "version": __version__,
        "timestamp": datetime.now().isoformat(),
    }


def run() -> None:
    """Console entry point (used by pyproject [project.scripts])."""
    import uvicorn

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    try:
        port = int(settings.port_raw)
    except ValueError:
        port = 5000

    uvicorn.run("synergy.api:app", host=settings.host, port=port, reload=False)
