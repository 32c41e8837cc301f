"""FastAPI application exposing the lunge counter over HTTP.

Endpoints:
- POST /lunge/frame: analyze one frame of pose landmarks (JSON)
- GET /lunge/status: current session totals
- POST /lunge/session: start a new session
"""
from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from lunge_counter.api.routers.lunge import router as lunge_router
from lunge_counter.core.config import get_settings

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    sink_id = None
    if settings.environment != "test":
        logs_dir = Path(__file__).resolve().parent.parent / "data" / "logs"
        logs_dir.mkdir(parents=True, exist_ok=True)
        sink_id = logger.add(logs_dir / "app.log", rotation="5 MB", retention="7 days", enqueue=True, backtrace=False, diagnose=False)
    yield
    if sink_id is not None:
        logger.remove(sink_id)


app = FastAPI(title=settings.app_name, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.exposed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health() -> dict:
    """Return API health status."""

    return {"status": "ok"}


app.include_router(lunge_router, prefix="", tags=["lunge"])
