"""Liveness endpoint; hosts the sync loop as a background task."""

import asyncio
from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from jobhunter.core.config import Settings, load_settings
from jobhunter.sync.loop import run_forever

LIVENESS_TEXT = "Job Hunter Bot is Running 24/7!"

log = structlog.get_logger()


def create_app(settings: Optional[Settings] = None, run_sync: bool = True) -> FastAPI:
    """Build the app. With run_sync the loop starts and stops with the app."""
    if settings is None:
        settings = load_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if not run_sync:
            yield
            return

        stop_event = asyncio.Event()
        task = asyncio.create_task(run_forever(settings, stop_event))
        app.state.sync_task = task
        yield
        stop_event.set()
        try:
            await asyncio.wait_for(task, timeout=10.0)
        except asyncio.TimeoutError:
            log.warning("sync_task_stop_timeout")
            task.cancel()

    app = FastAPI(
        title="Job Hunter",
        docs_url=None,
        redoc_url=None,
        lifespan=lifespan,
    )
    app.state.settings = settings

    @app.get("/", response_class=PlainTextResponse)
    async def liveness():
        return LIVENESS_TEXT

    return app
