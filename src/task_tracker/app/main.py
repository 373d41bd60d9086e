import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from task_tracker.app.errors import install_error_handlers
from task_tracker.app.middleware.access_log import AccessLogMiddleware
from task_tracker.app.routes import tasks
from task_tracker.bootstrap import open_task_service
from task_tracker.config import Settings, load_settings
from task_tracker.observability.logging import setup_logging

logger = logging.getLogger("task_tracker.system")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or load_settings()
    setup_logging(settings)
    logger.info("system.start", extra={"category": "system", "event": "system.start", "store": settings.task_store})

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        async with open_task_service(settings) as svc:
            app.state.task_service = svc
            yield
            app.state.task_service = None
        logger.info("system.stop", extra={"category": "system", "event": "system.stop"})

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.state.settings = settings
    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    install_error_handlers(app)

    app.include_router(tasks.router)

    @app.get("/api/health")
    async def health(request: Request):
        connected = await tasks.get_service(request).ping()
        return {
            "success": True,
            "message": "Server is running",
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "database": "connected" if connected else "disconnected",
        }

    return app


def run() -> None:
    settings = load_settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_config=None)
