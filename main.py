"""
Task Manager API — application entry point.
"""

from __future__ import annotations

import logging
import sys

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.auth import router as auth_router
from api.errors import register_exception_handlers
from api.middleware import register_middleware
from api.routes import health_router, router as task_router
from config.settings import Settings, config
from core.state_manager import AppState

logging.basicConfig(
    level=logging.DEBUG if config.debug else getattr(logging, config.log_level.upper(), logging.INFO),
    format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
    stream=sys.stdout,
)
for _noisy in ("httpcore", "httpx", "urllib3"):
    logging.getLogger(_noisy).setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or config
    app = FastAPI(
        title=settings.app_name,
        version="1.0.0",
        description="Task CRUD API with session-based authentication.",
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_middleware(app)
    register_exception_handlers(app)

    # In-memory stores live for as long as this app instance does.
    app.state.services = AppState(settings)

    # Routes
    app.include_router(auth_router, prefix="/auth")
    app.include_router(task_router, prefix="/tasks")
    app.include_router(health_router)

    logger.info("%s ready (min password length %d)", settings.app_name, settings.min_password_length)
    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level="debug" if config.debug else "info",
    )
