"""Taskhub API — FastAPI application factory and entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map TaskhubError → structured JSON responses
    - Each app instance owns its collections and token validator (app.state), never globals
    - Only the /tasks router is gated; /users and /health are public

Design Decisions:
    - create_app() factory over a bare module-level app: tests get fresh collections
      per app instance, uvicorn still imports taskhub.main:app
    - Lifespan over @app.on_event: configures logging, closes the validator's HTTP client
    - Request access log as HTTP middleware (every request, gated or not)
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taskhub.api.error_handlers import register_error_handlers
from taskhub.api.routes import health, tasks, users
from taskhub.config import Settings, get_settings
from taskhub.infrastructure.collection_store import build_collection
from taskhub.infrastructure.observability import log_requests, setup_logging
from taskhub.infrastructure.token_validation import build_token_validator
from taskhub.schemas.task import Task
from taskhub.schemas.user import User

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)
    logger.info(
        f"Taskhub API started (id_strategy={settings.id_strategy.value}, "
        f"auth_backend={settings.auth_backend.value})",
    )
    yield
    await app.state.token_validator.aclose()
    logger.info("Taskhub API shutting down")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build a FastAPI app with its own collections and token validator."""
    settings = settings or get_settings()

    app = FastAPI(title="Taskhub API", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.users = build_collection(settings.id_strategy, User, "User")
    app.state.tasks = build_collection(settings.id_strategy, Task, "Task")
    app.state.token_validator = build_token_validator(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(log_requests)

    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(tasks.router)

    register_error_handlers(app)
    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn on the configured port."""
    settings = get_settings()
    uvicorn.run(
        "taskhub.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    run()
