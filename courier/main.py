"""Courier API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map CourierError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database manager and membership client created by the lifespan, stored on app.state,
      and closed on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Collaborators owned by the entry point, injected into services through
      api/dependencies.py (no module-level singletons)
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from courier.api.error_handlers import register_error_handlers
from courier.api.routes import health, messages
from courier.config import get_settings
from courier.infrastructure.database import DatabaseSessionManager
from courier.infrastructure.membership_client import HttpMembershipClient
from courier.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    app.state.db_manager = DatabaseSessionManager(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    app.state.membership = HttpMembershipClient(
        base_url=settings.membership_api_url,
        api_token=settings.membership_api_token,
        timeout_seconds=settings.membership_timeout_seconds,
    )
    logger.info("Courier API started")
    yield
    logger.info("Courier API shutting down")
    await app.state.membership.aclose()
    await app.state.db_manager.dispose()


app = FastAPI(
    title="Courier API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes — explicit registration
app.include_router(health.router)
app.include_router(messages.router)

register_error_handlers(app)
