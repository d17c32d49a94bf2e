"""Officer Records API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map OfficerRecordsError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup and disposed on shutdown via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Schema is owned by Alembic migrations; the app never calls create_all
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from officer_records.api.error_handlers import register_error_handlers
from officer_records.api.routes import (
    admin_config, health, history, pension, personnel, statistics,
)
from officer_records.config import get_settings
from officer_records.infrastructure.database import close_db, init_db
from officer_records.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("Officer Records API started")
    yield
    await close_db()
    logger.info("Officer Records API shutting down")


app = FastAPI(
    title="Officer Records API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(personnel.router)
app.include_router(pension.router)
app.include_router(statistics.router)
app.include_router(admin_config.router)
app.include_router(history.router)

register_error_handlers(app)
