"""Mini Notes API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery — ExMA anti-pattern)
    - Global error handlers map MiniNotesError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup and disposed on shutdown via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py (ADR: ExMA import fan-out < 10)
    - limiter stored on app.state: slowapi's documented integration point
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from mini_notes.api.error_handlers import register_error_handlers
from mini_notes.api.routes import account, auth, health, notes
from mini_notes.config import get_settings
from mini_notes.infrastructure import database
from mini_notes.infrastructure.observability import setup_logging
from mini_notes.infrastructure.rate_limiter import limiter

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("Mini Notes API started")
    yield
    await manager.dispose()
    logger.info("Mini Notes API shutting down")


app = FastAPI(
    title="Mini Notes API", version=health.SERVICE_VERSION, lifespan=lifespan,
)
app.state.limiter = limiter

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],
)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(notes.router)
app.include_router(account.router)

register_error_handlers(app)

# Static files — serves the single-page client build when present
# ADR: mounted AFTER API routes so /api/* takes precedence
if os.path.isdir("static"):
    app.mount("/", StaticFiles(directory="static", html=True), name="static")
