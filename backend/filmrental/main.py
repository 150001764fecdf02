"""Film Rental API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map FilmRentalError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database manager and clock live on app.state, created by the lifespan

Design Decisions:
    - Lifespan over @app.on_event: cleaner startup/shutdown pairing
    - Tests replace app.state.db_manager / app.state.clock instead of patching globals
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from filmrental.api.error_handlers import register_error_handlers
from filmrental.api.routes import customers, health, payments, rentals, staff
from filmrental.config import get_settings
from filmrental.infrastructure.clock import SystemClock
from filmrental.infrastructure.database import DatabaseSessionManager
from filmrental.infrastructure.observability import setup_logging

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
    app.state.clock = SystemClock()
    logger.info("Film Rental API started")
    yield
    logger.info("Film Rental API shutting down")
    await app.state.db_manager.dispose()


app = FastAPI(title="Film Rental API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(rentals.router)
app.include_router(payments.router)
app.include_router(customers.router)
app.include_router(staff.router)

register_error_handlers(app)
