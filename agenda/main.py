"""team-agenda - Team task scheduling and agenda service."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from agenda.core.config import constants
from agenda.core.db_client import close_connection, init_db
from agenda.core.logging import configure_logfire, instrument_fastapi
from agenda.interface.admin_router import router as admin_router
from agenda.interface.agenda_router import router as agenda_router
from agenda.interface.auth_router import router as auth_router
from agenda.interface.error_handlers import register_error_handlers


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan context manager."""
    # Startup
    configure_logfire()

    await init_db()
    logger.info("Database initialized")

    yield
    # Shutdown
    await close_connection()


app = FastAPI(
    title="team-agenda",
    description="Team task scheduling with daily, weekly and monthly agenda views",
    version="0.1.0",
    lifespan=lifespan,
)

# Instrument FastAPI with Logfire
instrument_fastapi(app)

register_error_handlers(app)

# Register routers
app.include_router(auth_router)
app.include_router(agenda_router)
app.include_router(admin_router)


@app.get("/health")
async def health_check() -> JSONResponse:
    """Health check endpoint."""
    return JSONResponse(content={"status": "healthy"}, status_code=constants.HTTP_OK)
