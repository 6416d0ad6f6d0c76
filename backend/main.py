"""
Sitecraft FastAPI application.

Entry point for the API server.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from backend import db
from backend.config import settings
from backend.routes import ai as ai_routes
from backend.routes import export as export_routes
from backend.routes import projects as project_routes
from backend.routes import templates as template_routes

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for FastAPI application.

    Handles startup and shutdown logic:
    - Initialize database pool (skipped for in-memory storage)
    - Close database pool on shutdown
    """
    if settings.USE_MEMORY_STORAGE:
        logger.info("DATABASE_URL not set, using in-memory project storage")
    else:
        await db.init_pool()

    yield

    if not settings.USE_MEMORY_STORAGE:
        await db.close_pool()


app = FastAPI(
    title="Sitecraft",
    lifespan=lifespan,
)

# Register routes
app.include_router(template_routes.router)
app.include_router(project_routes.router)
app.include_router(ai_routes.router)
app.include_router(export_routes.router)


@app.get("/health")
async def health():
    """Health check endpoint for uptime monitoring."""
    return {"status": "ok", "storage": "memory" if settings.USE_MEMORY_STORAGE else "postgres"}
