#!/usr/bin/env python3
"""
ThesisMatch - FastAPI Application

Thesis supervision platform: students, supervisors, workflow stages,
supervisor matching and the archive of past theses, with automatic API
documentation.

Usage:
    python -m web.backend.app

Then open:
    - http://localhost:8080/docs - API Documentation (Swagger UI)
    - http://localhost:8080/redoc - Alternative API Documentation
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from database.init_db import init_db
from .config import get_config
from .dependencies import get_db_engine
from .exceptions import register_exception_handlers
from .routers import (
    matching_router,
    students_router,
    supervisors_router,
    workflow_router,
    stats_router,
    theses_router,
    documents_router
)

# Load configuration
config = get_config()

# Configure logging
logging.basicConfig(
    level=getattr(logging, config.logging.level.upper(), logging.INFO),
    format=config.logging.format
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db(get_db_engine())
    yield


# Create FastAPI app
app = FastAPI(
    title="ThesisMatch API",
    description="API for thesis supervision: supervisor matching, assignments and workflow",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# Register exception handlers
register_exception_handlers(app)

# Include routers
app.include_router(matching_router)
app.include_router(students_router)
app.include_router(supervisors_router)
app.include_router(workflow_router)
app.include_router(stats_router)
app.include_router(theses_router)
app.include_router(documents_router)


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "thesis-match-web"}


def main():
    """Run the web server."""
    import uvicorn

    logger.info(f"Starting ThesisMatch Web Server on {config.web.host}:{config.web.port}")
    logger.info(f"API Docs: http://{config.web.host}:{config.web.port}/docs")

    uvicorn.run(
        "web.backend.app:app",
        host=config.web.host,
        port=config.web.port,
        reload=False,
        log_level=config.logging.level.lower()
    )


if __name__ == "__main__":
    main()
