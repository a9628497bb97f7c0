"""
FastAPI Production Application

Main entry point for the Order Desk API.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
import structlog

from orderdesk.config import get_settings
from orderdesk.config.logging import configure_logging
from orderdesk.database.connection import init_database, close_database
from orderdesk.serving.api.main import create_api_app

settings = get_settings()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    configure_logging()

    logger.info("Starting Order Desk API", environment=settings.app_env)

    # Startup fails if the store is unreachable
    await init_database()

    yield

    logger.info("Shutting down...")
    await close_database()


app = create_api_app(lifespan=lifespan)


@app.get("/api/v1/info")
async def api_info():
    """API information endpoint."""
    return {
        "name": "Order Desk API",
        "version": settings.version,
        "environment": settings.app_env,
        "documentation": "/docs",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
