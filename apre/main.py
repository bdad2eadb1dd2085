"""
FastAPI Production Application

Main entry point for the APRE Reporting API.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
import structlog

from apre.config import get_settings
from apre.config.logging import configure_logging
from apre.database.connection import init_database, close_database
from apre.serving.api import create_api_app

settings = get_settings()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    configure_logging("DEBUG" if settings.debug else None)

    logger.info("Starting APRE Reporting API", environment=settings.app_env)

    # The gateway still starts when MongoDB is down; readiness reports it
    try:
        await init_database()
        logger.info("Database initialized")
    except Exception as e:
        logger.warning("Database init failed", error=str(e))

    yield

    logger.info("Shutting down...")
    await close_database()


app = create_api_app(lifespan=lifespan)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
