"""
Database Connection Management

Async MongoDB client lifecycle for the report gateway.
Route handlers receive a database handle and never open or close
connections themselves.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

import structlog
from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from apre.config import get_settings
from apre.errors import UpstreamError

logger = structlog.get_logger(__name__)
settings = get_settings()

# Global client
_client: Optional[AsyncMongoClient] = None


async def init_database() -> AsyncMongoClient:
    """
    Initialize the MongoDB client.

    The driver keeps its own connection pool, so one client is shared by
    every request for the lifetime of the process.

    Returns:
        AsyncMongoClient: The initialized client
    """
    global _client

    if _client is not None:
        logger.warning("Database already initialized")
        return _client

    _client = AsyncMongoClient(
        settings.mongo.url,
        serverSelectionTimeoutMS=settings.mongo.server_selection_timeout_ms,
    )

    try:
        await _client.admin.command("ping")
        logger.info(
            "Database connection established",
            database=settings.mongo.database,
        )
    except PyMongoError as e:
        logger.error("Failed to connect to database", error=str(e))
        await _client.close()
        _client = None
        raise

    return _client


async def close_database() -> None:
    """Close the MongoDB client and its pooled connections."""
    global _client

    if _client is not None:
        await _client.close()
        _client = None
        logger.info("Database connection closed")


def get_client() -> AsyncMongoClient:
    """
    Get the MongoDB client.

    Raises:
        RuntimeError: If database is not initialized
    """
    if _client is None:
        raise RuntimeError("Database not initialized. Call init_database() first.")
    return _client


def get_database() -> AsyncDatabase:
    """Get the reporting database handle."""
    return get_client()[settings.mongo.database]


@asynccontextmanager
async def store_errors(operation: str, **context: Any) -> AsyncGenerator[None, None]:
    """
    Translate driver failures inside the block into UpstreamError.

    Example:
        async with store_errors("distinct", field="region"):
            await db["sales"].distinct("region")
    """
    try:
        yield
    except PyMongoError as e:
        logger.error(
            "Database operation failed",
            operation=operation,
            error=str(e),
            error_type=type(e).__name__,
            **context,
        )
        raise UpstreamError(f"{operation} failed") from e


@asynccontextmanager
async def get_db() -> AsyncGenerator[AsyncDatabase, None]:
    """
    Get the database handle for a unit of work.

    Driver errors raised inside the block surface as UpstreamError.

    Yields:
        AsyncDatabase: Database handle

    Example:
        async with get_db() as db:
            await db["sales"].insert_many(docs)
    """
    async with store_errors("database session"):
        yield get_database()


def get_db_dependency() -> AsyncDatabase:
    """FastAPI dependency for the database handle."""
    try:
        return get_database()
    except RuntimeError as e:
        logger.error("Database handle requested before initialization")
        raise UpstreamError("database unavailable") from e


async def check_database_health() -> Dict[str, Any]:
    """
    Ping the database server.

    Returns:
        Dict with health status
    """
    try:
        client = get_client()
        await client.admin.command("ping")
        return {"status": "healthy", "database": settings.mongo.database}
    except (PyMongoError, RuntimeError) as e:
        logger.warning("Database health check failed", error=str(e))
        return {"status": "unhealthy", "error": str(e)}
