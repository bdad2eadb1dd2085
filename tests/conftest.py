"""
Test Suite Configuration
"""
import os

os.environ.setdefault("APP_ENV", "testing")

from typing import Any, Callable, Dict, List
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from apre.config import Settings
from apre.console.client import GatewayClient
from apre.database.connection import get_db_dependency
from apre.serving.api import create_api_app

GATEWAY_URL = "http://gateway.test/api"


def make_cursor(rows: List[Dict[str, Any]]) -> MagicMock:
    """Stand-in for the cursor returned by an awaited aggregate()."""
    cursor = MagicMock()
    cursor.to_list = AsyncMock(return_value=rows)
    return cursor


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings"""
    return Settings(
        app_env="testing",
        debug=True,
    )


@pytest.fixture
def mock_db() -> MagicMock:
    """
    Mock database handle.

    db["<collection>"] returns the same collection mock on every lookup;
    aggregate() yields no rows and distinct() no values until a test says
    otherwise.
    """
    collections: Dict[str, MagicMock] = {}

    def get_collection(name: str) -> MagicMock:
        if name not in collections:
            collection = MagicMock(name=name)
            collection.aggregate = AsyncMock(return_value=make_cursor([]))
            collection.distinct = AsyncMock(return_value=[])
            collections[name] = collection
        return collections[name]

    db = MagicMock()
    db.__getitem__.side_effect = get_collection
    return db


@pytest.fixture
def feedback_collection(mock_db) -> MagicMock:
    return mock_db["customerFeedback"]


@pytest.fixture
def sales_collection(mock_db) -> MagicMock:
    return mock_db["sales"]


@pytest.fixture
def app(mock_db) -> FastAPI:
    """Gateway app wired to the mock database"""
    app = create_api_app()
    app.dependency_overrides[get_db_dependency] = lambda: mock_db
    return app


@pytest.fixture
def client(app) -> TestClient:
    """HTTP client for the gateway"""
    return TestClient(app)


def mock_gateway(handler: Callable[[httpx.Request], Any]) -> GatewayClient:
    """Console client whose requests are answered by handler"""
    return GatewayClient(base_url=GATEWAY_URL, transport=httpx.MockTransport(handler))


@pytest.fixture
async def asgi_console_client(app):
    """Console client talking to the in-process gateway"""
    client = GatewayClient(base_url=GATEWAY_URL, transport=httpx.ASGITransport(app=app))
    yield client
    await client.close()
