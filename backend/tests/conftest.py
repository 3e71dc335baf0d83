"""
Snippetbox — Test Configuration (conftest.py)
==============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: Mock database session (no real DB needed)
    ├── access_log: Logger + captured records for the request logging middleware
    ├── sample_snippet / sample_user: ORM-like objects for service tests
    └── test_client: HTTPX AsyncClient bound to a fresh app with a mocked session
"""

import logging
import os
import tempfile
import uuid
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from typing import List
from unittest.mock import AsyncMock, MagicMock

# Override settings BEFORE any snippetbox import: the engine is built at import time
_tmp_dir = tempfile.mkdtemp(prefix="snippetbox_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_tmp_dir}/test.db"
os.environ["SESSION_SECRET"] = "test-session-secret"
os.environ["SECURE_COOKIES"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from snippetbox.database import get_db_session


class RecordingHandler(logging.Handler):
    """Keeps every record it receives, for assertions on structured fields."""

    def __init__(self):
        super().__init__(level=logging.DEBUG)
        self.records: List[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


@pytest.fixture
def access_log():
    """
    Provides an isolated logger for RequestLoggingMiddleware.

    Returns a namespace with `logger` (pass to the middleware) and
    `records` (what it emitted).
    """
    logger = logging.getLogger(f"tests.access.{uuid.uuid4().hex}")
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    handler = RecordingHandler()
    logger.addHandler(handler)
    yield SimpleNamespace(logger=logger, records=handler.records)
    logger.removeHandler(handler)


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    begin_nested() returns a MagicMock, which supports `async with` and does
    not swallow exceptions raised inside the block.
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    session.begin_nested = MagicMock()
    return session


@pytest.fixture
def sample_snippet():
    now = datetime.now(timezone.utc)
    return SimpleNamespace(
        id=1,
        title="An old silent pond",
        content="An old silent pond...\nA frog jumps into the pond,\nsplash! Silence again.",
        created=now,
        expires=now + timedelta(days=7),
    )


@pytest.fixture
def sample_user():
    return SimpleNamespace(
        id=1,
        name="Alice",
        email="alice@example.com",
        created=datetime.now(timezone.utc),
    )


@pytest_asyncio.fixture
async def test_client(mock_db_session, access_log):
    """
    Provides an async HTTP test client for endpoint testing.

    The app's database dependency yields mock_db_session; routes tests patch
    the service singletons for the data they need.
    """
    from snippetbox.main import create_app

    app = create_app(access_logger=access_log.logger)

    async def override_db_session():
        yield mock_db_session

    app.dependency_overrides[get_db_session] = override_db_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
