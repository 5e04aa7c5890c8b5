"""
HRMS Backend — Test Configuration (conftest.py)
================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Two kinds of backing store:
       - `database`: an in-memory MongoDB (mongomock-motor) for end-to-end
         handler tests that need real insert/find/update/delete semantics
       - `mock_collection`: AsyncMock collection for unit tests and for
         injecting driver failures or asserting that no store call happened

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── test_settings:       Settings pointing at a throwaway database name
    ├── database:            Database wrapping an AsyncMongoMockClient
    ├── employee_collection: The in-memory `employees` collection
    ├── mock_collection:     AsyncMock standing in for a motor collection
    ├── test_client:         HTTPX AsyncClient against the in-memory store
    └── mock_client:         HTTPX AsyncClient whose service uses mock_collection
"""

import os

# Override settings for testing BEFORE any app imports
os.environ["MONGO_URI"] = "mongodb://localhost:27017/hrms-test"
os.environ["MONGO_DB_NAME"] = "hrms-test"
os.environ["LOG_LEVEL"] = "WARNING"

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from hrms.config import Settings
from hrms.database import Database
from hrms.main import create_app
from hrms.services.employee_service import EmployeeService, get_employee_service


@pytest.fixture
def test_settings():
    return Settings(
        mongo_uri="mongodb://localhost:27017/hrms-test",
        mongo_db_name="hrms-test",
        mongo_collection="employees",
        log_level="WARNING",
    )


@pytest.fixture
def database(test_settings):
    """A Database over a fresh in-memory MongoDB for each test."""
    client = AsyncMongoMockClient()
    return Database(client, test_settings.mongo_db_name, test_settings.mongo_collection)


@pytest.fixture
def employee_collection(database):
    return database.collection


@pytest.fixture
def mock_collection():
    """
    Provides a mock motor collection.

    `find()` is synchronous in motor and returns a cursor whose `to_list()` is
    awaited, so the cursor is a MagicMock carrying an AsyncMock.

    Usage:
        mock_collection.find.return_value.to_list.return_value = [doc]
        mock_collection.insert_one.side_effect = ServerSelectionTimeoutError("down")
    """
    collection = MagicMock()
    cursor = MagicMock()
    cursor.to_list = AsyncMock(return_value=[])
    collection.find = MagicMock(return_value=cursor)
    collection.find_one = AsyncMock(return_value=None)
    collection.insert_one = AsyncMock()
    collection.find_one_and_update = AsyncMock(return_value=None)
    collection.delete_one = AsyncMock()
    return collection


@pytest.fixture
def sample_employee():
    return {"name": "Ann", "salary": 1000, "age": 30}


@pytest_asyncio.fixture
async def test_client(test_settings, database):
    """
    HTTPX AsyncClient talking to an app wired to the in-memory store.

    ASGITransport does not run the lifespan, so the database is injected
    through create_app() instead of being connected.
    """
    app = create_app(settings=test_settings, database=database)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def mock_client(test_settings, database, mock_collection):
    """HTTPX AsyncClient whose EmployeeService runs against `mock_collection`."""
    app = create_app(settings=test_settings, database=database)
    app.dependency_overrides[get_employee_service] = lambda: EmployeeService(mock_collection)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
