"""
HRMS Backend — MongoDB Session Management
==========================================

What:  One async motor client and the `employees` collection handle.
Why:   Centralizes all database connection logic in one place.
How:   `Database.connect()` creates the client, pings the server within the
       configured timeout, and returns a connected instance. main.py attaches
       it to `app.state` once; handlers reach it through a FastAPI dependency.
When:  Connected in the lifespan startup; closed in the lifespan shutdown.

Connection Strategy:
    motor connects lazily, so the constructor alone never fails on an
    unreachable server. The explicit `ping` forces server selection, bounded by
    serverSelectionTimeoutMS, so a bad MONGO_URI aborts startup instead of
    failing the first request. There is no retry and no degraded mode.

    The client is shared by all concurrent requests without locking; motor
    multiplexes independent operations over its own connection pool.
"""

import logging
from typing import Any, Optional

from motor.motor_asyncio import (
    AsyncIOMotorClient,
    AsyncIOMotorCollection,
    AsyncIOMotorDatabase,
)
from pymongo.errors import PyMongoError

from hrms.config import Settings
from hrms.exceptions import DatabaseConnectionError

logger = logging.getLogger(__name__)


class Database:
    """
    Holds the client, database and collection for the lifetime of the process.

    The constructor accepts any motor-compatible client, which is how tests
    hand in an in-memory client without going through `connect()`.
    """

    def __init__(self, client: Any, db_name: str, collection_name: str):
        self._client = client
        self._db: AsyncIOMotorDatabase = client[db_name]
        self._collection: AsyncIOMotorCollection = self._db[collection_name]

    @property
    def client(self) -> Any:
        return self._client

    @property
    def collection(self) -> AsyncIOMotorCollection:
        """The employees collection, shared read/write across requests."""
        return self._collection

    @classmethod
    async def connect(cls, settings: Settings) -> "Database":
        """
        Open a session to MongoDB and verify it answers.

        Raises:
            DatabaseConnectionError: the server was not reachable within
                `settings.mongo_connect_timeout` seconds, or the URI is invalid.
        """
        logger.info(
            "Connecting to MongoDB (db=%s, timeout=%ds)",
            settings.mongo_db_name,
            settings.mongo_connect_timeout,
        )
        client: Optional[AsyncIOMotorClient] = None
        try:
            client = AsyncIOMotorClient(
                settings.mongo_uri,
                serverSelectionTimeoutMS=settings.mongo_connect_timeout_ms,
            )
            await client.admin.command("ping")
        except PyMongoError as e:
            if client is not None:
                client.close()
            raise DatabaseConnectionError(
                message=f"Could not connect to MongoDB: {e}",
                uri=settings.mongo_uri,
            ) from e

        logger.info("MongoDB connection established")
        return cls(client, settings.mongo_db_name, settings.mongo_collection)

    async def ping(self) -> bool:
        """Lightweight liveness probe used by the health check."""
        try:
            await self._client.admin.command("ping")
        except PyMongoError as e:
            logger.warning("MongoDB ping failed: %s", str(e))
            return False
        return True

    def close(self) -> None:
        """Closes all pooled connections. Called during application shutdown."""
        self._client.close()
