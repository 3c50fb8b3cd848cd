"""MongoDB connection using Motor (async driver)."""

import asyncio
import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from exceptions import ConnectionFailure
from modules.config import ConfigEnv

logger = logging.getLogger(__name__)

_client: Optional[AsyncIOMotorClient] = None
_db: Optional[AsyncIOMotorDatabase] = None
_lock: Optional[asyncio.Lock] = None


def _get_lock() -> asyncio.Lock:
    # Created lazily so the lock binds to the running loop; no await between check and set.
    global _lock
    if _lock is None:
        _lock = asyncio.Lock()
    return _lock


def is_connected() -> bool:
    return _db is not None


async def ensure_connected() -> AsyncIOMotorDatabase:
    """
    Connect to MongoDB once per process and return the database handle.

    Safe to call from every action: concurrent first calls are serialized and
    only one client is ever created. A missing MONGODB_URL or a failed ping
    raises ConnectionFailure and leaves the manager disconnected, so the next
    call tries again.
    """
    global _client, _db
    if _db is not None:
        logger.debug("Already connected to MongoDB")
        return _db

    async with _get_lock():
        if _db is not None:
            return _db

        url = ConfigEnv.MONGODB_URL
        if not url:
            logger.error("MONGODB_URL is not set")
            raise ConnectionFailure("MONGODB_URL is not set")

        client: Optional[AsyncIOMotorClient] = None
        try:
            client = AsyncIOMotorClient(
                url,
                serverSelectionTimeoutMS=ConfigEnv.MONGODB_SERVER_SELECTION_TIMEOUT_MS,
            )
            await client.admin.command("ping")
        except (PyMongoError, ValueError) as e:
            # ValueError: malformed URI the parser rejects before any network I/O
            if client is not None:
                client.close()
            logger.error(f"Could not connect to MongoDB: {e}")
            raise ConnectionFailure(str(e)) from e

        _client = client
        _db = client[ConfigEnv.MONGODB_DB_NAME]
        logger.info(f"Connected to MongoDB (database '{ConfigEnv.MONGODB_DB_NAME}')")
        return _db


def get_client() -> AsyncIOMotorClient:
    """Return the global Motor client. Raises if ensure_connected() has not succeeded."""
    if _client is None:
        raise ConnectionFailure("not connected")
    return _client


def get_db() -> AsyncIOMotorDatabase:
    """Return the database instance. Raises if ensure_connected() has not succeeded."""
    if _db is None:
        raise ConnectionFailure("not connected")
    return _db


def close_client() -> None:
    """Close the global Motor client. Called on app shutdown and between tests."""
    global _client, _db, _lock
    if _client is not None:
        _client.close()
        logger.info("MongoDB client closed")
    _client = None
    _db = None
    _lock = None
