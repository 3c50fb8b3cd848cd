"""Database module: MongoDB connection and utilities."""

from .connection import ensure_connected, get_db, get_client, close_client, is_connected
from .indexes import create_indexes
from .populate import populate, index_by

__all__ = [
    "ensure_connected",
    "get_db",
    "get_client",
    "close_client",
    "is_connected",
    "create_indexes",
    "populate",
    "index_by",
]
