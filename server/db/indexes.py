"""Create MongoDB indexes for the user and thread query patterns."""

import logging
from typing import Any, List, Set, Tuple

from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase

logger = logging.getLogger(__name__)

IndexKey = Tuple[Tuple[str, Any], ...]

INDEXES = {
    # users: external identity and username are unique; created_at drives search ordering
    "users": [
        ([("id", 1)], True, "id_unique"),
        ([("username", 1)], True, "username_unique"),
        ([("created_at", -1)], False, "created_at_-1"),
    ],
    # threads: author for activity, parent_id for reply traversal
    "threads": [
        ([("author", 1)], False, "author_1"),
        ([("parent_id", 1)], False, "parent_id_1"),
    ],
}


async def _existing_indexes(coll: AsyncIOMotorCollection) -> Set[Tuple[IndexKey, bool]]:
    """(key, unique) pairs already present on `coll`, whatever their names."""
    existing = set()
    for spec in (await coll.index_information()).values():
        key = spec.get("key") or []
        # key may come back as a SON/dict or as a list of (field, direction)
        pairs = key.items() if hasattr(key, "items") else key
        existing.add((tuple((field, direction) for field, direction in pairs), spec.get("unique", False)))
    return existing


async def create_indexes(db: AsyncIOMotorDatabase) -> int:
    """
    Create the indexes in INDEXES that are missing, matching on key and
    uniqueness so an equivalent index under another name is left alone.
    Returns how many indexes were created this run.
    """
    total_created = 0
    for collection_name, specs in INDEXES.items():
        coll = db[collection_name]
        existing = await _existing_indexes(coll)
        created: List[str] = []
        for keys, unique, name in specs:
            if (tuple(keys), unique) in existing:
                continue
            await coll.create_index(keys, unique=unique, name=name)
            created.append(name)
        if created:
            logger.info(f"Indexes created on {collection_name}: {', '.join(created)}")
        total_created += len(created)

    logger.info("Indexes ensured (%s created this run)", total_created)
    return total_created
