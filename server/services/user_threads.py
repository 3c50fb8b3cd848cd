"""Fetch a user's threads with their community and replies expanded."""
import asyncio
import logging
from typing import Any, Dict, Optional

from pymongo.errors import PyMongoError

from db.connection import ensure_connected
from db.populate import index_by, populate
from db.schemas import UserWithThreads
from exceptions import AggregationFailure

logger = logging.getLogger(__name__)

COMMUNITY_FIELDS = {"name": 1, "id": 1, "image": 1, "_id": 1}
AUTHOR_FIELDS = {"name": 1, "image": 1, "id": 1}


async def fetch_user_posts(user_id: str) -> Optional[UserWithThreads]:
    """
    Return the user with `threads` expanded, or None if the user does not exist.

    Each thread carries its community (name, id, image) and its replies, each
    reply carrying its author (name, image, id). Every level is fetched with
    one query; the community and reply lookups run concurrently.
    """
    db = await ensure_connected()

    try:
        user = await db.users.find_one({"id": user_id})
        if not user:
            return None

        threads = await populate(db.threads, user.get("threads", []))

        communities, replies = await asyncio.gather(
            populate(db.communities, [t.get("community") for t in threads], COMMUNITY_FIELDS),
            populate(db.threads, [c for t in threads for c in t.get("children", [])]),
        )
        authors = await populate(
            db.users, [r.get("author") for r in replies], AUTHOR_FIELDS, key="id"
        )
    except PyMongoError as e:
        logger.error(f"Error fetching threads of user {user_id}: {e}")
        raise AggregationFailure(str(e)) from e

    communities_by_id = index_by(communities)
    replies_by_id = index_by(replies)
    authors_by_id = index_by(authors, "id")

    def expand_reply(reply: Dict[str, Any]) -> Dict[str, Any]:
        return {**reply, "author": authors_by_id.get(reply.get("author"))}

    user["threads"] = [
        {
            **thread,
            "community": communities_by_id.get(thread.get("community")),
            "children": [
                expand_reply(replies_by_id[c])
                for c in thread.get("children", [])
                if c in replies_by_id
            ],
        }
        for thread in threads
    ]
    return UserWithThreads.model_validate(user)
