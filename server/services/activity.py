"""Activity feed: replies written by other users on a user's own threads."""
import logging
from typing import List

import pymongo
from pymongo.errors import PyMongoError

from db.connection import ensure_connected
from db.populate import index_by, populate
from db.schemas import ThreadReply
from exceptions import ActivityFailure

logger = logging.getLogger(__name__)

AUTHOR_FIELDS = {"name": 1, "image": 1, "id": 1}


async def get_activity(user_id: str) -> List[ThreadReply]:
    """
    Return replies to `user_id`'s threads authored by someone else, newest first.

    Self-replies are never included.
    """
    db = await ensure_connected()

    try:
        child_thread_ids = []
        async for thread in db.threads.find({"author": user_id}, {"children": 1}):
            child_thread_ids.extend(thread.get("children", []))

        if not child_thread_ids:
            return []

        replies = await db.threads.find(
            {"_id": {"$in": child_thread_ids}, "author": {"$ne": user_id}}
        ).sort("created_at", pymongo.DESCENDING).to_list(length=None)

        authors = await populate(
            db.users, [r.get("author") for r in replies], AUTHOR_FIELDS, key="id"
        )
    except PyMongoError as e:
        logger.error(f"Error fetching activity for {user_id}: {e}")
        raise ActivityFailure(str(e)) from e

    authors_by_id = index_by(authors, "id")
    return [
        ThreadReply.model_validate({**reply, "author": authors_by_id.get(reply.get("author"))})
        for reply in replies
    ]
