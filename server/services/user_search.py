"""
Paginated user search.

Matches the search text as a case-insensitive literal substring of the
username or display name, excluding the user who is searching.
"""
import asyncio
import logging
import re
from typing import Any, Dict, Union

import pymongo
from pymongo.errors import PyMongoError

from db.connection import ensure_connected
from db.schemas import User, UserSearchPage
from exceptions import SearchFailure

logger = logging.getLogger(__name__)

SortOrder = Union[str, int]

_SORT_DIRECTIONS = {
    "asc": pymongo.ASCENDING,
    "ascending": pymongo.ASCENDING,
    "desc": pymongo.DESCENDING,
    "descending": pymongo.DESCENDING,
    1: pymongo.ASCENDING,
    -1: pymongo.DESCENDING,
}


def sort_direction(sort_by: SortOrder) -> int:
    """Map "asc"/"desc" (or 1/-1) to a pymongo sort direction."""
    key = sort_by.strip().lower() if isinstance(sort_by, str) else sort_by
    try:
        return _SORT_DIRECTIONS[key]
    except (KeyError, TypeError):
        raise ValueError(f"Invalid sort direction: {sort_by!r}") from None


def build_search_filter(user_id: str, search_string: str = "") -> Dict[str, Any]:
    """Filter excluding `user_id`, narrowed to username/name matches when text is given."""
    query: Dict[str, Any] = {"id": {"$ne": user_id}}
    if search_string.strip() != "":
        regex = re.compile(re.escape(search_string), re.IGNORECASE)
        query["$or"] = [
            {"username": {"$regex": regex}},
            {"name": {"$regex": regex}},
        ]
    return query


async def fetch_users(
    user_id: str,
    search_string: str = "",
    page_number: int = 1,
    page_size: int = 20,
    sort_by: SortOrder = "desc",
) -> UserSearchPage:
    """
    Search users other than `user_id`, one page at a time.

    Pages are 1-indexed and ordered by creation time (ties broken by _id so
    consecutive pages never overlap). `is_next` is True while more matches
    remain after this page.

    Raises:
        ValueError: page_number or page_size below 1, or unknown sort_by.
        ConnectionFailure: MongoDB is not reachable.
        SearchFailure: The page or count query failed.
    """
    if page_number < 1:
        raise ValueError(f"page_number must be >= 1, got {page_number}")
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")
    direction = sort_direction(sort_by)

    db = await ensure_connected()

    skip_amount = (page_number - 1) * page_size
    query = build_search_filter(user_id, search_string)

    try:
        cursor = (
            db.users.find(query)
            .sort([("created_at", direction), ("_id", direction)])
            .skip(skip_amount)
            .limit(page_size)
        )
        total_users_count, users = await asyncio.gather(
            db.users.count_documents(query),
            cursor.to_list(length=page_size),
        )
    except PyMongoError as e:
        logger.error(f"Error searching users for {user_id}: {e}")
        raise SearchFailure(str(e)) from e

    is_next = total_users_count > skip_amount + len(users)
    return UserSearchPage(
        users=[User.model_validate(u) for u in users],
        is_next=is_next,
    )
