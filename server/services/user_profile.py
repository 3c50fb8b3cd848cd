"""
User profile actions: create/update a profile and fetch a single user.
"""
import logging
from datetime import datetime, timezone
from typing import Optional

from pymongo.errors import PyMongoError

from db.connection import ensure_connected
from db.populate import populate
from db.schemas import UserWithCommunities
from exceptions import ReadFailure, WriteFailure
from modules.config import ConfigEnv
from services.revalidation import revalidate_path

logger = logging.getLogger(__name__)


async def update_user(
    user_id: str,
    username: str,
    name: str,
    bio: str,
    image: str,
    path: str,
) -> None:
    """
    Create or update the user identified by `user_id` and mark it onboarded.

    Args:
        user_id: External identity of the user.
        username: Stored lower-cased.
        name: Display name.
        bio: Profile bio.
        image: Profile image URL.
        path: Route the edit came from; the profile edit route is revalidated.

    Raises:
        ConnectionFailure: MongoDB is not reachable.
        WriteFailure: The upsert failed.
    """
    db = await ensure_connected()

    now = datetime.now(timezone.utc)
    try:
        await db.users.find_one_and_update(
            {"id": user_id},
            {
                "$set": {
                    "username": username.lower(),
                    "name": name,
                    "bio": bio,
                    "image": image,
                    "onboarded": True,
                    "updated_at": now,
                },
                "$setOnInsert": {
                    "created_at": now,
                    "threads": [],
                    "communities": [],
                },
            },
            upsert=True,
        )
    except PyMongoError as e:
        logger.error(f"Error updating user {user_id}: {e}")
        raise WriteFailure(str(e)) from e

    logger.info(f"Saved profile for user {user_id}")

    if path == ConfigEnv.PROFILE_EDIT_PATH:
        await revalidate_path(path)


async def fetch_user(user_id: str) -> Optional[UserWithCommunities]:
    """Fetch a user by external id with its communities expanded. None if absent."""
    db = await ensure_connected()

    try:
        user = await db.users.find_one({"id": user_id})
        if not user:
            return None
        user["communities"] = await populate(db.communities, user.get("communities", []))
    except PyMongoError as e:
        logger.error(f"Error fetching user {user_id}: {e}")
        raise ReadFailure(str(e)) from e

    return UserWithCommunities.model_validate(user)
