"""
Users API - profiles, user search, a user's threads and their activity feed.
"""
import logging
from typing import List, Literal, Optional

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

from db.schemas import ThreadReply, UserSearchPage, UserWithCommunities, UserWithThreads
from exceptions import ConnectionFailure, ThreadsError
from services.activity import get_activity
from services.user_profile import fetch_user, update_user
from services.user_search import fetch_users
from services.user_threads import fetch_user_posts

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])


class ProfileUpdate(BaseModel):
    """Body for PUT /api/users/{user_id}."""

    username: str
    name: str
    bio: str = ""
    image: str = ""
    path: str = ""


def _to_http_error(e: ThreadsError) -> HTTPException:
    logger.error(f"{e.operation} failed: {e}")
    if isinstance(e, ConnectionFailure):
        return HTTPException(status_code=503, detail=str(e))
    return HTTPException(status_code=500, detail=str(e))


@router.get("", response_model=UserSearchPage)
async def search_users(
    user_id: str = Query(..., description="User performing the search; excluded from results"),
    q: str = Query("", description="Case-insensitive text matched against username and name"),
    page: int = Query(1, ge=1, description="1-indexed page number"),
    page_size: int = Query(20, ge=1, le=100, description="Users per page"),
    sort: Literal["asc", "desc"] = Query("desc", description="Creation time order"),
):
    """Search users other than the caller, newest first by default."""
    try:
        return await fetch_users(
            user_id,
            search_string=q,
            page_number=page,
            page_size=page_size,
            sort_by=sort,
        )
    except ThreadsError as e:
        raise _to_http_error(e)


@router.put("/{user_id}")
async def put_user(user_id: str, body: ProfileUpdate):
    """Create or update a profile and mark the user onboarded."""
    try:
        await update_user(
            user_id,
            username=body.username,
            name=body.name,
            bio=body.bio,
            image=body.image,
            path=body.path,
        )
    except ThreadsError as e:
        raise _to_http_error(e)
    return {"status": "ok", "data": {"id": user_id}}


@router.get("/{user_id}", response_model=UserWithCommunities)
async def get_user(user_id: str):
    """Get a user with their communities."""
    try:
        user: Optional[UserWithCommunities] = await fetch_user(user_id)
    except ThreadsError as e:
        raise _to_http_error(e)
    if user is None:
        raise HTTPException(status_code=404, detail=f"User not found: {user_id}")
    return user


@router.get("/{user_id}/threads", response_model=UserWithThreads)
async def get_user_threads(user_id: str):
    """Get a user with their threads, each thread's community and replies."""
    try:
        user = await fetch_user_posts(user_id)
    except ThreadsError as e:
        raise _to_http_error(e)
    if user is None:
        raise HTTPException(status_code=404, detail=f"User not found: {user_id}")
    return user


@router.get("/{user_id}/activity", response_model=List[ThreadReply])
async def get_user_activity(user_id: str):
    """Replies other users left on this user's threads."""
    try:
        return await get_activity(user_id)
    except ThreadsError as e:
        raise _to_http_error(e)
