"""Tests for the activity feed."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from pymongo.errors import OperationFailure

from exceptions import ActivityFailure
from services.activity import get_activity


@pytest.mark.asyncio
async def test_reply_by_other_user_shows_up(fake_db, make_user, make_thread):
    make_user("u1")
    make_user("u2", name="Bob", image="bob.png")
    p1 = make_thread("u1", text="P1")
    p2 = make_thread("u2", text="P2", parent=p1)

    activity_u1 = await get_activity("u1")
    activity_u2 = await get_activity("u2")

    assert [r.object_id for r in activity_u1] == [p2]
    assert activity_u1[0].author.id == "u2"
    assert activity_u1[0].author.name == "Bob"
    assert activity_u1[0].author.image == "bob.png"
    assert activity_u2 == []


@pytest.mark.asyncio
async def test_self_replies_are_excluded(fake_db, make_user, make_thread):
    make_user("u1")
    make_user("u2")
    p1 = make_thread("u1")
    make_thread("u1", text="me again", parent=p1)
    other = make_thread("u2", text="nice", parent=p1)

    activity = await get_activity("u1")

    assert [r.object_id for r in activity] == [other]
    assert all(r.author.id != "u1" for r in activity)


@pytest.mark.asyncio
async def test_replies_across_threads_newest_first(fake_db, make_user, make_thread):
    make_user("u1")
    make_user("u2")
    make_user("u3")
    p1 = make_thread("u1")
    p2 = make_thread("u1")
    r1 = make_thread("u2", parent=p1)
    r2 = make_thread("u3", parent=p2)
    r3 = make_thread("u3", parent=p1)

    activity = await get_activity("u1")

    assert [r.object_id for r in activity] == [r3, r2, r1]


@pytest.mark.asyncio
async def test_no_threads_means_no_activity(fake_db, make_user):
    make_user("u1")
    assert await get_activity("u1") == []


@pytest.mark.asyncio
async def test_store_errors_are_wrapped():
    db = MagicMock()
    db.threads.find = MagicMock(side_effect=OperationFailure("cursor killed"))
    with patch("services.activity.ensure_connected", AsyncMock(return_value=db)):
        with pytest.raises(ActivityFailure) as exc_info:
            await get_activity("u1")

    assert str(exc_info.value) == "Error in fetching activity: cursor killed"
    assert exc_info.value.detail == "cursor killed"
