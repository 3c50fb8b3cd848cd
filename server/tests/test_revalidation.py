"""Tests for the route revalidation signal."""

from unittest.mock import AsyncMock, Mock

import pytest

from services.revalidation import clear_revalidators, register_revalidator, revalidate_path


@pytest.mark.asyncio
async def test_no_callbacks_is_a_no_op():
    await revalidate_path("/profile/edit")


@pytest.mark.asyncio
async def test_sync_and_async_callbacks_receive_path():
    sync_cb = Mock()
    async_cb = AsyncMock()
    register_revalidator(sync_cb)
    register_revalidator(async_cb)

    await revalidate_path("/profile/edit")

    sync_cb.assert_called_once_with("/profile/edit")
    async_cb.assert_awaited_once_with("/profile/edit")


@pytest.mark.asyncio
async def test_failing_callback_does_not_stop_others():
    after = Mock()
    register_revalidator(Mock(side_effect=RuntimeError("boom")))
    register_revalidator(after)

    await revalidate_path("/profile/edit")

    after.assert_called_once_with("/profile/edit")


@pytest.mark.asyncio
async def test_clear_revalidators():
    cb = Mock()
    register_revalidator(cb)
    clear_revalidators()

    await revalidate_path("/profile/edit")

    cb.assert_not_called()
