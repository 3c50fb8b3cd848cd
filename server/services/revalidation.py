"""
Route revalidation signal.

Writes that change what a cached page shows call revalidate_path(path). The
web layer decides what that means by registering callbacks; with none
registered the signal is only logged.
"""
import inspect
import logging
from typing import Any, Callable, List

logger = logging.getLogger(__name__)

Revalidator = Callable[[str], Any]

_revalidators: List[Revalidator] = []


def register_revalidator(callback: Revalidator) -> None:
    """Register a sync or async callback taking the route path."""
    _revalidators.append(callback)


def clear_revalidators() -> None:
    _revalidators.clear()


async def revalidate_path(path: str) -> None:
    """
    Fire the invalidation signal for `path`.

    Callback errors are logged and never reach the caller: the write that
    triggered the signal has already succeeded.
    """
    logger.info(f"Revalidating path: {path}")
    for callback in list(_revalidators):
        try:
            result = callback(path)
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            logger.error(f"Revalidation callback failed for {path}: {e}")
