"""Resolve reference fields into the documents they point to."""

from typing import Any, Dict, Iterable, List, Optional

from motor.motor_asyncio import AsyncIOMotorCollection


def _with_key(projection: Optional[Dict[str, Any]], key: str) -> Optional[Dict[str, Any]]:
    """Return an inclusion projection that always keeps the lookup key."""
    if projection is None:
        return None
    out = dict(projection)
    out[key] = 1
    return out


async def populate(
    collection: AsyncIOMotorCollection,
    refs: Iterable[Any],
    projection: Optional[Dict[str, Any]] = None,
    *,
    key: str = "_id",
) -> List[Dict[str, Any]]:
    """
    Fetch the documents referenced by `refs` with a single $in query.

    Results follow the order of `refs`: a repeated reference yields the
    document again, a dangling reference is dropped.
    """
    refs = [ref for ref in refs if ref is not None]
    if not refs:
        return []
    distinct = list(dict.fromkeys(refs))
    cursor = collection.find({key: {"$in": distinct}}, _with_key(projection, key))
    docs = await cursor.to_list(length=None)
    by_key = {doc[key]: doc for doc in docs}
    return [by_key[ref] for ref in refs if ref in by_key]


def index_by(docs: Iterable[Dict[str, Any]], key: str = "_id") -> Dict[Any, Dict[str, Any]]:
    """Map documents by `key` for joining already-fetched references."""
    return {doc[key]: doc for doc in docs}
