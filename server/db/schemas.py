from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from bson import ObjectId
from pydantic import BaseModel, Field, ConfigDict


class PyObjectId(ObjectId):
    """Custom type for handling MongoDB ObjectId in Pydantic models."""

    @classmethod
    def __get_pydantic_core_schema__(cls, _source_type, _handler):
        from pydantic_core import core_schema
        return core_schema.union_schema([
            core_schema.is_instance_schema(ObjectId),
            core_schema.chain_schema([
                core_schema.str_schema(),
                core_schema.no_info_plain_validator_function(cls.validate),
            ])
        ], serialization=core_schema.plain_serializer_function_ser_schema(str))

    @classmethod
    def validate(cls, v):
        if isinstance(v, ObjectId):
            return v
        if isinstance(v, str):
            return ObjectId(v)
        raise ValueError("Invalid ObjectId")


class MongoModel(BaseModel):
    """Base model for MongoDB documents with ObjectId support.

    `id` is taken by the external identity on users and communities, so the
    store's own `_id` lives on `object_id`.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        arbitrary_types_allowed=True,
        json_encoders={ObjectId: str}
    )

    object_id: Optional[PyObjectId] = Field(default=None, alias="_id")


# ----- Communities -----

class CommunitySummary(MongoModel):
    """Community projection used inside expanded threads (name, id, image)."""

    id: str
    name: str
    image: Optional[str] = None


class Community(CommunitySummary):
    """Community document. Read-only from the user actions."""

    username: Optional[str] = None
    bio: Optional[str] = None
    created_by: Optional[str] = None
    members: List[str] = Field(default_factory=list)


# ----- Users -----

class AuthorSummary(MongoModel):
    """User projection used for thread authors (name, image, id)."""

    id: str
    name: str
    image: Optional[str] = None


class User(MongoModel):
    """User document, keyed by the external identity `id`."""

    id: str
    username: str
    name: str
    bio: Optional[str] = None
    image: Optional[str] = None
    onboarded: bool = False
    threads: List[PyObjectId] = Field(default_factory=list)
    communities: List[PyObjectId] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ----- Threads -----

class Thread(MongoModel):
    """Thread (post) document. `author` holds the author's external id."""

    text: str = ""
    author: str
    community: Optional[PyObjectId] = None
    parent_id: Optional[PyObjectId] = None
    children: List[PyObjectId] = Field(default_factory=list)
    created_at: Optional[datetime] = None


class ThreadReply(Thread):
    """Thread with its author expanded."""

    author: Optional[AuthorSummary] = None


class UserThread(Thread):
    """Thread with its community and replies expanded."""

    community: Optional[CommunitySummary] = None
    children: List[ThreadReply] = Field(default_factory=list)


# ----- Expanded users / results -----

class UserWithCommunities(User):
    communities: List[Community] = Field(default_factory=list)


class UserWithThreads(User):
    threads: List[UserThread] = Field(default_factory=list)


class UserSearchPage(BaseModel):
    """One page of user search results."""

    users: List[User]
    is_next: bool
