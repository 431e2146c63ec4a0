from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from post_service.models import EntityStatus


class CamelModel(BaseModel):
    """Accepts and emits camelCase field names (``authorId``) on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Post ---

class PostCreate(CamelModel):
    author_id: str
    content: str
    hashtags: list[str] = []
    images: list[str] = []


class PostUpdate(CamelModel):
    # author_id is accepted so it can be dropped by the service layer.
    author_id: str | None = None
    content: str | None = None
    hashtags: list[str] | None = None
    images: list[str] | None = None


class PostResponse(CamelModel):
    id: str
    author_id: str
    content: str
    hashtags: list[str] = []
    images: list[str] = []
    status: EntityStatus
    like_count: int
    comment_count: int
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


# --- Comment ---

class CommentCreate(CamelModel):
    post_id: str
    parent_comment_id: str | None = None
    author_id: str
    text: str


class CommentUpdate(CamelModel):
    # Only text is writable; the reference fields are stripped by the service.
    text: str | None = None
    post_id: str | None = None
    author_id: str | None = None
    parent_comment_id: str | None = None


class CommentResponse(CamelModel):
    id: str
    post_id: str
    parent_comment_id: str | None = None
    author_id: str
    text: str
    status: EntityStatus
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


class CommentTree(CommentResponse):
    replies: list[CommentTree] = Field(default_factory=list)


# --- Like ---

class LikeCreate(CamelModel):
    post_id: str
    user_id: str


class LikeResponse(CamelModel):
    id: str
    post_id: str
    user_id: str
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


class ToggleLikeRequest(CamelModel):
    # Optional here so a missing userId reaches the controller and maps to 400.
    user_id: str | None = None


class LikeCheckResponse(CamelModel):
    is_liked: bool


# --- Envelopes ---

class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    message: str
    error: str | None = None


CommentTree.model_rebuild()
