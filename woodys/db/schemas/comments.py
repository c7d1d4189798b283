from __future__ import annotations

from datetime import datetime
from pydantic import BaseModel, ConfigDict


class CommentCreate(BaseModel):
    content: str
    rating: int = 0


class CommentUpdate(BaseModel):
    content: str | None = None
    rating: int | None = None


class Comment(BaseModel):
    id: int
    project_id: int
    user_id: int
    parent_comment_id: int | None = None
    content: str
    rating: int
    is_deleted: bool
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


class CommentWithAuthor(Comment):
    """Comment annotated for display: author details, reply count and replies."""

    username: str | None = None
    user_reputation: float | None = None
    reply_count: int = 0
    replies: list[CommentWithAuthor] | None = None
