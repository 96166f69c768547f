from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..domain import ChangeEvent, Comment, Post


class PostPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    title: str
    content: str = Field(default="")
    cover_image: Optional[str] = Field(default=None)
    author_id: Optional[str] = Field(default=None)
    likes: int = Field(default=0)
    created_at: Optional[datetime] = Field(default=None)

    @classmethod
    def from_domain(cls, post: Post) -> "PostPayload":
        return cls(
            id=post.id,
            title=post.title,
            content=post.content,
            cover_image=post.cover_image,
            author_id=post.author_id,
            likes=post.likes,
            created_at=post.created_at,
        )


class CommentPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    post_id: int
    name: str
    comment: str
    created_at: Optional[datetime] = Field(default=None)

    @classmethod
    def from_domain(cls, comment: Comment) -> "CommentPayload":
        return cls(
            id=comment.id,
            post_id=comment.post_id,
            name=comment.name,
            comment=comment.comment,
            created_at=comment.created_at,
        )


class SessionPayload(BaseModel):
    user_id: Optional[str] = Field(default=None)
    email: Optional[str] = Field(default=None)
    access_token: Optional[str] = Field(default=None)
    refresh_token: Optional[str] = Field(default=None)
    token_type: Optional[str] = Field(default=None)
    expires_at: Optional[int] = Field(default=None)

    @classmethod
    def from_session(cls, session: Any) -> "SessionPayload":
        user = getattr(session, "user", None)
        user_id = getattr(user, "id", None)
        return cls(
            user_id=str(user_id) if user_id else None,
            email=getattr(user, "email", None),
            access_token=getattr(session, "access_token", None),
            refresh_token=getattr(session, "refresh_token", None),
            token_type=getattr(session, "token_type", None),
            expires_at=getattr(session, "expires_at", None),
        )


class ChangeEventPayload(BaseModel):
    type: str
    table: str
    schema_name: str = Field(default="public", alias="schema")
    record: Dict[str, Any] = Field(default_factory=dict)
    old_record: Dict[str, Any] = Field(default_factory=dict)
    commit_timestamp: Optional[datetime] = Field(default=None)

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_domain(cls, event: ChangeEvent) -> "ChangeEventPayload":
        return cls(
            type=event.type.value,
            table=event.table,
            schema_name=event.schema,
            record=event.record,
            old_record=event.old_record,
            commit_timestamp=event.commit_timestamp,
        )
