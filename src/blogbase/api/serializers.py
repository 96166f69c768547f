from __future__ import annotations

from typing import Any, Dict, Optional

from ..domain import ChangeEvent, Comment, Post
from .models import ChangeEventPayload, CommentPayload, PostPayload, SessionPayload


def serialize_post(post: Post) -> Dict[str, Any]:
    return PostPayload.from_domain(post).model_dump(mode="json")


def serialize_comment(comment: Comment) -> Dict[str, Any]:
    return CommentPayload.from_domain(comment).model_dump(mode="json")


def serialize_session(session: Any) -> Optional[Dict[str, Any]]:
    if session is None:
        return None
    return SessionPayload.from_session(session).model_dump(mode="json")


def serialize_change(event: ChangeEvent) -> Dict[str, Any]:
    return ChangeEventPayload.from_domain(event).model_dump(mode="json", by_alias=True)
