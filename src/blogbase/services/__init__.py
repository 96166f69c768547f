"""Application services wrapping the data layer in structured results."""

from __future__ import annotations

from .auth import AuthService
from .comments import CommentService
from .context import ServiceContext
from .media import MediaService
from .posts import PostService
from .realtime import ChangeSubscription, RealtimeService

__all__ = [
    "AuthService",
    "ChangeSubscription",
    "CommentService",
    "MediaService",
    "PostService",
    "RealtimeService",
    "ServiceContext",
]
