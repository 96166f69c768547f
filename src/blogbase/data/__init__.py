"""Data access layer."""

from __future__ import annotations

from .realtime import ChangeFeed
from .repositories import CommentRepository, PostRepository
from .storage import ImageBucket
from .supabase import SupabaseConnection, SupabaseNotConfiguredError

__all__ = [
    "ChangeFeed",
    "CommentRepository",
    "ImageBucket",
    "PostRepository",
    "SupabaseConnection",
    "SupabaseNotConfiguredError",
]
