"""Supabase table repositories."""

from __future__ import annotations

from .comments import CommentRepository
from .posts import PostRepository

__all__ = ["CommentRepository", "PostRepository"]
