from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Mapping

from supabase import PostgrestAPIError

from ..domain import Comment, ErrorKind, Result
from .context import ServiceContext
from .errors import malformed_failure, postgrest_failure

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CommentService:
    context: ServiceContext

    async def fetch_comments(self, post_id: int) -> Result[List[Comment]]:
        """Comments for a post, oldest first so new ones append at the end."""

        try:
            records = await self.context.comments.list_for_post(post_id)
        except PostgrestAPIError as exc:
            logger.error("Error fetching comments for post %s: %s", post_id, exc.message)
            return postgrest_failure(exc)
        try:
            return Result.success([Comment.from_record(record) for record in records])
        except (KeyError, TypeError, ValueError) as exc:
            logger.error("Error reading comments for post %s: %s", post_id, exc)
            return malformed_failure("comment", exc)

    async def create_comment(self, comment_data: Mapping[str, Any]) -> Result[Comment]:
        try:
            record = await self.context.comments.insert(comment_data)
        except PostgrestAPIError as exc:
            logger.error("Error creating comment: %s", exc.message)
            return postgrest_failure(exc)
        if not record:
            logger.error("Error creating comment: insert returned no row")
            return Result.failure(ErrorKind.BACKEND, "Insert returned no row.")
        try:
            return Result.success(Comment.from_record(record))
        except (KeyError, TypeError, ValueError) as exc:
            logger.error("Error reading created comment: %s", exc)
            return malformed_failure("comment", exc)
