from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional

from supabase import PostgrestAPIError

from ..domain import ErrorKind, Post, Result
from .context import ServiceContext
from .errors import is_no_rows, malformed_failure, postgrest_failure

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PostService:
    context: ServiceContext

    async def fetch_posts(self) -> Result[List[Post]]:
        """Return every post, newest first."""

        try:
            records = await self.context.posts.list_newest_first()
        except PostgrestAPIError as exc:
            logger.error("Error fetching posts: %s", exc.message)
            return postgrest_failure(exc)
        try:
            return Result.success([Post.from_record(record) for record in records])
        except (KeyError, TypeError, ValueError) as exc:
            logger.error("Error reading posts: %s", exc)
            return malformed_failure("post", exc)

    async def fetch_post(self, post_id: int) -> Result[Optional[Post]]:
        """Return a single post; a missing row is a successful ``None``."""

        try:
            record = await self.context.posts.fetch(post_id)
        except PostgrestAPIError as exc:
            if is_no_rows(exc):
                return Result.success(None)
            logger.error("Error fetching post %s: %s", post_id, exc.message)
            return postgrest_failure(exc)
        try:
            return Result.success(Post.from_record(record) if record else None)
        except (KeyError, TypeError, ValueError) as exc:
            logger.error("Error reading post %s: %s", post_id, exc)
            return malformed_failure("post", exc)

    async def create_post(self, post_data: Mapping[str, Any]) -> Result[Post]:
        try:
            record = await self.context.posts.insert(post_data)
        except PostgrestAPIError as exc:
            logger.error("Error creating post: %s", exc.message)
            return postgrest_failure(exc)
        if not record:
            logger.error("Error creating post: insert returned no row")
            return Result.failure(ErrorKind.BACKEND, "Insert returned no row.")
        try:
            return Result.success(Post.from_record(record))
        except (KeyError, TypeError, ValueError) as exc:
            logger.error("Error reading created post: %s", exc)
            return malformed_failure("post", exc)

    async def update_post(self, post_id: int, updates: Mapping[str, Any]) -> Result[Post]:
        """Update a post and confirm every requested field was stored as sent.

        Row-level policies can accept the write while leaving a column
        unchanged, so a mismatch between ``updates`` and the returned row is
        reported as a ``VERIFICATION`` failure.
        """

        logger.debug("Attempting to update post %s with %s", post_id, dict(updates))
        try:
            try:
                existing = await self.context.posts.fetch(post_id)
            except PostgrestAPIError as exc:
                logger.error("Error checking post existence for %s: %s", post_id, exc.message)
                kind = ErrorKind.NOT_FOUND if is_no_rows(exc) else ErrorKind.BACKEND
                return postgrest_failure(exc, kind)
            if not existing:
                logger.error("Post %s not found or not accessible", post_id)
                return Result.failure(ErrorKind.NOT_FOUND, f"Post {post_id} not found or not accessible.")
            logger.debug("Existing post data: %s", existing)

            try:
                updated = await self.context.posts.update(post_id, updates)
            except PostgrestAPIError as exc:
                logger.error("Error updating post %s: %s", post_id, exc.message)
                return postgrest_failure(exc)
            if not updated:
                logger.error("Update of post %s returned no row", post_id)
                return Result.failure(ErrorKind.VERIFICATION, f"Update of post {post_id} returned no row.")
            logger.debug("Updated post data: %s", updated)

            mismatched = sorted(key for key in updates if updates[key] != updated.get(key))
            if mismatched:
                logger.error(
                    "Update verification failed for post %s; expected %s, got %s",
                    post_id,
                    dict(updates),
                    updated,
                )
                return Result.failure(
                    ErrorKind.VERIFICATION,
                    "Some fields did not update correctly.",
                    details={"fields": mismatched},
                )
            try:
                return Result.success(Post.from_record(updated))
            except (KeyError, TypeError, ValueError) as exc:
                logger.error("Error reading updated post %s: %s", post_id, exc)
                return malformed_failure("post", exc)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Unexpected error updating post %s", post_id)
            return Result.failure(ErrorKind.UNEXPECTED, str(exc))

    async def delete_post(self, post_id: int) -> Result[None]:
        try:
            await self.context.posts.delete(post_id)
        except PostgrestAPIError as exc:
            logger.error("Error deleting post %s: %s", post_id, exc.message)
            return postgrest_failure(exc)
        return Result.success(None)

    async def increment_likes(self, post_id: int) -> Result[None]:
        """Bump the like counter through the server-side function."""

        try:
            await self.context.posts.increment_likes(post_id)
        except PostgrestAPIError as exc:
            logger.error("Error incrementing likes for post %s: %s", post_id, exc.message)
            return postgrest_failure(exc)
        return Result.success(None)
