from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable

from ..config import StorageSettings
from ..data import ChangeFeed, CommentRepository, ImageBucket, PostRepository, SupabaseConnection


@dataclass(slots=True)
class ServiceContext:
    """Aggregate root for services to share the connection and repositories."""

    connection: SupabaseConnection
    storage: StorageSettings = field(default_factory=StorageSettings)
    clock: Callable[[], float] = time.time
    posts: PostRepository = field(init=False)
    comments: CommentRepository = field(init=False)
    images: ImageBucket = field(init=False)
    feed: ChangeFeed = field(init=False)

    def __post_init__(self) -> None:
        self.posts = PostRepository(
            connection=self.connection,
            table_name=self.storage.posts_table,
            likes_function=self.storage.likes_function,
        )
        self.comments = CommentRepository(
            connection=self.connection,
            table_name=self.storage.comments_table,
        )
        self.images = ImageBucket(
            connection=self.connection,
            bucket_name=self.storage.images_bucket,
        )
        self.feed = ChangeFeed(connection=self.connection)
