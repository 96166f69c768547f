from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional

from supabase import AsyncClient

from .config import AppSettings, StorageSettings, get_settings
from .data import SupabaseConnection
from .domain import Comment, Post, Result, UploadedAsset, parse_timestamp
from .services import (
    AuthService,
    ChangeSubscription,
    CommentService,
    MediaService,
    PostService,
    RealtimeService,
    ServiceContext,
)
from .services.media import FileSource
from .services.realtime import ChangeCallback


def format_date(iso_string: str) -> str:
    """Render an ISO timestamp as a locale date string."""

    return parse_timestamp(iso_string).strftime("%x")


@dataclass(slots=True)
class BackendGateway:
    """Single entry point for the blog front-end: auth, posts, comments, images and live updates."""

    context: ServiceContext
    auth: AuthService = field(init=False)
    posts: PostService = field(init=False)
    comments: CommentService = field(init=False)
    media: MediaService = field(init=False)
    realtime: RealtimeService = field(init=False)

    def __post_init__(self) -> None:
        self.auth = AuthService(self.context)
        self.posts = PostService(self.context)
        self.comments = CommentService(self.context)
        self.media = MediaService(self.context, self.auth)
        self.realtime = RealtimeService(self.context)

    @classmethod
    def from_client(cls, client: AsyncClient, *, storage: Optional[StorageSettings] = None) -> "BackendGateway":
        connection = SupabaseConnection.from_client(client)
        return cls(ServiceContext(connection=connection, storage=storage or StorageSettings()))

    @classmethod
    def from_settings(cls, settings: Optional[AppSettings] = None) -> "BackendGateway":
        """Build a gateway whose client is created on first use from ``settings``."""

        resolved = settings or get_settings()
        connection = SupabaseConnection(settings=resolved.supabase)
        return cls(ServiceContext(connection=connection, storage=resolved.storage))

    # Auth

    async def login(self, email: str, password: str) -> Result[Any]:
        return await self.auth.login(email, password)

    async def get_session(self) -> Optional[Any]:
        return await self.auth.get_session()

    async def is_logged_in(self) -> bool:
        return await self.auth.is_logged_in()

    async def logout(self) -> Result[None]:
        return await self.auth.logout()

    async def get_user_id(self) -> Optional[str]:
        return await self.auth.current_user_id()

    # Posts

    async def fetch_posts(self) -> Result[List[Post]]:
        return await self.posts.fetch_posts()

    async def fetch_post(self, post_id: int) -> Result[Optional[Post]]:
        return await self.posts.fetch_post(post_id)

    async def create_post(self, post_data: Mapping[str, Any]) -> Result[Post]:
        return await self.posts.create_post(post_data)

    async def update_post(self, post_id: int, updates: Mapping[str, Any]) -> Result[Post]:
        return await self.posts.update_post(post_id, updates)

    async def delete_post(self, post_id: int) -> Result[None]:
        return await self.posts.delete_post(post_id)

    async def increment_likes(self, post_id: int) -> Result[None]:
        return await self.posts.increment_likes(post_id)

    # Comments

    async def fetch_comments(self, post_id: int) -> Result[List[Comment]]:
        return await self.comments.fetch_comments(post_id)

    async def create_comment(self, comment_data: Mapping[str, Any]) -> Result[Comment]:
        return await self.comments.create_comment(comment_data)

    # Storage

    async def upload_file_and_get_url(
        self,
        file: FileSource,
        *,
        filename: Optional[str] = None,
        content_type: Optional[str] = None,
    ) -> Result[UploadedAsset]:
        return await self.media.upload_file_and_get_url(file, filename=filename, content_type=content_type)

    # Realtime

    async def subscribe_to_posts(self, callback: ChangeCallback) -> ChangeSubscription:
        return await self.realtime.subscribe_to_posts(callback)

    async def subscribe_to_post_comments(self, post_id: int, callback: ChangeCallback) -> ChangeSubscription:
        return await self.realtime.subscribe_to_post_comments(post_id, callback)
