from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .supabase import SupabaseConnection


@dataclass(slots=True)
class ImageBucket:
    connection: SupabaseConnection
    bucket_name: str

    async def upload(self, path: str, content: bytes, *, content_type: Optional[str] = None) -> None:
        client = await self.connection.ensure_client()
        options = {"content-type": content_type} if content_type else None
        await client.storage.from_(self.bucket_name).upload(path, content, options)

    async def public_url(self, path: str) -> str:
        client = await self.connection.ensure_client()
        url = await client.storage.from_(self.bucket_name).get_public_url(path)
        return url or ""
