from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from ..supabase import SupabaseConnection

Record = Dict[str, Any]


@dataclass(slots=True)
class PostRepository:
    connection: SupabaseConnection
    table_name: str
    likes_function: str

    async def list_newest_first(self) -> List[Record]:
        table = await self.connection.table(self.table_name)
        response = await table.select("*").order("created_at", desc=True).execute()
        return list(response.data or [])

    async def fetch(self, post_id: int) -> Optional[Record]:
        """Return the row for ``post_id``; PostgREST raises ``PGRST116`` when it is missing."""

        table = await self.connection.table(self.table_name)
        response = await table.select("*").eq("id", post_id).single().execute()
        return response.data or None

    async def insert(self, payload: Mapping[str, Any]) -> Optional[Record]:
        table = await self.connection.table(self.table_name)
        response = await table.insert(dict(payload)).execute()
        rows = response.data or []
        return rows[0] if rows else None

    async def update(self, post_id: int, updates: Mapping[str, Any]) -> Optional[Record]:
        table = await self.connection.table(self.table_name)
        response = await table.update(dict(updates)).eq("id", post_id).execute()
        rows = response.data or []
        return rows[0] if rows else None

    async def delete(self, post_id: int) -> None:
        table = await self.connection.table(self.table_name)
        await table.delete().eq("id", post_id).execute()

    async def increment_likes(self, post_id: int) -> None:
        client = await self.connection.ensure_client()
        await client.rpc(self.likes_function, {"post_id": post_id}).execute()
