from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from ..supabase import SupabaseConnection

Record = Dict[str, Any]


@dataclass(slots=True)
class CommentRepository:
    connection: SupabaseConnection
    table_name: str

    async def list_for_post(self, post_id: int) -> List[Record]:
        table = await self.connection.table(self.table_name)
        response = await table.select("*").eq("post_id", post_id).order("created_at", desc=False).execute()
        return list(response.data or [])

    async def insert(self, payload: Mapping[str, Any]) -> Optional[Record]:
        table = await self.connection.table(self.table_name)
        response = await table.insert(dict(payload)).execute()
        rows = response.data or []
        return rows[0] if rows else None
