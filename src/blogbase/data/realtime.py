from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from .supabase import SupabaseConnection

PayloadHandler = Callable[[Dict[str, Any]], None]


@dataclass(slots=True)
class ChangeFeed:
    """Opens ``postgres_changes`` channels against one database schema."""

    connection: SupabaseConnection
    schema: str = "public"

    async def open(
        self,
        topic: str,
        table: str,
        handler: PayloadHandler,
        *,
        filter: Optional[str] = None,
    ) -> Any:
        client = await self.connection.ensure_client()
        channel = client.channel(topic)
        channel.on_postgres_changes("*", callback=handler, table=table, schema=self.schema, filter=filter)
        await channel.subscribe()
        return channel
