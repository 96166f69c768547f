from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Optional

from supabase import AsyncClient, acreate_client

from ..config.settings import SupabaseSettings


class SupabaseNotConfiguredError(RuntimeError):
    """Raised when a client must be created but the URL or anon key is missing."""


@dataclass
class SupabaseConnection:
    """Owns the async Supabase client handle shared by repositories and services."""

    settings: SupabaseSettings
    _client: Optional[AsyncClient] = None
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock, repr=False, compare=False)

    @classmethod
    def from_client(cls, client: AsyncClient, settings: Optional[SupabaseSettings] = None) -> "SupabaseConnection":
        return cls(settings=settings or SupabaseSettings(url=None, anon_key=None), _client=client)

    async def ensure_client(self) -> AsyncClient:
        if self._client is not None:
            return self._client
        if not self.settings.is_configured:
            missing = ", ".join(self.settings.missing_env_vars)
            raise SupabaseNotConfiguredError(f"Supabase settings are incomplete; missing {missing}.")
        # concurrent first callers must share one client
        async with self._lock:
            if self._client is None:
                self._client = await acreate_client(self.settings.url, self.settings.anon_key)
        return self._client

    def is_connected(self) -> bool:
        return self._client is not None

    async def table(self, name: str):
        client = await self.ensure_client()
        return client.table(name)
