from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class SupabaseSettings:
    url: Optional[str]
    anon_key: Optional[str]

    @property
    def is_configured(self) -> bool:
        return bool(self.url and self.anon_key)

    @property
    def missing_env_vars(self) -> list[str]:
        missing = []
        if not self.url:
            missing.append("SUPABASE_URL")
        if not self.anon_key:
            missing.append("SUPABASE_ANON_KEY")
        return missing


@dataclass(frozen=True)
class StorageSettings:
    posts_table: str = "posts"
    comments_table: str = "comments"
    images_bucket: str = "post-images"
    likes_function: str = "increment_likes"


@dataclass(frozen=True)
class ServerSettings:
    host: str = "127.0.0.1"
    port: int = 8000


@dataclass(frozen=True)
class AppSettings:
    supabase: SupabaseSettings
    storage: StorageSettings
    server: ServerSettings


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    supabase = SupabaseSettings(
        url=os.getenv("SUPABASE_URL"),
        anon_key=os.getenv("SUPABASE_ANON_KEY"),
    )

    storage = StorageSettings(
        posts_table=os.getenv("BLOGBASE_POSTS_TABLE", "posts"),
        comments_table=os.getenv("BLOGBASE_COMMENTS_TABLE", "comments"),
        images_bucket=os.getenv("BLOGBASE_IMAGES_BUCKET", "post-images"),
        likes_function=os.getenv("BLOGBASE_LIKES_FUNCTION", "increment_likes"),
    )

    server = ServerSettings(
        host=os.getenv("BLOGBASE_HOST", "127.0.0.1"),
        port=_int_from_env("BLOGBASE_PORT", 8000),
    )

    return AppSettings(supabase=supabase, storage=storage, server=server)
