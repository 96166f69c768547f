from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Mapping, Optional

from .enums import ChangeType

_FRACTION = re.compile(r"\.(\d+)(?=[+-]|$)")


def parse_timestamp(value: str) -> datetime:
    """Parse a Postgres ISO timestamp; fractions of any width are padded or cut to microseconds."""

    text = value.strip().replace("Z", "+00:00")
    text = _FRACTION.sub(lambda match: "." + match.group(1)[:6].ljust(6, "0"), text)
    return datetime.fromisoformat(text)


def _parse_datetime(value: Any) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        return parse_timestamp(value)
    raise ValueError(f"Unsupported datetime value: {value!r}")


@dataclass(slots=True)
class Post:
    id: int
    title: str
    content: str = ""
    cover_image: Optional[str] = None
    author_id: Optional[str] = None
    likes: int = 0
    created_at: Optional[datetime] = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Post":
        return cls(
            id=record["id"],
            title=str(record.get("title") or ""),
            content=record.get("content") or "",
            cover_image=record.get("cover_image"),
            author_id=record.get("author_id"),
            likes=int(record.get("likes") or 0),
            created_at=_parse_datetime(record.get("created_at")),
        )

    def to_record(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "cover_image": self.cover_image,
            "author_id": self.author_id,
            "likes": self.likes,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(slots=True)
class Comment:
    id: int
    post_id: int
    name: str
    comment: str
    created_at: Optional[datetime] = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Comment":
        return cls(
            id=record["id"],
            post_id=record["post_id"],
            name=str(record.get("name") or ""),
            comment=str(record.get("comment") or ""),
            created_at=_parse_datetime(record.get("created_at")),
        )

    def to_record(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "post_id": self.post_id,
            "name": self.name,
            "comment": self.comment,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(slots=True)
class UploadedAsset:
    filename: str
    path: str
    bucket: str
    public_url: str


@dataclass(slots=True)
class ChangeEvent:
    """A row-level change delivered by a realtime channel."""

    type: ChangeType
    table: str
    schema: str = "public"
    record: Dict[str, Any] = field(default_factory=dict)
    old_record: Dict[str, Any] = field(default_factory=dict)
    commit_timestamp: Optional[datetime] = None
    raw: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "ChangeEvent":
        # realtime wraps the change under "data"; older servers send it flat
        data = payload.get("data") or payload
        change = data.get("type") or data.get("eventType") or ""
        return cls(
            type=ChangeType(str(change).upper()),
            table=str(data.get("table") or ""),
            schema=str(data.get("schema") or "public"),
            record=dict(data.get("record") or data.get("new") or {}),
            old_record=dict(data.get("old_record") or data.get("old") or {}),
            commit_timestamp=_parse_datetime(data.get("commit_timestamp")),
            raw=dict(payload),
        )

    def to_record(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "table": self.table,
            "schema": self.schema,
            "record": self.record,
            "old_record": self.old_record,
            "commit_timestamp": self.commit_timestamp.isoformat() if self.commit_timestamp else None,
        }
