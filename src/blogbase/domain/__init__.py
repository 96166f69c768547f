"""Domain records for the blog backend."""

from __future__ import annotations

from .enums import ChangeType, ErrorKind
from .models import ChangeEvent, Comment, Post, UploadedAsset, parse_timestamp
from .results import GatewayError, Result

__all__ = [
    "ChangeEvent",
    "ChangeType",
    "Comment",
    "ErrorKind",
    "GatewayError",
    "Post",
    "Result",
    "UploadedAsset",
    "parse_timestamp",
]
