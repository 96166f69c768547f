"""Async gateway over a Supabase project backing a blog: auth, posts, comments, images and live updates."""

from __future__ import annotations

from .data import SupabaseNotConfiguredError
from .domain import ChangeEvent, Comment, ErrorKind, GatewayError, Post, Result, UploadedAsset
from .gateway import BackendGateway, format_date
from .services import ChangeSubscription

__all__ = [
    "BackendGateway",
    "ChangeEvent",
    "ChangeSubscription",
    "Comment",
    "ErrorKind",
    "GatewayError",
    "Post",
    "Result",
    "SupabaseNotConfiguredError",
    "UploadedAsset",
    "format_date",
    "main",
]


def main() -> None:
    from .cli import main as cli_main

    cli_main()
