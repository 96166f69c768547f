"""HTTP surface for blogbase."""

from .server import create_app, run_local_server, stream_changes

__all__ = ["create_app", "run_local_server", "stream_changes"]
