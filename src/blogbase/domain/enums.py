from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    AUTH = "auth"
    NOT_FOUND = "not_found"
    BACKEND = "backend"
    STORAGE = "storage"
    MISSING_URL = "missing_url"
    VERIFICATION = "verification"
    UNEXPECTED = "unexpected"


class ChangeType(str, Enum):
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
