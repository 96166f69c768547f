from __future__ import annotations

from typing import Any, Dict

from storage3.exceptions import StorageApiError
from supabase import AuthError, PostgrestAPIError, StorageException

from ..domain import ErrorKind, Result

NO_ROWS_CODE = "PGRST116"


def is_no_rows(exc: PostgrestAPIError) -> bool:
    return exc.code == NO_ROWS_CODE


def postgrest_failure(exc: PostgrestAPIError, kind: ErrorKind = ErrorKind.BACKEND) -> Result[Any]:
    details: Dict[str, Any] = {}
    if exc.hint:
        details["hint"] = exc.hint
    if exc.details:
        details["details"] = exc.details
    return Result.failure(kind, exc.message or str(exc), code=exc.code, details=details)


def auth_failure(exc: AuthError) -> Result[Any]:
    code = getattr(exc, "code", None)
    return Result.failure(ErrorKind.AUTH, exc.message, code=str(code) if code else None)


def storage_message(exc: StorageException) -> str:
    if isinstance(exc, StorageApiError):
        return exc.message
    return str(exc)


def storage_failure(exc: StorageException) -> Result[Any]:
    if isinstance(exc, StorageApiError):
        details = {"error": exc.code} if exc.code else {}
        code = str(exc.status) if exc.status is not None else None
        return Result.failure(ErrorKind.STORAGE, exc.message, code=code, details=details)
    return Result.failure(ErrorKind.STORAGE, str(exc))


def malformed_failure(entity: str, exc: Exception) -> Result[Any]:
    return Result.failure(ErrorKind.BACKEND, f"Malformed {entity} record: {exc}")
