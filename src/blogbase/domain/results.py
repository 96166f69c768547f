from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, Optional, TypeVar

from .enums import ErrorKind

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class GatewayError:
    kind: ErrorKind
    message: str
    code: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        if self.code:
            return f"{self.kind.value} ({self.code}): {self.message}"
        return f"{self.kind.value}: {self.message}"


@dataclass(frozen=True, slots=True)
class Result(Generic[T]):
    """Outcome of a gateway operation: either a value or a structured error."""

    value: Optional[T] = None
    error: Optional[GatewayError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Optional[T] = None) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(
        cls,
        kind: ErrorKind,
        message: str,
        *,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> "Result[T]":
        return cls(error=GatewayError(kind=kind, message=message, code=code, details=dict(details or {})))

    def unwrap_or(self, default: T) -> T:
        if self.error is not None or self.value is None:
            return default
        return self.value

    def as_dict(self, serialize: Optional[Callable[[Any], Any]] = None) -> Dict[str, Any]:
        """Render the ``{success, data|error}`` shape consumed by front-end pages."""

        if self.error is not None:
            return {"success": False, "error": self.error.message}
        data = serialize(self.value) if serialize is not None else self.value
        return {"success": True, "data": data}
