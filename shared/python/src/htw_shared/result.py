"""
result.py — Success/failure value returned by the import and analytics components.

Components never show notifications themselves; they hand back a Result
and the caller (API route, CLI command) decides how to present it.

Usage:
    result = build_dashboard(store)
    if result.success:
        render(result.value)
    else:
        log.error("dashboard_failed", error=str(result.error))
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    value: T | None = None
    error: Exception | None = None

    @classmethod
    def ok(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def fail(cls, error: Exception) -> "Result[T]":
        return cls(error=error)

    @property
    def success(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value or raise the stored error unchanged."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]
