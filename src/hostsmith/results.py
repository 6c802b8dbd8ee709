from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

__all__ = ["OperationResult"]

T = TypeVar("T")


@dataclass
class OperationResult(Generic[T]):
    """Outcome of a hosts operation as reported to the user."""

    success: bool
    message: str
    error: Optional[BaseException] = None
    data: Optional[T] = None

    @classmethod
    def ok(cls, message: str, data: Optional[T] = None) -> "OperationResult[T]":
        return cls(True, message, data=data)

    @classmethod
    def failed(cls, message: str, error: Optional[BaseException] = None) -> "OperationResult[Any]":
        return cls(False, message, error=error)

    def __bool__(self) -> bool:
        return self.success
