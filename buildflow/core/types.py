"""
Core type definitions for Buildflow.

Provides the result wrapper returned by services that touch the outside
world, so callers can report failures without catching exceptions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass
class ServiceResult(Generic[T]):
    """Result wrapper for service operations.

    Carries either the result data or an error message, never both.
    """

    success: bool
    data: T | None = None
    error: str | None = None

    @classmethod
    def ok(cls, data: T) -> ServiceResult[T]:
        """Create a successful result."""
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str) -> ServiceResult[T]:
        """Create a failed result."""
        return cls(success=False, error=error)
