"""
Storage backend interface.

Defines the abstract interface the exporter writes generated artifacts and
saved configurations through, so the destination can change without
touching the generator.
"""

from __future__ import annotations

import hashlib
from abc import ABC, abstractmethod
from typing import TypeVar

from pydantic import BaseModel

T = TypeVar("T", bound=BaseModel)


class StorageBackend(ABC):
    """Abstract storage backend interface."""

    @abstractmethod
    async def store_text(self, key: str, content: str) -> str:
        """Store text content and return the storage key.

        Args:
            key: Storage key/path.
            content: Text content to store.

        Returns:
            The final storage key.
        """
        ...

    @abstractmethod
    async def store_model(self, key: str, model: BaseModel) -> str:
        """Store a Pydantic model as JSON.

        Args:
            key: Storage key/path.
            model: Pydantic model instance to store.

        Returns:
            The final storage key.
        """
        ...

    @abstractmethod
    async def load_text(self, key: str) -> str:
        """Load text content from storage."""
        ...

    @abstractmethod
    async def load_model(self, key: str, model_type: type[T]) -> T:
        """Load a Pydantic model from storage.

        Args:
            key: Storage key/path to load from.
            model_type: The Pydantic model class to deserialize into.

        Returns:
            The deserialized Pydantic model instance.
        """
        ...

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """Check if a key exists in storage."""
        ...

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Delete a key from storage.

        Returns:
            True if the key was deleted, False if it did not exist.
        """
        ...

    @abstractmethod
    async def move(self, src_key: str, dst_key: str) -> str:
        """Move content to a new key, replacing whatever is there.

        Returns:
            The destination key.
        """
        ...

    @staticmethod
    def compute_hash(content: str) -> str:
        """Compute the SHA-256 hash of text content.

        Args:
            content: Text to hash, encoded as UTF-8.

        Returns:
            Hexadecimal SHA-256 digest.
        """
        return hashlib.sha256(content.encode("utf-8")).hexdigest()

