"""
Local filesystem storage backend.

Writes generated workflows and notes into a project checkout.
"""

from __future__ import annotations

from pathlib import Path
from typing import TypeVar

import aiofiles
import aiofiles.os
from pydantic import BaseModel

from .interface import StorageBackend

T = TypeVar("T", bound=BaseModel)


class LocalStorageBackend(StorageBackend):
    """Local filesystem storage backend."""

    def __init__(self, base_path: Path) -> None:
        """Initialize local storage.

        Args:
            base_path: Root directory, usually the repository the workflow is for
        """
        self.base_path = base_path.resolve()

    def _get_full_path(self, key: str) -> Path:
        """Get full filesystem path for a key.

        Keys are normalized so the resulting path always stays inside the
        base directory.

        Args:
            key: The storage key to convert to a filesystem path.

        Returns:
            The resolved absolute path within the base directory.
        """
        clean_key = key.replace("..", "").replace(":", "").lstrip("/\\")
        full_path = (self.base_path / clean_key).resolve()

        try:
            full_path.relative_to(self.base_path)
        except ValueError:
            # Escaped through a symlink; flatten into the base directory
            clean_key = clean_key.replace("/", "_").replace("\\", "_")
            full_path = self.base_path / clean_key

        return full_path

    async def store_text(self, key: str, content: str) -> str:
        """Write text content, creating parent directories as needed."""
        full_path = self._get_full_path(key)
        full_path.parent.mkdir(parents=True, exist_ok=True)

        async with aiofiles.open(full_path, "w", encoding="utf-8") as f:
            await f.write(content)

        return key

    async def store_model(self, key: str, model: BaseModel) -> str:
        """Store Pydantic model as indented JSON."""
        return await self.store_text(key, model.model_dump_json(indent=2))

    async def load_text(self, key: str) -> str:
        """Load text content from filesystem.

        Raises:
            FileNotFoundError: If the key does not exist.
        """
        full_path = self._get_full_path(key)

        if not full_path.exists():
            raise FileNotFoundError(f"Key not found: {key}")

        async with aiofiles.open(full_path, "r", encoding="utf-8") as f:
            return await f.read()

    async def load_model(self, key: str, model_type: type[T]) -> T:
        """Load Pydantic model from JSON file.

        Raises:
            FileNotFoundError: If the key does not exist.
        """
        json_content = await self.load_text(key)
        return model_type.model_validate_json(json_content)

    async def exists(self, key: str) -> bool:
        return self._get_full_path(key).exists()

    async def delete(self, key: str) -> bool:
        full_path = self._get_full_path(key)
        if not full_path.exists():
            return False
        await aiofiles.os.remove(full_path)
        return True

    async def move(self, src_key: str, dst_key: str) -> str:
        """Rename within the base directory, replacing the destination."""
        src_path = self._get_full_path(src_key)
        dst_path = self._get_full_path(dst_key)
        dst_path.parent.mkdir(parents=True, exist_ok=True)
        await aiofiles.os.replace(src_path, dst_path)
        return dst_key
