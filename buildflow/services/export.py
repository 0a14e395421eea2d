"""
Artifact Export Service.

Persists generated workflows, their setup notes and the selection that
produced them. The selection engine never touches storage; this service is
the caller-side half that does.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from ..core.config import ExportSettings, get_settings
from ..core.exceptions import ExportError
from ..core.logging import get_logger
from ..core.types import ServiceResult
from ..models.configuration import BuildConfiguration
from ..storage import StorageBackend

logger = get_logger(__name__)


class ExportOutput(BaseModel):
    """Keys written (and removed) by an export."""

    workflow_key: str = Field(description="Storage key of the workflow file")
    workflow_hash: str = Field(description="SHA-256 of the workflow text")
    info_key: str | None = Field(default=None, description="Storage key of the setup notes")
    removed_keys: list[str] = Field(default_factory=list, description="Stale files deleted")


def workflow_name(config: BuildConfiguration) -> str:
    """File stem for a configuration's artifacts, e.g. flutter-signed."""
    return f"{config.sdk.value}-{config.build_type.value}"


def _staging_key(key: str) -> str:
    return f"{key}.tmp"


class ArtifactExporter:
    """Writes a resolved configuration through a storage backend."""

    def __init__(self, storage: StorageBackend, settings: ExportSettings | None = None) -> None:
        """Initialize the exporter.

        Args:
            storage: Backend rooted at the target project
            settings: Export layout. Uses global settings if not provided.
        """
        self.storage = storage
        self.settings = settings or get_settings().export

    def workflow_key(self, config: BuildConfiguration) -> str:
        return f"{self.settings.workflows_dir.strip('/')}/{workflow_name(config)}.yml"

    def info_key(self, config: BuildConfiguration) -> str:
        return f"{self.settings.info_dir.strip('/')}/{workflow_name(config)}.md"

    async def export(self, config: BuildConfiguration) -> ServiceResult[ExportOutput]:
        """Write the configuration's generated artifacts.

        Both files are first written to staging keys beside their targets
        and only moved into place once every write succeeded, so a failed
        export leaves the previous workflow and notes as they were. The info
        file is removed when the configuration has none, so a stale file
        from an earlier selection never survives next to a new workflow.

        Args:
            config: A configuration that has been resolved.

        Returns:
            ServiceResult containing ExportOutput or error
        """
        workflow_key = self.workflow_key(config)
        info_key = self.info_key(config)

        try:
            if not config.code_artifact:
                raise ExportError(
                    message="configuration has no generated workflow; resolve it first",
                    key=workflow_key,
                )

            staged = {workflow_key: config.code_artifact}
            if config.info_artifact is not None:
                staged[info_key] = config.info_artifact
            await self._stage(staged)

            for key in staged:
                await self.storage.move(_staging_key(key), key)

            removed: list[str] = []
            written_info: str | None = None
            if config.info_artifact is not None:
                written_info = info_key
            elif await self.storage.exists(info_key):
                await self.storage.delete(info_key)
                removed.append(info_key)

            output = ExportOutput(
                workflow_key=workflow_key,
                workflow_hash=self.storage.compute_hash(config.code_artifact),
                info_key=written_info,
                removed_keys=removed,
            )
            logger.info(
                "Artifacts exported",
                workflow=workflow_key,
                info=written_info,
                removed=removed,
            )
            return ServiceResult.ok(output)

        except ExportError as e:
            return ServiceResult.fail(str(e))
        except OSError as e:
            logger.error("Export failed", key=workflow_key, error=str(e))
            return ServiceResult.fail(str(ExportError(message=str(e), key=workflow_key, cause=e)))

    async def _stage(self, staged: dict[str, str]) -> None:
        """Write each text to its staging key, discarding all of them on failure."""
        try:
            for key, content in staged.items():
                await self.storage.store_text(_staging_key(key), content)
        except OSError:
            for key in staged:
                await self.storage.delete(_staging_key(key))
            raise

    async def save_configuration(self, config: BuildConfiguration) -> str:
        """Save a selection, including its generated text, as JSON.

        Returns:
            Storage key of the saved configuration.
        """
        key = self.settings.config_filename
        try:
            return await self.storage.store_model(key, config)
        except OSError as e:
            raise ExportError(message=str(e), key=key, cause=e) from e

    async def load_configuration(self) -> BuildConfiguration:
        """Load a previously saved selection.

        Raises:
            ExportError: If no saved configuration exists or it cannot be read.
        """
        key = self.settings.config_filename
        try:
            return await self.storage.load_model(key, BuildConfiguration)
        except FileNotFoundError as e:
            raise ExportError(message="no saved configuration", key=key, cause=e) from e
        except ValueError as e:
            raise ExportError(message="saved configuration is invalid", key=key, cause=e) from e
