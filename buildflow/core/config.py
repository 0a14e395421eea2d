"""
Settings management for Buildflow.

Provides centralized, type-safe settings with environment variable overrides
and sensible defaults for template lookup and artifact export.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load .env file if it exists (looks in cwd and parent directories)
load_dotenv()


class TemplateSettings(BaseModel):
    """Template store configuration."""

    override_dir: Path | None = Field(
        default=None,
        description="Directory searched before the packaged templates",
    )


class ExportSettings(BaseModel):
    """Where generated artifacts are written."""

    base_path: Path = Field(default=Path("."), description="Export root directory")
    workflows_dir: str = Field(
        default=".github/workflows",
        description="Workflow directory relative to the export root",
    )
    info_dir: str = Field(
        default="docs/ci", description="Setup notes directory relative to the export root"
    )
    config_filename: str = Field(
        default="buildflow.json", description="Saved configuration file name"
    )


class Settings(BaseModel):
    """Root settings for Buildflow."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Logging level"
    )
    templates: TemplateSettings = Field(default_factory=TemplateSettings)
    export: ExportSettings = Field(default_factory=ExportSettings)

    model_config = {"extra": "ignore"}

    @classmethod
    def from_env(cls) -> Settings:
        """Create settings from environment variables."""
        template_dir = os.environ.get("BUILDFLOW_TEMPLATE_DIR")
        return cls(
            log_level=os.environ.get("BUILDFLOW_LOG_LEVEL", "INFO").upper(),  # type: ignore
            templates=TemplateSettings(
                override_dir=Path(template_dir).expanduser() if template_dir else None,
            ),
            export=ExportSettings(
                base_path=Path(os.environ.get("BUILDFLOW_OUTPUT_PATH", ".")),
                workflows_dir=os.environ.get("BUILDFLOW_WORKFLOWS_DIR", ".github/workflows"),
                info_dir=os.environ.get("BUILDFLOW_INFO_DIR", "docs/ci"),
            ),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings.from_env()
