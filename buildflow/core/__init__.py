"""Core infrastructure components for Buildflow."""

from .config import Settings, get_settings
from .exceptions import (
    BuildflowError,
    ExportError,
    InvalidCombinationError,
    OptionError,
    TemplateRenderError,
)
from .logging import get_logger, setup_logging
from .types import ServiceResult

__all__ = [
    "Settings",
    "get_settings",
    "BuildflowError",
    "ExportError",
    "InvalidCombinationError",
    "OptionError",
    "TemplateRenderError",
    "get_logger",
    "setup_logging",
    "ServiceResult",
]
