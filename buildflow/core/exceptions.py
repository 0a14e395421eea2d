"""
Custom exception hierarchy for Buildflow.

All exceptions inherit from BuildflowError so callers can handle every
failure of the generator in one place. Each exception carries context for
debugging and logging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class BuildflowError(Exception):
    """Base exception for all Buildflow errors."""

    message: str
    context: dict[str, Any] = field(default_factory=dict)
    cause: Exception | None = None

    def __str__(self) -> str:
        ctx = f" | context: {self.context}" if self.context else ""
        cause = f" | caused by: {self.cause}" if self.cause else ""
        return f"{self.message}{ctx}{cause}"


@dataclass
class OptionError(BuildflowError):
    """Raised when a label or slug names no member of an option set."""

    option: str = ""
    value: str = ""
    allowed: list[str] = field(default_factory=list)

    def __str__(self) -> str:
        allowed = ", ".join(repr(a) for a in self.allowed)
        return f"Unknown {self.option} {self.value!r} (expected one of: {allowed})"


@dataclass
class InvalidCombinationError(BuildflowError):
    """Raised when a (platform, sdk, build type) combination has no table row.

    This is a contract violation: the configuration source must restrict
    choices to the declared option sets before resolving.
    """

    combination: tuple[str, ...] = ()

    def __str__(self) -> str:
        return f"No workflow variant for combination {self.combination}: {self.message}"


@dataclass
class TemplateRenderError(BuildflowError):
    """Raised when the template store cannot render a registered variant.

    Always fatal. A registered template that fails to render is a packaging
    defect, not a transient condition.
    """

    template_id: str = ""

    def __str__(self) -> str:
        base = super().__str__()
        return f"Template '{self.template_id}' failed to render: {base}"


@dataclass
class ExportError(BuildflowError):
    """Raised when generated artifacts cannot be persisted."""

    key: str = ""

    def __str__(self) -> str:
        base = super().__str__()
        return f"Export of '{self.key}' failed: {base}" if self.key else f"Export failed: {base}"
