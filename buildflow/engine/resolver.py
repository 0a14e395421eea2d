"""
Selection engine.

Resolves a BuildConfiguration to its workflow text and optional setup
notes, binding the selection's parameters into the variants named by the
resolution table.
"""

from __future__ import annotations

from typing import Any

from ..core.exceptions import TemplateRenderError
from ..core.logging import get_logger
from ..models.configuration import BuildConfiguration
from ..templates.registry import (
    BUILD_VARIANT_NAME,
    BUILD_VARIANT_PATH,
    PUBLISHING_FORMAT,
    SHOW_VERSIONS,
    TITLE,
    TemplateVariant,
    lookup,
)
from ..templates.store import TemplateStore, get_template_store

logger = get_logger(__name__)


def _bind(variant: TemplateVariant, candidates: dict[str, Any]) -> dict[str, Any]:
    """Select the parameters a variant declares."""
    return {name: candidates[name] for name in variant.params}


class SelectionEngine:
    """Turns a configuration into generated text.

    Stateless apart from the read-only template store, so one engine can
    serve independent configurations.
    """

    def __init__(self, store: TemplateStore | None = None) -> None:
        """Initialize the engine.

        Args:
            store: Template store to render with. Uses the shared store if not provided.
        """
        self.store = store or get_template_store()

    def resolve(self, config: BuildConfiguration) -> tuple[str, str | None]:
        """Generate the workflow and info text for a configuration.

        Both texts are rendered before the configuration is touched, so a
        failure leaves the previous artifacts in place.

        Args:
            config: Selection to resolve. Its artifact fields are replaced.

        Returns:
            Tuple of (workflow text, info text or None).

        Raises:
            InvalidCombinationError: If an axis value is outside its option set.
            TemplateRenderError: If a registered template cannot be rendered.
        """
        resolution = lookup(config.platform, config.sdk, config.build_type)
        log = logger.bind(
            platform=config.platform.value,
            sdk=config.sdk.value,
            build_type=config.build_type.value,
        )
        inputs = config.custom_inputs

        candidates: dict[str, Any] = {
            TITLE: resolution.title,
            PUBLISHING_FORMAT: inputs.publishing_format,
            SHOW_VERSIONS: inputs.show_versions,
            BUILD_VARIANT_NAME: inputs.build_variant_name or "",
            BUILD_VARIANT_PATH: inputs.build_variant_path or "",
        }

        try:
            code_text = self.store.render(resolution.code, _bind(resolution.code, candidates))
            info_text = None
            if resolution.info is not None:
                info_text = self.store.render(resolution.info, _bind(resolution.info, candidates))
        except TemplateRenderError as e:
            log.error("Resolution failed", template=e.template_id)
            raise

        config.code_artifact = code_text
        config.info_artifact = info_text

        log.debug(
            "Configuration resolved",
            code_variant=resolution.code.template_id,
            info_variant=resolution.info.template_id if resolution.info else None,
        )
        return code_text, info_text

    def clear_artifacts(self, config: BuildConfiguration) -> None:
        """Reset a configuration's generated text."""
        config.clear_artifacts()


def resolve(config: BuildConfiguration) -> tuple[str, str | None]:
    """Resolve a configuration with the shared template store."""
    return SelectionEngine().resolve(config)


def clear_artifacts(config: BuildConfiguration) -> None:
    """Reset a configuration's generated text."""
    config.clear_artifacts()
