"""
Template store backed by Jinja2.

Templates ship inside the package under templates/workflows and
templates/info. An override directory, when configured, is searched first
so a deployment can replace individual documents without forking the
package.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

from jinja2 import (
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    PackageLoader,
    StrictUndefined,
    TemplateError,
)

from ..core.config import get_settings
from ..core.exceptions import TemplateRenderError
from ..core.logging import get_logger
from .registry import INFO_NAMESPACE, WORKFLOWS_NAMESPACE, TemplateVariant, all_variants

logger = get_logger(__name__)

_EXTENSIONS = {
    WORKFLOWS_NAMESPACE: ".yml.j2",
    INFO_NAMESPACE: ".md.j2",
}


def github_expression(expression: str) -> str:
    """Wrap an expression in GitHub Actions ${{ }} syntax."""
    return "${{ " + expression + " }}"


class TemplateStore:
    """Renders registered template variants to text.

    The Jinja environment is built once. Rendering only reads from it, so a
    single store can be shared between callers.
    """

    def __init__(self, override_dir: Path | None = None) -> None:
        """Initialize the store.

        Args:
            override_dir: Optional directory searched before the packaged templates.
        """
        loaders = []
        if override_dir is not None:
            loaders.append(FileSystemLoader(str(override_dir)))
        loaders.append(PackageLoader("buildflow", "templates"))

        self.override_dir = override_dir
        self.env = Environment(
            loader=ChoiceLoader(loaders),
            undefined=StrictUndefined,
            autoescape=False,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["gha"] = github_expression

    @staticmethod
    def template_path(variant: TemplateVariant) -> str:
        """File name of a variant inside the template directory."""
        try:
            return variant.template_id + _EXTENSIONS[variant.namespace]
        except KeyError as e:
            raise TemplateRenderError(
                message=f"unknown namespace '{variant.namespace}'",
                template_id=variant.template_id,
                cause=e,
            ) from e

    def render(self, variant: TemplateVariant, params: dict[str, Any]) -> str:
        """Render a variant with exactly its declared parameters.

        Args:
            variant: Registered variant to render.
            params: Bound parameter values, keyed by name.

        Returns:
            Rendered text.

        Raises:
            TemplateRenderError: On a parameter mismatch, a missing template,
                or any Jinja error while rendering.
        """
        supplied = set(params)
        if supplied != variant.params:
            raise TemplateRenderError(
                message="parameter mismatch",
                template_id=variant.template_id,
                context={
                    "missing": sorted(variant.params - supplied),
                    "unexpected": sorted(supplied - variant.params),
                },
            )

        path = self.template_path(variant)
        try:
            template = self.env.get_template(path)
            return template.render(**params)
        except TemplateError as e:
            logger.error("Template render failed", template_id=variant.template_id, error=str(e))
            raise TemplateRenderError(
                message=str(e) or type(e).__name__,
                template_id=variant.template_id,
                cause=e,
            ) from e

    def verify(self) -> list[str]:
        """Load and compile every registered template.

        Returns:
            Template ids that were checked.

        Raises:
            TemplateRenderError: On the first template that is missing or malformed.
        """
        checked = []
        for variant in all_variants():
            path = self.template_path(variant)
            try:
                self.env.get_template(path)
            except TemplateError as e:
                raise TemplateRenderError(
                    message=str(e) or type(e).__name__,
                    template_id=variant.template_id,
                    cause=e,
                ) from e
            checked.append(variant.template_id)
        logger.debug("Templates verified", count=len(checked))
        return checked


@lru_cache(maxsize=1)
def get_template_store() -> TemplateStore:
    """Get the shared template store for the configured override directory."""
    return TemplateStore(get_settings().templates.override_dir)
