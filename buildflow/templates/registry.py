"""
Template variant registry and the resolution table.

The table maps every (platform, sdk, build type) combination to a workflow
variant, a title, and an optional info variant. It is checked for total
coverage at import time so a new option member cannot ship without rows.
"""

from __future__ import annotations

from dataclasses import dataclass
from itertools import product

from ..core.exceptions import InvalidCombinationError
from ..models.options import BuildType, Platform, Sdk

Combination = tuple[Platform, Sdk, BuildType]

WORKFLOWS_NAMESPACE = "workflows"
INFO_NAMESPACE = "info"

# Parameter names shared between the engine and the templates
TITLE = "title"
PUBLISHING_FORMAT = "publishing_format"
SHOW_VERSIONS = "show_versions"
BUILD_VARIANT_NAME = "build_variant_name"
BUILD_VARIANT_PATH = "build_variant_path"

_CODE_PARAMS = frozenset(
    {TITLE, PUBLISHING_FORMAT, SHOW_VERSIONS, BUILD_VARIANT_NAME, BUILD_VARIANT_PATH}
)
# Flutter picks its flavor from the project, so it takes no variant name
_FLUTTER_CODE_PARAMS = _CODE_PARAMS - {BUILD_VARIANT_NAME}
_INFO_PARAMS = frozenset({SHOW_VERSIONS})


@dataclass(frozen=True)
class TemplateVariant:
    """A parameterized document in the template store."""

    template_id: str
    params: frozenset[str]

    @property
    def namespace(self) -> str:
        """Either "workflows" or "info"."""
        return self.template_id.split("/", 1)[0]

    @property
    def name(self) -> str:
        """Identifier without its namespace, e.g. github-flutter-signed."""
        return self.template_id.split("/", 1)[1]


@dataclass(frozen=True)
class Resolution:
    """One row of the resolution table."""

    title: str
    code: TemplateVariant
    info: TemplateVariant | None


def _slug(platform: Platform, sdk: Sdk, build_type: BuildType) -> str:
    return f"{platform.value}-{sdk.value}-{build_type.value}"


def _row(
    platform: Platform,
    sdk: Sdk,
    build_type: BuildType,
    title: str,
    code_params: frozenset[str] = _CODE_PARAMS,
    with_info: bool = True,
) -> tuple[Combination, Resolution]:
    slug = _slug(platform, sdk, build_type)
    code = TemplateVariant(f"{WORKFLOWS_NAMESPACE}/{slug}", code_params)
    info = TemplateVariant(f"{INFO_NAMESPACE}/{slug}", _INFO_PARAMS) if with_info else None
    return (platform, sdk, build_type), Resolution(title=title, code=code, info=info)


RESOLUTION_TABLE: dict[Combination, Resolution] = dict(
    [
        _row(Platform.GITHUB, Sdk.NATIVE, BuildType.SIGNED, "Android release build"),
        _row(
            Platform.GITHUB,
            Sdk.FLUTTER,
            BuildType.SIGNED,
            "Flutter Android release build",
            code_params=_FLUTTER_CODE_PARAMS,
        ),
        _row(Platform.GITHUB, Sdk.REACT_NATIVE, BuildType.SIGNED, "React Native Android release build"),
        _row(Platform.GITHUB, Sdk.NATIVE, BuildType.UNSIGNED, "Android debug build"),
        _row(
            Platform.GITHUB,
            Sdk.FLUTTER,
            BuildType.UNSIGNED,
            "Flutter Android debug build",
            code_params=_FLUTTER_CODE_PARAMS,
        ),
        # An unsigned React Native debug build needs no manual setup, so no notes
        _row(
            Platform.GITHUB,
            Sdk.REACT_NATIVE,
            BuildType.UNSIGNED,
            "React Native Android debug build",
            with_info=False,
        ),
    ]
)


def all_combinations() -> list[Combination]:
    """Cartesian product of every declared option member."""
    return list(product(Platform, Sdk, BuildType))


def missing_combinations() -> list[Combination]:
    """Combinations that have no row in the resolution table."""
    return [combo for combo in all_combinations() if combo not in RESOLUTION_TABLE]


def lookup(platform: Platform, sdk: Sdk, build_type: BuildType) -> Resolution:
    """Get the table row for a combination.

    Raises:
        InvalidCombinationError: If the combination is outside the table.
    """
    try:
        return RESOLUTION_TABLE[(platform, sdk, build_type)]
    except (KeyError, TypeError) as e:
        raise InvalidCombinationError(
            message="value outside the declared option sets",
            combination=(str(platform), str(sdk), str(build_type)),
            cause=e,
        ) from e


def all_variants() -> list[TemplateVariant]:
    """Every registered variant, workflows first, in table order."""
    code = [row.code for row in RESOLUTION_TABLE.values()]
    info = [row.info for row in RESOLUTION_TABLE.values() if row.info is not None]
    return code + info


_missing = missing_combinations()
if _missing:
    raise InvalidCombinationError(
        message="resolution table is incomplete",
        combination=tuple(_slug(*combo) for combo in _missing),
    )
