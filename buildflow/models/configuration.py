"""
Configuration models.

A BuildConfiguration is the single stateful value of the generator: the
user's selection plus the text last generated from it. The artifact fields
are derived. They are written only by the selection engine and by
clear_artifacts(), always together.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from .options import BuildType, Platform, PublishingFormat, Sdk


class CustomInputs(BaseModel):
    """Optional parameters bound into the workflow templates."""

    build_variant_name: str | None = Field(
        default=None, description="Gradle build variant name (e.g., productionRelease)"
    )
    build_variant_path: str | None = Field(
        default=None, description="Variant output directory (e.g., app/)"
    )
    publishing_format: PublishingFormat = Field(description="APK or AAB output")
    show_versions: bool = Field(default=False, description="Print toolchain versions in the job")

    model_config = {"validate_assignment": True}


class BuildConfiguration(BaseModel):
    """A platform/SDK/build type selection and its generated artifacts."""

    platform: Platform = Field(default=Platform.GITHUB)
    sdk: Sdk
    build_type: BuildType
    custom_inputs: CustomInputs
    code_artifact: str | None = Field(default=None, description="Last generated workflow text")
    info_artifact: str | None = Field(default=None, description="Last generated setup notes")

    model_config = {"validate_assignment": True}

    @property
    def combination(self) -> tuple[Platform, Sdk, BuildType]:
        """The three axes as a resolution-table key."""
        return (self.platform, self.sdk, self.build_type)

    def clear_artifacts(self) -> None:
        """Invalidate generated text.

        Resets the workflow text to an empty string and drops the info text,
        whatever the current selection is.
        """
        self.info_artifact = None
        self.code_artifact = ""
