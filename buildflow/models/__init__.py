"""Data models for Buildflow."""

from .configuration import BuildConfiguration, CustomInputs
from .options import DISPLAY_LABELS, BuildType, OptionEnum, Platform, PublishingFormat, Sdk

__all__ = [
    "BuildConfiguration",
    "CustomInputs",
    "DISPLAY_LABELS",
    "BuildType",
    "OptionEnum",
    "Platform",
    "PublishingFormat",
    "Sdk",
]
