"""
Option enumerations for the three selection axes and the output format.

Every enum value is a stable slug used on the command line and in saved
configurations. Display labels live in explicit lookup tables so renaming a
member never changes what a generated workflow says.
"""

from __future__ import annotations

from enum import Enum

from ..core.exceptions import OptionError


class OptionEnum(str, Enum):
    """Base for closed option sets with a canonical display label."""

    @property
    def label(self) -> str:
        """Canonical human-readable label for this option."""
        return DISPLAY_LABELS[type(self)][self]

    def __str__(self) -> str:
        return self.label

    @classmethod
    def choices(cls) -> list[OptionEnum]:
        """All members in declaration order."""
        return list(cls)

    @classmethod
    def from_label(cls, text: str) -> OptionEnum:
        """Parse a display label back into a member.

        Args:
            text: Label as shown to users, e.g. "React Native".

        Returns:
            The matching member.

        Raises:
            OptionError: If no member carries that label.
        """
        labels = DISPLAY_LABELS[cls]
        for member, label in labels.items():
            if label == text.strip():
                return member
        raise OptionError(
            message="unknown label",
            option=cls.__name__,
            value=text,
            allowed=list(labels.values()),
        )

    @classmethod
    def parse(cls, text: str) -> OptionEnum:
        """Parse a slug or a display label, ignoring case.

        Raises:
            OptionError: If the text matches neither a slug nor a label.
        """
        wanted = text.strip().lower()
        for member in cls:
            if wanted in (member.value, member.label.lower()):
                return member
        raise OptionError(
            message="unknown option",
            option=cls.__name__,
            value=text,
            allowed=[member.value for member in cls],
        )


class Platform(OptionEnum):
    """CI hosting environment the workflow targets."""

    GITHUB = "github"


class Sdk(OptionEnum):
    """Application framework being built."""

    NATIVE = "native"
    FLUTTER = "flutter"
    REACT_NATIVE = "react-native"


class BuildType(OptionEnum):
    """Whether the artifact is a signed release or an unsigned debug build."""

    UNSIGNED = "unsigned"
    SIGNED = "signed"


class PublishingFormat(OptionEnum):
    """Packaged output container."""

    APK = "apk"
    AAB = "aab"


DISPLAY_LABELS: dict[type[OptionEnum], dict[OptionEnum, str]] = {
    Platform: {
        Platform.GITHUB: "GitHub Actions",
    },
    Sdk: {
        Sdk.NATIVE: "Native App",
        Sdk.FLUTTER: "Flutter",
        Sdk.REACT_NATIVE: "React Native",
    },
    BuildType: {
        BuildType.UNSIGNED: "Debug (unsigned)",
        BuildType.SIGNED: "Release (signed)",
    },
    PublishingFormat: {
        PublishingFormat.APK: "APK",
        PublishingFormat.AAB: "AAB",
    },
}
