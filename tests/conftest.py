"""Test configuration for Buildflow."""

import tempfile
from pathlib import Path

import pytest

from buildflow.models import BuildConfiguration, BuildType, CustomInputs, PublishingFormat, Sdk


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests.

    Yields:
        Path: A Path object pointing to the temporary directory.
            The directory is automatically cleaned up after the test.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def make_config():
    """Factory for configurations with sensible defaults.

    Returns:
        Callable building a BuildConfiguration from keyword overrides.
    """
    def _make(
        sdk=Sdk.NATIVE,
        build_type=BuildType.UNSIGNED,
        publishing_format=PublishingFormat.APK,
        show_versions=False,
        build_variant_name=None,
        build_variant_path=None,
    ):
        return BuildConfiguration(
            sdk=sdk,
            build_type=build_type,
            custom_inputs=CustomInputs(
                publishing_format=publishing_format,
                show_versions=show_versions,
                build_variant_name=build_variant_name,
                build_variant_path=build_variant_path,
            ),
        )

    return _make


@pytest.fixture
def storage(temp_dir):
    """Create a storage backend rooted in the temporary directory.

    Returns:
        LocalStorageBackend: Backend writing under temp_dir.
    """
    from buildflow.storage import LocalStorageBackend
    return LocalStorageBackend(temp_dir)
