"""Unit tests for the artifact export service."""

import json

import pytest

from buildflow.core.config import ExportSettings
from buildflow.core.exceptions import ExportError
from buildflow.engine import SelectionEngine
from buildflow.models import BuildType, PublishingFormat, Sdk
from buildflow.services import ArtifactExporter, workflow_name
from buildflow.storage import LocalStorageBackend
from buildflow.templates import TemplateStore


@pytest.fixture
def exporter(storage):
    return ArtifactExporter(storage, ExportSettings())


class FailingNotesStorage(LocalStorageBackend):
    """Local storage that cannot write setup notes."""

    async def store_text(self, key: str, content: str) -> str:
        if key.endswith(".md.tmp"):
            raise OSError("disk full")
        return await super().store_text(key, content)


@pytest.fixture
def engine():
    return SelectionEngine(TemplateStore())


def test_workflow_name(make_config):
    config = make_config(sdk=Sdk.REACT_NATIVE, build_type=BuildType.SIGNED)
    assert workflow_name(config) == "react-native-signed"


@pytest.mark.asyncio
class TestArtifactExporter:
    """Tests for writing generated artifacts."""

    async def test_export_writes_workflow_and_notes(self, exporter, engine, make_config, temp_dir):
        config = make_config(sdk=Sdk.FLUTTER, build_type=BuildType.SIGNED)
        engine.resolve(config)

        result = await exporter.export(config)

        assert result.success
        assert result.data.workflow_key == ".github/workflows/flutter-signed.yml"
        assert result.data.info_key == "docs/ci/flutter-signed.md"
        assert result.data.workflow_hash == exporter.storage.compute_hash(config.code_artifact)
        written = (temp_dir / ".github" / "workflows" / "flutter-signed.yml").read_text()
        assert written == config.code_artifact
        assert (temp_dir / "docs" / "ci" / "flutter-signed.md").read_text() == config.info_artifact

    async def test_export_without_notes(self, exporter, engine, make_config, temp_dir):
        config = make_config(sdk=Sdk.REACT_NATIVE, build_type=BuildType.UNSIGNED)
        engine.resolve(config)

        result = await exporter.export(config)

        assert result.success
        assert result.data.info_key is None
        assert result.data.removed_keys == []
        assert not (temp_dir / "docs" / "ci").exists()

    async def test_export_removes_stale_notes(self, exporter, make_config, temp_dir):
        stale = temp_dir / "docs" / "ci" / "react-native-unsigned.md"
        stale.parent.mkdir(parents=True)
        stale.write_text("old notes")

        config = make_config(sdk=Sdk.REACT_NATIVE, build_type=BuildType.UNSIGNED)
        config.code_artifact = "name: React Native Android debug build\n"

        result = await exporter.export(config)

        assert result.success
        assert result.data.removed_keys == ["docs/ci/react-native-unsigned.md"]
        assert not stale.exists()

    async def test_failed_notes_write_keeps_previous_files(self, engine, make_config, temp_dir):
        workflow = temp_dir / ".github" / "workflows" / "native-signed.yml"
        notes = temp_dir / "docs" / "ci" / "native-signed.md"
        workflow.parent.mkdir(parents=True)
        notes.parent.mkdir(parents=True)
        workflow.write_text("old workflow")
        notes.write_text("old notes")

        exporter = ArtifactExporter(FailingNotesStorage(temp_dir), ExportSettings())
        config = make_config(build_type=BuildType.SIGNED)
        engine.resolve(config)

        result = await exporter.export(config)

        assert not result.success
        assert "disk full" in result.error
        assert workflow.read_text() == "old workflow"
        assert notes.read_text() == "old notes"
        assert list(temp_dir.rglob("*.tmp")) == []

    async def test_export_leaves_no_staging_files(self, exporter, engine, make_config, temp_dir):
        config = make_config(sdk=Sdk.NATIVE, build_type=BuildType.SIGNED)
        engine.resolve(config)

        result = await exporter.export(config)

        assert result.success
        assert list(temp_dir.rglob("*.tmp")) == []

    async def test_export_requires_resolved_config(self, exporter, make_config):
        config = make_config()
        config.clear_artifacts()

        result = await exporter.export(config)

        assert not result.success
        assert "resolve it first" in result.error

    async def test_custom_layout(self, storage, engine, make_config, temp_dir):
        exporter = ArtifactExporter(storage, ExportSettings(workflows_dir="ci/", info_dir="notes"))
        config = make_config()
        engine.resolve(config)

        result = await exporter.export(config)

        assert result.data.workflow_key == "ci/native-unsigned.yml"
        assert (temp_dir / "notes" / "native-unsigned.md").exists()


@pytest.mark.asyncio
class TestSavedConfiguration:
    """Tests for saving and loading selections."""

    async def test_save_and_load(self, exporter, engine, make_config, temp_dir):
        config = make_config(
            sdk=Sdk.FLUTTER,
            build_type=BuildType.SIGNED,
            publishing_format=PublishingFormat.AAB,
            build_variant_path="app/",
        )
        engine.resolve(config)

        key = await exporter.save_configuration(config)
        assert key == "buildflow.json"
        saved = json.loads((temp_dir / "buildflow.json").read_text())
        assert saved["sdk"] == "flutter"

        loaded = await exporter.load_configuration()
        assert loaded == config

    async def test_load_missing(self, exporter):
        with pytest.raises(ExportError):
            await exporter.load_configuration()

    async def test_load_invalid(self, exporter, temp_dir):
        (temp_dir / "buildflow.json").write_text('{"sdk": "ionic"}')
        with pytest.raises(ExportError) as exc_info:
            await exporter.load_configuration()
        assert "invalid" in str(exc_info.value)
