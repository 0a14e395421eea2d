"""Unit tests for the Jinja2 template store."""

import pytest

from buildflow.core.exceptions import TemplateRenderError
from buildflow.models import PublishingFormat
from buildflow.templates import TemplateStore, TemplateVariant, all_variants


@pytest.fixture
def store():
    return TemplateStore()


class TestTemplateStore:
    """Tests for rendering and verification."""

    def test_verify_all_registered_templates(self, store):
        """Every registered variant has a template that compiles."""
        checked = store.verify()
        assert sorted(checked) == sorted(v.template_id for v in all_variants())

    def test_gha_filter(self, temp_dir):
        """GitHub expressions are emitted without tripping Jinja syntax."""
        (temp_dir / "workflows").mkdir()
        (temp_dir / "workflows" / "sample.yml.j2").write_text(
            'key: {{ "secrets.TOKEN" | gha }}\n'
        )
        override = TemplateStore(override_dir=temp_dir)
        variant = TemplateVariant("workflows/sample", frozenset())
        assert override.render(variant, {}) == "key: ${{ secrets.TOKEN }}\n"

    def test_override_dir_takes_precedence(self, temp_dir):
        (temp_dir / "info").mkdir()
        (temp_dir / "info" / "github-native-signed.md.j2").write_text(
            "custom notes {{ show_versions }}"
        )
        store = TemplateStore(override_dir=temp_dir)
        variant = TemplateVariant("info/github-native-signed", frozenset({"show_versions"}))
        assert store.render(variant, {"show_versions": True}) == "custom notes True"

    def test_enum_renders_label(self, temp_dir):
        (temp_dir / "workflows").mkdir()
        (temp_dir / "workflows" / "sample.yml.j2").write_text("format: {{ publishing_format }}")
        store = TemplateStore(override_dir=temp_dir)
        variant = TemplateVariant("workflows/sample", frozenset({"publishing_format"}))
        assert store.render(variant, {"publishing_format": PublishingFormat.AAB}) == "format: AAB"

    def test_missing_template_is_fatal(self, store):
        variant = TemplateVariant("workflows/does-not-exist", frozenset())
        with pytest.raises(TemplateRenderError) as exc_info:
            store.render(variant, {})
        assert exc_info.value.template_id == "workflows/does-not-exist"

    def test_undefined_placeholder_is_fatal(self, temp_dir):
        """StrictUndefined turns an unbound placeholder into an error."""
        (temp_dir / "workflows").mkdir()
        (temp_dir / "workflows" / "sample.yml.j2").write_text("name: {{ missing_value }}")
        store = TemplateStore(override_dir=temp_dir)
        with pytest.raises(TemplateRenderError):
            store.render(TemplateVariant("workflows/sample", frozenset()), {})

    def test_malformed_template_is_fatal(self, temp_dir):
        (temp_dir / "workflows").mkdir()
        (temp_dir / "workflows" / "sample.yml.j2").write_text("name: {% if %}")
        store = TemplateStore(override_dir=temp_dir)
        with pytest.raises(TemplateRenderError):
            store.render(TemplateVariant("workflows/sample", frozenset()), {})

    def test_parameter_mismatch_is_fatal(self, store):
        variant = TemplateVariant("info/github-native-signed", frozenset({"show_versions"}))
        with pytest.raises(TemplateRenderError) as exc_info:
            store.render(variant, {"show_versions": True, "title": "extra"})
        assert exc_info.value.context["unexpected"] == ["title"]

    def test_unknown_namespace(self, store):
        with pytest.raises(TemplateRenderError):
            store.render(TemplateVariant("docs/readme", frozenset()), {})
