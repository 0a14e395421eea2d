"""
Buildflow CLI.

Command-line interface for generating CI workflows for mobile app builds.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from .core.config import get_settings
from .core.exceptions import BuildflowError, OptionError
from .core.logging import bind_context, clear_context, setup_logging
from .engine import SelectionEngine
from .models import (
    BuildConfiguration,
    BuildType,
    CustomInputs,
    OptionEnum,
    Platform,
    PublishingFormat,
    Sdk,
)
from .services import ArtifactExporter, workflow_name
from .storage import LocalStorageBackend
from .templates import RESOLUTION_TABLE, get_template_store

app = typer.Typer(
    name="buildflow",
    help="Generate CI workflows and setup notes for mobile app builds",
    add_completion=False,
)

console = Console()


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        from . import __version__
        console.print(f"buildflow v{__version__}")
        raise typer.Exit()


def _parse(option_type: type[OptionEnum], value: str, param: str) -> OptionEnum:
    try:
        return option_type.parse(value)
    except OptionError as e:
        raise typer.BadParameter(str(e), param_hint=param) from e


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Enable verbose logging",
    ),
) -> None:
    """Buildflow: CI workflow generator for Android, Flutter and React Native."""
    settings = get_settings()
    if verbose:
        settings = settings.model_copy(update={"log_level": "DEBUG"})
    setup_logging(settings)


@app.command()
def generate(
    sdk: str = typer.Option(
        Sdk.NATIVE.value,
        "--sdk",
        "-s",
        help="App framework: native, flutter or react-native",
    ),
    build_type: str = typer.Option(
        BuildType.UNSIGNED.value,
        "--build-type",
        "-b",
        help="unsigned (debug) or signed (release)",
    ),
    publishing_format: str = typer.Option(
        PublishingFormat.APK.value,
        "--format",
        "-f",
        help="Output format: apk or aab",
    ),
    platform: str = typer.Option(
        Platform.GITHUB.value,
        "--platform",
        "-p",
        help="CI platform",
    ),
    variant_name: Optional[str] = typer.Option(
        None,
        "--variant-name",
        help="Gradle build variant name (e.g., productionRelease)",
    ),
    variant_path: Optional[str] = typer.Option(
        None,
        "--variant-path",
        help="Module or output path prefix (e.g., app/)",
    ),
    show_versions: bool = typer.Option(
        False,
        "--show-versions",
        help="Print toolchain versions in the workflow",
    ),
    from_config: bool = typer.Option(
        False,
        "--from-config",
        help="Use the selection saved in the output directory instead of the options",
    ),
    save_config: bool = typer.Option(
        False,
        "--save-config",
        help="Save the selection and generated text to the output directory",
    ),
    write: bool = typer.Option(
        False,
        "--write",
        help="Write the workflow and notes into the output directory",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Project directory to read from and write into",
        file_okay=False,
        resolve_path=True,
    ),
    raw: bool = typer.Option(
        False,
        "--raw",
        help="Print plain text without formatting",
    ),
) -> None:
    """Generate a workflow and its setup notes.

    Resolves the selected platform, SDK and build type to a workflow
    definition and prints it, optionally writing it into a project.
    """
    settings = get_settings()
    exporter = ArtifactExporter(
        LocalStorageBackend(output or settings.export.base_path),
        settings.export,
    )

    async def run_async() -> None:
        if from_config:
            config = await exporter.load_configuration()
        else:
            config = BuildConfiguration(
                platform=_parse(Platform, platform, "--platform"),
                sdk=_parse(Sdk, sdk, "--sdk"),
                build_type=_parse(BuildType, build_type, "--build-type"),
                custom_inputs=CustomInputs(
                    build_variant_name=variant_name,
                    build_variant_path=variant_path,
                    publishing_format=_parse(PublishingFormat, publishing_format, "--format"),
                    show_versions=show_versions,
                ),
            )

        bind_context(workflow=workflow_name(config))
        config.clear_artifacts()
        code_text, info_text = SelectionEngine().resolve(config)

        if raw:
            typer.echo(code_text, nl=False)
            if info_text is not None:
                typer.echo("")
                typer.echo(info_text, nl=False)
        else:
            title = f"{config.platform.label} · {config.sdk.label} · {config.build_type.label}"
            console.print(Panel(Syntax(code_text, "yaml"), title=escape(title), border_style="blue"))
            if info_text is not None:
                console.print(Panel(escape(info_text), title="Setup notes", border_style="green"))
            else:
                console.print("[dim]No manual setup needed for this combination.[/dim]")

        if save_config:
            key = await exporter.save_configuration(config)
            console.print(f"[bold]Saved configuration:[/bold] {escape(key)}")

        if write:
            result = await exporter.export(config)
            if not result.success:
                console.print(f"[bold red]✗ Export failed:[/bold red] {escape(result.error or '')}")
                raise typer.Exit(1)
            console.print(f"[bold green]✓ Wrote[/bold green] {escape(result.data.workflow_key)}")
            if result.data.info_key:
                console.print(f"[bold green]✓ Wrote[/bold green] {escape(result.data.info_key)}")
            for key in result.data.removed_keys:
                console.print(f"[yellow]Removed stale[/yellow] {escape(key)}")

    try:
        asyncio.run(run_async())
    except BuildflowError as e:
        console.print(f"[bold red]✗ Generation failed:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)
    finally:
        clear_context()


@app.command()
def options() -> None:
    """List every selectable option and its label."""
    table = Table(title="Options")
    table.add_column("Axis", style="cyan")
    table.add_column("Value")
    table.add_column("Label", style="green")

    for axis, option_type in (
        ("platform", Platform),
        ("sdk", Sdk),
        ("build-type", BuildType),
        ("format", PublishingFormat),
    ):
        for member in option_type.choices():
            table.add_row(axis, member.value, member.label)

    console.print(table)


@app.command()
def matrix() -> None:
    """Show which templates each combination resolves to."""
    table = Table(title="Resolution Table")
    table.add_column("Platform", style="cyan")
    table.add_column("SDK", style="cyan")
    table.add_column("Build Type", style="cyan")
    table.add_column("Title")
    table.add_column("Workflow")
    table.add_column("Setup Notes")

    for (platform, sdk, build_type), row in RESOLUTION_TABLE.items():
        table.add_row(
            platform.label,
            sdk.label,
            build_type.label,
            row.title,
            row.code.template_id,
            row.info.template_id if row.info else "[dim]none[/dim]",
        )

    console.print(table)


@app.command()
def check() -> None:
    """Verify every registered template loads and compiles."""
    try:
        checked = get_template_store().verify()
    except BuildflowError as e:
        console.print(f"[bold red]✗ Template check failed:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)

    console.print(f"[bold green]✓ {len(checked)} templates OK[/bold green]")


@app.command()
def settings() -> None:
    """Show current settings."""
    cfg = get_settings()

    table = Table(title="Current Settings")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    table.add_row("Log Level", cfg.log_level)
    table.add_row("Output Path", str(cfg.export.base_path))
    table.add_row("Workflows Dir", cfg.export.workflows_dir)
    table.add_row("Notes Dir", cfg.export.info_dir)
    table.add_row("Saved Config", cfg.export.config_filename)
    table.add_row("Template Override", str(cfg.templates.override_dir or "-"))

    console.print(table)

    console.print("\n[dim]Configure via environment variables:[/dim]")
    console.print("  BUILDFLOW_LOG_LEVEL, BUILDFLOW_OUTPUT_PATH, BUILDFLOW_TEMPLATE_DIR")
    console.print("  BUILDFLOW_WORKFLOWS_DIR, BUILDFLOW_INFO_DIR")


def main_entry() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main_entry()
