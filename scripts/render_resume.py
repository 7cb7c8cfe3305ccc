#!/usr/bin/env python3
"""
Resume Merge and Export CLI

Merges a resume record (JSON or YAML, camelCase wire shape) into an HTML
template or preset, and exports records to HTML, Markdown, JSON or text.

Commands:
    render   - Merge a record into a template and print or save the markup
    export   - Write a record export file
    presets  - List the preset template library
    limits   - Show layout limits inferred from a template
    inspect  - Show which tokens and repeat blocks a template uses

Examples:\n

    render_resume.py render data/ada.json --preset minimal-bw              # Print merged fragment

    render_resume.py render data/ada.yaml -t clone.html -o out.html -D     # Save full document

    render_resume.py export data/ada.json markdown --output-dir outs/      # Markdown export

    render_resume.py presets --category modern                             # List modern presets
"""

from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from restyle.contexts.intake import normalize_record
from restyle.contexts.rendering import (
    EXPORT_FORMATS,
    build_download_document,
    build_print_document,
    export_resume,
)
from restyle.contexts.rendering.logger import setup_rendering_logger
from restyle.contexts.templating import (
    PresetRegistry,
    ResumeRecord,
    analyze_layout_limits,
    inspect_template,
    render,
)
from restyle.contexts.templating.exceptions import (
    InvalidRecordStructureError,
    PresetNotFoundError,
)
from restyle.contexts.templating.layout_limits import PAGE_SIZES
from restyle.contexts.templating.logger import setup_templating_logger
from restyle.utils.logger import LOGS_PATH

app = typer.Typer(
    help="Merge resume records into HTML templates and export them",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _session_log_dir(kind: str) -> Path:
    """Timestamped log directory for one CLI session, e.g. outs/logs/render_20251114_123456."""
    return LOGS_PATH / f"{kind}_{datetime.now().strftime('%Y%m%d_%H%M%S')}"


def _fail(message: str) -> None:
    typer.secho(f"Error: {message}\n", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


def _load_record(data_path: Path) -> ResumeRecord:
    if not data_path.exists():
        _fail(f"Record file not found: {data_path}")
    try:
        return ResumeRecord.load(data_path)
    except (InvalidRecordStructureError, ValueError) as e:
        _fail(f"Could not read record from {data_path}: {e}")


def _resolve_template(template_path: Optional[Path], preset_id: Optional[str]):
    """Return (markup, layout limits, page size) from a template file or a preset."""
    if template_path and preset_id:
        _fail("Use either --template or --preset, not both")

    if template_path:
        if not template_path.exists():
            _fail(f"Template file not found: {template_path}")
        markup = template_path.read_text(encoding="utf-8")
        return markup, analyze_layout_limits(markup), PAGE_SIZES["A4"]

    try:
        preset = PresetRegistry().get_preset(preset_id or "default")
    except PresetNotFoundError as e:
        _fail(str(e))
    return preset.html_template, preset.layout_limits, preset.page_size


@app.command("render")
def render_command(
    data_path: Annotated[
        Path,
        typer.Argument(help="Record file (.json, .yaml or .yml)"),
    ],
    template_path: Annotated[
        Optional[Path],
        typer.Option("--template", "-t", help="HTML template file"),
    ] = None,
    preset_id: Annotated[
        Optional[str],
        typer.Option("--preset", "-p", help="Preset template id (default: 'default')"),
    ] = None,
    output_path: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Write to this file instead of stdout"),
    ] = None,
    document: Annotated[
        bool,
        typer.Option("--document", "-D", help="Wrap the markup in a full HTML document"),
    ] = False,
    for_print: Annotated[
        bool,
        typer.Option("--print", help="Use the print document shell (opens the print dialog)"),
    ] = False,
    normalize: Annotated[
        bool,
        typer.Option(
            "--normalize",
            "-n",
            help="Truncate fields to the template's layout limits before merging",
        ),
    ] = False,
):
    """
    Merge a record into a template and print or save the result.

    Examples:\n

        $ render_resume.py render ada.json --preset modern-fresh

        $ render_resume.py render ada.json -t clone.html -o ada.html --normalize
    """
    setup_templating_logger(_session_log_dir("render"), source="file" if template_path else "preset")

    record = _load_record(data_path)
    markup, limits, page_size = _resolve_template(template_path, preset_id)

    if normalize:
        record = normalize_record(record, limits)

    html = render(markup, record)

    if document:
        if for_print:
            html = build_print_document(html, record, page_size)
        else:
            html = build_download_document(html, record)

    if output_path is None:
        typer.echo(html)
        return

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(html, encoding="utf-8")
    typer.secho(f"✓ Wrote {output_path}", fg=typer.colors.GREEN, bold=True)


@app.command("export")
def export_command(
    data_path: Annotated[
        Path,
        typer.Argument(help="Record file (.json, .yaml or .yml)"),
    ],
    export_format: Annotated[
        str,
        typer.Argument(help=f"Export format: {', '.join(EXPORT_FORMATS)}"),
    ],
    template_path: Annotated[
        Optional[Path],
        typer.Option("--template", "-t", help="HTML template file (html format only)"),
    ] = None,
    preset_id: Annotated[
        Optional[str],
        typer.Option("--preset", "-p", help="Preset template id (html format only)"),
    ] = None,
    output_dir: Annotated[
        Path,
        typer.Option("--output-dir", "-d", help="Directory for the export file"),
    ] = Path("."),
):
    """
    Export a record as HTML, Markdown, JSON or plain text.

    Examples:\n

        $ render_resume.py export ada.json markdown

        $ render_resume.py export ada.json html --preset creative-colorful -d outs/
    """
    setup_rendering_logger(_session_log_dir("export"), export_format=export_format)

    record = _load_record(data_path)

    template = None
    if export_format == "html":
        template, _, _ = _resolve_template(template_path, preset_id)

    try:
        output_path = export_resume(record, export_format, output_dir, template=template)
    except ValueError as e:
        _fail(str(e))

    typer.secho(f"✓ Exported {export_format}: {output_path}", fg=typer.colors.GREEN, bold=True)


@app.command("presets")
def presets_command(
    category: Annotated[
        Optional[str],
        typer.Option("--category", "-c", help="Only list presets in this category"),
    ] = None,
):
    """List the preset template library."""
    registry = PresetRegistry()
    presets = registry.list_by_category(category) if category else registry.list_presets()

    if not presets:
        typer.echo("No presets found.")
        return

    typer.secho(f"\n{len(presets)} preset(s)", fg=typer.colors.BLUE, bold=True)
    for preset in presets:
        typer.echo(f"  {preset.id:<22} {preset.category:<13} {preset.name}")
        typer.echo(f"  {'':<22} {'':<13} {preset.description}")


@app.command("limits")
def limits_command(
    template_path: Annotated[
        Path,
        typer.Argument(help="HTML template file"),
    ],
):
    """Show the layout limits inferred from a template's markup."""
    if not template_path.exists():
        _fail(f"Template file not found: {template_path}")

    limits = analyze_layout_limits(template_path.read_text(encoding="utf-8"))
    for name, value in limits.to_dict().items():
        typer.echo(f"  {name:<16} {value}")


@app.command("inspect")
def inspect_command(
    template_path: Annotated[
        Path,
        typer.Argument(help="HTML template file"),
    ],
):
    """Show which tokens and repeat blocks a template uses."""
    if not template_path.exists():
        _fail(f"Template file not found: {template_path}")

    vocabulary = inspect_template(template_path.read_text(encoding="utf-8"))

    typer.echo(f"  Scalar tokens:     {', '.join(vocabulary.scalar_tokens) or '-'}")
    typer.echo(f"  Experience blocks: {vocabulary.experience_blocks}")
    typer.echo(f"  Education blocks:  {vocabulary.education_blocks}")
    typer.echo(f"  Skill tokens:      {', '.join(vocabulary.skill_tokens) or '-'}")
    if vocabulary.unknown_tokens:
        typer.secho(
            f"  Unknown tokens (removed on merge): {', '.join(vocabulary.unknown_tokens)}",
            fg=typer.colors.YELLOW,
        )
    if vocabulary.is_empty:
        typer.secho("  Template receives no record data", fg=typer.colors.YELLOW)


if __name__ == "__main__":
    app()
