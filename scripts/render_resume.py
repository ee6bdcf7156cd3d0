#!/usr/bin/env python3
"""
Resume PDF Rendering CLI

Renders structured resume data (JSON or YAML) to PDF, inspects rendered PDFs,
and validates their layout against the data they were rendered from.

Commands:
    render   - Render resume data to a PDF file (or a data URL with --preview)
    inspect  - Show page count and extracted text lines of a PDF
    validate - Check a rendered PDF's layout against its resume data

Examples:\n

    render_resume.py render data/jane_doe.json                           # Single column

    render_resume.py render data/jane_doe.json --layout two-column       # Sidebar layout

    render_resume.py render data/jane_doe.yaml -p palette_slate -p spacing_compact

    render_resume.py inspect "outs/results/2026-10-17/Jane Doe_Resume.pdf"

    render_resume.py validate data/jane_doe.json "Jane Doe_TwoColumn_Resume.pdf" -l two-column
"""

import os
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from folio.contexts.profile import load_resume_data
from folio.contexts.rendering import Layout, generate_resume_pdf
from folio.contexts.rendering.layout_diagnostics import validate_rendered_resume
from folio.contexts.rendering.logger import setup_rendering_logger
from folio.utils.pdf_processing import PDFDocument, page_count
from folio.utils.timestamp import now

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))


def display_path(path: Path) -> str:
    """Return path relative to the working directory for cleaner display."""
    try:
        return str(Path(path).resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


def start_session(command: str, console_level: str = "INFO") -> Path:
    """Create a timestamped log directory and point loguru at it."""
    log_dir = LOGS_PATH / f"{command}_{now()}"
    setup_rendering_logger(log_dir, console_level=console_level)
    return log_dir


app = typer.Typer(
    help="Render structured resume data to paginated PDFs and check their layout",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("render")
def render_command(
    input_path: Annotated[
        Path,
        typer.Argument(help="Resume data file (.json, .yaml or .yml)"),
    ],
    layout: Annotated[
        str,
        typer.Option("--layout", "-l", help="Layout: 'single' or 'two-column'"),
    ] = Layout.SINGLE.value,
    preview: Annotated[
        bool,
        typer.Option("--preview", help="Print a data URL instead of writing a file"),
    ] = False,
    output_dir: Annotated[
        Optional[Path],
        typer.Option("--output-dir", "-o", help="Output directory (default: RESULTS_PATH/<today>)"),
    ] = None,
    presets: Annotated[
        Optional[List[str]],
        typer.Option("--preset", "-p", help="Layout preset, repeatable (e.g., palette_slate)"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logs, page count and output size"),
    ] = False,
):
    """
    Render resume data to PDF.

    Examples:\n

        $ render_resume.py render jane.json                          # Write PDF

        $ render_resume.py render jane.json -l two-column -o out/    # Sidebar layout into out/

        $ render_resume.py render jane.json --preview                 # Print a data URL
    """
    # Preview output is the data URL itself; keep info logs off stdout
    console_level = "WARNING" if preview else ("DEBUG" if verbose else "INFO")
    log_dir = start_session("render", console_level=console_level)

    if not preview:
        typer.secho(f"\nRendering: {input_path.name} ({layout})", fg=typer.colors.BLUE, bold=True)

    try:
        data = load_resume_data(input_path)
        result = generate_resume_pdf(
            data,
            layout=layout,
            preview=preview,
            output_dir=output_dir,
            presets=presets,
        )
    except (ValueError, FileNotFoundError) as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    if preview:
        typer.echo(result)
        raise typer.Exit(code=0)

    typer.secho("✓ Rendering succeeded", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  PDF: {display_path(result)}")
    if verbose:
        typer.echo(f"  Pages: {page_count(result)}")
        typer.echo(f"  Size: {result.stat().st_size} bytes")
        typer.echo(f"  Log: {display_path(log_dir / 'render.log')}")
    typer.echo("")


@app.command("inspect")
def inspect_command(
    pdf_path: Annotated[Path, typer.Argument(help="PDF to inspect")],
    columns: Annotated[
        Optional[float],
        typer.Option(
            "--columns",
            "-c",
            help="Column split as a fraction of page width (e.g., 0.324 for the sidebar layout)",
            min=0.0,
            max=1.0,
        ),
    ] = None,
):
    """
    Show page count and extracted text lines per page (and column).

    Examples:\n

        $ render_resume.py inspect resume.pdf

        $ render_resume.py inspect resume.pdf --columns 0.324
    """
    try:
        pdf = PDFDocument(pdf_path, column_splits=[columns] if columns else None)
    except FileNotFoundError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.secho(f"\n{pdf_path.name}: {pdf.page_count} page(s)", fg=typer.colors.BLUE, bold=True)
    for page in range(1, pdf.page_count + 1):
        for column in range(pdf.num_columns):
            header = f"Page {page}" if pdf.num_columns == 1 else f"Page {page}, column {column}"
            typer.secho(f"\n=== {header} ===", bold=True)
            for line in pdf.get_lines(page, column):
                typer.echo(f"  {line}")
    typer.echo("")


@app.command("validate")
def validate_command(
    input_path: Annotated[Path, typer.Argument(help="Resume data the PDF was rendered from")],
    pdf_path: Annotated[Path, typer.Argument(help="Rendered PDF")],
    layout: Annotated[
        str,
        typer.Option("--layout", "-l", help="Layout the PDF was rendered with"),
    ] = Layout.SINGLE.value,
):
    """
    Validate a rendered PDF's layout against its resume data.

    Checks that every section with content has its heading in the right
    column, that empty sections are omitted, and that the two-column sidebar
    background is present on every page.

    Examples:\n

        $ render_resume.py validate jane.json "Jane Doe_Resume.pdf"

        $ render_resume.py validate jane.json "Jane Doe_TwoColumn_Resume.pdf" -l two-column
    """
    log_dir = start_session("validate")
    typer.secho(f"\nValidating: {pdf_path.name}", fg=typer.colors.BLUE, bold=True)

    try:
        data = load_resume_data(input_path)
        diagnostics = validate_rendered_resume(data, pdf_path, layout)
    except (ValueError, FileNotFoundError) as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    issues = diagnostics.get_inherited_issues()
    if not issues:
        typer.secho("\n✓ Validation passed", fg=typer.colors.GREEN, bold=True)
    else:
        typer.secho("\n✗ Validation failed", fg=typer.colors.RED, bold=True)
        for issue in issues:
            typer.secho(f"  - {issue}", fg=typer.colors.RED)
    typer.echo(f"  Page count: {diagnostics.actual_page_count}")
    typer.echo(f"  Log: {display_path(log_dir / 'render.log')}")
    typer.echo("")

    raise typer.Exit(code=0 if not issues else 1)


if __name__ == "__main__":
    app()
