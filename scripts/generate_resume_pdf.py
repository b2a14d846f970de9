#!/usr/bin/env python3
"""
Résumé PDF Generation CLI

Renders the résumé HTML page to PDF with headless Chromium, validates rendered
PDFs, and exports the CSS build's theme configuration.

Commands:
    render  - Render the résumé HTML to PDF (default when no command is given)
    check   - Validate an existing PDF
    theme   - Export config/theme.yaml to tailwind.config.js
    events  - Show recent render pipeline events

Examples:\n

    generate_resume_pdf.py                                     # Render with configured paths

    generate_resume_pdf.py render --preset a4                  # A4 paper

    generate_resume_pdf.py render -i resume.html -o out.pdf    # Explicit paths

    generate_resume_pdf.py check web/static/resume.pdf --max-pages 2

    generate_resume_pdf.py theme --output tailwind.config.js
"""

from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from folio.contexts.rendering import render_resume
from folio.contexts.rendering.page_options import resolve_page_options
from folio.contexts.rendering.renderer import (
    LOAD_MODES,
    RENDER_TIMEOUT_MS,
    RESUME_HTML_PATH,
    RESUME_PDF_PATH,
)
from folio.contexts.rendering.validator import DEFAULT_MAX_BYTES, validate_pdf
from folio.contexts.styling.theme import (
    ThemeConfigError,
    content_files,
    load_theme,
    write_tailwind_config,
)
from folio.utils.event_logging import get_recent_events
from folio.utils.timestamp import format_timestamp

load_dotenv()


def display_path(path: Path) -> str:
    """Return path relative to the working directory for cleaner display."""
    try:
        return str(Path(path).resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


app = typer.Typer(
    help="Render the résumé HTML to PDF, validate PDFs, and export the CSS theme",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Render the résumé when no command is provided."""
    if ctx.invoked_subcommand is None:
        ctx.invoke(render_command)


@app.command("render")
def render_command(
    input_path: Annotated[
        Optional[Path],
        typer.Option("--input", "-i", help="HTML document to render (default: RESUME_HTML_PATH)"),
    ] = None,
    output_path: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="PDF to write (default: RESUME_PDF_PATH)"),
    ] = None,
    preset: Annotated[
        Optional[str],
        typer.Option("--preset", "-p", help="Page preset from config/page_options.yaml"),
    ] = None,
    margin: Annotated[
        Optional[str],
        typer.Option("--margin", help="Same margin on all four sides (e.g., 0.4in, 10mm)"),
    ] = None,
    timeout_ms: Annotated[
        float,
        typer.Option("--timeout-ms", help="Give up if the page has not settled after this long", min=1),
    ] = RENDER_TIMEOUT_MS,
    load_mode: Annotated[
        str,
        typer.Option("--load-mode", help="'content' injects the HTML, 'file' opens the file URI"),
    ] = "content",
    max_pages: Annotated[
        Optional[int],
        typer.Option("--max-pages", help="Warn when the PDF has more pages than this", min=1),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show every error and validation issue"),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Only write render.log, keep the console to the summary"),
    ] = False,
):
    """
    Render the résumé HTML to PDF.

    Overwrites the output PDF. Exits with code 1 if the input is missing or
    the browser fails to launch, load, or print.

    Examples:\n

        $ generate_resume_pdf.py render                        # Configured paths, Letter

        $ generate_resume_pdf.py render --preset a4 --margin 10mm

        $ generate_resume_pdf.py render --load-mode file       # Resolve relative assets
    """
    input_path = input_path or RESUME_HTML_PATH
    output_path = output_path or RESUME_PDF_PATH

    typer.secho(f"\nRendering: {display_path(input_path)}", fg=typer.colors.BLUE, bold=True)
    typer.echo(f"Output: {display_path(output_path)}")
    typer.echo("")

    if load_mode not in LOAD_MODES:
        typer.secho(
            f"Error: --load-mode must be one of {', '.join(LOAD_MODES)}\n",
            fg=typer.colors.RED,
            err=True,
        )
        raise typer.Exit(code=1)

    overrides = None
    if margin is not None:
        overrides = {"margins": {side: margin for side in ("top", "right", "bottom", "left")}}

    try:
        page_options = resolve_page_options(preset=preset, overrides=overrides)
    except ValueError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    result = render_resume(
        input_path=input_path,
        output_path=output_path,
        page_options=page_options,
        timeout_ms=timeout_ms,
        load_mode=load_mode,
        max_pages=max_pages,
        verbose=verbose,
        quiet=quiet,
    )

    typer.echo("")
    if result.success:
        typer.secho("✓ PDF generated", fg=typer.colors.GREEN, bold=True)
        typer.echo(f"  PDF: {display_path(result.pdf_path)}")
        typer.echo(f"  File size: {result.size_bytes / 1024:.2f} KB")
        if result.page_count is not None:
            typer.echo(f"  Pages: {result.page_count}")

        if result.validation and result.validation.issues:
            typer.secho(
                f"  {len(result.validation.issues)} validation warning(s):", fg=typer.colors.YELLOW
            )
            issue_limit = len(result.validation.issues) if verbose else 3
            for issue in result.validation.issues[:issue_limit]:
                typer.secho(f"  - {issue}", fg=typer.colors.YELLOW)
    else:
        typer.secho(f"✗ Render failed ({result.error_kind})", fg=typer.colors.RED, bold=True)
        for error in result.errors:
            typer.secho(f"  - {error}", fg=typer.colors.RED)

    if result.log_dir:
        typer.echo(f"  Log: {display_path(result.log_dir / 'render.log')}")
    typer.echo("")

    raise typer.Exit(code=0 if result.success else 1)


@app.command("check")
def check_command(
    pdf_path: Annotated[Path, typer.Argument(help="PDF file to validate")],
    max_pages: Annotated[
        Optional[int],
        typer.Option("--max-pages", help="Fail when the PDF has more pages than this", min=1),
    ] = None,
    max_bytes: Annotated[
        int,
        typer.Option("--max-bytes", help="Fail when the PDF is larger than this", min=1),
    ] = DEFAULT_MAX_BYTES,
    expect: Annotated[
        Optional[str],
        typer.Option("--expect", "-e", help="Text that must appear in the PDF"),
    ] = None,
):
    """
    Validate a rendered PDF.

    Checks the PDF signature, size, page count and (optionally) that some
    expected text survived rendering.

    Examples:\n

        $ generate_resume_pdf.py check web/static/resume.pdf --max-pages 2

        $ generate_resume_pdf.py check out.pdf --expect "Work Experience"
    """
    typer.secho(f"\nValidating: {display_path(pdf_path)}", fg=typer.colors.BLUE, bold=True)

    result = validate_pdf(pdf_path, max_pages=max_pages, max_bytes=max_bytes, expected_text=expect)

    if result.is_valid:
        typer.secho("\n✓ Validation passed", fg=typer.colors.GREEN, bold=True)
    else:
        typer.secho("\n✗ Validation failed", fg=typer.colors.RED, bold=True)
        for issue in result.issues:
            typer.secho(f"  - {issue}", fg=typer.colors.RED)

    if result.page_count is not None:
        typer.echo(f"  Pages: {result.page_count}")
    if result.size_bytes is not None:
        typer.echo(f"  File size: {result.size_bytes / 1024:.2f} KB")
    typer.echo("")

    raise typer.Exit(code=0 if result.is_valid else 1)


@app.command("theme")
def theme_command(
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Theme YAML (default: THEME_CONFIG_PATH)"),
    ] = None,
    output_path: Annotated[
        Path,
        typer.Option("--output", "-o", help="Where to write the build tool config"),
    ] = Path("tailwind.config.js"),
    list_content: Annotated[
        bool,
        typer.Option("--list-content", help="List the files the content globs match"),
    ] = False,
):
    """
    Export the theme configuration to tailwind.config.js.

    Examples:\n

        $ generate_resume_pdf.py theme                         # Write ./tailwind.config.js

        $ generate_resume_pdf.py theme --list-content          # Also show scanned files
    """
    try:
        theme = load_theme(config_path)
    except ThemeConfigError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    written = write_tailwind_config(theme, output_path)
    typer.secho(f"\n✓ Theme exported: {display_path(written)}", fg=typer.colors.GREEN, bold=True)
    typer.echo(
        f"  Colors: {len(theme.colors)}  Animations: {len(theme.animations)}  "
        f"Keyframes: {len(theme.keyframes)}"
    )

    if list_content:
        files = content_files(theme, Path.cwd())
        typer.echo(f"\nContent files ({len(files)}):")
        for path in files:
            typer.echo(f"  {display_path(path)}")
    typer.echo("")


@app.command("events")
def events_command(
    n: Annotated[int, typer.Option("--n", "-n", help="Number of events to show", min=1)] = 10,
    document: Annotated[
        Optional[str], typer.Option("--document", "-d", help="Only events for this document")
    ] = None,
    event_type: Annotated[
        Optional[str], typer.Option("--type", "-t", help="Only events of this type")
    ] = None,
):
    """
    Show recent render pipeline events.

    Examples:\n

        $ generate_resume_pdf.py events                        # Last 10 events

        $ generate_resume_pdf.py events -t render_failed -n 5
    """
    events = get_recent_events(n, document_name=document, event_type=event_type)
    if not events:
        typer.echo("No events recorded.")
        raise typer.Exit(code=0)

    for event in events:
        when = format_timestamp(event.get("timestamp", ""), relative=True)
        line = f"{when:>10}  {event.get('event_type', '?'):<18} {event.get('document_name', '?')}"
        if event.get("error_kind"):
            line += f"  ({event['error_kind']})"
        color = typer.colors.RED if event.get("event_type") == "render_failed" else None
        typer.secho(line, fg=color)


if __name__ == "__main__":
    app()
