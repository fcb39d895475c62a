"""doc-outline command line interface."""

import json
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from docoutline.core.extractor_factory import (
    ExtractorFactory,
    extract_links,
    extract_outline,
    extract_structure,
)
from docoutline.core.output_writer import OutputWriter
from docoutline.models.epub import EpubStructure
from docoutline.models.options import OutlineOptions
from docoutline.models.outline import DocOutline

app = typer.Typer(
    name="doc-outline",
    help="Extract a navigable outline from EPUB, HTML, Markdown and PDF files.",
    add_completion=False,
)

console = Console()

FileArgument = Annotated[
    Path,
    typer.Argument(
        help="Path to the document (EPUB, HTML, Markdown or PDF)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
    ),
]


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _resolve_format(path: Path, fmt: str | None) -> str:
    """Explicit format name, or the one detected from the file name."""
    resolved = fmt.lower() if fmt else ExtractorFactory.detect_format(path.name)
    if resolved not in ExtractorFactory.FORMATS:
        console.print(f"[red]Unsupported file format: {fmt or path.suffix}[/]")
        console.print(f"[dim]Supported formats: {', '.join(ExtractorFactory.FORMATS)}[/]")
        raise typer.Exit(1)
    return resolved


def _load_options(config: Path | None) -> OutlineOptions:
    if config is None:
        return OutlineOptions()
    try:
        return OutlineOptions.from_file(config)
    except (OSError, ValueError, ValidationError) as e:
        console.print(f"[red]Invalid config {config}: {e}[/]")
        raise typer.Exit(1)


def display_outline(outline: DocOutline, title: str) -> None:
    """Display an outline as an indented table."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim", width=4)
    table.add_column("Title", style="white")
    table.add_column("Level", justify="right", style="green")
    table.add_column("Target", style="dim")

    for section in outline.sections:
        indent = "  " * section.depth
        level = f"h{section.heading_level}" if section.heading_level else str(section.depth)
        target = section.href or ""
        table.add_row(str(section.order_index + 1), f"{indent}{section.title}", level, target)

    console.print(table)


@app.command()
def outline(
    path: FileArgument,
    fmt: Annotated[
        Optional[str],
        typer.Option("--format", "-f", help="Force format: epub, html, markdown or pdf"),
    ] = None,
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="JSON file with outline options", exists=True, dir_okay=False),
    ] = None,
    min_level: Annotated[
        Optional[int],
        typer.Option("--min-level", help="Smallest heading level to include (HTML/Markdown)"),
    ] = None,
    max_level: Annotated[
        Optional[int],
        typer.Option("--max-level", help="Largest heading level to include (HTML/Markdown)"),
    ] = None,
    no_ids: Annotated[
        bool,
        typer.Option("--no-ids", help="Do not generate ids for headings without one"),
    ] = False,
    keep_scripts: Annotated[
        bool,
        typer.Option("--keep-scripts", help="Keep <script>/<noscript> before extraction (HTML)"),
    ] = False,
    include_css: Annotated[
        Optional[str],
        typer.Option("--include-css", help="Only use subtrees matching this CSS selector (HTML)"),
    ] = None,
    exclude_css: Annotated[
        Optional[str],
        typer.Option("--exclude-css", help="Drop subtrees matching this CSS selector (HTML)"),
    ] = None,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the outline as JSON"),
    ] = False,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Write the outline to this JSON file"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log extraction progress"),
    ] = False,
) -> None:
    """Extract and display the outline of a document."""
    _configure_logging(verbose)
    source_format = _resolve_format(path, fmt)
    options = _load_options(config)

    heading = options.heading
    overrides = {
        "min_heading_level": min_level,
        "max_heading_level": max_level,
        "include_css": include_css,
        "exclude_css": exclude_css,
    }
    updates = {key: value for key, value in overrides.items() if value is not None}
    if no_ids:
        updates["generate_ids"] = False
    if keep_scripts:
        updates["strip_scripts"] = False
    options = options.model_copy(update={"heading": heading.model_copy(update=updates)})

    data = path.read_bytes()
    epub: EpubStructure | None = None
    if source_format == "epub" and options.enable_epub_outline:
        epub = extract_structure(data)
        result = epub.outline
    else:
        result = extract_outline(data, source_format, options)

    if output is not None:
        written = OutputWriter(output, path).write(result, source_format, epub)
        console.print(f"[green]Wrote {len(result)} sections to {written}[/]")
        return

    if as_json:
        console.print_json(result.model_dump_json())
        return

    if not result.sections:
        console.print("[yellow]No outline found.[/]")
        return

    display_outline(result, f"Outline of {path.name}")


@app.command("epub-info")
def epub_info(
    path: FileArgument,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log extraction progress"),
    ] = False,
) -> None:
    """Display EPUB package, spine, DRM and table of contents details."""
    _configure_logging(verbose)
    structure = extract_structure(path.read_bytes())
    package = structure.package

    info_lines = [f"[bold]{path.name}[/]", ""]
    if package is None:
        info_lines.append("[yellow]No package document found[/]")
    else:
        info_lines.extend(
            [
                f"[dim]Package:[/] {package.path}",
                f"[dim]Reading direction:[/] {package.reading_direction or 'default'}",
                f"[dim]Navigation document:[/] {package.navigation_document_path or 'none'}",
                f"[dim]Cover image:[/] {package.cover_image_path or 'none'}",
                f"[dim]Manifest items:[/] {len(package.manifest)}",
                f"[dim]Content files:[/] {structure.content_file_count}",
                f"[dim]Embedded resources:[/] {structure.embedded_resource_count} "
                f"({len(package.images)} images, {len(package.fonts)} fonts, "
                f"{len(package.stylesheets)} stylesheets, {len(package.other_resources)} other)",
            ]
        )

    drm = "[red]yes[/]" if structure.encryption.has_drm else "no"
    info_lines.append(f"[dim]DRM:[/] {drm}")
    for uri in structure.encryption.encrypted_resources:
        info_lines.append(f"  [dim]-[/] {uri}")
    info_lines.append(f"[dim]TOC source:[/] {structure.toc.source.value}")

    console.print(Panel("\n".join(info_lines), title="EPUB Info", border_style="blue"))

    if structure.outline.sections:
        display_outline(structure.outline, "Table of Contents")


@app.command()
def links(
    path: FileArgument,
    base_uri: Annotated[
        Optional[str],
        typer.Option("--base-uri", "-b", help="Resolve relative links and flag external ones against this URI"),
    ] = None,
    fmt: Annotated[
        Optional[str],
        typer.Option("--format", "-f", help="Force format: html or markdown"),
    ] = None,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print links as JSON"),
    ] = False,
) -> None:
    """List the hyperlinks of an HTML or Markdown document."""
    _configure_logging(False)
    source_format = _resolve_format(path, fmt)
    found = extract_links(path.read_bytes(), source_format, base_uri)

    if as_json:
        console.print_json(json.dumps([link.model_dump() for link in found]))
        return

    if not found:
        console.print("[yellow]No links found.[/]")
        return

    table = Table(title=f"Links in {path.name}", show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim", width=4)
    table.add_column("Text", style="white")
    table.add_column("URL", style="green")
    table.add_column("External", justify="center")

    for i, link in enumerate(found, start=1):
        table.add_row(str(i), link.text or "", link.url, "yes" if link.is_external else "")

    console.print(table)
