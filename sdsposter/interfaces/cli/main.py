"""
CLI Main - Typer-based command-line interface.

Usage:
    sdsposter extract path/to/sds.pdf
    sdsposter extract label.png --output record.json --retries 3
    sdsposter pictograms list
    sdsposter pictograms set GHS-02 flame.png
    sdsposter serve
"""

from __future__ import annotations

import asyncio
import json
import logging
import mimetypes
import re
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from sdsposter.config import SdsPosterError, get_settings
from sdsposter.domains.hazard import (
    HazardRecord,
    PictogramCode,
    ResolvedPictogram,
    resolve_pictograms,
)

app = typer.Typer(
    name="sdsposter",
    help="SDS Poster - Trilingual hazard posters from safety data sheets",
    add_completion=False,
)
pictograms_app = typer.Typer(help="Manage custom pictogram images.")
app.add_typer(pictograms_app, name="pictograms")
console = Console()

# Exact codes only: "GHS-02", "ghs02", "02", "2"
_CODE_PATTERN = re.compile(r"(?:ghs-?)?0?([1-9])")


@app.callback()
def configure(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs"),
) -> None:
    """Configure logging for all commands."""
    level = logging.DEBUG if verbose else get_settings().log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


@app.command()
def extract(
    path: Path = typer.Argument(..., help="Path to a PDF or image file"),
    api_key: str | None = typer.Option(
        None, "--api-key", "-k", help="Gemini API key (defaults to configuration)"
    ),
    output: Path | None = typer.Option(None, "--output", "-o", help="Output JSON path"),
    retries: int = typer.Option(1, "--retries", "-r", min=1, help="Attempts on transient errors"),
) -> None:
    """Extract a trilingual hazard record from a safety data sheet."""
    if not path.exists():
        console.print(f"[red]Error:[/red] File not found: {path}")
        raise typer.Exit(1)

    mime_type, _ = mimetypes.guess_type(path.name)
    if mime_type != "application/pdf" and not (mime_type or "").startswith("image/"):
        console.print(f"[red]Error:[/red] Unsupported file type: {path.name}")
        raise typer.Exit(1)

    asyncio.run(_extract_async(path, mime_type, api_key, output, retries))


async def _extract_async(
    path: Path,
    mime_type: str,
    api_key: str | None,
    output: Path | None,
    retries: int,
) -> None:
    """Async extraction implementation."""
    from sdsposter.domains.extraction import ExtractionSession
    from sdsposter.interfaces.api.deps import get_extractor, get_pictogram_library

    settings = get_settings()
    session = ExtractionSession(get_extractor())

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        progress.add_task(f"Analyzing {path.name}...", total=None)

        try:
            record = await session.upload(
                path.read_bytes(),
                mime_type,
                api_key or settings.gemini_api_key,
                attempts=retries,
            )
        except SdsPosterError as e:
            console.print(f"[red]Error:[/red] {e.message} [dim]({e.code.value})[/dim]")
            raise typer.Exit(1)

    if record is None:
        raise typer.Exit(1)
    pictograms = resolve_pictograms(record.hazards.ghs_pictograms, get_pictogram_library().load())

    console.print("\n[green]Extraction Complete[/green]\n")
    console.print(_summary_table(record))
    _print_pictograms(pictograms)

    if output:
        output.write_text(
            json.dumps(record.to_wire(), indent=2, ensure_ascii=False),
            encoding="utf-8",
        )
        console.print(f"\n[green]Saved to:[/green] {output}")


def _summary_table(record: HazardRecord) -> Table:
    """Trilingual overview of the main record sections."""
    table = Table(title="Hazard Record", show_lines=True)
    table.add_column("Section", style="cyan")
    table.add_column("日本語")
    table.add_column("English")
    table.add_column("Tiếng Việt")

    rows = [
        ("Product", record.basic_info.product_name),
        ("Company", record.basic_info.company_name),
        ("GHS class", record.hazards.ghs_class),
        ("Hazard statements", record.hazards.hazard_statements),
        ("Precautions", record.hazards.precautionary_statements),
    ]
    rows += [(route.label.en, text) for route, text in record.first_aid.items()]
    rows += [
        ("Extinguishing media", record.firefighting.extinguishing_media),
        ("Handling", record.handling_storage.handling),
        ("Storage", record.handling_storage.storage),
        ("Disposal", record.disposal.method),
    ]
    for section, text in rows:
        table.add_row(section, text.ja, text.en, text.vi)

    for ingredient in record.composition.ingredients:
        table.add_row(
            f"Ingredient ({ingredient.concentration})",
            ingredient.name.ja,
            ingredient.name.en,
            ingredient.name.vi,
        )
    return table


def _print_pictograms(pictograms: list[ResolvedPictogram]) -> None:
    if not pictograms:
        console.print("\n[dim]No GHS pictograms recognized.[/dim]")
        return

    console.print(
        Panel(
            "\n".join(
                f"[bold]{p.code.value}[/bold] {p.label} [dim]({p.source_token})[/dim]"
                for p in pictograms
            ),
            title="GHS Pictograms",
        )
    )


@pictograms_app.command("list")
def list_pictograms() -> None:
    """Show all nine pictograms and their effective images."""
    from sdsposter.interfaces.api.deps import get_pictogram_library

    table = Table(title="GHS Pictograms")
    table.add_column("Code", style="cyan")
    table.add_column("Label")
    table.add_column("Image")
    table.add_column("Custom", justify="center")

    for entry in get_pictogram_library().catalogue():
        image = entry.image or ""
        if image.startswith("data:"):
            image = f"{image.split(';', 1)[0]} ({len(image)} chars)"
        table.add_row(entry.code.value, entry.label, image, "yes" if entry.custom else "")

    console.print(table)


@pictograms_app.command("set")
def set_pictogram(
    code: str = typer.Argument(..., help="Pictogram code, e.g. GHS-02"),
    image: str = typer.Argument(..., help="Image file path or URL"),
) -> None:
    """Replace a pictogram's image with a local file or URL."""
    from sdsposter.interfaces.api.deps import get_pictogram_library

    pictogram = _parse_code(code)
    library = get_pictogram_library()

    try:
        if Path(image).is_file():
            library.set_image(pictogram, image)
        else:
            library.set(pictogram, image)
    except SdsPosterError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(1)

    console.print(f"[green]Custom image saved for {pictogram.value}[/green]")


@pictograms_app.command("remove")
def remove_pictogram(
    code: str = typer.Argument(..., help="Pictogram code, e.g. GHS-02"),
) -> None:
    """Restore a pictogram's default image."""
    from sdsposter.interfaces.api.deps import get_pictogram_library

    pictogram = _parse_code(code)
    if get_pictogram_library().remove(pictogram):
        console.print(f"[green]Default image restored for {pictogram.value}[/green]")
    else:
        console.print(f"[yellow]No custom image for {pictogram.value}[/yellow]")


def _parse_code(code: str) -> PictogramCode:
    """Parse a user-typed code ("GHS-02", "ghs02", "2")."""
    match = _CODE_PATTERN.fullmatch(code.strip().lower())
    if match is None:
        valid = ", ".join(c.value for c in PictogramCode)
        console.print(f"[red]Error:[/red] Unknown pictogram code: {code} (expected {valid})")
        raise typer.Exit(1)
    return PictogramCode.from_number(int(match.group(1)))


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", "-h", help="Host to bind"),
    port: int | None = typer.Option(None, "--port", "-p", help="Port to bind"),
    reload: bool = typer.Option(False, "--reload", help="Enable auto-reload"),
) -> None:
    """Start the API server."""
    import uvicorn

    settings = get_settings()
    host = host or settings.api_host
    port = port or settings.api_port

    console.print("\n[green]Starting SDS Poster API server[/green]")
    console.print(f"[dim]http://{host}:{port}[/dim]\n")

    uvicorn.run(
        "sdsposter.interfaces.api:create_app",
        host=host,
        port=port,
        reload=reload,
        factory=True,
    )


@app.command()
def version() -> None:
    """Show version information."""
    from sdsposter import __version__

    console.print(f"SDS Poster v{__version__}")


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
