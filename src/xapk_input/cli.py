"""
xapk-input CLI - Inspect candidate XAPK packages from the command line.
"""

import json
import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from xapk_input.logging_config import setup_logging

app = typer.Typer(
    name="xapk-input",
    help="xapk-input - XAPK split-APK package detection",
    no_args_is_help=True,
)

console = Console()


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Override the configured log level"
    ),
) -> None:
    # Fall back to basic console logging if file logging is not permitted
    try:
        setup_logging(context="cli", level=log_level)
    except PermissionError:
        logging.basicConfig(level=(log_level or "INFO").upper())


@app.command()
def inspect(
    path: Path = typer.Argument(..., help="Path to the candidate XAPK file"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
) -> None:
    """
    Check whether a file is a supported XAPK package.

    Exits with status 0 when the package is supported and 1 otherwise.
    """
    from xapk_input.xapk.utils import inspect_manifest, is_supported

    if not path.exists():
        console.print(f"[bold red]Error:[/bold red] Path not found: {path}")
        raise typer.Exit(1)

    result = inspect_manifest(path)
    manifest = result.manifest
    supported = manifest is not None and is_supported(manifest)

    if as_json:
        payload = {
            "path": str(path),
            "supported": supported,
            "manifest": manifest.model_dump(mode="json") if manifest else None,
            "failure": result.failure.value if result.failure else None,
            "detail": result.detail,
        }
        typer.echo(json.dumps(payload, indent=2))
        raise typer.Exit(0 if supported else 1)

    if manifest is None:
        assert result.failure is not None
        console.print(
            f"[yellow]No XAPK manifest:[/yellow] {result.failure.value} ({result.detail})"
        )
        raise typer.Exit(1)

    console.print(f"[bold blue]XAPK manifest:[/bold blue] {path}")
    console.print(f"  Package: {manifest.package_name or 'N/A'}")
    console.print(f"  Name: {manifest.name or 'N/A'}")
    console.print(f"  Version: {manifest.version_name or 'N/A'}")
    console.print(f"  XAPK version: {manifest.xapk_version}")
    console.print(f"  Split APKs: {len(manifest.split_apks)}")
    for split_file in manifest.split_apk_files:
        console.print(f"    - {split_file}")

    if supported:
        console.print("[green]✓ Supported[/green]")
        raise typer.Exit(0)

    console.print("[yellow]⊘ Unsupported[/yellow]")
    raise typer.Exit(1)


@app.command()
def summary(
    paths: List[Path] = typer.Argument(..., help="Input files to summarize"),
) -> None:
    """
    Show location, size, digests and XAPK status of input files.
    """
    from xapk_input.summary import summarize_input

    failed = 0
    for path in paths:
        if not path.is_file():
            console.print(f"[bold red]Error:[/bold red] Not a file: {path}")
            failed += 1
            continue

        info = summarize_input(path)

        table = Table(title=path.name, show_header=False)
        table.add_column("Field", style="cyan")
        table.add_column("Value")
        table.add_row("File", str(info.path))
        table.add_row("Size", f"{info.size} bytes")
        for algorithm, digest in info.digests.items():
            table.add_row(algorithm.upper(), digest)
        table.add_row("Zip", "yes" if info.is_zip else "no")
        if info.manifest is not None:
            table.add_row("Package", info.manifest.package_name or "N/A")
            table.add_row("XAPK version", str(info.manifest.xapk_version))
            table.add_row("Split APKs", str(len(info.manifest.split_apks)))
        elif info.failure is not None:
            table.add_row("Manifest", info.failure.value)
        table.add_row("Supported", "yes" if info.is_supported else "no")

        console.print(table)

    if failed:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
