#!/usr/bin/env python3
"""
CLI interface for the bank statement table extractor.
"""
import logging
from enum import Enum
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from .core.config import load_settings
from .core.errors import ConfigError, DocumentError
from .core.loader import PdfDocument
from .core.runner import StatementParser
from .models.schema import ExtractionResult
from .tools.export import WRITERS

app = typer.Typer(help="Bank statement table extractor")
console = Console()


class OutputFormat(str, Enum):
    json = "json"
    csv = "csv"
    xlsx = "xlsx"


def _configure(config: Optional[Path], force_ocr: Optional[bool], merge_particulars: Optional[bool],
               workers: Optional[int], verbose: bool):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)

    try:
        settings, options = load_settings(config)
    except ConfigError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    # Flags given on the command line override the settings file
    overrides = {}
    if force_ocr is not None:
        overrides["force_ocr"] = force_ocr
    if merge_particulars is not None:
        overrides["merge_multiline_particulars"] = merge_particulars
    if overrides:
        options = options.model_copy(update=overrides)
    if workers:
        settings = settings.model_copy(update={"max_workers": workers})
    return settings, options


def _emit(result: ExtractionResult, output: Optional[Path], fmt: OutputFormat, source_name: str):
    if fmt == OutputFormat.json:
        payload = result.model_dump_json(indent=2)
        if output:
            output.write_text(payload)
            console.print(f"[green]✓ {len(result.rows)} rows written to: {output}[/green]")
        else:
            console.print_json(payload)
    else:
        if not output:
            console.print(f"[red]Error: --out is required for {fmt.value} output[/red]")
            raise typer.Exit(1)
        WRITERS[fmt.value](result, output, source_name)
        console.print(f"[green]✓ {len(result.rows)} rows written to: {output}[/green]")

    if result.diagnostics:
        table = Table(title="Skipped pages")
        table.add_column("Page", justify="right")
        table.add_column("Reason")
        table.add_column("Detail")
        for diagnostic in result.diagnostics:
            table.add_row(str(diagnostic.page), diagnostic.kind, diagnostic.message)
        console.print(table)


@app.command()
def parse(
    pdf_path: Path = typer.Argument(..., help="Path to PDF file"),
    output: Optional[Path] = typer.Option(None, "--out", "-o", help="Output file path"),
    fmt: OutputFormat = typer.Option(OutputFormat.json, "--format", "-f", help="Output format"),
    force_ocr: Optional[bool] = typer.Option(None, "--force-ocr/--no-force-ocr", help="OCR every page even when it has a text layer"),
    merge_particulars: Optional[bool] = typer.Option(None, "--merge-particulars/--no-merge-particulars", help="Append wrapped particulars lines to the previous transaction"),
    workers: Optional[int] = typer.Option(None, "--workers", "-w", min=1, help="Pages processed in parallel"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML settings file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output")
):
    """Extract the transaction table from a statement PDF."""

    if not pdf_path.exists():
        console.print(f"[red]Error: PDF file not found: {pdf_path}[/red]")
        raise typer.Exit(1)

    settings, options = _configure(config, force_ocr, merge_particulars, workers, verbose)

    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=True
        ) as progress:
            task = progress.add_task("Opening PDF...", total=None)
            with PdfDocument(pdf_path) as document:
                progress.update(task, description=f"Extracting {document.page_count} pages...")
                result = StatementParser(options, settings).parse(document)
    except DocumentError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    _emit(result, output, fmt, pdf_path.name)


@app.command()
def text(
    text_path: Path = typer.Argument(..., help="Path to a plain-text statement (e.g. OCR output)"),
    output: Optional[Path] = typer.Option(None, "--out", "-o", help="Output file path"),
    fmt: OutputFormat = typer.Option(OutputFormat.json, "--format", "-f", help="Output format"),
    merge_particulars: Optional[bool] = typer.Option(None, "--merge-particulars/--no-merge-particulars", help="Append wrapped particulars lines to the previous transaction"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML settings file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output")
):
    """Extract the transaction table from plain statement text."""

    if not text_path.exists():
        console.print(f"[red]Error: text file not found: {text_path}[/red]")
        raise typer.Exit(1)

    settings, options = _configure(config, None, merge_particulars, None, verbose)
    result = StatementParser(options, settings).parse_text(text_path.read_text(encoding='utf-8'))
    _emit(result, output, fmt, text_path.name)


@app.command()
def validate(
    json_path: Path = typer.Argument(..., help="Path to JSON file to validate")
):
    """Validate a saved extraction result."""
    try:
        data = ExtractionResult.model_validate_json(json_path.read_text())
    except (OSError, ValueError) as e:
        console.print(f"[red]Validation failed: {e}[/red]")
        raise typer.Exit(1)

    console.print("[green]✓ JSON is valid[/green]")
    for key, value in data.header.items():
        console.print(f"{key}: {value}")
    console.print(f"Transactions: {len(data.rows)}")
    console.print(f"Skipped pages: {len(data.diagnostics)}")


if __name__ == "__main__":
    app()
