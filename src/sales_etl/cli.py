"""
Command-line interface for sales_etl.

Commands:
- run: Execute one extraction run and print its report
- sources: List the sources the current configuration registers
- init-db: Create the SQL Server dimension tables
"""

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from sales_etl.config import Settings

app = typer.Typer(
    name="sales-etl",
    help="Sales extract-and-load CLI",
    no_args_is_help=True,
)
console = Console()


def _settings(data_dir: Path | None, backend: str | None, api_url: str | None) -> Settings:
    """Current settings with command-line overrides applied."""
    overrides = {}
    if data_dir is not None:
        overrides["data_dir"] = data_dir
    if backend is not None:
        overrides["loader_backend"] = backend
    if api_url is not None:
        overrides["api_url"] = api_url
    return Settings(**overrides)


@app.command()
def run(
    data_dir: Path | None = typer.Option(
        None, "--data-dir", "-d", help="Root data directory (csv/ and warehouse/ live here)"
    ),
    backend: str | None = typer.Option(
        None, "--backend", "-b", help="Dimension loader backend: parquet or sqlserver"
    ),
    api_url: str | None = typer.Option(
        None, "--api-url", help="Sales API endpoint to extract from"
    ),
):
    """Run the extraction and load dimensions."""
    from sales_etl.etl import RunStatus, build_orchestrator, render_report

    orchestrator = build_orchestrator(_settings(data_dir, backend, api_url))
    report = orchestrator.execute_extraction()
    console.print(render_report(report))

    if report.status is RunStatus.FATAL:
        raise typer.Exit(code=1)


@app.command()
def sources(
    data_dir: Path | None = typer.Option(
        None, "--data-dir", "-d", help="Root data directory"
    ),
    api_url: str | None = typer.Option(
        None, "--api-url", help="Sales API endpoint"
    ),
):
    """List the sources a run would use."""
    from sales_etl.etl.factory import build_sources
    from sales_etl.sources import source_kind

    registered = build_sources(_settings(data_dir, None, api_url))
    if not registered:
        console.print("[yellow]No sources configured[/]")
        return

    table = Table(title="Registered Sources", show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Source")
    table.add_column("Kind")
    for i, source in enumerate(registered, 1):
        table.add_row(str(i), source.name, source_kind(source).value)
    console.print(table)


@app.command()
def init_db():
    """Initialize the dimension schema (create Dim* tables)."""
    from sales_etl.db import init_schema

    console.print("[bold blue]Initializing dimension schema...[/]")
    init_schema()
    console.print("[bold green]Done. Schema created successfully[/]")


if __name__ == "__main__":
    app()
