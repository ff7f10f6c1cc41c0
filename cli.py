#!/usr/bin/env python3
"""CLI tool for exporting Apigee API products to a registry document"""
import sys
import typer
from typing import Optional
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from clients.apigee_client import ApigeeClient
from discovery.document_writer import FORMATS, render_document
from discovery.product_exporter import ProductExporter
from utils.config_loader import ConfigLoader
from utils.logger import ExportLogger, configure_logging

app = typer.Typer(
    name="apigee-registry-export",
    help="Export Apigee resources as registry documents",
    add_completion=False
)
console = Console(stderr=True)


def create_client(config) -> ApigeeClient:
    return ApigeeClient.from_config(config)


@app.command()
def products(
    org: str = typer.Argument(..., help="Apigee organization name"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to config file (YAML/JSON)"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write the document to a file instead of stdout"),
    fmt: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: yaml or json"),
    token: Optional[str] = typer.Option(None, "--token", help="OAuth2 access token (overrides config and APIGEE_TOKEN)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Export Apigee Products"""
    configure_logging(verbose)

    try:
        config_data = ConfigLoader.load_config(config) if config else {}
        apigee_config = ConfigLoader.load_apigee_config(config_data, organization=org)
        if token:
            apigee_config.token = token
        export_config = ConfigLoader.load_export_config(config_data)
        fmt = fmt or export_config.format
        output = output or export_config.output
        if fmt not in FORMATS:
            raise ValueError(f"Unsupported output format: {fmt}")

        client = create_client(apigee_config)
        exporter = ProductExporter(client, ExportLogger(f"products-{org}"))
        document = render_document(exporter.export(), fmt)

    except Exception as e:
        console.print(f"[bold red]Error: {escape(str(e))}[/bold red]")
        raise typer.Exit(code=1)

    if output:
        with open(output, 'w') as f:
            f.write(document)
        console.print(f"[green]✓ Export completed. Saved to {output}[/green]")
        _print_export_summary(exporter.export_stats)
    else:
        sys.stdout.write(document)


@app.command()
def generate_config(
    output: str = typer.Option("export_config.yaml", "--output", "-o", help="Output config file"),
):
    """Generate a template configuration file"""
    config = ConfigLoader.create_default_config()
    ConfigLoader.save_config(config, output)
    console.print(f"[green]✓ Configuration template saved to {output}[/green]")
    console.print("\n[yellow]Please edit the file and set your organization and credentials.[/yellow]")


def _print_export_summary(stats: dict):
    """Print export summary"""
    table = Table(title="Export Summary")
    table.add_column("Resource Type", style="cyan")
    table.add_column("Count", style="green")

    for resource_type, count in stats.items():
        table.add_row(resource_type.replace('_', ' ').title(), str(count))

    console.print(table)


if __name__ == "__main__":
    app()
