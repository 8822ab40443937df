"""
Status Explorer CLI — Browse packages installed according to a dpkg status file.

Usage:
    status-explorer list
    status-explorer --status-file ./status show lsb-release
    status-explorer export --output-dir ./packages
"""

import asyncio
import logging
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from status_explorer.core.config import DEFAULT_STATUS_FILE, LOG_FORMAT, STATUS_FILE_ENV
from status_explorer.core.result import Failure


def _configure_logging(verbose: bool) -> None:
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=log_level, format=LOG_FORMAT)


def _unwrap(result):
    """Return a successful value or abort the command with the failure message."""
    if isinstance(result, Failure):
        raise click.ClickException(str(result))
    return result.value


def _format_reference(ref) -> str:
    name = f"[cyan]{escape(ref.name)}[/cyan]" if ref.installed else f"[dim]{escape(ref.name)}[/dim]"
    if not ref.alternatives:
        return name
    alternatives = ", ".join(
        f"[cyan]{escape(alt.name)}[/cyan]" if alt.installed else f"[dim]{escape(alt.name)}[/dim]"
        for alt in ref.alternatives
    )
    return f"{name} ({alternatives})"


def _print_references(console: Console, title: str, references) -> None:
    if not references:
        return
    console.print(f"\n[bold]{title}[/bold]")
    for ref in references:
        console.print(f"  - {_format_reference(ref)}")


@click.group()
@click.version_option(package_name="status-explorer")
@click.option(
    "--status-file",
    "-f",
    type=click.Path(dir_okay=False, path_type=Path),
    envvar=STATUS_FILE_ENV,
    default=DEFAULT_STATUS_FILE,
    show_default=True,
    help="dpkg status file to read.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging.")
@click.pass_context
def cli(ctx, status_file, verbose):
    """Status Explorer — Browse installed Debian packages and their dependencies."""
    from status_explorer.core.repository import PackageRepository

    _configure_logging(verbose)
    ctx.obj = PackageRepository(status_file=status_file)


@cli.command(name="list")
@click.pass_obj
def list_command(repository):
    """List installed packages sorted by name."""
    packages = _unwrap(asyncio.run(repository.list_packages()))

    console = Console()
    table = Table(title=f"Packages ({len(packages)})")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Synopsis")
    table.add_column("Depends", justify="right")
    table.add_column("Dependants", justify="right")

    for package in packages:
        table.add_row(
            escape(package.name),
            escape(package.description.synopsis),
            str(len(package.depends)),
            str(len(package.dependants)),
        )
    console.print(table)


@cli.command()
@click.argument("name")
@click.pass_context
def show(ctx, name):
    """Show the description, dependencies and dependants of a package."""
    package = _unwrap(asyncio.run(ctx.obj.find_package(name)))

    console = Console()
    if package is None:
        console.print(f"Package {escape(name)} not found.")
        ctx.exit(2)

    console.print(f"[bold]{escape(package.name)}[/bold]")
    console.print(f"[italic]{escape(package.description.synopsis)}[/italic]")
    if package.description.description:
        console.print(f"\n{escape(package.description.description)}")
    _print_references(console, "Depends on", package.depends)
    _print_references(console, "Dependants", package.dependants)


@cli.command()
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(file_okay=False),
    default="./status_export",
    help="Output directory for exported packages.",
)
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["json"]),
    default="json",
    help="Export format.",
)
@click.pass_obj
def export(repository, output_dir, fmt):
    """Export every package with its resolved references."""
    from status_explorer.exporters import get_exporter

    packages = _unwrap(asyncio.run(repository.list_packages()))
    exporter = get_exporter(fmt, output_dir)
    count = asyncio.run(exporter.export_set(packages))
    click.echo(f"Exported {count} packages to {output_dir}")


if __name__ == "__main__":
    cli()
