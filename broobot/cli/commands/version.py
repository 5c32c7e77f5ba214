"""Version command."""

import click
from rich.console import Console
from rich.table import Table

from ... import __version__
from ..app import load_config

console = Console()


@click.command()
@click.option("--check-config", is_flag=True, help="Also show configured upstream services")
@click.pass_context
def version(ctx: click.Context, check_config: bool) -> None:
    """Show BrooBot version.

    Examples:

        broobot version

        broobot version --check-config
    """
    console.print(f"[bold]BrooBot[/bold] v{__version__}")

    if not check_config:
        return

    config = load_config(ctx)
    table = Table(title="Upstream Services")
    table.add_column("Service", style="cyan")
    table.add_column("Status")

    table.add_row("Claude API", _status(bool(config.anthropic_api_key)))
    table.add_row("Serper API", _status(bool(config.serper_api_key)))
    table.add_row("Mock mode", "[yellow]on[/yellow]" if config.mock_mode else "off")

    console.print()
    console.print(table)


def _status(configured: bool) -> str:
    return "[green]✓ configured[/green]" if configured else "[red]✗ not configured[/red]"
