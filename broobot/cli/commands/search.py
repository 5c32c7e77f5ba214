"""Tool search commands."""

import asyncio
import json

import click
from rich.console import Console
from rich.markdown import Markdown
from rich.table import Table

from ...data import AI_TOOLS, get_categories
from ...errors import InvalidArgument
from ...tools.formatter import render
from ...tools.scorer import rank
from ...tools.service import create_tool_search_service, to_response
from ...types import SearchOptions, ToolSearchResult
from ..app import load_config

console = Console()


@click.command()
@click.argument("query")
@click.option("--limit", "-n", type=int, default=5, show_default=True, help="Max results")
@click.option("--category", "-C", "categories", multiple=True, help="Restrict to category (repeatable)")
@click.option("--free-only", is_flag=True, help="Only free tools")
@click.option("--min-rating", type=float, default=0.0, help="Minimum rating (0-5)")
@click.option("--no-scrape", is_flag=True, help="Search the static dataset only")
@click.option("--markdown", "markdown_output", is_flag=True, help="Print the recommendation report")
@click.option("--json", "json_output", is_flag=True, help="JSON output format")
@click.pass_context
def search(
    ctx: click.Context,
    query: str,
    limit: int,
    categories: tuple,
    free_only: bool,
    min_rating: float,
    no_scrape: bool,
    markdown_output: bool,
    json_output: bool,
) -> None:
    """Recommend AI tools for QUERY.

    Examples:

        broobot search "free coding assistant"

        broobot search -C "Image Generation" --no-scrape "art"

        broobot search --json "video editing" | jq .tools[0].name
    """
    options = SearchOptions(
        limit=limit,
        categories=list(categories) or None,
        free_only=free_only,
        min_rating=min_rating,
    )

    if no_scrape:
        if not query:
            raise click.BadParameter("Query string is required", param_hint="QUERY")
        results = rank(query, AI_TOOLS, options)
        result = ToolSearchResult(query, results, render(query, results), options)
    else:
        service = create_tool_search_service(load_config(ctx))
        try:
            result = asyncio.run(service.search(query, options))
        except InvalidArgument as e:
            raise click.BadParameter(str(e), param_hint="QUERY")

    if json_output:
        click.echo(json.dumps(to_response(result), indent=2, ensure_ascii=False))
    elif markdown_output:
        console.print(Markdown(result.formatted_message))
    else:
        _print_table(result)


def _print_table(result: ToolSearchResult) -> None:
    if not result.results:
        console.print(f"[yellow]{result.formatted_message}[/yellow]")
        return

    table = Table(title=f"Tools for \"{result.query}\"")
    table.add_column("#", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Category")
    table.add_column("Free")
    table.add_column("Rating")
    table.add_column("Score", justify="right")
    table.add_column("Link")

    for i, tool in enumerate(result.results, start=1):
        name = f"{tool.name} [magenta]NEW[/magenta]" if tool.is_scraped else tool.name
        free = "[green]✓[/green]" if tool.is_free else "[red]✗[/red]"
        table.add_row(
            str(i),
            name,
            tool.category,
            free,
            f"{tool.rating:g}",
            f"{tool.relevance_score:.1f}",
            tool.url,
        )

    console.print(table)


@click.command()
def categories() -> None:
    """List categories of the static tool dataset."""
    table = Table(title="Tool Categories")
    table.add_column("Category", style="cyan")
    table.add_column("Tools", justify="right")

    for category in get_categories():
        count = sum(1 for tool in AI_TOOLS if tool.category == category)
        table.add_row(category, str(count))

    console.print(table)
