"""BrooBot CLI application."""

import os
from pathlib import Path

import click
from rich.console import Console

from .. import __version__
from ..config import BrooBotConfig
from ..utils.logging import setup_logging

console = Console()


def config_candidates() -> list[Path]:
    """Config file locations in lookup order.

    ``$BROOBOT_CONFIG`` first, then ``.broobot.yaml`` or ``broobot.yaml`` in
    the working directory, then ``broobot/config.yaml`` under
    ``$XDG_CONFIG_HOME`` (default ``~/.config``).
    """
    candidates = []
    env_config = os.environ.get("BROOBOT_CONFIG")
    if env_config:
        candidates.append(Path(env_config).expanduser())

    cwd = Path.cwd()
    candidates += [cwd / ".broobot.yaml", cwd / "broobot.yaml"]

    config_home = os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config"
    candidates.append(Path(config_home) / "broobot" / "config.yaml")
    return candidates


def find_config() -> str | None:
    """First existing config file from config_candidates(), or None."""
    for path in config_candidates():
        if path.is_file():
            return str(path)
    return None


def load_config(ctx: click.Context) -> BrooBotConfig:
    """Config for a subcommand, built from the group options."""
    return BrooBotConfig.from_env(ctx.obj.get("config"))


@click.group()
@click.version_option(version=__version__, prog_name="broobot")
@click.option("--config", "-c", type=click.Path(exists=True), help="Config file path")
@click.option("--no-config", is_flag=True, help="Disable config auto-loading")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.pass_context
def cli(ctx: click.Context, config: str, no_config: bool, verbose: bool) -> None:
    """BrooBot: buddy chat, AI tool search and deep research.

    Config file locations (in priority order):

        1. -c/--config PATH (explicit)

        2. BROOBOT_CONFIG env var

        3. .broobot.yaml or broobot.yaml (project config)

        4. $XDG_CONFIG_HOME/broobot/config.yaml (user config)

    Examples:

        broobot search "free image generation"

        broobot search --free-only --min-rating 4.5 "writing"

        broobot serve --port 3001
    """
    ctx.ensure_object(dict)

    if no_config:
        config = None
    elif config is None:
        config = find_config()
        if config and verbose:
            console.print(f"[dim]Using config: {config}[/dim]")

    if verbose:
        setup_logging(BrooBotConfig(log_level="DEBUG"))

    ctx.obj["config"] = config
    ctx.obj["verbose"] = verbose


from .commands import search, serve, version

cli.add_command(search.search)
cli.add_command(search.categories)
cli.add_command(serve.serve)
cli.add_command(version.version)
