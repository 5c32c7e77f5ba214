"""Serve command: run the web backend."""

import click

from ...web.__main__ import serve as run_server


@click.command()
@click.option("--host", default=None, help="Server host (default: 0.0.0.0)")
@click.option("--port", "-P", type=int, default=None, help="Server port (default: $PORT or 3001)")
@click.option("--mock", is_flag=True, help="Force mock mode")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    default=None,
    help="Log level",
)
@click.pass_context
def serve(ctx: click.Context, host: str, port: int, mock: bool, log_level: str) -> None:
    """Run the BrooBot HTTP backend.

    Examples:

        broobot serve

        broobot serve --port 8080 --mock
    """
    run_server(
        config_path=ctx.obj.get("config"),
        host=host,
        port=port,
        mock=mock,
        log_level=log_level,
    )
