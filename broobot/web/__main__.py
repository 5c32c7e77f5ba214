"""
CLI entry point for the BrooBot web server.

Usage:
    python -m broobot.web --port 3001
    broobot-web --config broobot.yaml --mock
"""

import argparse

from ..config import BrooBotConfig
from ..utils.logging import setup_logging


def main() -> None:
    parser = argparse.ArgumentParser(
        description="BrooBot Web Server",
        prog="broobot-web",
    )
    parser.add_argument(
        "-c", "--config",
        default=None,
        help="Path to YAML config file",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Server port (default: $PORT or 3001)",
    )
    parser.add_argument(
        "--host",
        default=None,
        help="Server host (default: 0.0.0.0)",
    )
    parser.add_argument(
        "--mock",
        action="store_true",
        help="Force mock mode (no completion provider calls)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (default: from config or INFO)",
    )

    args = parser.parse_args()
    serve(
        config_path=args.config,
        host=args.host,
        port=args.port,
        mock=args.mock,
        log_level=args.log_level,
    )


def serve(
    config_path=None,
    host=None,
    port=None,
    mock: bool = False,
    log_level=None,
) -> None:
    """Load configuration and run uvicorn."""
    import uvicorn

    from .server import create_app

    config = BrooBotConfig.from_env(config_path)
    if host:
        config.host = host
    if port:
        config.port = port
    if mock:
        config.mock_mode = True
    if log_level:
        config.log_level = log_level

    setup_logging(config)
    app = create_app(config)

    print("\n  BrooBot Web Server")
    print(f"  URL: http://{config.host}:{config.port}")
    print(f"  Frontend: {config.frontend_url}")
    print(f"  Mock mode: {'on' if config.mock_mode else 'off'}")
    print()

    uvicorn.run(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
    )


if __name__ == "__main__":
    main()
