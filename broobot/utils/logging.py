"""
Logging setup for BrooBot.

Log records go to stderr so that ``broobot search --json`` output on stdout
stays machine-readable. A rotating file handler is added when the config
names a log file.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from ..config import BrooBotConfig

DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

# Third-party loggers that log every request at INFO.
NOISY_LOGGERS = ("httpx", "httpcore", "uvicorn.access")


def setup_logging(config: Optional[BrooBotConfig] = None) -> None:
    """
    Configure the root logger from BrooBotConfig settings.

    Outside DEBUG level the per-request chatter of httpx and the uvicorn
    access log is held back to WARNING; at DEBUG everything is shown.

    Example:
        config = BrooBotConfig.from_env("broobot.yaml")
        setup_logging(config)
    """
    config = config or BrooBotConfig(log_format=DEFAULT_FORMAT)
    level = getattr(logging, config.log_level.upper(), logging.INFO)
    formatter = logging.Formatter(config.log_format or DEFAULT_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if config.log_file:
        file_handler = RotatingFileHandler(
            config.log_file,
            maxBytes=config.log_max_bytes,
            backupCount=config.log_backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    noisy_level = logging.NOTSET if level <= logging.DEBUG else logging.WARNING
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(noisy_level)


def get_logger(name: str) -> logging.Logger:
    """Logger under the broobot namespace (pass __name__)."""
    return logging.getLogger(name)
