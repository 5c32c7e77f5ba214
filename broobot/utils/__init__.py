"""BrooBot utilities."""

from .helpers import format_message_response, generate_id, generate_message_id, utc_now_iso
from .logging import get_logger, setup_logging
from .retry import RetryConfig, retry_async

__all__ = [
    "format_message_response",
    "generate_id",
    "generate_message_id",
    "utc_now_iso",
    "get_logger",
    "setup_logging",
    "RetryConfig",
    "retry_async",
]
