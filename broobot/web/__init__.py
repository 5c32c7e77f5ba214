"""BrooBot HTTP surface (FastAPI)."""

from .server import create_app, parse_search_options

__all__ = ["create_app", "parse_search_options"]
