"""Clients for external collaborators: reader proxy, web search, completions."""

from .completion import CompletionClient, calculate_cost, create_completion_client
from .reader import ReaderClient, extract_content
from .search import WebSearchClient, mock_search_results

__all__ = [
    "CompletionClient",
    "calculate_cost",
    "create_completion_client",
    "ReaderClient",
    "extract_content",
    "WebSearchClient",
    "mock_search_results",
]
