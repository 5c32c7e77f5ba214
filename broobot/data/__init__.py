"""Static tool dataset."""

from .ai_tools import AI_TOOLS, get_categories, get_tool_by_id, get_tool_stats

__all__ = ["AI_TOOLS", "get_categories", "get_tool_by_id", "get_tool_stats"]
