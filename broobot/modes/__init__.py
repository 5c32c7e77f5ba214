"""Chat mode handlers."""

from .buddy import BuddyMode, mock_reply
from .research import DeepResearch, mock_research

MODE_DESCRIPTORS = [
    {
        "id": "buddy",
        "name": "Buddy Mode",
        "description": "General conversational AI for all your questions",
        "icon": "💬",
        "features": ["General chat", "Writing help", "Coding assistance", "Learning support"],
    },
    {
        "id": "ai_tool_assistant",
        "name": "AI Tool Assistant",
        "description": "Find the perfect AI tools for your needs",
        "icon": "🔧",
        "features": ["Tool recommendations", "Free & paid options", "Direct links", "Ratings & reviews"],
    },
    {
        "id": "deep_research",
        "name": "Deep Research",
        "description": "AI-powered web research with cited sources",
        "icon": "🔍",
        "features": ["Web scraping", "Source citations", "Comprehensive reports", "Export options"],
    },
]

__all__ = ["BuddyMode", "DeepResearch", "MODE_DESCRIPTORS", "mock_reply", "mock_research"]
