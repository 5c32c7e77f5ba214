"""Buddy mode: general assistant chat."""

from __future__ import annotations

import logging
from typing import Any, Optional

from ..clients.completion import CompletionClient
from ..errors import RateLimited
from ..types import ChatMode
from ..utils.helpers import format_message_response

logger = logging.getLogger(__name__)

BUDDY_SYSTEM_PROMPT = """You are BrooBot, a friendly and helpful AI assistant created to help users with a wide variety of tasks.

Your personality:
- Friendly, approachable, and conversational
- Professional but not overly formal
- Patient and helpful
- Clear and concise in explanations
- Encouraging and supportive

Your capabilities:
- General conversation and questions
- Writing assistance (essays, articles, emails, creative writing)
- Coding help (debugging, explanations, code generation)
- Problem-solving and brainstorming
- Research and information gathering
- Learning support and tutoring
- Creative projects

Guidelines:
- Be conversational and natural
- Provide clear, well-structured answers
- Ask clarifying questions when needed
- Break down complex topics into simple terms
- Use examples when helpful
- Be honest about limitations
- Stay on topic but be flexible
- Use appropriate formatting (markdown, code blocks, lists)

Remember: You're a helpful buddy, not just a search engine. Engage meaningfully with the user.

User ID: {user_id}"""


def mock_reply(text: str) -> str:
    """Canned reply picked by keywords in the last user message."""
    lower = text.lower()

    if "hello" in lower or "hi" in lower:
        return (
            "Hello! 👋 I'm BrooBot, your friendly AI assistant. I'm here to help you "
            "with anything you need. What can I do for you today?"
        )
    if "how are you" in lower:
        return (
            "I'm doing great, thank you for asking! As an AI assistant, I'm always ready "
            "and excited to help. How can I assist you today?"
        )
    if "joke" in lower:
        return (
            "Sure! Here's one: Why did the AI go to therapy? Because it had too many deep "
            "learning issues! 😄\n\nBut seriously, I'm here to help with real questions too. "
            "What else can I do for you?"
        )
    if "code" in lower or "program" in lower:
        return (
            "I can definitely help with coding! I'm experienced in many programming languages "
            "including JavaScript, Python, Java, C++, and more.\n\n"
            "What kind of code help do you need? I can:\n"
            "- Debug existing code\n"
            "- Explain programming concepts\n"
            "- Write new functions\n"
            "- Review code\n"
            "- Suggest best practices"
        )
    if "write" in lower or "essay" in lower or "article" in lower:
        return (
            "I'd be happy to help with writing! I can assist with:\n"
            "- Blog posts and articles\n"
            "- Essays and research papers\n"
            "- Creative writing\n"
            "- Professional emails\n"
            "- Technical documentation\n\n"
            "What would you like to write about?"
        )
    return (
        f"I understand you're asking about: \"{text}\"\n\n"
        "**[MOCK MODE]** This is a mock response because Claude API is not configured yet.\n\n"
        "To enable real AI responses:\n"
        "1. Get your API key from https://console.anthropic.com\n"
        "2. Set ANTHROPIC_API_KEY in the environment or the llm.api_key config entry\n"
        "3. Restart the backend server\n\n"
        "In the meantime, I can still help you test the interface! Try asking about:\n"
        "- Coding help\n"
        "- Writing assistance\n"
        "- General questions"
    )


class BuddyMode:
    """Chat handler for the buddy mode.

    Without a completion client every reply comes from mock_reply(). A rate
    limited provider also falls back to the mock immediately; other
    provider failures propagate to the caller.
    """

    def __init__(self, client: Optional[CompletionClient] = None) -> None:
        self._client = client

    async def handle(
        self,
        messages: list[dict[str, Any]],
        user_id: str,
        session_id: Optional[str] = None,
    ) -> dict[str, Any]:
        if self._client is None:
            return self._mock(messages, session_id)

        provider_messages = [
            {
                "role": "user" if msg.get("role") == "user" else "assistant",
                "content": str(msg.get("content", "")),
            }
            for msg in messages
        ]

        logger.info(f"Sending buddy request for user {user_id}")
        try:
            completion = await self._client.complete(
                provider_messages,
                system_prompt=BUDDY_SYSTEM_PROMPT.format(user_id=user_id),
                model_tier="fast",
                max_tokens=2048,
                temperature=0.7,
            )
        except RateLimited:
            logger.warning("Rate limit hit, falling back to mock")
            return self._mock(messages, session_id)

        return {
            "message": format_message_response(
                completion.text,
                ChatMode.BUDDY.value,
                {"model": completion.model, "usage": completion.usage.to_dict()},
            ),
            "sessionId": session_id,
            "usage": completion.usage.to_dict(),
            "cost": completion.cost_usd,
        }

    def _mock(self, messages: list[dict[str, Any]], session_id: Optional[str]) -> dict[str, Any]:
        last = str(messages[-1].get("content", "")) if messages else ""
        return {
            "message": format_message_response(
                mock_reply(last),
                ChatMode.BUDDY.value,
                {"model": "mock", "isMock": True},
            ),
            "sessionId": session_id,
            "usage": {"input_tokens": 0, "output_tokens": 0},
            "cost": 0,
        }
