"""Small helpers shared by the chat modes and the web layer."""

import secrets
import string
import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional

_ALPHABET = string.ascii_lowercase + string.digits


def random_suffix(length: int = 9) -> str:
    """Short base36 random token."""
    return "".join(secrets.choice(_ALPHABET) for _ in range(length))


def generate_id(prefix: str) -> str:
    """Generate ``<prefix>_<epoch ms>_<random>``."""
    return f"{prefix}_{int(time.time() * 1000)}_{random_suffix()}"


def generate_message_id() -> str:
    return generate_id("msg")


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def format_message_response(
    content: str,
    mode: str,
    metadata: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Wrap assistant text in the chat message shape the frontend renders."""
    return {
        "id": generate_message_id(),
        "role": "assistant",
        "content": content,
        "timestamp": utc_now_iso(),
        "mode": mode,
        "metadata": metadata or {},
    }
