"""Request authentication dependencies.

Local-development stub: any Authorization header is accepted and mapped to
a fixed mock user. Token verification belongs here once an identity
provider is wired in.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from fastapi import Header, HTTPException


@dataclass
class User:
    id: str
    email: str
    subscription: Dict[str, Any] = field(default_factory=lambda: {"tier": "free"})


MOCK_USER = User(id="mock-user-123", email="test@example.com")


def authenticate(authorization: Optional[str] = Header(default=None)) -> User:
    """Require an Authorization header."""
    if not authorization:
        raise HTTPException(status_code=401, detail="No authorization header")
    return MOCK_USER


def optional_auth(authorization: Optional[str] = Header(default=None)) -> Optional[User]:
    """Resolve the user when a header is present, anonymous otherwise."""
    if authorization:
        return MOCK_USER
    return None
