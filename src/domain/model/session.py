"""Session value objects shared by the login workflow and the API layer."""

from dataclasses import dataclass
from enum import Enum

from domain.model.user import User


class SessionAction(str, Enum):
    """What the HTTP layer must do with the session cookie after a login."""
    KEEP = 'keep'
    SET = 'set'
    CLEAR = 'clear'


@dataclass(frozen=True)
class SessionCredentials:
    """Identity claimed by a request: signed cookie user id + CSRF token header."""
    user_id: str | None = None
    token: str | None = None


@dataclass(frozen=True)
class LoginResult:
    """Outcome of a login attempt.

    ``user`` is None only when a cookie renewal found no matching record,
    in which case ``session`` is CLEAR.
    """
    user: User | None
    session: SessionAction


@dataclass(frozen=True)
class OAuthIdentity:
    """User fields extracted from an OAuth provider profile."""
    user_id: str
    name: str
    avatar: str
    contact: str
    location: str | None = None
