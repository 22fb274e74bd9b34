"""OAuth port — outbound interface for the identity provider."""

from dataclasses import dataclass
from typing import Any, Protocol


class OAuthError(Exception):
    """Base exception for OAuth provider errors."""


@dataclass(frozen=True)
class OAuthLogin:
    """Result of exchanging an authorization code.

    ``profile`` is the provider's raw person resource (names, photos,
    emailAddresses, locations lists), or None if none was returned.
    """
    access_token: str
    profile: dict[str, Any] | None


class OAuthPort(Protocol):
    """Port for the OAuth consent URL and code exchange."""

    @property
    def auth_url(self) -> str: ...

    async def log_in(self, code: str) -> OAuthLogin: ...
