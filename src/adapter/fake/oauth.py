"""In-memory implementation of OAuthPort for testing."""

from typing import Any

from port.oauth import OAuthError, OAuthLogin


class FakeOAuthAdapter:
    """Fake OAuth adapter that returns a preconfigured profile."""

    def __init__(
        self,
        profile: dict[str, Any] | None = None,
        error: str | None = None,
        auth_url: str = "https://accounts.example.com/o/oauth2/auth?client_id=test",
    ):
        self.profile = profile
        self.error = error
        self._auth_url = auth_url
        self.codes: list[str] = []

    @property
    def auth_url(self) -> str:
        return self._auth_url

    async def log_in(self, code: str) -> OAuthLogin:
        self.codes.append(code)
        if self.error:
            raise OAuthError(self.error)
        return OAuthLogin(access_token="fake-access-token", profile=self.profile)


def make_profile(
    user_id: str | None = "google-123",
    name: str | None = "Jane Doe",
    avatar: str | None = "https://img.example.com/jane.png",
    email: str | None = "jane@example.com",
) -> dict[str, Any]:
    """Build a People API style profile; pass None to leave a field's list out."""
    profile: dict[str, Any] = {}
    if name is not None or user_id is not None:
        entry: dict[str, Any] = {}
        if name is not None:
            entry['displayName'] = name
        if user_id is not None:
            entry['metadata'] = {'source': {'type': 'PROFILE', 'id': user_id}}
        profile['names'] = [entry]
    if avatar is not None:
        profile['photos'] = [{'url': avatar}]
    if email is not None:
        profile['emailAddresses'] = [{'value': email}]
    return profile
