"""Google OAuth adapter.

Implements OAuthPort: builds the consent URL, exchanges the authorization
code at Google's token endpoint and reads the signed-in person from the
People API.

API Documentation: https://developers.google.com/people/api/rest/v1/people/get
"""

import logging
import os
from typing import Any
from urllib.parse import urlencode

import httpx
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

from port.oauth import OAuthError, OAuthLogin

logger = logging.getLogger(__name__)

GOOGLE_AUTH_URL = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
PEOPLE_ME_URL = "https://people.googleapis.com/v1/people/me"
PERSON_FIELDS = "emailAddresses,names,photos,locations"
SCOPES = (
    "https://www.googleapis.com/auth/userinfo.email",
    "https://www.googleapis.com/auth/userinfo.profile",
)
API_TIMEOUT_SECONDS = 10.0


class GoogleOAuthAdapter:
    """Adapter that signs viewers in with Google."""

    def __init__(
        self,
        client_id: str | None = None,
        client_secret: str | None = None,
        redirect_uri: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.client_id = client_id or os.getenv("G_CLIENT_ID", "")
        self.client_secret = client_secret or os.getenv("G_CLIENT_SECRET", "")
        self.redirect_uri = redirect_uri or f"{os.getenv('PUBLIC_URL', '')}/login"
        self._transport = transport

    @property
    def auth_url(self) -> str:
        query = urlencode({
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "response_type": "code",
            "access_type": "online",
            "scope": " ".join(SCOPES),
        })
        return f"{GOOGLE_AUTH_URL}?{query}"

    async def log_in(self, code: str) -> OAuthLogin:
        """Exchange ``code`` for an access token and fetch the person resource.

        Raises:
            OAuthError: network failure, rejected code, or People API error.
        """
        async with httpx.AsyncClient(timeout=API_TIMEOUT_SECONDS, transport=self._transport) as client:
            access_token = await self._exchange_code(client, code)
            profile = await self._fetch_profile(client, access_token)
        return OAuthLogin(access_token=access_token, profile=profile)

    async def _exchange_code(self, client: httpx.AsyncClient, code: str) -> str:
        data = {
            "code": code,
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "redirect_uri": self.redirect_uri,
            "grant_type": "authorization_code",
        }
        # One-time codes are not retried
        try:
            response = await client.post(GOOGLE_TOKEN_URL, data=data)
        except httpx.RequestError as e:
            logger.warning(
                "Google token exchange request error",
                extra={"error_type": type(e).__name__},
            )
            raise OAuthError(f"token exchange failed: {type(e).__name__}") from e

        if response.status_code != 200:
            reason = _error_reason(response)
            logger.warning(
                "Google token exchange rejected",
                extra={"status_code": response.status_code, "reason": reason},
            )
            raise OAuthError(f"token exchange failed: {reason}")

        body = _json_body(response, "token exchange failed")
        access_token = body.get("access_token") if isinstance(body, dict) else None
        if not access_token:
            raise OAuthError("token exchange failed: no access token")
        return access_token

    async def _fetch_profile(
        self, client: httpx.AsyncClient, access_token: str,
    ) -> dict[str, Any] | None:
        try:
            response = await _get_with_retry(
                client,
                PEOPLE_ME_URL,
                params={"personFields": PERSON_FIELDS},
                headers={"Authorization": f"Bearer {access_token}"},
            )
        except httpx.RequestError as e:
            logger.warning(
                "People API request error",
                extra={"error_type": type(e).__name__},
            )
            raise OAuthError(f"profile request failed: {type(e).__name__}") from e

        if response.status_code == 404:
            logger.debug("People API returned no profile")
            return None

        if response.status_code != 200:
            reason = _error_reason(response)
            logger.warning(
                "People API HTTP error",
                extra={"status_code": response.status_code, "reason": reason},
            )
            raise OAuthError(f"profile request failed: {reason}")

        data = _json_body(response, "profile request failed")
        if not isinstance(data, dict) or not data:
            logger.warning(
                "Unexpected People API response",
                extra={"type": type(data).__name__},
            )
            return None
        return data


# ── HTTP helpers ─────────────────────────────────────────────


@retry(
    retry=retry_if_exception_type((httpx.TimeoutException, httpx.ConnectError)),
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=4),
    reraise=True,
)
async def _get_with_retry(client: httpx.AsyncClient, url: str, **kwargs) -> httpx.Response:
    """GET with automatic retry on transient failures."""
    return await client.get(url, **kwargs)


def _json_body(response: httpx.Response, failure: str) -> Any:
    """Decoded JSON body of a 200 response; a non-JSON body is an OAuthError."""
    try:
        return response.json()
    except ValueError as e:
        logger.warning(
            "Google returned a non-JSON body",
            extra={"status_code": response.status_code, "failure": failure},
        )
        raise OAuthError(f"{failure}: malformed response") from e


def _error_reason(response: httpx.Response) -> str:
    """Google's error code from a JSON error body, else the HTTP status."""
    try:
        body = response.json()
    except ValueError:
        return f"HTTP {response.status_code}"

    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict):
        return error.get("status") or error.get("message") or f"HTTP {response.status_code}"
    return error or f"HTTP {response.status_code}"
