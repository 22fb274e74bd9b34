"""Auth service — login workflow and session authorization business logic.

Pure business logic with no HTTP dependencies.
Raises domain errors that route handlers map to HTTP status codes, and
reports the session cookie side effect through LoginResult.session.
"""

import logging
import secrets
from typing import Any

from domain.model.errors import AuthenticationError
from domain.model.session import (
    LoginResult,
    OAuthIdentity,
    SessionAction,
    SessionCredentials,
)
from domain.model.user import User
from port.oauth import OAuthError, OAuthPort
from port.user_repository import UserRepository, UserStoreError

logger = logging.getLogger(__name__)

TOKEN_BYTES = 16
GOOGLE_LOGIN_ERROR = "Google login error"


def generate_token() -> str:
    """Fresh opaque session token (32 hex chars)."""
    return secrets.token_hex(TOKEN_BYTES)


# ── Profile extraction ───────────────────────────────────────
# Each lookup returns None for anything absent or of the wrong shape;
# extract_identity() decides which fields are mandatory.


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _first_entry(profile: dict[str, Any], key: str) -> dict[str, Any] | None:
    entries = profile.get(key)
    if not isinstance(entries, list) or not entries:
        return None
    return _as_dict(entries[0]) or None


def _display_name(profile: dict[str, Any]) -> str | None:
    entry = _first_entry(profile, 'names')
    return entry.get('displayName') if entry else None


def _source_id(profile: dict[str, Any]) -> str | None:
    entry = _first_entry(profile, 'names')
    if not entry:
        return None
    source = _as_dict(_as_dict(entry.get('metadata')).get('source'))
    return source.get('id')


def _location(profile: dict[str, Any]) -> str | None:
    entry = _first_entry(profile, 'locations')
    return entry.get('value') if entry else None


def _photo_url(profile: dict[str, Any]) -> str | None:
    entry = _first_entry(profile, 'photos')
    return entry.get('url') if entry else None


def _email(profile: dict[str, Any]) -> str | None:
    entry = _first_entry(profile, 'emailAddresses')
    return entry.get('value') if entry else None


def extract_identity(profile: dict[str, Any]) -> OAuthIdentity:
    """Normalize an OAuth person resource into the fields a User needs.

    Raises:
        AuthenticationError: id, name, avatar or email is missing
    """
    user_id = _source_id(profile)
    name = _display_name(profile)
    avatar = _photo_url(profile)
    contact = _email(profile)

    if not user_id or not name or not avatar or not contact:
        raise AuthenticationError(GOOGLE_LOGIN_ERROR)

    return OAuthIdentity(
        user_id=user_id,
        name=name,
        avatar=avatar,
        contact=contact,
        location=_location(profile),
    )


# ── Login workflow ───────────────────────────────────────────


async def log_in(
    repo: UserRepository,
    oauth: OAuthPort,
    code: str | None,
    session_user_id: str | None,
) -> LoginResult:
    """Log the viewer in via OAuth code if given, else via the session cookie.

    Raises:
        AuthenticationError: missing profile data, or any store/provider failure
    """
    token = generate_token()
    try:
        if code:
            return await _log_in_via_oauth(repo, oauth, code, token)
        return _log_in_via_cookie(repo, session_user_id, token)
    except (UserStoreError, OAuthError) as e:
        logger.error("Login failed", extra={"error": str(e), "via": "oauth" if code else "cookie"})
        raise AuthenticationError(str(e), cause=e) from e


def _log_in_via_cookie(
    repo: UserRepository,
    session_user_id: str | None,
    token: str,
) -> LoginResult:
    user = repo.set_token(session_user_id, token) if session_user_id else None

    if not user:
        logger.info("Session cookie matched no user", extra={"userId": session_user_id})
        return LoginResult(user=None, session=SessionAction.CLEAR)

    logger.debug("Session renewed", extra={"userId": user.id})
    return LoginResult(user=user, session=SessionAction.KEEP)


async def _log_in_via_oauth(
    repo: UserRepository,
    oauth: OAuthPort,
    code: str,
    token: str,
) -> LoginResult:
    login = await oauth.log_in(code)
    if not login.profile:
        raise AuthenticationError(GOOGLE_LOGIN_ERROR)

    identity = extract_identity(login.profile)

    user = repo.update_profile(
        identity.user_id,
        name=identity.name,
        avatar=identity.avatar,
        contact=identity.contact,
        token=token,
    )

    if not user:
        user = repo.create(
            identity.user_id,
            name=identity.name,
            avatar=identity.avatar,
            contact=identity.contact,
            token=token,
        )
        if not user:
            raise AuthenticationError("User was inserted but could not be read back")
        logger.info("User created", extra={"userId": user.id})
    else:
        logger.info("User logged in", extra={"userId": user.id})

    return LoginResult(user=user, session=SessionAction.SET)


# ── Authorization ────────────────────────────────────────────


def authorize(repo: UserRepository, credentials: SessionCredentials) -> User | None:
    """Resolve the session's user from cookie user id + CSRF token.

    Returns None unless both are present and match the stored record.
    """
    if not credentials.user_id or not credentials.token:
        return None
    return repo.get_by_token(credentials.user_id, credentials.token)
