"""Session cookie signing and request authentication dependencies."""

import os
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional
from fastapi import Depends, Header, Request, Response
from jose import JWTError, jwt

from domain.model.session import SessionCredentials

logger = logging.getLogger(__name__)

VIEWER_COOKIE_NAME = "viewer"
SESSION_MAX_AGE_SECONDS = 365 * 24 * 60 * 60
JWT_ALGORITHM = "HS256"


@dataclass(frozen=True)
class CookieSettings:
    """How the session cookie is signed and which attributes it carries.

    ``secure`` is False only when the app runs in development mode.
    """
    secret: str
    secure: bool = True
    name: str = VIEWER_COOKIE_NAME
    max_age: int = SESSION_MAX_AGE_SECONDS

    @classmethod
    def from_env(cls) -> "CookieSettings":
        secret = os.getenv("SESSION_SECRET")
        if not secret:
            raise ValueError(
                "SESSION_SECRET environment variable is required. "
                "Generate a secure key with: openssl rand -hex 32"
            )
        return cls(
            secret=secret,
            secure=os.getenv("APP_ENV", "production") != "development",
        )


def get_cookie_settings() -> CookieSettings:
    return CookieSettings.from_env()


def sign_user_id(user_id: str, settings: CookieSettings) -> str:
    """Sign a user ID into a session cookie value."""
    payload = {
        "sub": user_id,
        "iat": datetime.now(timezone.utc),
    }
    return jwt.encode(payload, settings.secret, algorithm=JWT_ALGORITHM)


def read_user_id(value: Optional[str], settings: CookieSettings) -> Optional[str]:
    """Verify a session cookie value and extract the user ID.

    Returns None for a missing, forged or malformed cookie.
    """
    if not value:
        return None
    try:
        payload = jwt.decode(value, settings.secret, algorithms=[JWT_ALGORITHM])
    except JWTError as e:
        logger.debug(f"Session cookie verification failed: {e}")
        return None
    return payload.get("sub")


def set_session_cookie(response: Response, user_id: str, settings: CookieSettings) -> None:
    response.set_cookie(
        key=settings.name,
        value=sign_user_id(user_id, settings),
        max_age=settings.max_age,
        expires=settings.max_age,
        httponly=True,
        samesite="strict",
        secure=settings.secure,
    )


def clear_session_cookie(response: Response, settings: CookieSettings) -> None:
    response.delete_cookie(
        key=settings.name,
        httponly=True,
        samesite="strict",
        secure=settings.secure,
    )


def get_session_credentials(
    request: Request,
    x_csrf_token: Optional[str] = Header(default=None),
    settings: CookieSettings = Depends(get_cookie_settings),
) -> SessionCredentials:
    """Identity claimed by the request: signed cookie user ID + X-CSRF-TOKEN header."""
    return SessionCredentials(
        user_id=read_user_id(request.cookies.get(settings.name), settings),
        token=x_csrf_token,
    )
