"""Viewer routes (login, logout, Stripe account linking).

Flow:
    Client → GET /viewer/auth-url → Redirect to Google → back with ?code=
    Client → POST /viewer/login {code} → Cookie set → Viewer (token used as X-CSRF-TOKEN)
    Client → POST /viewer/login {} on page load → Cookie renewed or cleared
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Response, status

from api.dependencies import get_oauth_port, get_payment_port, get_user_repo
from api.models import AuthUrlResponse, ConnectStripeRequest, LogInRequest, ViewerResponse
from api.security import (
    CookieSettings,
    clear_session_cookie,
    get_cookie_settings,
    get_session_credentials,
    set_session_cookie,
)
from domain.model.errors import (
    AuthenticationError,
    AuthorizationError,
    ConsistencyError,
    DomainError,
    ProcessorError,
)
from domain.model.session import SessionAction, SessionCredentials
from domain.model.viewer import Viewer
from port.oauth import OAuthPort
from port.payment import PaymentPort
from port.user_repository import UserRepository
from services import auth_service, stripe_service


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/viewer", tags=["viewer"])

_ERROR_STATUS = (
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (AuthorizationError, status.HTTP_401_UNAUTHORIZED),
    (ProcessorError, status.HTTP_502_BAD_GATEWAY),
    (ConsistencyError, status.HTTP_409_CONFLICT),
)


def _to_http_error(error: DomainError, operation: str) -> HTTPException:
    """Map a domain error kind to its HTTP status, keeping the message."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    for kind, code in _ERROR_STATUS:
        if isinstance(error, kind):
            status_code = code
            break
    return HTTPException(status_code=status_code, detail=f"Failed to {operation}: {error}")


@router.get("/auth-url", response_model=AuthUrlResponse)
async def get_auth_url(oauth: OAuthPort = Depends(get_oauth_port)):
    """Google consent URL the client redirects to."""
    return AuthUrlResponse(auth_url=oauth.auth_url)


@router.post("/login", response_model=ViewerResponse)
async def log_in(
    response: Response,
    request: Optional[LogInRequest] = None,
    credentials: SessionCredentials = Depends(get_session_credentials),
    settings: CookieSettings = Depends(get_cookie_settings),
    repo: UserRepository = Depends(get_user_repo),
    oauth: OAuthPort = Depends(get_oauth_port),
):
    """Log in with a Google code, or renew the session from the cookie.

    Raises:
        HTTPException: 401 if the Google profile is unusable or the login fails
    """
    code = request.code if request else None

    try:
        result = await auth_service.log_in(repo, oauth, code, credentials.user_id)
    except DomainError as e:
        raise _to_http_error(e, "log in") from e

    if result.session == SessionAction.SET:
        set_session_cookie(response, result.user.id, settings)
    elif result.session == SessionAction.CLEAR:
        clear_session_cookie(response, settings)

    if not result.user:
        return ViewerResponse.from_viewer(Viewer.anonymous())
    return ViewerResponse.from_viewer(Viewer.from_user(result.user))


@router.post("/logout", response_model=ViewerResponse)
async def log_out(
    response: Response,
    settings: CookieSettings = Depends(get_cookie_settings),
):
    """Clear the session cookie. The stored token is left to be rotated on next login."""
    clear_session_cookie(response, settings)
    return ViewerResponse.from_viewer(Viewer.anonymous())


@router.post("/stripe/connect", response_model=ViewerResponse)
async def connect_stripe(
    request: ConnectStripeRequest,
    credentials: SessionCredentials = Depends(get_session_credentials),
    repo: UserRepository = Depends(get_user_repo),
    payments: PaymentPort = Depends(get_payment_port),
):
    """Link the viewer to a Stripe Connect account.

    Raises:
        HTTPException: 401 no viewer, 502 Stripe grant failed, 409 viewer not updated
    """
    try:
        user = await stripe_service.connect(repo, payments, credentials, request.code)
    except DomainError as e:
        raise _to_http_error(e, "connect with Stripe") from e

    return ViewerResponse.from_viewer(Viewer.from_user(user))


@router.post("/stripe/disconnect", response_model=ViewerResponse)
async def disconnect_stripe(
    credentials: SessionCredentials = Depends(get_session_credentials),
    repo: UserRepository = Depends(get_user_repo),
):
    """Unlink the viewer's Stripe account (local state only)."""
    try:
        user = stripe_service.disconnect(repo, credentials)
    except DomainError as e:
        raise _to_http_error(e, "disconnect with Stripe") from e

    return ViewerResponse.from_viewer(Viewer.from_user(user))
