"""Stripe service — links and unlinks a connected payment account.

Flow: authorize viewer → (connect only) exchange code with processor → store account ID
"""

import logging

from domain.model.errors import AuthorizationError, ConsistencyError, ProcessorError
from domain.model.session import SessionCredentials
from domain.model.user import User
from port.payment import PaymentError, PaymentPort
from port.user_repository import UserRepository, UserStoreError
from services.auth_service import authorize

logger = logging.getLogger(__name__)


async def connect(
    repo: UserRepository,
    payments: PaymentPort,
    credentials: SessionCredentials,
    code: str,
) -> User:
    """Link the viewer to the payment account granted by ``code``.

    Returns the updated User.
    Raises AuthorizationError, ProcessorError or ConsistencyError.
    """
    viewer = _require_viewer(repo, credentials, "viewer cannot be found")

    try:
        wallet_id = await payments.connect(code)
    except PaymentError as e:
        raise ProcessorError(str(e), cause=e) from e
    if not wallet_id:
        raise ProcessorError("stripe grant error")

    user = _set_wallet(repo, viewer.id, wallet_id)
    logger.info("Payment account connected", extra={"userId": user.id})
    return user


def disconnect(repo: UserRepository, credentials: SessionCredentials) -> User:
    """Clear the viewer's payment account ID. Local state only."""
    viewer = _require_viewer(
        repo, credentials, "viewer cannot be found or has not connected with Stripe",
    )

    user = _set_wallet(repo, viewer.id, None)
    logger.info("Payment account disconnected", extra={"userId": user.id})
    return user


def _require_viewer(
    repo: UserRepository,
    credentials: SessionCredentials,
    message: str,
) -> User:
    """Return the authorized viewer or raise AuthorizationError."""
    try:
        viewer = authorize(repo, credentials)
    except UserStoreError as e:
        raise AuthorizationError(str(e), cause=e) from e
    if not viewer:
        raise AuthorizationError(message)
    return viewer


def _set_wallet(repo: UserRepository, user_id: str, wallet_id: str | None) -> User:
    try:
        user = repo.set_wallet(user_id, wallet_id)
    except UserStoreError as e:
        raise ConsistencyError(str(e), cause=e) from e
    if not user:
        raise ConsistencyError("viewer could not be updated")
    return user
