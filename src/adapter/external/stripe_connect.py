"""Stripe Connect adapter — implements PaymentPort with the Stripe OAuth flow."""

import asyncio
import logging
import os

import stripe

from port.payment import PaymentError

logger = logging.getLogger(__name__)


class StripeConnectAdapter:
    """Adapter that exchanges Stripe Connect authorization codes."""

    def __init__(self, api_key: str | None = None):
        self.api_key = api_key or os.getenv("S_SECRET_KEY", "")

    async def connect(self, code: str) -> str | None:
        """Exchange ``code`` for the connected account's ``stripe_user_id``.

        The SDK call is synchronous and runs in a worker thread.

        Raises:
            PaymentError: Stripe rejected the code or could not be reached.
        """
        try:
            response = await asyncio.to_thread(
                stripe.OAuth.token,
                api_key=self.api_key,
                grant_type="authorization_code",
                code=code,
            )
        except stripe.StripeError as e:
            logger.warning(
                "Stripe OAuth token exchange failed",
                extra={"error_type": type(e).__name__, "error": str(e)[:200]},
            )
            raise PaymentError(str(e)) from e

        if not response:
            return None
        return response.get("stripe_user_id")
