"""Payment port — outbound interface for the payment processor's account linking."""

from typing import Protocol


class PaymentError(Exception):
    """Base exception for payment processor errors."""


class PaymentPort(Protocol):
    async def connect(self, code: str) -> str | None:
        """Exchange an authorization code for a connected account ID."""
        ...
