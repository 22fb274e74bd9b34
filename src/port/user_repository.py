from typing import Protocol
from domain.model.user import User


class UserStoreError(Exception):
    """The user store could not be reached or rejected the operation."""


class UserRepository(Protocol):
    """Protocol defining the interface for user data access.

    Every update is an atomic find-and-update keyed by user id that never
    upserts and returns the post-update record, or None when nothing matched.
    Driver failures raise UserStoreError.
    """
    def get_by_token(self, user_id: str, token: str) -> User | None:
        """Find a user whose ID and current session token both match."""
        ...

    def set_token(self, user_id: str, token: str) -> User | None:
        """Rotate the session token. Return the updated User or None."""
        ...

    def update_profile(
        self, user_id: str, name: str, avatar: str, contact: str, token: str,
    ) -> User | None:
        """Refresh profile fields and token. Return the updated User or None."""
        ...

    def create(
        self, user_id: str, name: str, avatar: str, contact: str, token: str,
    ) -> User | None:
        """Insert a new user with zero income and no bookings/listings.

        Returns the stored User as read back by its ID.
        """
        ...

    def set_wallet(self, user_id: str, wallet_id: str | None) -> User | None:
        """Set or clear the payment account ID. Return the updated User or None."""
        ...
