"""Viewer projection — what the client sees of the current session's user."""

from dataclasses import dataclass

from domain.model.user import User


@dataclass(frozen=True)
class Viewer:
    """Transient per-response view of the authenticated (or anonymous) user."""
    id: str | None = None
    token: str | None = None
    avatar: str | None = None
    wallet_id: str | None = None
    did_request: bool = True

    @classmethod
    def from_user(cls, user: User) -> "Viewer":
        return cls(
            id=user.id,
            token=user.token,
            avatar=user.avatar,
            wallet_id=user.wallet_id,
        )

    @classmethod
    def anonymous(cls) -> "Viewer":
        return cls()

    @property
    def has_wallet(self) -> bool | None:
        """True when a payment account is linked, otherwise None (never False)."""
        return True if self.wallet_id else None
