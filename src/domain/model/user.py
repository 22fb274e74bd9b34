from dataclasses import dataclass, field


@dataclass
class User:
    """Domain model representing a user.

    ``id`` is the stable identifier issued by the OAuth provider and never
    changes once the record exists. ``token`` is rotated on every login.
    """
    id: str
    token: str
    name: str
    avatar: str
    contact: str
    wallet_id: str | None = None
    income: int = 0
    bookings: list[str] = field(default_factory=list)
    listings: list[str] = field(default_factory=list)
