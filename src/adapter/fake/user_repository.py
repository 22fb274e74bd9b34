"""In-memory implementation of UserRepository for testing."""

from dataclasses import replace

from domain.model.user import User
from port.user_repository import UserStoreError


class FakeUserRepository:
    def __init__(self, fail_with: str | None = None):
        self.store: dict[str, User] = {}
        self.fail_with = fail_with
        self.inserted: list[str] = []
        self.writes = 0

    def _check(self) -> None:
        if self.fail_with:
            raise UserStoreError(self.fail_with)

    def _set(self, user_id: str, **fields) -> User | None:
        self._check()
        self.writes += 1
        user = self.store.get(user_id)
        if not user:
            return None
        updated = replace(user, **fields)
        self.store[user_id] = updated
        return updated

    # ── write operations ─────────────────────────────────────

    def set_token(self, user_id: str, token: str) -> User | None:
        return self._set(user_id, token=token)

    def update_profile(
        self, user_id: str, name: str, avatar: str, contact: str, token: str,
    ) -> User | None:
        return self._set(user_id, name=name, avatar=avatar, contact=contact, token=token)

    def set_wallet(self, user_id: str, wallet_id: str | None) -> User | None:
        return self._set(user_id, wallet_id=wallet_id)

    def create(
        self, user_id: str, name: str, avatar: str, contact: str, token: str,
    ) -> User | None:
        self._check()
        self.writes += 1
        if user_id in self.store:
            raise UserStoreError(f"duplicate key: {user_id}")

        self.store[user_id] = User(
            id=user_id, token=token, name=name, avatar=avatar, contact=contact,
        )
        self.inserted.append(user_id)
        return self._get(user_id)

    # ── read operations ──────────────────────────────────────

    def _get(self, user_id: str) -> User | None:
        self._check()
        return self.store.get(user_id)

    def get_by_token(self, user_id: str, token: str) -> User | None:
        user = self._get(user_id)
        if user and user.token == token:
            return user
        return None
