"""In-memory implementation of UserRepository for testing."""

from dataclasses import asdict
from datetime import datetime, timezone

from bson import ObjectId

from domain.model.errors import DuplicateEmailError
from domain.model.user import NewUser, User


class FakeUserRepository:
    """Dict-backed store that mirrors the MongoDB adapter's semantics.

    Like the partial unique index, email must be unique among non-deleted users.
    """

    def __init__(self):
        self.store: dict[str, User] = {}

    # ── write operations ─────────────────────────────────────

    def create(self, new_user: NewUser) -> User:
        if any(u.email == new_user.email and not u.deleted for u in self.store.values()):
            raise DuplicateEmailError(new_user.email)

        user = User(id=str(ObjectId()), **asdict(new_user))
        self.store[user.id] = user
        return user

    def set_banned(self, user_id: str, banned: bool) -> bool:
        return self._set_flag(user_id, 'banned', banned)

    def set_activated(self, user_id: str, activated: bool) -> bool:
        return self._set_flag(user_id, 'activated', activated)

    def soft_delete(self, user_id: str) -> bool:
        return self._set_flag(user_id, 'deleted', True)

    def _set_flag(self, user_id: str, flag: str, value: bool) -> bool:
        user = self.store.get(user_id)
        if not user or user.deleted or getattr(user, flag) == value:
            return False

        setattr(user, flag, value)
        user.updated_at = datetime.now(timezone.utc)
        return True

    # ── read operations ──────────────────────────────────────

    def get_by_email(self, email: str) -> User | None:
        for user in self.store.values():
            if user.email == email and not user.deleted:
                return user
        return None

    def get_by_id(self, user_id: str) -> User | None:
        user = self.store.get(user_id)
        if user and not user.deleted:
            return user
        return None
