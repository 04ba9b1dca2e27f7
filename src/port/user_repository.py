from typing import Protocol
from domain.model.user import NewUser, User


class UserRepository(Protocol):
    """Protocol defining the interface for user data access.

    Soft-deleted users are invisible to every read.
    """
    def create(self, new_user: NewUser) -> User:
        """Persist a new user and return it with a generated id.

        Raises DuplicateEmailError if the store's unique email constraint rejects it.
        """
        ...

    def get_by_email(self, email: str) -> User | None:
        """Find a non-deleted user by exact email. Return None if not found."""
        ...

    def get_by_id(self, user_id: str) -> User | None:
        """Find a non-deleted user by ID. Return None if not found or the ID is malformed."""
        ...

    def set_banned(self, user_id: str, banned: bool) -> bool:
        """Ban or unban a user. Return True if a record changed."""
        ...

    def set_activated(self, user_id: str, activated: bool) -> bool:
        """Activate or deactivate a user. Return True if a record changed."""
        ...

    def soft_delete(self, user_id: str) -> bool:
        """Flag a user as deleted. Return True if a record changed."""
        ...
