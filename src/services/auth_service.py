"""Auth service: registration and credential validation business logic.

Pure business logic with no HTTP dependencies.
Raises domain errors that route handlers map to HTTP status codes.
"""

import logging
from datetime import datetime, timezone
from functools import lru_cache
from typing import Any, Mapping

from domain.model.errors import BannedAccountError, DuplicateEmailError
from domain.model.registration import RegistrationInput
from domain.model.user import NewUser, Role, User
from port.user_repository import UserRepository
from services.password_service import hash_password, verify_password
from services.registration_service import validate_registration

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    # Verified against when the email is unknown so the miss costs one bcrypt round too
    return hash_password("dummy-password-for-timing")


def register(repo: UserRepository, data: RegistrationInput) -> User:
    """Register a new customer account.

    Returns the created User domain object. Role is always CUSTOMER and the
    account starts inactive.

    Raises:
        DuplicateEmailError: a non-deleted user already holds the email
        StorageError: the store failed
    """
    if repo.get_by_email(data.email):
        raise DuplicateEmailError(data.email)

    password_hash = hash_password(data.password)

    now = datetime.now(timezone.utc)
    new_user = NewUser(
        email=data.email,
        password_hash=password_hash,
        first_name=data.first_name,
        last_name=data.last_name,
        phone=data.phone,
        address=data.address,
        city=data.city,
        postal=data.postal,
        country=data.country,
        role=Role.CUSTOMER,
        activated=False,
        deleted=False,
        banned=False,
        created_at=now,
        updated_at=now,
    )

    # The store's unique index is authoritative for concurrent registrations
    user = repo.create(new_user)
    logger.info("User registered", extra={"userId": user.id, "email": user.email})
    return user


def create_account(repo: UserRepository, data: Mapping[str, Any]) -> User:
    """Validate a raw registration payload and register it.

    Raises:
        ValidationError: payload failed validation; nothing was persisted
        DuplicateEmailError: a non-deleted user already holds the email
    """
    return register(repo, validate_registration(data))


def validate_credentials(repo: UserRepository, email: str, password: str) -> User | None:
    """Check an email/password pair.

    Returns the User on success and None for an unknown email or a wrong
    password; the two cases are indistinguishable to the caller.

    The password is always verified before the ban flag is consulted so a
    banned account takes as long to answer as any other.

    Raises:
        BannedAccountError: the account is banned, whatever the password
    """
    user = repo.get_by_email(email)
    if not user:
        verify_password(password, _dummy_hash())
        return None

    is_valid = verify_password(password, user.password_hash)

    if user.banned:
        logger.warning("Login attempt on banned account", extra={"userId": user.id})
        raise BannedAccountError(user.id)

    return user if is_valid else None
