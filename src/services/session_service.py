"""Signed session tokens.

A session token is an HS256 JWT carrying the user's id, email, display name
and role. Resolving a token never raises: an invalid, expired or tampered
token is simply no session.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

from domain.model.session import Session
from domain.model.user import Role, User

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"
SESSION_MAX_AGE = timedelta(days=30)


class SessionTokenIssuer:
    """Issues and resolves session tokens signed with a shared secret."""

    def __init__(self, secret_key: str, max_age: timedelta = SESSION_MAX_AGE):
        if not secret_key:
            raise ValueError("secret_key is required")
        self._secret_key = secret_key
        self.max_age = max_age

    @property
    def max_age_seconds(self) -> int:
        return int(self.max_age.total_seconds())

    def issue(self, user: User) -> str:
        """Create a signed token for a validated user."""
        now = datetime.now(timezone.utc)
        payload = {
            "sub": user.id,
            "email": user.email,
            "name": user.display_name,
            "role": user.role.value,
            "iat": now,
            "exp": now + self.max_age,
        }
        return jwt.encode(payload, self._secret_key, algorithm=JWT_ALGORITHM)

    def resolve(self, token: Optional[str]) -> Optional[Session]:
        """Rebuild the Session from a token, or None if it is not valid."""
        if not token:
            return None

        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[JWT_ALGORITHM])
        except JWTError as e:
            logger.debug(f"Session token rejected: {e}")
            return None

        try:
            return Session(
                id=payload["sub"],
                email=payload["email"],
                name=payload["name"],
                role=Role(payload["role"]),
            )
        except (KeyError, ValueError):
            logger.debug("Session token is missing claims")
            return None
