"""Password hashing with bcrypt.

Every hash gets a fresh salt, so hashing the same password twice yields
different digests. Verification delegates to bcrypt.checkpw, which compares
in constant time.
"""

import logging

import bcrypt

from utils.config import BCRYPT_MIN_ROUNDS, get_bcrypt_rounds

logger = logging.getLogger(__name__)

# bcrypt only reads the first 72 bytes of input
BCRYPT_MAX_PASSWORD_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_PASSWORD_BYTES]


def hash_password(password: str, rounds: int | None = None) -> str:
    """Hash a plaintext password with a per-call salt.

    Args:
        password: Plain text password
        rounds: bcrypt work factor; defaults to the configured value and is
            never allowed below BCRYPT_MIN_ROUNDS

    Returns:
        Bcrypt hash as string (salt and cost embedded)
    """
    rounds = get_bcrypt_rounds() if rounds is None else max(rounds, BCRYPT_MIN_ROUNDS)
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(_encode(password), salt).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """Return True iff plain reproduces hashed using the salt embedded in it."""
    try:
        return bcrypt.checkpw(_encode(plain), hashed.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is malformed")
        return False
