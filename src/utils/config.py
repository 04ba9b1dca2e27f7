"""Environment-backed configuration.

Values are read on call rather than at import so the app factory and tests
can control the environment.
"""

import logging
import os

logger = logging.getLogger(__name__)

MONGODB_URI_PREFIXES = ('mongodb://', 'mongodb+srv://')
DEFAULT_DATABASE_NAME = 'storefront'

BCRYPT_DEFAULT_ROUNDS = 10
BCRYPT_MIN_ROUNDS = 10


class ConfigError(ValueError):
    """Required configuration is missing or malformed."""


def get_mongodb_uri() -> str:
    """Return MONGODB_URI after checking it is set and uses a MongoDB scheme."""
    uri = os.getenv('MONGODB_URI')

    if not uri or not uri.strip():
        raise ConfigError("MONGODB_URI environment variable is required")

    if not uri.startswith(MONGODB_URI_PREFIXES):
        raise ConfigError("MONGODB_URI must start with mongodb:// or mongodb+srv://")

    return uri


def get_database_name() -> str:
    return os.getenv('MONGODB_DATABASE', DEFAULT_DATABASE_NAME)


def get_jwt_secret_key() -> str:
    secret = os.getenv('JWT_SECRET_KEY')
    if not secret or not secret.strip():
        raise ConfigError(
            "JWT_SECRET_KEY environment variable is required. "
            "Generate a secure key with: openssl rand -hex 32"
        )
    return secret


def get_bcrypt_rounds() -> int:
    """Return the bcrypt work factor, never below BCRYPT_MIN_ROUNDS."""
    raw = os.getenv('BCRYPT_ROUNDS')
    if not raw:
        return BCRYPT_DEFAULT_ROUNDS

    try:
        rounds = int(raw)
    except ValueError:
        raise ConfigError(f"BCRYPT_ROUNDS must be an integer, got {raw!r}")

    if rounds < BCRYPT_MIN_ROUNDS:
        logger.warning(
            "BCRYPT_ROUNDS below minimum, using floor",
            extra={"requested": rounds, "floor": BCRYPT_MIN_ROUNDS},
        )
        return BCRYPT_MIN_ROUNDS
    return rounds


def get_session_cookie_secure() -> bool:
    return os.getenv('SESSION_COOKIE_SECURE', 'true').strip().lower() not in ('0', 'false', 'no')


def get_cors_origins() -> str | list[str]:
    """Return "*" or the explicit list from CORS_ORIGINS (comma separated)."""
    cors_origins_env = os.getenv('CORS_ORIGINS', '*')
    if cors_origins_env == '*':
        return '*'
    return [origin.strip() for origin in cors_origins_env.split(',') if origin.strip()]
