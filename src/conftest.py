"""Shared test environment.

Configuration is read from the environment, so set safe defaults before any
test module builds an app or hashes a password.
"""

import os

os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("MONGODB_URI", "mongodb://localhost:27017/storefront_test")
os.environ.setdefault("BCRYPT_ROUNDS", "10")
os.environ.setdefault("CORS_ORIGINS", "http://localhost:3000")
