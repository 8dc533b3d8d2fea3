"""Test environment defaults, applied before any test module is imported."""

import os

os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-not-for-production")
# Minimum bcrypt cost keeps hashing fast in tests
os.environ.setdefault("BCRYPT_ROUNDS", "4")
