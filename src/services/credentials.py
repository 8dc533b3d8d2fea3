"""Credential engine — password hashing and bearer token issuance.

Pure functions over their inputs: no storage access. bcrypt embeds the salt
and cost factor in its output, so a stored hash is self-describing.
"""

import logging
import os
from datetime import datetime, timedelta, timezone

import bcrypt
from jose import JWTError, jwt

logger = logging.getLogger(__name__)

BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))
# bcrypt ignores everything past 72 bytes; newer releases raise instead.
BCRYPT_MAX_BYTES = 72

JWT_ALGORITHM = "HS256"
JWT_EXPIRATION_DAYS = int(os.getenv("JWT_EXPIRATION_DAYS", "7"))


def _secret_key() -> str:
    secret = os.getenv("JWT_SECRET_KEY")
    if not secret:
        raise ValueError(
            "JWT_SECRET_KEY environment variable is required. "
            "Generate a secure key with: openssl rand -hex 32"
        )
    return secret


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    """Hash password using bcrypt with a fresh random salt.

    Args:
        password: Plain text password

    Returns:
        Bcrypt hash string (salt and rounds embedded)
    """
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(_encode(password), salt).decode("utf-8")


def verify_password(plain: str, hashed: str | None) -> bool:
    """Check a plain password against a stored bcrypt hash.

    A missing or malformed hash counts as a mismatch.
    """
    if not hashed:
        return False
    try:
        return bcrypt.checkpw(_encode(plain), hashed.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is malformed")
        return False


def issue_token(user_id: str, role: str) -> str:
    """Create a signed JWT carrying the user's id and role."""
    now = datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "role": role,
        "iat": now,
        "exp": now + timedelta(days=JWT_EXPIRATION_DAYS),
    }
    return jwt.encode(payload, _secret_key(), algorithm=JWT_ALGORITHM)


def decode_token(token: str) -> dict | None:
    """Verify a JWT and return its claims, or None if invalid or expired."""
    try:
        claims = jwt.decode(token, _secret_key(), algorithms=[JWT_ALGORITHM])
    except JWTError as e:
        logger.debug(f"JWT verification failed: {e}")
        return None
    if claims.get("sub") is None:
        return None
    return claims
