"""
Bearer Token Authentication

Issues and verifies JSON Web Tokens that identify a user id, and hashes
user passwords with bcrypt. Tokens are read from an
``Authorization: Bearer <token>`` header (scheme is case-insensitive).
"""

import os
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from fastapi import Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from apps.shared.errors import AuthenticationError

logger = logging.getLogger(__name__)

SECRET_KEY = os.getenv("SECRET")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "10"))
ENVIRONMENT = os.getenv("ENVIRONMENT", "development")

DEV_SECRET_KEY = "development-only-secret"

TOKEN_ERROR = "token missing or invalid"

_dev_secret_warned = False

# auto_error=False so a missing header reaches us and becomes a 401
bearer_scheme = HTTPBearer(auto_error=False)


def _get_secret_key() -> str:
    global _dev_secret_warned
    if SECRET_KEY:
        return SECRET_KEY
    if ENVIRONMENT == "production":
        raise RuntimeError(
            "SECRET must be set in production. "
            "Generate one with: python -c 'import secrets; print(secrets.token_urlsafe(32))'"
        )
    if not _dev_secret_warned:
        logger.warning(
            "SECRET not set - signing tokens with the development key. "
            "Set SECRET environment variable for security."
        )
        _dev_secret_warned = True
    return DEV_SECRET_KEY


def hash_password(password: str) -> str:
    # bcrypt only looks at the first 72 bytes
    hashed = bcrypt.hashpw(password.encode("utf-8")[:72], bcrypt.gensalt(rounds=BCRYPT_ROUNDS))
    return hashed.decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    return bcrypt.checkpw(password.encode("utf-8")[:72], password_hash.encode("utf-8"))


def create_access_token(
    user_id: int,
    username: str,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Create a signed token for a user.

    Args:
        user_id: Id the token authenticates as (``id`` claim)
        username: Included for clients, not trusted on the server
        expires_delta: Lifetime, defaults to ACCESS_TOKEN_EXPIRE_MINUTES

    Returns:
        Encoded JWT string
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)

    payload = {
        "username": username,
        "id": user_id,
        "exp": datetime.now(timezone.utc) + expires_delta,
    }
    return jwt.encode(payload, _get_secret_key(), algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    """
    Verify a token's signature and expiry and return its claims.

    Raises:
        AuthenticationError: If the token is invalid or expired
    """
    try:
        return jwt.decode(token, _get_secret_key(), algorithms=[JWT_ALGORITHM])
    except JWTError as e:
        logger.info(f"Rejected bearer token: {type(e).__name__}")
        raise AuthenticationError(TOKEN_ERROR)


def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
) -> int:
    """
    Dependency resolving the caller's user id from the bearer token

    Usage in endpoints:
    @router.post("/protected")
    def protected_endpoint(user_id: int = Depends(get_current_user_id)):
        ...
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError(TOKEN_ERROR)

    claims = decode_access_token(credentials.credentials)
    user_id = claims.get("id")
    if user_id is None:
        raise AuthenticationError(TOKEN_ERROR)

    try:
        return int(user_id)
    except (TypeError, ValueError):
        raise AuthenticationError(TOKEN_ERROR)
