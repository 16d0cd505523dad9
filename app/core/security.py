"""
Password hashing and JWT bearer tokens.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import jwt
from fastapi.security import OAuth2PasswordBearer
from passlib.hash import argon2

from app.core.config import settings

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/token")


def get_password_hash(password: str) -> str:
    return argon2.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return argon2.verify(plain_password, hashed_password)
    except ValueError:
        # Not an argon2 hash
        return False


def create_access_token(data: dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a signed JWT.

    Args:
        data: Claims to encode; ``sub`` must already be a string
        expires_delta: Token lifetime (defaults to ``ACCESS_TOKEN_EXPIRE_MINUTES``)

    Returns:
        Encoded token
    """
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode["exp"] = expire
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> Optional[str]:
    """Return the ``sub`` claim of a valid token, or ``None``."""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except jwt.InvalidTokenError:
        return None
    return payload.get("sub")
