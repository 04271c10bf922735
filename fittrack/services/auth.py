"""
FitTrack API - Authentication Service.

JWT token generation and password hashing utilities.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
import logging

import bcrypt
from jose import jwt, JWTError

from settings import settings

logger = logging.getLogger(__name__)


# Maximum password length for bcrypt (72 bytes)
MAX_PASSWORD_BYTES = 72


def _prepare_password(password: str) -> bytes:
    """
    Prepare password for bcrypt hashing.

    Bcrypt only uses the first 72 bytes of any password.
    This function encodes and truncates to ensure consistent behavior.
    """
    return password.encode('utf-8')[:MAX_PASSWORD_BYTES]


def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: Plain text password to hash.

    Returns:
        str: Bcrypt hashed password.
    """
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    hashed = bcrypt.hashpw(_prepare_password(password), salt)
    return hashed.decode('utf-8')


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against a hash.

    Returns:
        bool: True if password matches, False otherwise.
    """
    try:
        return bcrypt.checkpw(
            _prepare_password(plain_password),
            hashed_password.encode('utf-8')
        )
    except ValueError as e:
        logger.warning(f"Password verification failed: {e}")
        return False


def create_access_token(
    user_id: str,
    expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create a JWT access token for a user.

    The owner id is written under both ``id`` (read by the front end) and
    ``sub``.

    Args:
        user_id: Id of the authenticated user.
        expires_delta: Optional custom expiration time.

    Returns:
        str: Encoded JWT access token.

    Example:
        >>> token = create_access_token("665f1c2e9b1d4c0012345678")
        >>> get_user_id_from_token(token)
        '665f1c2e9b1d4c0012345678'
    """
    now = datetime.now(timezone.utc)
    expire = now + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )

    to_encode = {
        "id": user_id,
        "sub": user_id,
        "exp": expire,
        "iat": now,
    }

    return jwt.encode(
        to_encode,
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM
    )


def verify_token(token: str) -> Optional[Dict[str, Any]]:
    """
    Verify and decode a JWT access token.

    Returns:
        Optional[Dict[str, Any]]: Token payload if valid, None otherwise.
    """
    try:
        return jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM]
        )
    except JWTError:
        return None


def get_user_id_from_token(token: str) -> Optional[str]:
    """
    Extract the owner id from a verified JWT token.

    Returns:
        Optional[str]: User ID if token is valid, None otherwise.
    """
    payload = verify_token(token)
    if payload:
        return payload.get("id") or payload.get("sub")
    return None
