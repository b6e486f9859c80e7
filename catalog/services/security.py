"""
Security Service

Handles password hashing and JWT token operations.

Security Features:
==================
1. Password hashing with bcrypt (passlib)
2. JWT token generation and validation
3. Secure password verification

The signing secret is always passed in by the caller (it comes from the
Settings the app was built with); nothing here reads configuration.

Usage:
    from catalog.services.security import hash_password, verify_password

    hashed = hash_password("SecurePass123")
    is_valid = verify_password("SecurePass123", hashed)

    token = create_access_token({"sub": "1"}, settings.secret_key)
    payload = verify_token_type(token, settings.secret_key, "access")
"""

import logging
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext

logger = logging.getLogger(__name__)

# -------------------------------------------------------------------------
# Password Hashing Configuration
# -------------------------------------------------------------------------
# deprecated="auto" re-hashes old schemes transparently on verify
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    """
    Hash a plain text password using bcrypt.

    Example:
        >>> hashed = hash_password("SecurePass123")
        >>> hashed.startswith("$2b$")
        True
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a hashed password.

    Uses constant-time comparison to prevent timing attacks.

    Example:
        >>> hashed = hash_password("SecurePass123")
        >>> verify_password("SecurePass123", hashed)
        True
        >>> verify_password("WrongPassword", hashed)
        False
    """
    return pwd_context.verify(plain_password, hashed_password)


# -------------------------------------------------------------------------
# JWT Token Configuration
# -------------------------------------------------------------------------
ALGORITHM = "HS256"


def create_access_token(
    data: dict,
    secret_key: str,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Create a signed JWT access token.

    Without expires_delta the token carries no "exp" claim and stays
    valid until the secret changes.

    Args:
        data: Payload data to encode in the token
        secret_key: Key used to sign the token
        expires_delta: Optional lifetime

    Returns:
        Encoded JWT token string

    Example:
        >>> token = create_access_token({"sub": "1"}, key)
        >>> token.count(".") == 2  # JWT format: header.payload.signature
        True
    """
    to_encode = data.copy()
    to_encode["type"] = "access"

    if expires_delta:
        to_encode["exp"] = datetime.now(UTC) + expires_delta

    return jwt.encode(to_encode, secret_key, algorithm=ALGORITHM)


def decode_token(token: str, secret_key: str) -> dict | None:
    """
    Decode and validate a JWT token.

    Returns:
        Decoded payload if valid, None if the signature is wrong, the
        token is malformed or it has expired
    """
    try:
        return jwt.decode(token, secret_key, algorithms=[ALGORITHM])
    except JWTError as e:
        logger.warning(f"JWT decode error: {e}")
        return None


def verify_token_type(token: str, secret_key: str, expected_type: str) -> dict | None:
    """
    Decode a token and verify its type.

    Returns:
        Decoded payload if valid and correct type, None otherwise
    """
    payload = decode_token(token, secret_key)

    if payload is None:
        return None

    if payload.get("type") != expected_type:
        logger.warning(f"Token type mismatch: expected {expected_type}")
        return None

    return payload
