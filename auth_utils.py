"""
Authentication utilities: Password hashing and JWT token management
"""

import jwt
from datetime import datetime, timedelta, timezone
from passlib.context import CryptContext
from typing import Optional
from config.settings import settings
from errors import InvalidToken

# Password hashing context
pwd_context = CryptContext(
    schemes=["argon2"],
    deprecated="auto"
)

# JWT configuration
ALGORITHM = "HS256"


def hash_password(password: str) -> str:
    """Hash a password using argon2"""
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its hash"""
    return pwd_context.verify(password, password_hash)


def _require_secret() -> str:
    if not settings.jwt_secret_key:
        raise ValueError("JWT_SECRET_KEY is not set. Cannot sign or verify JWT tokens.")
    return settings.jwt_secret_key


def create_jwt(user_id: str, email: str, expires_in: Optional[timedelta] = None) -> str:
    """Create a signed token carrying the user's id and email"""
    secret = _require_secret()
    lifetime = expires_in if expires_in is not None else timedelta(minutes=settings.jwt_expiry_minutes)

    payload = {
        "sub": str(user_id),
        "email": email,
        "exp": datetime.now(timezone.utc) + lifetime,
    }
    return jwt.encode(payload, secret, algorithm=ALGORITHM)


def decode_jwt(token: str) -> dict:
    """
    Decode and verify a JWT token.

    Returns:
        The claim set (sub, email, exp)

    Raises:
        InvalidToken: If the token is expired, malformed or badly signed
    """
    secret = _require_secret()
    try:
        return jwt.decode(token, secret, algorithms=[ALGORITHM])
    except jwt.ExpiredSignatureError as e:
        raise InvalidToken("Token has expired") from e
    except jwt.InvalidTokenError as e:
        raise InvalidToken("Invalid token") from e


def create_expired_jwt(user_id: str, email: str, expired_seconds_ago: int = 1) -> str:
    """Create an already expired token (tests only)."""
    return create_jwt(user_id, email, expires_in=timedelta(seconds=-expired_seconds_ago))
