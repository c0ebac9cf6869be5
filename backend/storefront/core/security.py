import secrets
import string
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterable, Optional

import jwt
from passlib.context import CryptContext

from storefront.core.config import (
    get_bcrypt_rounds,
    get_jwt_expiration_hours,
    get_jwt_secret_key,
)
from storefront.domain.interfaces import IPasswordHasher

_pwd_contexts: Dict[int, CryptContext] = {}


def _pwd_context() -> CryptContext:
    rounds = get_bcrypt_rounds()
    context = _pwd_contexts.get(rounds)
    if context is None:
        context = CryptContext(
            schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds
        )
        _pwd_contexts[rounds] = context
    return context


def hash_password(password: str) -> str:
    """Hash a password using bcrypt.

    Args:
        password: Plain text password to hash

    Returns:
        Hashed password string
    """
    return _pwd_context().hash(password)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """Verify a password against its hash.

    Returns:
        True if password matches, False otherwise (including a missing hash)
    """
    if not hashed_password:
        return False
    return _pwd_context().verify(plain_password, hashed_password)


class BcryptPasswordHasher(IPasswordHasher):
    """One-way credential transform backed by passlib's bcrypt."""

    def hash(self, raw: str) -> str:
        return hash_password(raw)

    def verify(self, raw: str, hashed: str) -> bool:
        return verify_password(raw, hashed)


_PASSWORD_ALPHABET = string.ascii_letters + string.digits


def generate_password(length: int = 10) -> str:
    """Random password used by the forgot-password flow."""
    return "".join(secrets.choice(_PASSWORD_ALPHABET) for _ in range(length))


# JWT configuration
JWT_ALGORITHM = "HS256"


def create_access_token(
    data: Dict[str, Any], expires_delta: Optional[timedelta] = None
) -> str:
    """Create a JWT access token.

    Args:
        data: Payload data to encode in the token
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token string
    """
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(
            hours=get_jwt_expiration_hours()
        )

    to_encode.update({"exp": expire})

    return jwt.encode(to_encode, get_jwt_secret_key(), algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """Decode and validate a JWT access token.

    Returns:
        Decoded payload if valid, None if invalid or expired
    """
    try:
        return jwt.decode(token, get_jwt_secret_key(), algorithms=[JWT_ALGORITHM])
    except jwt.PyJWTError:
        return None


def create_client_token(client_id: int, email: str, roles: Iterable[str] = ()) -> str:
    """Create a JWT token for a client account."""
    token_data = {
        "sub": str(client_id),
        "email": email,
        "roles": sorted(roles),
        "type": "access",
    }
    return create_access_token(token_data)


def get_client_id_from_token(token: str) -> Optional[int]:
    """Extract the client id carried by a valid access token."""
    payload = decode_access_token(token)
    if payload is None or payload.get("type") != "access":
        return None

    subject = payload.get("sub")
    if subject is None:
        return None

    try:
        return int(subject)
    except (TypeError, ValueError):
        return None
