"""Security and authentication utilities."""
from datetime import datetime, timedelta, timezone
from typing import Optional
import argon2
import jwt
from fastapi import HTTPException, Request

from sanctuary.core import config

STAFF_COOKIE_NAME = "staff_token"

ph = argon2.PasswordHasher(
    time_cost=2,
    memory_cost=65536,
    parallelism=1,
    hash_len=32,
    salt_len=16
)


def get_password_hash(password: str) -> str:
    """Hash a password using Argon2."""
    return ph.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its Argon2 hash."""
    try:
        ph.verify(password_hash, password)
        return True
    except argon2.exceptions.VerifyMismatchError:
        return False


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT access token."""
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=config.settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, config.settings.SECRET_KEY, algorithm=config.settings.ALGORITHM)
    return encoded_jwt


def verify_staff_token(request: Request) -> dict:
    """Verify the staff JWT cookie and return its payload."""
    token = request.cookies.get(STAFF_COOKIE_NAME)

    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")

    try:
        payload = jwt.decode(token, config.settings.SECRET_KEY, algorithms=[config.settings.ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token expired")
    except jwt.PyJWTError:
        raise HTTPException(status_code=401, detail="Invalid token")

    if not payload.get("is_staff"):
        raise HTTPException(status_code=403, detail="Not authorized")
    return payload


def verify_staff_password(password: str) -> bool:
    """Verify the check-in staff password.

    STAFF_PASSWORD may be an Argon2 hash (recommended) or plaintext for
    local development. Generate a hash with ``python hash_password.py``.
    """
    stored_password = config.settings.STAFF_PASSWORD

    if stored_password.startswith("$argon2"):
        return verify_password(password, stored_password)
    return password == stored_password
