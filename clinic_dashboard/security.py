"""
security.py
===========
Password hashing and bearer-token issue/verification.

Tokens are HS256 JWTs carrying only the practitioner id (``sub``) and role,
valid for JWT_EXPIRE_HOURS. There is no refresh and no revocation list.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from .config import settings
from .errors import Unauthenticated

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


@dataclass(frozen=True)
class AuthContext:
    """Identity established for the current request."""
    practitioner_id: str
    role: str


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # unrecognised hash format
        return False


def create_access_token(
    practitioner_id: str,
    role: str,
    issued_at: Optional[datetime] = None,
) -> str:
    """
    Sign a token for a practitioner.

    Args:
        practitioner_id: id stored as the ``sub`` claim
        role: practitioner role
        issued_at: issue time, defaults to now (UTC)

    Returns:
        Encoded JWT string
    """
    issued_at = issued_at or datetime.now(timezone.utc)
    expire = issued_at + timedelta(hours=settings.JWT_EXPIRE_HOURS)
    claims = {
        "sub": practitioner_id,
        "role": role,
        "iat": int(issued_at.timestamp()),
        "exp": int(expire.timestamp()),
    }
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def verify_token(token: Optional[str]) -> AuthContext:
    """
    Verify a bearer token and return the identity it carries.

    Raises:
        Unauthenticated: with reason missing/malformed/expired/invalid
    """
    if not token:
        raise Unauthenticated("No token, authorization denied", reason=Unauthenticated.MISSING)

    if token.count(".") != 2:
        raise Unauthenticated(
            "Invalid token format, authorization denied", reason=Unauthenticated.MALFORMED
        )

    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except ExpiredSignatureError:
        raise Unauthenticated("Token expired, please login again", reason=Unauthenticated.EXPIRED)
    except JWTError as e:
        logger.info("Token verification failed: %s", e)
        raise Unauthenticated("Invalid token", reason=Unauthenticated.INVALID)

    practitioner_id = payload.get("sub")
    role = payload.get("role")
    if not isinstance(practitioner_id, str) or not practitioner_id:
        raise Unauthenticated("Invalid token", reason=Unauthenticated.INVALID)

    return AuthContext(practitioner_id=practitioner_id, role=role or "doctor")
