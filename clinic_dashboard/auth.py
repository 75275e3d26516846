"""
auth.py
=======
FastAPI dependencies that authenticate a request.

The chain is: Authorization header -> bearer token -> AuthContext.
Handlers that need the full practitioner record add get_current_practitioner.
"""

from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from .db import get_db
from .errors import NotFound, Unauthenticated
from .models import Practitioner
from .security import AuthContext, verify_token


def bearer_token(authorization: Optional[str] = Header(None)) -> str:
    """Extract the token from an ``Authorization: Bearer <token>`` header."""
    if not authorization:
        raise Unauthenticated("No token, authorization denied", reason=Unauthenticated.MISSING)

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise Unauthenticated(
            "Invalid token format, authorization denied", reason=Unauthenticated.MALFORMED
        )
    return parts[1]


def require_identity(token: str = Depends(bearer_token)) -> AuthContext:
    return verify_token(token)


def get_current_practitioner(
    identity: AuthContext = Depends(require_identity),
    db: Session = Depends(get_db),
) -> Practitioner:
    """Re-fetch the practitioner named by the token."""
    doctor = db.get(Practitioner, identity.practitioner_id)
    if doctor is None:
        raise NotFound("Doctor not found")
    return doctor
