"""
Authentication router.
Registration, login, current practitioner profile and credential changes.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..auth import get_current_practitioner
from ..db import get_db
from ..errors import DuplicateEmail, InvalidCredentials
from ..models import Practitioner, utcnow
from ..schemas import (
    AuthResponse, DoctorOut, DoctorProfile, LoginRequest, MessageResponse,
    PasswordChange, ProfileUpdate, RegisterRequest,
)
from ..security import create_access_token, get_password_hash, verify_password

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/auth", tags=["auth"])


def _auth_response(doctor: Practitioner) -> AuthResponse:
    token = create_access_token(doctor.id, doctor.role)
    return AuthResponse(token=token, doctor=DoctorOut.model_validate(doctor))


@router.post("/register", response_model=AuthResponse)
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    """Register a practitioner and return a token."""
    email = payload.email.lower()
    if db.query(Practitioner).filter(Practitioner.email == email).first():
        logger.info("Registration rejected, email already registered: %s", email)
        raise DuplicateEmail()

    doctor = Practitioner(
        name=payload.name,
        email=email,
        password_hash=get_password_hash(payload.password),
        specialty=payload.specialty,
    )
    db.add(doctor)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateEmail()
    db.refresh(doctor)

    logger.info("Registered doctor %s (%s)", doctor.id, email)
    return _auth_response(doctor)


@router.post("/login", response_model=AuthResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    """Authenticate a practitioner and return a token."""
    email = payload.email.lower()
    doctor = db.query(Practitioner).filter(Practitioner.email == email).first()
    # Same error for unknown email and wrong password
    if not doctor or not verify_password(payload.password, doctor.password_hash):
        logger.info("Failed login for %s", email)
        raise InvalidCredentials()

    doctor.last_login = utcnow()
    db.commit()
    db.refresh(doctor)

    logger.info("Login successful for %s", email)
    return _auth_response(doctor)


@router.get("/me", response_model=DoctorProfile)
def me(doctor: Practitioner = Depends(get_current_practitioner)):
    return DoctorProfile.model_validate(doctor)


@router.put("/profile", response_model=DoctorProfile)
def update_profile(
    payload: ProfileUpdate,
    doctor: Practitioner = Depends(get_current_practitioner),
    db: Session = Depends(get_db),
):
    if payload.name is not None:
        doctor.name = payload.name
    if payload.specialty is not None:
        doctor.specialty = payload.specialty
    db.commit()
    db.refresh(doctor)
    return DoctorProfile.model_validate(doctor)


@router.put("/password", response_model=MessageResponse)
def change_password(
    payload: PasswordChange,
    doctor: Practitioner = Depends(get_current_practitioner),
    db: Session = Depends(get_db),
):
    if not verify_password(payload.current_password, doctor.password_hash):
        raise InvalidCredentials("Current password is incorrect")

    doctor.password_hash = get_password_hash(payload.new_password)
    db.commit()
    logger.info("Password changed for doctor %s", doctor.id)
    return MessageResponse(message="Password updated successfully")
