"""
models.py
=========
SQLAlchemy ORM models for the clinic dashboard.
Contains tables for:
 - Practitioner (doctors)
 - Patient
 - Assessment + PainLocation
 - Appointment
"""

import datetime
import enum
import uuid

from sqlalchemy import (
    Boolean, Column, Date, DateTime, ForeignKey, Integer, String, Text, Time,
)
from sqlalchemy.orm import declarative_base, relationship

# SQLAlchemy Base class
Base = declarative_base()


def utcnow() -> datetime.datetime:
    """Naive UTC timestamp, the form every DateTime column stores."""
    return datetime.datetime.now(datetime.timezone.utc).replace(tzinfo=None)


def new_id() -> str:
    return str(uuid.uuid4())


def is_valid_id(value: str) -> bool:
    try:
        uuid.UUID(str(value))
    except ValueError:
        return False
    return True


# ---------------------------------------------------------------------------
# ENUM DEFINITIONS
# ---------------------------------------------------------------------------

class AppointmentStatus(str, enum.Enum):
    """Appointment lifecycle values. No transition rules are enforced."""
    scheduled = "Scheduled"
    completed = "Completed"
    cancelled = "Cancelled"
    no_show = "No-show"


# ---------------------------------------------------------------------------
# TABLE DEFINITIONS
# ---------------------------------------------------------------------------

class Practitioner(Base):
    """Registered clinic staff member able to sign in."""
    __tablename__ = "doctors"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True, index=True)
    password_hash = Column(String, nullable=False)
    role = Column(String, nullable=False, default="doctor")
    specialty = Column(String, nullable=False)
    last_login = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=utcnow)


class Patient(Base):
    """Patient identity record. Written by the seed script or other systems."""
    __tablename__ = "patients"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True, index=True)
    password_hash = Column(String, nullable=False)
    created_at = Column(DateTime, default=utcnow)


class Assessment(Base):
    """Snapshot of a patient's self-reported pain state. Never updated."""
    __tablename__ = "assessments"

    id = Column(String(36), primary_key=True, default=new_id)

    # Denormalized patient reference
    patient_id = Column(String(36), ForeignKey("patients.id"), nullable=True)
    patient_name = Column(String, nullable=False)
    patient_email = Column(String, nullable=False, index=True)
    created_by = Column(String(36), nullable=True)

    pain_level = Column(Integer, nullable=False)
    pain_duration = Column(String, nullable=False)
    pain_description = Column(Text, nullable=False)

    # Medical conditions
    herniated_disc = Column(Boolean, default=False, nullable=False)
    spinal_stenosis = Column(Boolean, default=False, nullable=False)
    spondylolisthesis = Column(Boolean, default=False, nullable=False)
    scoliosis = Column(Boolean, default=False, nullable=False)
    other_conditions = Column(Text, nullable=True)

    # Treatments
    medication = Column(Boolean, default=False, nullable=False)
    physical_therapy = Column(Boolean, default=False, nullable=False)
    surgery = Column(Boolean, default=False, nullable=False)
    alternative_therapy = Column(Boolean, default=False, nullable=False)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime, default=utcnow, index=True)

    pain_locations = relationship(
        "PainLocation",
        order_by="PainLocation.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )


class PainLocation(Base):
    """One entry of an assessment's ordered pain-location list."""
    __tablename__ = "pain_locations"

    id = Column(Integer, primary_key=True)
    assessment_id = Column(String(36), ForeignKey("assessments.id"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    area = Column(String, nullable=False)
    side = Column(String, nullable=False)
    intensity = Column(String, nullable=False)
    type = Column(String, nullable=True)


class Appointment(Base):
    """Booking between one patient and the practitioner who created it."""
    __tablename__ = "appointments"

    id = Column(String(36), primary_key=True, default=new_id)
    patient_id = Column(String(36), ForeignKey("patients.id"), nullable=False)
    doctor_id = Column(String(36), ForeignKey("doctors.id"), nullable=False, index=True)
    date = Column(Date, nullable=False)
    time = Column(Time, nullable=False)
    type = Column(String, nullable=False)
    notes = Column(Text, nullable=True)
    status = Column(String, nullable=False, default=AppointmentStatus.scheduled.value)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    # Relationships
    patient = relationship("Patient", lazy="joined")
    doctor = relationship("Practitioner")
