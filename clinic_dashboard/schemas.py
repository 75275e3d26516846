"""
schemas.py
==========
Pydantic models used for validating incoming requests and
structuring outgoing API responses.

Wire names are camelCase; Python attributes are snake_case.
"""

import datetime as dt
from typing import List, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import (
    AfterValidator, BaseModel, BeforeValidator, ConfigDict, EmailStr, Field, StringConstraints,
)
from pydantic.alias_generators import to_camel
from typing_extensions import Annotated

from .models import AppointmentStatus

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


def _not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be empty")
    return value


def _email_as_given(value: str) -> str:
    """Check the address but keep the submitted spelling."""
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as e:
        raise ValueError(f"value is not a valid email address: {e}")
    return value


def _no_bool(value):
    # JSON true/false would otherwise coerce to 1/0
    if isinstance(value, bool):
        raise ValueError("must be an integer")
    return value


# Submitted assessment text is stored exactly as sent
NonBlankStr = Annotated[str, AfterValidator(_not_blank)]
SubmittedEmail = Annotated[str, AfterValidator(_email_as_given)]
PainLevel = Annotated[int, BeforeValidator(_no_bool), Field(ge=0, le=10)]


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ---------------------------------------------------------------------------
# AUTH
# ---------------------------------------------------------------------------

class RegisterRequest(CamelModel):
    """Request body for registering a practitioner."""
    name: NonEmptyStr
    email: EmailStr
    password: str = Field(..., min_length=6)
    specialty: NonEmptyStr


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class ProfileUpdate(CamelModel):
    name: Optional[NonEmptyStr] = None
    specialty: Optional[NonEmptyStr] = None


class PasswordChange(CamelModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6)


class DoctorOut(CamelModel):
    """Public practitioner fields returned with a token."""
    id: str
    name: str
    email: str
    role: str
    specialty: str


class DoctorProfile(DoctorOut):
    last_login: Optional[dt.datetime] = None
    created_at: Optional[dt.datetime] = None


class AuthResponse(CamelModel):
    token: str
    doctor: DoctorOut


class MessageResponse(CamelModel):
    message: str


# ---------------------------------------------------------------------------
# PATIENTS
# ---------------------------------------------------------------------------

class Pagination(CamelModel):
    total: int
    page: int
    pages: int


class PatientOut(CamelModel):
    """Patient record without its credential hash."""
    id: str
    name: str
    email: str
    created_at: Optional[dt.datetime] = None


class PatientPage(CamelModel):
    patients: List[PatientOut]
    pagination: Pagination


class PatientRef(CamelModel):
    id: str
    name: str
    email: str


# ---------------------------------------------------------------------------
# ASSESSMENTS
# ---------------------------------------------------------------------------

class UserInfoIn(CamelModel):
    name: NonBlankStr
    email: SubmittedEmail


class UserInfoOut(CamelModel):
    id: Optional[str] = None
    name: str
    email: str


class PainLocationSchema(CamelModel):
    area: NonBlankStr
    side: NonBlankStr
    intensity: NonBlankStr
    type: Optional[str] = None


class MedicalConditions(CamelModel):
    herniated_disc: bool = False
    spinal_stenosis: bool = False
    spondylolisthesis: bool = False
    scoliosis: bool = False
    other_conditions: Optional[str] = None


class Treatments(CamelModel):
    medication: bool = False
    physical_therapy: bool = False
    surgery: bool = False
    alternative_therapy: bool = False
    notes: Optional[str] = None


class AssessmentCreate(CamelModel):
    """Request body for submitting a pain assessment."""
    user_info: UserInfoIn
    pain_level: PainLevel
    pain_duration: NonBlankStr
    pain_description: NonBlankStr
    pain_locations: List[PainLocationSchema] = Field(..., min_length=1)
    medical_conditions: MedicalConditions
    treatments: Treatments


class AssessmentOut(CamelModel):
    id: str
    user_info: UserInfoOut
    created_by: Optional[str] = None
    pain_level: int
    pain_duration: str
    pain_description: str
    medical_conditions: MedicalConditions
    pain_locations: List[PainLocationSchema]
    treatments: Treatments
    created_at: dt.datetime

    @classmethod
    def from_model(cls, a) -> "AssessmentOut":
        return cls(
            id=a.id,
            user_info=UserInfoOut(id=a.patient_id, name=a.patient_name, email=a.patient_email),
            created_by=a.created_by,
            pain_level=a.pain_level,
            pain_duration=a.pain_duration,
            pain_description=a.pain_description,
            medical_conditions=MedicalConditions.model_validate(a),
            pain_locations=[PainLocationSchema.model_validate(loc) for loc in a.pain_locations],
            treatments=Treatments.model_validate(a),
            created_at=a.created_at,
        )


class AssessmentCreated(CamelModel):
    success: bool = True
    assessment: AssessmentOut
    message: str = "Assessment created successfully"


class AssessmentPage(CamelModel):
    assessments: List[AssessmentOut]
    pagination: Pagination


class PatientDetail(CamelModel):
    patient: PatientOut
    assessments: List[AssessmentOut]


class PainLocationStat(CamelModel):
    area: str
    side: str
    count: int
    avg_intensity: float


class ConditionCounts(CamelModel):
    herniated_disc: int = 0
    spinal_stenosis: int = 0
    spondylolisthesis: int = 0
    scoliosis: int = 0


class TreatmentCounts(CamelModel):
    medication: int = 0
    physical_therapy: int = 0
    surgery: int = 0
    alternative_therapy: int = 0


class StatsOverview(CamelModel):
    total_assessments: int
    unique_patient_count: int
    recent_assessments: int
    pain_locations: List[PainLocationStat]
    medical_conditions: ConditionCounts
    treatments: TreatmentCounts
    average_pain: float


# ---------------------------------------------------------------------------
# APPOINTMENTS
# ---------------------------------------------------------------------------

class AppointmentCreate(CamelModel):
    patient_id: NonEmptyStr
    date: dt.date
    time: dt.time
    type: NonEmptyStr
    notes: Optional[str] = None


class AppointmentStatusUpdate(CamelModel):
    status: AppointmentStatus


class AppointmentOut(CamelModel):
    id: str
    patient: PatientRef
    doctor_id: str
    date: dt.date
    time: dt.time
    type: str
    notes: Optional[str] = None
    status: str
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None

    @classmethod
    def from_model(cls, appt) -> "AppointmentOut":
        return cls(
            id=appt.id,
            patient=PatientRef.model_validate(appt.patient),
            doctor_id=appt.doctor_id,
            date=appt.date,
            time=appt.time,
            type=appt.type,
            notes=appt.notes,
            status=appt.status,
            created_at=appt.created_at,
            updated_at=appt.updated_at,
        )
