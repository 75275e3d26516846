"""
Patients router.
Read-only access to patient records and their assessments.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from ..auth import require_identity
from ..db import get_db, paginate
from ..errors import InvalidId, MissingParameter, NotFound
from ..models import Assessment, Patient, is_valid_id
from ..schemas import AssessmentOut, PatientDetail, PatientOut, PatientPage

router = APIRouter(
    prefix="/api/patients",
    tags=["patients"],
    dependencies=[Depends(require_identity)],
)


@router.get("", response_model=PatientPage)
def list_patients(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
):
    """All patients, newest first, one page at a time."""
    query = db.query(Patient).order_by(Patient.created_at.desc(), Patient.id)
    patients, pagination = paginate(query, page, limit)
    return PatientPage(
        patients=[PatientOut.model_validate(p) for p in patients],
        pagination=pagination,
    )


@router.get("/search", response_model=List[PatientOut])
def search_patients(query: Optional[str] = None, db: Session = Depends(get_db)):
    """Case-insensitive substring match on name or email."""
    if not query or not query.strip():
        raise MissingParameter("Search query is required")

    needle = query.strip().lower()
    patients = (
        db.query(Patient)
        .filter(or_(
            func.lower(Patient.name).contains(needle, autoescape=True),
            func.lower(Patient.email).contains(needle, autoescape=True),
        ))
        .order_by(Patient.name)
        .all()
    )
    return [PatientOut.model_validate(p) for p in patients]


@router.get("/{patient_id}", response_model=PatientDetail)
def get_patient(patient_id: str, db: Session = Depends(get_db)):
    """A patient plus every assessment submitted under their email."""
    if not is_valid_id(patient_id):
        raise InvalidId("Invalid patient ID")

    patient = db.get(Patient, patient_id)
    if patient is None:
        raise NotFound("Patient not found")

    # Assessments are linked by email, not by id
    assessments = (
        db.query(Assessment)
        .filter(func.lower(Assessment.patient_email) == patient.email.lower())
        .order_by(Assessment.created_at.desc())
        .all()
    )
    return PatientDetail(
        patient=PatientOut.model_validate(patient),
        assessments=[AssessmentOut.from_model(a) for a in assessments],
    )
