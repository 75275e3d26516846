"""
Assessments router.
Submitting, listing and summarising patient pain assessments.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy import func
from sqlalchemy.orm import Session

from ..auth import require_identity
from ..db import get_db, paginate
from ..errors import InvalidId, NotFound
from ..models import Assessment, PainLocation, Patient, is_valid_id
from ..schemas import (
    AssessmentCreate, AssessmentCreated, AssessmentOut, AssessmentPage, StatsOverview,
)
from ..security import AuthContext
from .. import stats

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/assessments", tags=["assessments"])


def _newest_first(db: Session):
    return db.query(Assessment).order_by(Assessment.created_at.desc(), Assessment.id)


@router.get("", response_model=AssessmentPage)
def list_assessments(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    identity: AuthContext = Depends(require_identity),
):
    assessments, pagination = paginate(_newest_first(db), page, limit)
    return AssessmentPage(
        assessments=[AssessmentOut.from_model(a) for a in assessments],
        pagination=pagination,
    )


@router.get("/recent", response_model=List[AssessmentOut])
def recent_assessments(
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    identity: AuthContext = Depends(require_identity),
):
    return [AssessmentOut.from_model(a) for a in _newest_first(db).limit(limit).all()]


@router.get("/stats/overview", response_model=StatsOverview)
def stats_overview(
    db: Session = Depends(get_db),
    identity: AuthContext = Depends(require_identity),
):
    """Dashboard statistics computed over every assessment."""
    return StatsOverview.model_validate(stats.overview(db))


@router.get("/user/{email}", response_model=List[AssessmentOut])
def assessments_for_email(
    email: str,
    db: Session = Depends(get_db),
    identity: AuthContext = Depends(require_identity),
):
    assessments = (
        db.query(Assessment)
        .filter(func.lower(Assessment.patient_email) == email.strip().lower())
        .order_by(Assessment.created_at.desc())
        .all()
    )
    return [AssessmentOut.from_model(a) for a in assessments]


@router.get("/{assessment_id}", response_model=AssessmentOut)
def get_assessment(
    assessment_id: str,
    db: Session = Depends(get_db),
    identity: AuthContext = Depends(require_identity),
):
    if not is_valid_id(assessment_id):
        raise InvalidId("Invalid assessment ID")

    assessment = db.get(Assessment, assessment_id)
    if assessment is None:
        raise NotFound("Assessment not found")
    return AssessmentOut.from_model(assessment)


@router.post("", response_model=AssessmentCreated)
def create_assessment(
    payload: AssessmentCreate,
    db: Session = Depends(get_db),
    identity: AuthContext = Depends(require_identity),
):
    """Store a new assessment stamped with the submitting practitioner."""
    email = payload.user_info.email
    patient = db.query(Patient).filter(func.lower(Patient.email) == email.lower()).first()

    conditions = payload.medical_conditions
    treatments = payload.treatments
    assessment = Assessment(
        patient_id=patient.id if patient else None,
        patient_name=payload.user_info.name,
        patient_email=email,
        created_by=identity.practitioner_id,
        pain_level=payload.pain_level,
        pain_duration=payload.pain_duration,
        pain_description=payload.pain_description,
        herniated_disc=conditions.herniated_disc,
        spinal_stenosis=conditions.spinal_stenosis,
        spondylolisthesis=conditions.spondylolisthesis,
        scoliosis=conditions.scoliosis,
        other_conditions=conditions.other_conditions,
        medication=treatments.medication,
        physical_therapy=treatments.physical_therapy,
        surgery=treatments.surgery,
        alternative_therapy=treatments.alternative_therapy,
        notes=treatments.notes,
        pain_locations=[
            PainLocation(position=i, area=loc.area, side=loc.side,
                         intensity=loc.intensity, type=loc.type)
            for i, loc in enumerate(payload.pain_locations)
        ],
    )
    db.add(assessment)
    db.commit()
    db.refresh(assessment)

    logger.info("Assessment %s saved by doctor %s", assessment.id, identity.practitioner_id)
    return AssessmentCreated(assessment=AssessmentOut.from_model(assessment))
