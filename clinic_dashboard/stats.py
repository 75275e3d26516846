"""
stats.py
========
Dashboard aggregates over the whole assessments collection.
Each figure is one SQL aggregate query.
"""

from datetime import timedelta

from sqlalchemy import case, func
from sqlalchemy.orm import Session

from .models import Assessment, PainLocation, utcnow

RECENT_WINDOW = timedelta(days=7)

# Pain-location intensity -> score used for avgIntensity; anything else is 0
INTENSITY_SCORES = {"Mild": 1, "Moderate": 2, "Severe": 3}

CONDITION_FLAGS = ("herniated_disc", "spinal_stenosis", "spondylolisthesis", "scoliosis")
TREATMENT_FLAGS = ("medication", "physical_therapy", "surgery", "alternative_therapy")


def _true_counts(db: Session, flags) -> dict:
    columns = [
        func.coalesce(func.sum(case((getattr(Assessment, flag), 1), else_=0)), 0)
        for flag in flags
    ]
    row = db.query(*columns).one()
    return {flag: int(value or 0) for flag, value in zip(flags, row)}


def pain_location_stats(db: Session) -> list:
    """Count and average intensity score per (area, side)."""
    score = case(
        *[(PainLocation.intensity == label, value) for label, value in INTENSITY_SCORES.items()],
        else_=0,
    )
    rows = (
        db.query(
            PainLocation.area,
            PainLocation.side,
            func.count(PainLocation.id),
            func.avg(score),
        )
        .group_by(PainLocation.area, PainLocation.side)
        .order_by(PainLocation.area, PainLocation.side)
        .all()
    )
    return [
        {"area": area, "side": side, "count": int(count), "avg_intensity": float(avg or 0)}
        for area, side, count, avg in rows
    ]


def overview(db: Session) -> dict:
    """Collect every dashboard figure into one dict (snake_case keys)."""
    total = db.query(func.count(Assessment.id)).scalar() or 0
    unique_patients = (
        db.query(func.count(func.distinct(func.lower(Assessment.patient_email)))).scalar() or 0
    )
    since = utcnow() - RECENT_WINDOW
    recent = db.query(func.count(Assessment.id)).filter(Assessment.created_at >= since).scalar() or 0
    average_pain = db.query(func.avg(Assessment.pain_level)).scalar()

    return {
        "total_assessments": int(total),
        "unique_patient_count": int(unique_patients),
        "recent_assessments": int(recent),
        "pain_locations": pain_location_stats(db),
        "medical_conditions": _true_counts(db, CONDITION_FLAGS),
        "treatments": _true_counts(db, TREATMENT_FLAGS),
        "average_pain": float(average_pain or 0),
    }
