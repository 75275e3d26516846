"""
seed.py
=======
Populate an empty database with sample patients and assessments.

Usage:
    python -m clinic_dashboard.seed
"""

import logging
import random
from datetime import timedelta

from .config import settings
from .db import SessionLocal, init_db
from .logging_config import configure_logging
from .models import Assessment, Base, PainLocation, Patient, utcnow
from .security import get_password_hash

logger = logging.getLogger(__name__)

SAMPLE_PATIENTS = [
    ("John Smith", "john.smith@example.com"),
    ("Emily Johnson", "emily.johnson@example.com"),
    ("Michael Williams", "michael.williams@example.com"),
    ("Sarah Brown", "sarah.brown@example.com"),
    ("David Jones", "david.jones@example.com"),
]
SAMPLE_PASSWORD = "password123"

DURATIONS = ["Few days", "One week", "Several weeks", "More than a month", "More than a year"]
AREAS = ["Lower back", "Upper back", "Neck", "Hip", "Leg"]
SIDES = ["Left", "Right", "Both", "Central"]
INTENSITIES = ["Mild", "Moderate", "Severe"]
PAIN_TYPES = ["Sharp", "Dull", "Burning", "Aching"]


def seed_patients(db) -> list:
    """Insert the sample patients unless the table already has rows."""
    if db.query(Patient).count():
        logger.info("Patients already present, skipping")
        return db.query(Patient).all()

    password_hash = get_password_hash(SAMPLE_PASSWORD)
    patients = [Patient(name=name, email=email, password_hash=password_hash)
                for name, email in SAMPLE_PATIENTS]
    db.add_all(patients)
    db.commit()
    logger.info("Seeded %d patients", len(patients))
    return patients


def seed_assessments(db, patients, per_patient: int = 2, rng=None) -> int:
    if db.query(Assessment).count():
        logger.info("Assessments already present, skipping")
        return 0

    rng = rng or random.Random()
    count = 0
    for patient in patients:
        for _ in range(per_patient):
            locations = [
                PainLocation(
                    position=i,
                    area=rng.choice(AREAS),
                    side=rng.choice(SIDES),
                    intensity=rng.choice(INTENSITIES),
                    type=rng.choice(PAIN_TYPES),
                )
                for i in range(rng.randint(1, 3))
            ]
            db.add(Assessment(
                patient_id=patient.id,
                patient_name=patient.name,
                patient_email=patient.email,
                pain_level=rng.randint(0, 10),
                pain_duration=rng.choice(DURATIONS),
                pain_description="Sample assessment",
                herniated_disc=rng.random() < 0.3,
                spinal_stenosis=rng.random() < 0.2,
                spondylolisthesis=rng.random() < 0.1,
                scoliosis=rng.random() < 0.1,
                medication=rng.random() < 0.6,
                physical_therapy=rng.random() < 0.4,
                surgery=rng.random() < 0.1,
                alternative_therapy=rng.random() < 0.2,
                created_at=utcnow() - timedelta(days=rng.randint(0, 30)),
                pain_locations=locations,
            ))
            count += 1
    db.commit()
    logger.info("Seeded %d assessments", count)
    return count


def main():
    configure_logging(settings.LOG_LEVEL)
    init_db(Base)
    db = SessionLocal()
    try:
        patients = seed_patients(db)
        seed_assessments(db, patients)
    finally:
        db.close()


if __name__ == "__main__":
    main()
