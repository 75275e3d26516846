"""
test_seed.py
============
Sample data loader.
"""

import random

from clinic_dashboard.db import SessionLocal
from clinic_dashboard.models import Assessment, Patient
from clinic_dashboard.seed import SAMPLE_PATIENTS, seed_assessments, seed_patients


def test_seed_populates_empty_tables_once():
    db = SessionLocal()
    try:
        patients = seed_patients(db)
        assert len(patients) == len(SAMPLE_PATIENTS)
        assert seed_assessments(db, patients, per_patient=2, rng=random.Random(7)) == 2 * len(patients)

        # second run leaves existing data alone
        seed_patients(db)
        assert seed_assessments(db, patients) == 0
        assert db.query(Patient).count() == len(SAMPLE_PATIENTS)
        assert db.query(Assessment).count() == 2 * len(SAMPLE_PATIENTS)
        assert all(a.pain_locations for a in db.query(Assessment).all())
    finally:
        db.close()


def test_seeded_data_visible_through_api(client, auth_headers):
    db = SessionLocal()
    try:
        seed_assessments(db, seed_patients(db), per_patient=1, rng=random.Random(1))
    finally:
        db.close()

    stats = client.get("/api/assessments/stats/overview", headers=auth_headers).json()
    assert stats["totalAssessments"] == len(SAMPLE_PATIENTS)
    assert stats["uniquePatientCount"] == len(SAMPLE_PATIENTS)
