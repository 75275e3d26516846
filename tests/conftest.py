"""
conftest.py
===========
Shared fixtures: a temporary SQLite database, a TestClient, and helpers for
registering practitioners and inserting patients directly.
"""

import os
import sys
import tempfile

# Point the app at a throwaway database BEFORE any app module is imported
_db_fd, _db_path = tempfile.mkstemp(suffix=".db")
os.environ["DATABASE_URL"] = f"sqlite:///{_db_path}"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["ENVIRONMENT"] = "test"

# Ensure the app package is discoverable when running from /tests
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import pytest
from fastapi.testclient import TestClient

from clinic_dashboard.db import SessionLocal, engine
from clinic_dashboard.main import app
from clinic_dashboard.models import Base, Patient
from clinic_dashboard.security import get_password_hash


# --------------------------------------------------------------------------
# FIXTURES
# --------------------------------------------------------------------------

@pytest.fixture(scope="session")
def client():
    """TestClient for the whole session; tables are reset per test."""
    with TestClient(app) as c:
        yield c
    engine.dispose()
    os.close(_db_fd)
    os.unlink(_db_path)


@pytest.fixture(autouse=True)
def clean_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def register(client):
    """Register a practitioner and return (token, doctor) from the response."""
    def _register(email="house@example.com", password="secret123",
                  name="Dr. House", specialty="Diagnostics"):
        res = client.post("/api/auth/register", json={
            "name": name, "email": email, "password": password, "specialty": specialty,
        })
        assert res.status_code == 200, res.text
        data = res.json()
        return data["token"], data["doctor"]
    return _register


@pytest.fixture
def auth_headers(register):
    token, _ = register()
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def make_patient():
    """Insert a patient directly, the way records arrive from outside the API."""
    def _make(name="John Smith", email="john.smith@example.com"):
        db = SessionLocal()
        try:
            patient = Patient(name=name, email=email, password_hash="not-a-real-hash")
            db.add(patient)
            db.commit()
            db.refresh(patient)
            return patient
        finally:
            db.close()
    return _make


@pytest.fixture
def assessment_payload():
    def _payload(**overrides):
        payload = {
            "userInfo": {"name": "John Smith", "email": "john.smith@example.com"},
            "painLevel": 6,
            "painDuration": "Several weeks",
            "painDescription": "Dull ache after sitting",
            "painLocations": [
                {"area": "Lower back", "side": "Left", "intensity": "Moderate", "type": "Dull"},
            ],
            "medicalConditions": {
                "herniatedDisc": True,
                "spinalStenosis": False,
                "spondylolisthesis": False,
                "scoliosis": False,
                "otherConditions": "",
            },
            "treatments": {
                "medication": True,
                "physicalTherapy": False,
                "surgery": False,
                "alternativeTherapy": False,
                "notes": "Ibuprofen as needed",
            },
        }
        payload.update(overrides)
        return payload
    return _payload
