"""
test_client.py
==============
ClinicClient driven against the app through the TestClient transport.
"""

import pytest

from clinic_dashboard.client import ApiError, ClinicClient


@pytest.fixture
def api(client):
    return ClinicClient("http://testserver", session=client)


def test_register_stores_token_and_attaches_it(api):
    data = api.register("Dr. Client", "client@example.com", "secret123", "Spine")
    assert api.token == data["token"]
    assert api.me()["email"] == "client@example.com"


def test_login_and_logout(api):
    api.register("Dr. Client", "client@example.com", "secret123", "Spine")
    api.logout()
    assert api.token is None

    api.login("client@example.com", "secret123")
    assert api.token is not None


def test_error_message_passed_through(api):
    with pytest.raises(ApiError) as exc:
        api.login("nobody@example.com", "secret123")
    assert exc.value.status_code == 400
    assert exc.value.message == "Invalid Credentials"


def test_unknown_route_message_passed_through(api):
    with pytest.raises(ApiError) as exc:
        api.request("GET", "/api/nope")
    assert exc.value.status_code == 404
    assert exc.value.message == "Not Found"


def test_401_discards_token(api):
    api.token = "not-a-jwt"
    with pytest.raises(ApiError) as exc:
        api.list_patients()
    assert exc.value.status_code == 401
    assert api.token is None


def test_full_workflow(api, make_patient, assessment_payload):
    api.register("Dr. Flow", "flow@example.com", "secret123", "Spine")
    patient = make_patient()

    assert api.search_patients("smith")[0]["id"] == patient.id
    assert api.list_patients()["pagination"]["total"] == 1

    created = api.create_assessment(assessment_payload())["assessment"]
    assert api.get_assessment(created["id"]) == created
    assert api.assessments_for_email("john.smith@example.com")[0]["id"] == created["id"]
    assert api.recent_assessments(limit=5)[0]["id"] == created["id"]
    assert api.list_assessments()["pagination"]["total"] == 1
    assert api.get_patient(patient.id)["assessments"][0]["id"] == created["id"]
    assert api.stats_overview()["totalAssessments"] == 1

    appointment = api.create_appointment(patient.id, "2026-12-01", "10:00", "Follow-up")
    assert api.update_appointment_status(appointment["id"], "Completed")["status"] == "Completed"
    assert len(api.list_appointments()) == 1
    assert api.delete_appointment(appointment["id"])["message"] == "Appointment removed"

    assert api.update_profile(specialty="Rehab")["specialty"] == "Rehab"
    assert api.change_password("secret123", "newsecret")["message"] == "Password updated successfully"


def test_base_url_defaults_to_settings():
    from clinic_dashboard.config import settings

    assert ClinicClient().base_url == settings.CLINIC_API_URL.rstrip("/")
