"""
test_appointments.py
====================
Booking, ordering, status updates and ownership checks.
"""

import pytest


@pytest.fixture
def two_doctors(register):
    token_a, doctor_a = register(email="a@example.com", name="Dr. A")
    token_b, doctor_b = register(email="b@example.com", name="Dr. B")
    return (
        ({"Authorization": f"Bearer {token_a}"}, doctor_a),
        ({"Authorization": f"Bearer {token_b}"}, doctor_b),
    )


def _book(client, headers, patient_id, date="2026-11-02", time="09:30", type="Consultation"):
    return client.post("/api/appointments", headers=headers, json={
        "patientId": patient_id, "date": date, "time": time, "type": type, "notes": "First visit",
    })


def test_create_appointment(client, auth_headers, make_patient):
    patient = make_patient()
    res = _book(client, auth_headers, patient.id)
    assert res.status_code == 200
    data = res.json()
    assert data["status"] == "Scheduled"
    assert data["patient"] == {"id": patient.id, "name": patient.name, "email": patient.email}
    assert data["date"] == "2026-11-02"
    assert data["time"].startswith("09:30")


def test_create_for_unknown_patient(client, auth_headers):
    res = _book(client, auth_headers, "6f1c1f57-3c8e-4c41-9d7e-2a3c0b1e9f10")
    assert res.status_code == 404
    assert res.json()["message"] == "Patient not found"


def test_create_with_malformed_patient_id(client, auth_headers):
    res = _book(client, auth_headers, "42")
    assert res.status_code == 400
    assert res.json()["message"] == "Invalid patient ID"


def test_list_sorted_by_date_then_time_and_scoped_to_caller(client, two_doctors, make_patient):
    (headers_a, _), (headers_b, _) = two_doctors
    patient = make_patient()
    _book(client, headers_a, patient.id, date="2026-11-03", time="08:00")
    _book(client, headers_a, patient.id, date="2026-11-02", time="15:00")
    _book(client, headers_a, patient.id, date="2026-11-02", time="09:00")
    _book(client, headers_b, patient.id, date="2026-11-01", time="09:00")

    listed = client.get("/api/appointments", headers=headers_a).json()
    assert [(a["date"], a["time"][:5]) for a in listed] == [
        ("2026-11-02", "09:00"),
        ("2026-11-02", "15:00"),
        ("2026-11-03", "08:00"),
    ]


@pytest.mark.parametrize("status", ["Completed", "Cancelled", "No-show", "Scheduled"])
def test_owner_can_set_any_status(client, auth_headers, make_patient, status):
    appointment = _book(client, auth_headers, make_patient().id).json()
    res = client.put(f"/api/appointments/{appointment['id']}", json={"status": status},
                     headers=auth_headers)
    assert res.status_code == 200
    assert res.json()["status"] == status


def test_unknown_status_rejected(client, auth_headers, make_patient):
    appointment = _book(client, auth_headers, make_patient().id).json()
    res = client.put(f"/api/appointments/{appointment['id']}", json={"status": "Postponed"},
                     headers=auth_headers)
    assert res.status_code == 400


def test_other_doctor_cannot_update_or_delete(client, two_doctors, make_patient):
    (headers_a, _), (headers_b, _) = two_doctors
    appointment = _book(client, headers_a, make_patient().id).json()

    res = client.put(f"/api/appointments/{appointment['id']}", json={"status": "Cancelled"},
                     headers=headers_b)
    assert res.status_code == 403
    assert res.json()["message"] == "Not authorized"

    res = client.delete(f"/api/appointments/{appointment['id']}", headers=headers_b)
    assert res.status_code == 403

    listed = client.get("/api/appointments", headers=headers_a).json()
    assert [a["status"] for a in listed] == ["Scheduled"]


def test_owner_can_delete(client, auth_headers, make_patient):
    appointment = _book(client, auth_headers, make_patient().id).json()
    res = client.delete(f"/api/appointments/{appointment['id']}", headers=auth_headers)
    assert res.status_code == 200
    assert res.json() == {"message": "Appointment removed"}
    assert client.get("/api/appointments", headers=auth_headers).json() == []


def test_missing_appointment_is_404(client, auth_headers):
    missing = "6f1c1f57-3c8e-4c41-9d7e-2a3c0b1e9f10"
    assert client.delete(f"/api/appointments/{missing}", headers=auth_headers).status_code == 404
    res = client.put(f"/api/appointments/{missing}", json={"status": "Completed"}, headers=auth_headers)
    assert res.status_code == 404
