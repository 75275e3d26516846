"""
client.py
=========
Thin HTTP client for the clinic dashboard API.

The base URL is configuration (CLINIC_API_URL), never discovered. The client
keeps the bearer token returned by login/register, attaches it to every
request, and drops it whenever the server answers 401. Nothing is retried.
"""

import logging
from typing import Any, Dict, Optional

import requests

from .config import settings

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Non-2xx response from the API. ``message`` is the server's text as-is."""

    def __init__(self, status_code: int, message: str, payload: Any = None):
        self.status_code = status_code
        self.message = message
        self.payload = payload
        super().__init__(f"{status_code}: {message}")


class ClinicClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: float = 10,
        session=None,
    ):
        self.base_url = (base_url or settings.CLINIC_API_URL).rstrip("/")
        self.token = token
        self.timeout = timeout
        self.session = session or requests.Session()

    # ------------------------------------------------------------------
    # plumbing
    # ------------------------------------------------------------------

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def request(self, method: str, path: str, json=None, params=None) -> Any:
        url = f"{self.base_url}{path}"
        logger.debug("%s %s", method, url)
        response = self.session.request(
            method, url, json=json, params=params, headers=self._headers(), timeout=self.timeout
        )

        try:
            body = response.json()
        except ValueError:
            body = None

        if response.status_code >= 400:
            if response.status_code == 401:
                self.token = None
            message = body.get("message") if isinstance(body, dict) else None
            raise ApiError(response.status_code, message or response.text, body)
        return body

    # ------------------------------------------------------------------
    # auth
    # ------------------------------------------------------------------

    def register(self, name: str, email: str, password: str, specialty: str) -> dict:
        data = self.request("POST", "/api/auth/register", json={
            "name": name, "email": email, "password": password, "specialty": specialty,
        })
        self.token = data["token"]
        return data

    def login(self, email: str, password: str) -> dict:
        data = self.request("POST", "/api/auth/login", json={"email": email, "password": password})
        self.token = data["token"]
        return data

    def logout(self) -> None:
        """Tokens cannot be revoked; forgetting it is the whole logout."""
        self.token = None

    def me(self) -> dict:
        return self.request("GET", "/api/auth/me")

    def update_profile(self, name: Optional[str] = None, specialty: Optional[str] = None) -> dict:
        return self.request("PUT", "/api/auth/profile", json={"name": name, "specialty": specialty})

    def change_password(self, current_password: str, new_password: str) -> dict:
        return self.request("PUT", "/api/auth/password", json={
            "currentPassword": current_password, "newPassword": new_password,
        })

    # ------------------------------------------------------------------
    # patients
    # ------------------------------------------------------------------

    def list_patients(self, page: int = 1, limit: int = 10) -> dict:
        return self.request("GET", "/api/patients", params={"page": page, "limit": limit})

    def search_patients(self, query: str) -> list:
        return self.request("GET", "/api/patients/search", params={"query": query})

    def get_patient(self, patient_id: str) -> dict:
        return self.request("GET", f"/api/patients/{patient_id}")

    # ------------------------------------------------------------------
    # assessments
    # ------------------------------------------------------------------

    def list_assessments(self, page: int = 1, limit: int = 10) -> dict:
        return self.request("GET", "/api/assessments", params={"page": page, "limit": limit})

    def recent_assessments(self, limit: int = 10) -> list:
        return self.request("GET", "/api/assessments/recent", params={"limit": limit})

    def get_assessment(self, assessment_id: str) -> dict:
        return self.request("GET", f"/api/assessments/{assessment_id}")

    def assessments_for_email(self, email: str) -> list:
        return self.request("GET", f"/api/assessments/user/{email}")

    def create_assessment(self, payload: dict) -> dict:
        return self.request("POST", "/api/assessments", json=payload)

    def stats_overview(self) -> dict:
        return self.request("GET", "/api/assessments/stats/overview")

    # ------------------------------------------------------------------
    # appointments
    # ------------------------------------------------------------------

    def list_appointments(self) -> list:
        return self.request("GET", "/api/appointments")

    def create_appointment(self, patient_id: str, date: str, time: str, type: str,
                           notes: Optional[str] = None) -> dict:
        return self.request("POST", "/api/appointments", json={
            "patientId": patient_id, "date": date, "time": time, "type": type, "notes": notes,
        })

    def update_appointment_status(self, appointment_id: str, status: str) -> dict:
        return self.request("PUT", f"/api/appointments/{appointment_id}", json={"status": status})

    def delete_appointment(self, appointment_id: str) -> dict:
        return self.request("DELETE", f"/api/appointments/{appointment_id}")
