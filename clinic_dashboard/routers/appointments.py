"""
Appointments router.
Each practitioner books, updates and deletes only their own appointments.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..auth import require_identity
from ..db import get_db
from ..errors import InvalidId, NotAuthorized, NotFound
from ..models import Appointment, AppointmentStatus, Patient, is_valid_id
from ..schemas import (
    AppointmentCreate, AppointmentOut, AppointmentStatusUpdate, MessageResponse,
)
from ..security import AuthContext

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/appointments", tags=["appointments"])


def _owned_appointment(db: Session, appointment_id: str, identity: AuthContext) -> Appointment:
    """Load an appointment and check that the caller created it."""
    if not is_valid_id(appointment_id):
        raise InvalidId("Invalid appointment ID")

    appointment = db.get(Appointment, appointment_id)
    if appointment is None:
        raise NotFound("Appointment not found")
    if appointment.doctor_id != identity.practitioner_id:
        logger.warning(
            "Doctor %s tried to modify appointment %s owned by %s",
            identity.practitioner_id, appointment.id, appointment.doctor_id,
        )
        raise NotAuthorized()
    return appointment


@router.get("", response_model=List[AppointmentOut])
def list_appointments(
    db: Session = Depends(get_db),
    identity: AuthContext = Depends(require_identity),
):
    """The caller's appointments, soonest first."""
    appointments = (
        db.query(Appointment)
        .filter(Appointment.doctor_id == identity.practitioner_id)
        .order_by(Appointment.date.asc(), Appointment.time.asc())
        .all()
    )
    return [AppointmentOut.from_model(a) for a in appointments]


@router.post("", response_model=AppointmentOut)
def create_appointment(
    payload: AppointmentCreate,
    db: Session = Depends(get_db),
    identity: AuthContext = Depends(require_identity),
):
    if not is_valid_id(payload.patient_id):
        raise InvalidId("Invalid patient ID")
    if db.get(Patient, payload.patient_id) is None:
        raise NotFound("Patient not found")

    appointment = Appointment(
        patient_id=payload.patient_id,
        doctor_id=identity.practitioner_id,
        date=payload.date,
        time=payload.time,
        type=payload.type,
        notes=payload.notes,
        status=AppointmentStatus.scheduled.value,
    )
    db.add(appointment)
    db.commit()
    db.refresh(appointment)

    logger.info("Appointment %s booked by doctor %s", appointment.id, identity.practitioner_id)
    return AppointmentOut.from_model(appointment)


@router.put("/{appointment_id}", response_model=AppointmentOut)
def update_appointment_status(
    appointment_id: str,
    payload: AppointmentStatusUpdate,
    db: Session = Depends(get_db),
    identity: AuthContext = Depends(require_identity),
):
    """Overwrite the status. Any of the four values is accepted from the owner."""
    appointment = _owned_appointment(db, appointment_id, identity)
    appointment.status = payload.status.value
    db.commit()
    db.refresh(appointment)
    return AppointmentOut.from_model(appointment)


@router.delete("/{appointment_id}", response_model=MessageResponse)
def delete_appointment(
    appointment_id: str,
    db: Session = Depends(get_db),
    identity: AuthContext = Depends(require_identity),
):
    appointment = _owned_appointment(db, appointment_id, identity)
    db.delete(appointment)
    db.commit()
    logger.info("Appointment %s removed by doctor %s", appointment_id, identity.practitioner_id)
    return MessageResponse(message="Appointment removed")
