# Appointments Feature - Models

from enum import Enum
from typing import Optional
from datetime import date
from beanie import Document, Indexed
from clinicdesk.shared.models import TimestampMixin
from clinicdesk.shared.scoping import OwnedResource


class AppointmentType(str, Enum):
    """Kind of visit."""

    CHECKUP = "checkup"
    CLEANING = "cleaning"
    PROCEDURE = "procedure"
    CONSULTATION = "consultation"
    EMERGENCY = "emergency"
    FOLLOW_UP = "follow-up"


class AppointmentStatus(str, Enum):
    """Appointment lifecycle status."""

    SCHEDULED = "scheduled"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no-show"


class Appointment(Document, TimestampMixin):
    """
    Appointment document model.

    ``patient_id`` always references a patient owned by the same doctor.
    ``date`` is a local calendar day and ``time`` a zero-padded "HH:MM" string,
    so both sort correctly as stored.
    """

    doctor_id: Indexed(str)
    patient_id: Indexed(str)

    date: date
    time: str
    duration: int = 30  # minutes, 15..180
    type: AppointmentType = AppointmentType.CHECKUP
    status: AppointmentStatus = AppointmentStatus.SCHEDULED
    notes: Optional[str] = None

    class Settings:
        name = "appointments"
        use_state_management = True
        indexes = [
            [("doctor_id", 1), ("date", 1), ("time", 1)],
            [("doctor_id", 1), ("status", 1), ("date", 1)],
        ]


APPOINTMENTS = OwnedResource(model=Appointment, name="Appointment")
