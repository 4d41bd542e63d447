# Appointments Feature - Schemas

import re
from typing import Optional
from datetime import date, datetime
from pydantic import BaseModel, Field, field_validator
from clinicdesk.features.appointments.models import AppointmentType, AppointmentStatus
from clinicdesk.shared.dates import LocalDate


_TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)(:[0-5]\d)?$")


def _normalize_time(value: Optional[str]) -> Optional[str]:
    """Accept "HH:MM" or "HH:MM:SS" and store "HH:MM"."""
    if value is None:
        return value
    match = _TIME_PATTERN.match(value)
    if not match:
        raise ValueError("time must be HH:MM or HH:MM:SS (24-hour)")
    return f"{match.group(1)}:{match.group(2)}"


class CreateAppointmentRequest(BaseModel):
    """Schema for creating an appointment."""
    patient_id: str = Field(..., description="Patient id; must be one of the caller's patients")
    date: LocalDate
    time: str
    duration: int = Field(30, ge=15, le=180, description="Minutes")
    type: AppointmentType = AppointmentType.CHECKUP
    status: AppointmentStatus = AppointmentStatus.SCHEDULED
    notes: Optional[str] = None

    @field_validator("time")
    @classmethod
    def validate_time(cls, v: Optional[str]) -> Optional[str]:
        return _normalize_time(v)

    class Config:
        json_schema_extra = {
            "example": {
                "patient_id": "65a0c2f1e4b0a1b2c3d4e5f6",
                "date": "2024-01-15",
                "time": "09:30",
                "duration": 30,
                "type": "checkup",
                "status": "scheduled",
            }
        }


class UpdateAppointmentRequest(BaseModel):
    """Schema for partial appointment updates."""
    patient_id: Optional[str] = None
    date: Optional[LocalDate] = None
    time: Optional[str] = None
    duration: Optional[int] = Field(None, ge=15, le=180)
    type: Optional[AppointmentType] = None
    status: Optional[AppointmentStatus] = None
    notes: Optional[str] = None

    @field_validator("time")
    @classmethod
    def validate_time(cls, v: Optional[str]) -> Optional[str]:
        return _normalize_time(v)


class AppointmentResponse(BaseModel):
    """Schema for appointment response."""
    id: str
    doctor_id: str
    patient_id: str
    patient_name: str = ""
    date: date
    time: str
    duration: int
    type: AppointmentType
    status: AppointmentStatus
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime
