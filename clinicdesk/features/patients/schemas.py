# Patient Management Feature - Schemas

from typing import Optional, List
from datetime import date, datetime
from pydantic import BaseModel, EmailStr, Field
from clinicdesk.features.appointments.schemas import AppointmentResponse
from clinicdesk.features.medical_records.schemas import MedicalRecordResponse
from clinicdesk.shared.dates import LocalDate


# ============== Create / Update Patient ==============

class CreatePatientRequest(BaseModel):
    """Request schema for creating a new patient."""
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    phone: str = Field(..., min_length=1, max_length=50)
    date_of_birth: Optional[LocalDate] = None
    address: Optional[str] = None
    notes: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Sarah Johnson",
                "email": "sarah.johnson@email.com",
                "phone": "+1-555-0123",
                "date_of_birth": "1990-08-22",
            }
        }


class UpdatePatientRequest(BaseModel):
    """Request schema for updating patient information. Only provided fields are applied."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, min_length=1, max_length=50)
    date_of_birth: Optional[LocalDate] = None
    address: Optional[str] = None
    notes: Optional[str] = None


# ============== Patient Response ==============

class PatientResponse(BaseModel):
    """Response schema for patient data."""
    id: str
    doctor_id: str
    name: str
    email: str
    phone: str
    date_of_birth: Optional[date] = None
    address: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class PatientDetailResponse(PatientResponse):
    """Patient with their appointments and medical records."""
    appointments: List[AppointmentResponse] = []
    medical_records: List[MedicalRecordResponse] = []

