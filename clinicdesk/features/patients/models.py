# Patient Management Feature - Models

from typing import Optional
from datetime import date
from beanie import Document, Indexed
from pydantic import EmailStr
from clinicdesk.shared.models import TimestampMixin
from clinicdesk.shared.scoping import OwnedResource


class Patient(Document, TimestampMixin):
    """Patient document model. Each patient belongs to exactly one doctor."""

    # Owning doctor (User._id)
    doctor_id: Indexed(str)

    name: str
    # Unique across all doctors, not per doctor
    email: Indexed(EmailStr, unique=True)
    phone: str
    date_of_birth: Optional[date] = None
    address: Optional[str] = None
    notes: Optional[str] = None

    class Settings:
        name = "patients"
        use_state_management = True
        indexes = [
            [("doctor_id", 1), ("created_at", -1)],
        ]

    class Config:
        json_schema_extra = {
            "example": {
                "doctor_id": "65a0c2f1e4b0a1b2c3d4e5f6",
                "name": "Sarah Johnson",
                "email": "sarah.johnson@email.com",
                "phone": "+1-555-0123",
                "date_of_birth": "1990-08-22",
                "address": "123 Main St",
                "notes": "Prefers morning appointments",
            }
        }


PATIENTS = OwnedResource(model=Patient, name="Patient")
