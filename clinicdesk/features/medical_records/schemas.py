# Medical Records Feature - Schemas

from typing import List, Optional
from datetime import date, datetime
from pydantic import BaseModel, Field
from clinicdesk.shared.dates import LocalDate


class CreateMedicalRecordRequest(BaseModel):
    """Schema for creating a medical record."""
    date: LocalDate
    diagnosis: str = Field(..., min_length=1, max_length=500)
    treatment: str
    notes: Optional[str] = None
    attachments: List[str] = Field(default_factory=list)

    class Config:
        json_schema_extra = {
            "example": {
                "date": "2024-01-15",
                "diagnosis": "Dental caries, lower left molar",
                "treatment": "Composite filling",
                "notes": "Review in 6 months",
            }
        }


class UpdateMedicalRecordRequest(BaseModel):
    """Schema for partial medical record updates."""
    date: Optional[LocalDate] = None
    diagnosis: Optional[str] = Field(None, min_length=1, max_length=500)
    treatment: Optional[str] = None
    notes: Optional[str] = None
    attachments: Optional[List[str]] = None


class RenameFileRequest(BaseModel):
    """Schema for renaming an attached file."""
    new_name: str = Field(..., min_length=1, max_length=255)


class MedicalRecordFileResponse(BaseModel):
    """File metadata. Content is only returned by the download endpoint."""
    id: str
    medical_record_id: str
    original_name: str
    mime_type: str
    file_size: int
    uploaded_at: datetime


class MedicalRecordResponse(BaseModel):
    """Schema for medical record response."""
    id: str
    doctor_id: str
    patient_id: str
    date: date
    diagnosis: str
    treatment: str
    notes: Optional[str] = None
    attachments: List[str] = []
    files: List[MedicalRecordFileResponse] = []
    created_at: datetime
    updated_at: datetime
