# Medical Records Feature - Models

from typing import List, Optional
from datetime import date, datetime
from beanie import Document, Indexed
from pydantic import Field
from clinicdesk.shared.models import TimestampMixin
from clinicdesk.shared.scoping import OwnedResource


class MedicalRecord(Document, TimestampMixin):
    """
    Medical record document model.
    A dated diagnosis/treatment entry for one patient, written by the owning doctor.
    Files attached to the record live in ``medical_record_files``.
    """

    doctor_id: Indexed(str)
    patient_id: Indexed(str)

    date: date
    diagnosis: str  # max 500 chars
    treatment: str
    notes: Optional[str] = None

    # Free-form references (URLs, external ids); uploaded files are separate
    attachments: List[str] = Field(default_factory=list)

    class Settings:
        name = "medical_records"
        use_state_management = True
        indexes = [
            [("doctor_id", 1), ("patient_id", 1), ("date", -1)],
        ]


class MedicalRecordFile(Document):
    """
    File attached to a medical record.

    Carries no doctor id: ownership is resolved through the parent record.
    Content is stored base64-encoded.
    """

    medical_record_id: Indexed(str)

    original_name: str
    mime_type: str
    file_size: int  # bytes
    file_data: str  # base64

    uploaded_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "medical_record_files"
        use_state_management = True


MEDICAL_RECORDS = OwnedResource(model=MedicalRecord, name="Medical record")

MEDICAL_RECORD_FILES = OwnedResource(
    model=MedicalRecordFile,
    name="File",
    owner_field=None,
    parent=MEDICAL_RECORDS,
    parent_field="medical_record_id",
)
