from beanie import Document, Indexed
from pydantic import EmailStr
from typing import Optional, Literal
from clinicdesk.shared.models import TimestampMixin


AuthProvider = Literal["email", "google", "facebook"]
UserRole = Literal["doctor", "admin"]


class User(Document, TimestampMixin):
    """
    Doctor account.

    Every patient, appointment, medical record and notification is owned by
    exactly one user. Users are never deleted, only deactivated.
    """

    name: str
    email: Indexed(EmailStr, unique=True)
    password_hash: Optional[str] = None  # None for OAuth-only accounts
    phone: Optional[str] = None
    specialization: Optional[str] = None  # e.g. "General Dentistry"
    license_number: Optional[str] = None
    profile_photo: Optional[str] = None  # URL or base64

    # OAuth linkage
    google_id: Optional[str] = None
    facebook_id: Optional[str] = None
    provider: AuthProvider = "email"

    role: UserRole = "doctor"
    is_active: bool = True
    is_email_verified: bool = False

    class Settings:
        name = "users"
        use_state_management = True
        indexes = ["google_id", "facebook_id"]

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Dr. Sarah Anderson",
                "email": "sarah@clinic.com",
                "phone": "+1-555-0100",
                "specialization": "General Dentistry",
                "license_number": "DDS-12345",
            }
        }
