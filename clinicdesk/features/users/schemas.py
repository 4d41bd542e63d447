# User Management Feature - Schemas

from typing import Optional
from pydantic import BaseModel, EmailStr, Field
from clinicdesk.features.auth.models import AuthProvider, UserRole


class CreateUserRequest(BaseModel):
    """Schema for creating an account (admin or registration)."""
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: Optional[str] = Field(None, min_length=6, max_length=100)
    phone: Optional[str] = None
    specialization: Optional[str] = Field(None, max_length=200)
    license_number: Optional[str] = Field(None, max_length=100)
    profile_photo: Optional[str] = None
    provider: AuthProvider = "email"
    role: UserRole = "doctor"


class UpdateUserRequest(BaseModel):
    """Schema for partial account updates. Only provided fields are applied."""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=6, max_length=100)
    phone: Optional[str] = None
    specialization: Optional[str] = Field(None, max_length=200)
    license_number: Optional[str] = Field(None, max_length=100)
    profile_photo: Optional[str] = None


class AdminUpdateUserRequest(UpdateUserRequest):
    """Admins may additionally change the role."""
    role: Optional[UserRole] = None
