from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime
from clinicdesk.features.auth.models import AuthProvider, UserRole


# Request Schemas
class RegisterRequest(BaseModel):
    """Register request schema."""

    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=100)
    phone: Optional[str] = None
    specialization: Optional[str] = Field(None, max_length=200)
    license_number: Optional[str] = Field(None, max_length=100)


class LoginRequest(BaseModel):
    """Login request schema."""

    email: EmailStr
    password: str


class OAuthProfile(BaseModel):
    """Identity returned by an OAuth provider after the code exchange."""

    provider: AuthProvider
    provider_id: str
    email: EmailStr
    name: str
    photo: Optional[str] = None


# Response Schemas
class UserResponse(BaseModel):
    """User response schema. Never carries the password hash."""

    id: str
    name: str
    email: EmailStr
    phone: Optional[str] = None
    specialization: Optional[str] = None
    license_number: Optional[str] = None
    profile_photo: Optional[str] = None
    provider: AuthProvider
    role: UserRole
    is_active: bool
    is_email_verified: bool
    created_at: datetime
    updated_at: datetime


class AuthResponse(BaseModel):
    """Register / login response schema."""

    access_token: str
    token_type: str = "bearer"
    user: UserResponse


class TokenResponse(BaseModel):
    """Refresh response schema."""

    access_token: str
    token_type: str = "bearer"
