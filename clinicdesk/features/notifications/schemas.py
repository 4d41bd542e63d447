# Notifications Feature - Schemas

from datetime import datetime
from pydantic import BaseModel, Field
from clinicdesk.features.notifications.models import NotificationType


class CreateNotificationRequest(BaseModel):
    """Schema for creating a notification for the current doctor."""
    title: str = Field(..., min_length=1, max_length=255)
    message: str = Field(..., min_length=1)
    type: NotificationType = NotificationType.INFO

    class Config:
        json_schema_extra = {
            "example": {
                "title": "Appointment tomorrow",
                "message": "Sarah Johnson at 09:30",
                "type": "reminder",
            }
        }


class NotificationResponse(BaseModel):
    """Schema for notification response."""
    id: str
    doctor_id: str
    title: str
    message: str
    type: NotificationType
    read: bool
    created_at: datetime
