# Notifications Feature - Models

from enum import Enum
from typing import Optional
from datetime import datetime
from beanie import Document
from pydantic import Field
from clinicdesk.shared.scoping import OwnedResource


class NotificationType(str, Enum):
    APPOINTMENT = "appointment"
    REMINDER = "reminder"
    ALERT = "alert"
    INFO = "info"


class Notification(Document):
    """
    In-app notification for a doctor.

    ``doctor_id`` may be empty for system-wide rows; those are never
    returned through the doctor-facing endpoints.
    """

    doctor_id: Optional[str] = None

    title: str = Field(..., max_length=255)
    message: str
    type: NotificationType = NotificationType.INFO
    read: bool = False

    created_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "notifications"
        use_state_management = True
        indexes = [
            [("doctor_id", 1), ("read", 1), ("created_at", -1)],
        ]


NOTIFICATIONS = OwnedResource(model=Notification, name="Notification")
