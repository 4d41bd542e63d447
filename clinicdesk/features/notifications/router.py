# Notifications Feature - Router

from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from clinicdesk.features.notifications.models import NotificationType
from clinicdesk.features.notifications.schemas import (
    CreateNotificationRequest,
    NotificationResponse,
)
from clinicdesk.features.notifications.service import NotificationService
from clinicdesk.features.auth.dependencies import get_current_doctor_id
from clinicdesk.shared.schemas import CountResponse, MessageResponse, PaginatedResponse


router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.post("", response_model=NotificationResponse, status_code=status.HTTP_201_CREATED)
async def create_notification(
    request: CreateNotificationRequest,
    doctor_id: str = Depends(get_current_doctor_id)
):
    """Create a notification for the current doctor."""
    notification = await NotificationService.create_notification(doctor_id, request)
    return NotificationService.notification_to_response(notification)


@router.get("", response_model=PaginatedResponse[NotificationResponse])
async def list_notifications(
    read: Optional[bool] = None,
    type: Optional[NotificationType] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    doctor_id: str = Depends(get_current_doctor_id)
):
    """
    List the current doctor's notifications, newest first.

    - **read**: Only read (true) or unread (false) notifications
    - **type**: appointment, reminder, alert or info
    """
    notifications, total = await NotificationService.get_notifications(
        doctor_id, read=read, type=type, page=page, limit=limit
    )
    return PaginatedResponse[NotificationResponse](
        data=[NotificationService.notification_to_response(n) for n in notifications],
        total=total,
        page=page,
        limit=limit,
    )


@router.patch("/read-all", response_model=CountResponse)
async def mark_all_as_read(doctor_id: str = Depends(get_current_doctor_id)):
    """Mark all of the current doctor's notifications as read."""
    count = await NotificationService.mark_all_as_read(doctor_id)
    return CountResponse(count=count)


@router.get("/{notification_id}", response_model=NotificationResponse)
async def get_notification(
    notification_id: str,
    doctor_id: str = Depends(get_current_doctor_id)
):
    notification = await NotificationService.get_notification(notification_id, doctor_id)
    return NotificationService.notification_to_response(notification)


@router.patch("/{notification_id}/read", response_model=NotificationResponse)
async def mark_as_read(
    notification_id: str,
    doctor_id: str = Depends(get_current_doctor_id)
):
    """Mark a notification as read."""
    notification = await NotificationService.mark_as_read(notification_id, doctor_id)
    return NotificationService.notification_to_response(notification)


@router.delete("/{notification_id}", response_model=MessageResponse)
async def delete_notification(
    notification_id: str,
    doctor_id: str = Depends(get_current_doctor_id)
):
    await NotificationService.delete_notification(notification_id, doctor_id)
    return MessageResponse(message="Notification deleted successfully")
