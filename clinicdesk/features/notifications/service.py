# Notifications Feature - Service

from typing import List, Optional, Tuple
from beanie.operators import Set
from clinicdesk.features.notifications.models import (
    Notification,
    NotificationType,
    NOTIFICATIONS,
)
from clinicdesk.features.notifications.schemas import (
    CreateNotificationRequest,
    NotificationResponse,
)
from clinicdesk.core.logging import logger
from clinicdesk.shared.scoping import get_owned, scoped_find, paginate


class NotificationService:
    """Service class for notification operations."""

    @staticmethod
    def notification_to_response(notification: Notification) -> NotificationResponse:
        return NotificationResponse(
            id=str(notification.id),
            doctor_id=notification.doctor_id,
            title=notification.title,
            message=notification.message,
            type=notification.type,
            read=notification.read,
            created_at=notification.created_at,
        )

    @staticmethod
    async def create_notification(
        doctor_id: str,
        request: CreateNotificationRequest
    ) -> Notification:
        notification = Notification(doctor_id=doctor_id, **request.model_dump())
        await notification.insert()

        logger.info(f"Created {notification.type.value} notification {notification.id}")
        return notification

    @staticmethod
    async def get_notifications(
        doctor_id: str,
        read: Optional[bool] = None,
        type: Optional[NotificationType] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Tuple[List[Notification], int]:
        """
        List the doctor's notifications, newest first.

        Returns:
            Tuple of (notifications on the page, total matching notifications)
        """
        filters = []
        if read is not None:
            filters.append(Notification.read == read)
        if type:
            filters.append(Notification.type == type)

        query = scoped_find(NOTIFICATIONS, doctor_id, *filters).sort(-Notification.created_at)
        return await paginate(query, page, limit)

    @staticmethod
    async def get_notification(notification_id: str, doctor_id: str) -> Notification:
        return await get_owned(NOTIFICATIONS, notification_id, doctor_id)

    @staticmethod
    async def mark_as_read(notification_id: str, doctor_id: str) -> Notification:
        """Mark a notification read. Marking an already read notification is a no-op."""
        notification = await NotificationService.get_notification(notification_id, doctor_id)

        if not notification.read:
            notification.read = True
            await notification.save()
            logger.info(f"Marked notification {notification_id} as read")

        return notification

    @staticmethod
    async def mark_all_as_read(doctor_id: str) -> int:
        """
        Mark every unread notification of the doctor as read.

        Returns:
            Number of notifications changed
        """
        result = await scoped_find(
            NOTIFICATIONS, doctor_id, Notification.read == False
        ).update_many(Set({Notification.read: True}))

        count = result.modified_count if result else 0
        logger.info(f"Marked {count} notifications as read")
        return count

    @staticmethod
    async def delete_notification(notification_id: str, doctor_id: str) -> None:
        notification = await NotificationService.get_notification(notification_id, doctor_id)
        await notification.delete()

        logger.info(f"Deleted notification {notification_id}")
