# app/utils/notifications.py
"""
Utility functions for creating and managing notifications
"""

from sqlalchemy.orm import Session
from app.models import Notification, NotificationType
from app.utils.dates import utcnow
from typing import List, Optional


def create_notification(
    db: Session,
    user_id: int,
    title: str,
    message: str,
    notification_type: NotificationType = NotificationType.SYSTEM,
    related_entity_type: Optional[str] = None,
    related_entity_id: Optional[int] = None,
) -> Notification:
    """
    Create a new notification for a user

    Args:
        db: Database session
        user_id: ID of the user to notify
        title: Notification title
        message: Notification message
        notification_type: Type of notification
        related_entity_type: Type of related entity (e.g., 'task', 'project')
        related_entity_id: ID of related entity

    Returns:
        Created notification object
    """
    notification = Notification(
        user_id=user_id,
        title=title,
        message=message,
        notification_type=notification_type.value,
        related_entity_type=related_entity_type,
        related_entity_id=related_entity_id,
    )

    db.add(notification)
    db.commit()
    db.refresh(notification)

    return notification


def create_task_overdue_notification(db: Session, user_id: int, task_id: int, task_title: str, deadline) -> Notification:
    message = f"Task '{task_title}' is overdue"
    if deadline is not None:
        message += f" (deadline was {deadline.strftime('%Y-%m-%d %H:%M')} UTC)"
    return create_notification(
        db=db,
        user_id=user_id,
        title="Task Overdue",
        message=message,
        notification_type=NotificationType.TASK_OVERDUE,
        related_entity_type="task",
        related_entity_id=task_id,
    )


def get_user_notifications(db: Session, user_id: int, skip: int = 0, limit: int = 50) -> List[Notification]:
    return (
        db.query(Notification)
        .filter(Notification.user_id == user_id)
        .order_by(Notification.created_at.desc(), Notification.id.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )


def mark_notification_read(db: Session, notification: Notification) -> Notification:
    if not notification.is_read:
        notification.is_read = True
        notification.read_at = utcnow()
        db.commit()
        db.refresh(notification)
    return notification
