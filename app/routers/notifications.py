# app/routers/notifications.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List

from app.config.settings import Settings
from app.database import get_db
from app.models.notification import Notification
from app.schemas.notification import NotificationOut
from app.utils.auth import Principal, get_current_principal
from app.utils.errors import Forbidden, NotFound
from app.utils.notifications import get_user_notifications, mark_notification_read

router = APIRouter(prefix="/notifications")


@router.get("/", response_model=List[NotificationOut])
def get_notifications(
    skip: int = Query(0, ge=0),
    limit: int = Query(Settings.PAGINATION["page_size"], ge=1),
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    """Get the caller's own notifications, newest first"""
    return get_user_notifications(db, principal.id, skip, Settings.page_limit(limit))


@router.patch("/{notification_id}/read", response_model=NotificationOut)
def mark_as_read(
    notification_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    notification = db.query(Notification).filter(Notification.id == notification_id).first()
    if not notification:
        raise NotFound("Notification not found")
    if notification.user_id != principal.id:
        raise Forbidden()
    return mark_notification_read(db, notification)
