from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import User
from ..schemas import NotificationOut, UnreadCount
from ..security import get_current_user
from ..services import notifications as notifications_service

router = APIRouter(prefix="/api/v1/notifications", tags=["notifications"])


@router.get("", response_model=list[NotificationOut])
def list_notifications(
    unread_only: bool = Query(False),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """List notifications for the current user, newest first."""
    return notifications_service.get_notifications_for_user(db, user.id, unread_only)


@router.get("/unread-count", response_model=UnreadCount)
def get_unread_count(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return {"unread_count": notifications_service.unread_count(db, user.id)}


@router.post("/read-all", response_model=UnreadCount)
def mark_all_read(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Mark all notifications as read for the current user."""
    notifications_service.mark_all_read(db, user.id)
    return {"unread_count": 0}


@router.post("/{notification_id}/read", response_model=NotificationOut)
def mark_notification_read(
    notification_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return notifications_service.mark_read(db, notification_id, user.id)
