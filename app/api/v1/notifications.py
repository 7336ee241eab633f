import uuid

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import get_current_admin
from app.crud import base as base_crud, notification as notification_crud
from app.exceptions import RecordNotFoundError
from app.models.base import get_db
from app.models.notification import Notification
from app.models.user import User
from app.schemas import notification as notification_schema
from app.services import audit_service

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=notification_schema.NotificationListResponse)
async def list_notifications(
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """최근 발송 이력 API (최대 20건)"""
    notifications = await notification_crud.get_recent_notifications(db)
    return notification_schema.NotificationListResponse(
        notifications=[notification_schema.NotificationResponse.model_validate(n) for n in notifications],
        total=len(notifications),
    )


@router.post("", response_model=notification_schema.NotificationResponse, status_code=status.HTTP_201_CREATED)
async def send_notification(
    request: notification_schema.NotificationCreateRequest,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """알림 발송 API"""
    notification = await base_crud.create_record(db, Notification, request.model_dump())
    response = notification_schema.NotificationResponse.model_validate(notification)
    await audit_service.log_action(
        db,
        admin,
        "notifications.send",
        "app_notifications",
        notification.id,
        details={"title": request.title, "target_audience": request.target_audience},
    )
    return response


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_notification(
    notification_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """알림 삭제 API"""
    if not await base_crud.delete_by_id(db, Notification, notification_id):
        raise RecordNotFoundError("Notification", notification_id)
    await audit_service.log_action(db, admin, "notifications.delete", "app_notifications", notification_id)
