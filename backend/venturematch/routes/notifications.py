from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from ..schemas.idea_schema import MessageResponse
from ..schemas.notification_schema import NotificationListResponse, NotificationOut
from ..services.auth_dependency import Actor, get_current_actor
from ..services.repositories import NotificationRepository, get_notification_repository

router = APIRouter(
    prefix="/notifications",
    tags=["Notifications"],
)


@router.get(
    "/",
    response_model=NotificationListResponse,
    summary="The caller's notifications, newest first",
)
def list_notifications(
    repo: NotificationRepository = Depends(get_notification_repository),
    actor: Actor = Depends(get_current_actor),
) -> NotificationListResponse:
    items = [NotificationOut(**n) for n in repo.list_for(actor.id)]
    return NotificationListResponse(
        notifications=items,
        unread_count=sum(1 for n in items if not n.read),
        demo=repo.demo,
    )


@router.patch(
    "/read-all",
    response_model=MessageResponse,
    summary="Mark every notification as read",
)
def mark_all_read(
    repo: NotificationRepository = Depends(get_notification_repository),
    actor: Actor = Depends(get_current_actor),
) -> MessageResponse:
    count = repo.mark_all_read(actor.id)
    return MessageResponse(message=f"Marked {count} notification(s) as read", demo=repo.demo)


@router.patch(
    "/{notification_id}/read",
    response_model=NotificationOut,
    summary="Mark one notification as read",
)
def mark_read(
    notification_id: str,
    repo: NotificationRepository = Depends(get_notification_repository),
    actor: Actor = Depends(get_current_actor),
) -> NotificationOut:
    item = repo.mark_read(notification_id, actor.id)
    if item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Notification not found")
    return NotificationOut(**item)
