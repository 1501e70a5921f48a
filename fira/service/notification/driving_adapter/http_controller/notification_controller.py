from uuid import UUID

from fastapi import APIRouter, Depends, status

from fira.platform.exception.exceptions import ForbiddenError
from fira.platform.logging.loguru_io import Logger
from fira.service.notification.app.command.mark_notification_read_use_case import (
    MarkNotificationReadUseCase,
)
from fira.service.notification.app.query.list_notifications_use_case import (
    ListNotificationsUseCase,
)
from fira.service.notification.driving_adapter.http_controller.schema.notification_schema import (
    MarkAllReadResponse,
    NotificationListResponse,
    NotificationResponse,
    UnreadCountResponse,
)
from fira.service.shared_kernel.driving_adapter.http_controller.auth.current_user import (
    get_current_user_id,
)


router = APIRouter()


async def _ensure_owner(
    *, notification_id: UUID, user_id: int, query: ListNotificationsUseCase
) -> None:
    notification = await query.get_by_id(notification_id=notification_id)
    if notification.user_id != user_id:
        raise ForbiddenError('Unauthorized: This notification belongs to another user')


@router.get('', status_code=status.HTTP_200_OK)
@Logger.io
async def list_notifications(
    user_id: int = Depends(get_current_user_id),
    use_case: ListNotificationsUseCase = Depends(ListNotificationsUseCase.depends),
) -> NotificationListResponse:
    notifications = await use_case.list_for_user(user_id=user_id)
    return NotificationListResponse(
        notifications=[NotificationResponse.model_validate(n) for n in notifications],
        unread_count=await use_case.unread_count(user_id=user_id),
    )


@router.get('/unread-count', status_code=status.HTTP_200_OK)
@Logger.io
async def unread_count(
    user_id: int = Depends(get_current_user_id),
    use_case: ListNotificationsUseCase = Depends(ListNotificationsUseCase.depends),
) -> UnreadCountResponse:
    return UnreadCountResponse(unread_count=await use_case.unread_count(user_id=user_id))


@router.patch('/read-all', status_code=status.HTTP_200_OK)
@Logger.io
async def mark_all_as_read(
    user_id: int = Depends(get_current_user_id),
    use_case: MarkNotificationReadUseCase = Depends(MarkNotificationReadUseCase.depends),
) -> MarkAllReadResponse:
    return MarkAllReadResponse(updated=await use_case.mark_all_as_read(user_id=user_id))


@router.patch('/{notification_id}/read', status_code=status.HTTP_200_OK)
@Logger.io
async def mark_as_read(
    notification_id: UUID,
    user_id: int = Depends(get_current_user_id),
    query: ListNotificationsUseCase = Depends(ListNotificationsUseCase.depends),
    use_case: MarkNotificationReadUseCase = Depends(MarkNotificationReadUseCase.depends),
) -> NotificationResponse:
    await _ensure_owner(notification_id=notification_id, user_id=user_id, query=query)
    notification = await use_case.mark_as_read(notification_id=notification_id)
    return NotificationResponse.model_validate(notification)


@router.delete('/{notification_id}', status_code=status.HTTP_204_NO_CONTENT)
@Logger.io
async def delete_notification(
    notification_id: UUID,
    user_id: int = Depends(get_current_user_id),
    query: ListNotificationsUseCase = Depends(ListNotificationsUseCase.depends),
    use_case: MarkNotificationReadUseCase = Depends(MarkNotificationReadUseCase.depends),
) -> None:
    await _ensure_owner(notification_id=notification_id, user_id=user_id, query=query)
    await use_case.delete(notification_id=notification_id)
