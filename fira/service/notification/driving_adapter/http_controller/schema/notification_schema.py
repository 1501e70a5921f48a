from datetime import datetime
from typing import Any, List, Optional
from uuid import UUID

from pydantic import BaseModel

from fira.service.notification.domain.entity.notification_entity import (
    NotificationChannel,
    NotificationPriority,
    NotificationType,
)


class NotificationResponse(BaseModel):
    model_config = {'from_attributes': True}

    id: UUID
    user_id: int
    type: NotificationType
    title: str
    message: str
    data: dict[str, Any]
    priority: NotificationPriority
    channel: NotificationChannel
    is_read: bool
    read_at: Optional[datetime] = None
    created_at: Optional[datetime] = None


class NotificationListResponse(BaseModel):
    notifications: List[NotificationResponse]
    unread_count: int


class UnreadCountResponse(BaseModel):
    unread_count: int


class MarkAllReadResponse(BaseModel):
    updated: int
