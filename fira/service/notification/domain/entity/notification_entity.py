from datetime import datetime, timezone
from enum import StrEnum
from typing import Any, Optional
from uuid import UUID

import attrs
from uuid_utils.compat import uuid7

from fira.platform.exception.exceptions import DomainError


class NotificationType(StrEnum):
    SYSTEM = 'system'
    EVENT_CANCELLED = 'event_cancelled'
    TICKET_CANCELLED = 'ticket_cancelled'
    BOOKING = 'booking'
    PAYMENT = 'payment'
    REFUND = 'refund'


class NotificationPriority(StrEnum):
    LOW = 'low'
    MEDIUM = 'medium'
    HIGH = 'high'


class NotificationChannel(StrEnum):
    # Stored only; delivery beyond in-app is not wired up
    IN_APP = 'in_app'
    EMAIL = 'email'
    PUSH = 'push'
    ALL = 'all'


@attrs.define
class Notification:
    id: UUID
    user_id: int
    type: NotificationType
    title: str
    message: str
    data: dict[str, Any] = attrs.field(factory=dict)
    priority: NotificationPriority = NotificationPriority.MEDIUM
    channel: NotificationChannel = NotificationChannel.IN_APP
    is_read: bool = False
    read_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        *,
        user_id: int,
        type: NotificationType,
        title: str,
        message: str,
        data: Optional[dict[str, Any]] = None,
        priority: NotificationPriority = NotificationPriority.MEDIUM,
        channel: NotificationChannel = NotificationChannel.IN_APP,
    ) -> 'Notification':
        if not title.strip():
            raise DomainError('Notification title is required')
        return cls(
            id=uuid7(),
            user_id=user_id,
            type=type,
            title=title,
            message=message,
            data=data or {},
            priority=priority,
            channel=channel,
            created_at=datetime.now(timezone.utc),
        )
