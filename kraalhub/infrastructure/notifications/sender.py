from __future__ import annotations

import logging
from typing import Protocol
from uuid import UUID

from kraalhub.application.notifications.factory import BuiltNotification

logger = logging.getLogger(__name__)


class NotificationSender(Protocol):
    async def send(
        self, *, tenant_id: UUID, sender_id: UUID, notification: BuiltNotification
    ) -> None: ...


class LoggingNotificationSender(NotificationSender):
    async def send(
        self, *, tenant_id: UUID, sender_id: UUID, notification: BuiltNotification
    ) -> None:
        logger.info(
            "Notification (logging provider): type=%s tenant=%s sender=%s title=%s message=%s",
            notification.type,
            tenant_id,
            sender_id,
            notification.title,
            notification.message,
        )
