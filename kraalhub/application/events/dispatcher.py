from __future__ import annotations

import logging
from typing import Iterable

from kraalhub.application.events.models import (
    CattleCreatedEvent,
    CattleDeletedEvent,
    CattleReassignedEvent,
    CattleUpdatedEvent,
    KraalCreatedEvent,
    KraalDeletedEvent,
    KraalUpdatedEvent,
)
from kraalhub.application.notifications.factory import BuiltNotification, build_notification
from kraalhub.application.notifications.types import NotificationType
from kraalhub.infrastructure.notifications.sender import NotificationSender

logger = logging.getLogger(__name__)


def _build(event: object) -> BuiltNotification | None:
    if isinstance(event, CattleCreatedEvent):
        return build_notification(
            NotificationType.CATTLE_CREATED, cattle_id=event.cattle_id, name=event.name
        )
    if isinstance(event, CattleUpdatedEvent):
        return build_notification(
            NotificationType.CATTLE_UPDATED,
            cattle_id=event.cattle_id,
            name=event.name,
            changed_fields=event.changed_fields,
        )
    if isinstance(event, CattleDeletedEvent):
        return build_notification(NotificationType.CATTLE_DELETED, cattle_id=event.cattle_id)
    if isinstance(event, CattleReassignedEvent):
        return build_notification(
            NotificationType.CATTLE_REASSIGNED,
            cattle_id=event.cattle_id,
            kraal_id=event.kraal_id,
            previous_kraal_id=event.previous_kraal_id,
        )
    if isinstance(event, KraalCreatedEvent):
        return build_notification(
            NotificationType.KRAAL_CREATED, kraal_id=event.kraal_id, name=event.name
        )
    if isinstance(event, KraalUpdatedEvent):
        return build_notification(
            NotificationType.KRAAL_UPDATED,
            kraal_id=event.kraal_id,
            name=event.name,
            changed_fields=event.changed_fields,
        )
    if isinstance(event, KraalDeletedEvent):
        return build_notification(NotificationType.KRAAL_DELETED, kraal_id=event.kraal_id)
    return None


async def dispatch_events(sender: NotificationSender, events: Iterable[object]) -> None:
    """
    Dispatch events post-commit. Failures are logged and never propagate,
    so this is safe to run in a background task after the response.
    """
    for event in list(events):
        try:
            built = _build(event)
            if built is None:
                logger.debug("No notification for event %s", type(event).__name__)
                continue
            await sender.send(
                tenant_id=event.tenant_id,  # type: ignore[attr-defined]
                sender_id=event.actor_user_id,  # type: ignore[attr-defined]
                notification=built,
            )
        except Exception as e:
            logger.error(
                "Error dispatching event %s: %s", type(event).__name__, e, exc_info=True
            )
