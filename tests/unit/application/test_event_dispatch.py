from __future__ import annotations

import logging
from uuid import uuid4

import pytest

from kraalhub.application.events.dispatcher import dispatch_events
from kraalhub.application.events.models import CattleCreatedEvent, KraalDeletedEvent
from kraalhub.application.notifications.factory import build_notification
from kraalhub.application.notifications.types import NotificationType


class CollectingSender:
    def __init__(self) -> None:
        self.sent = []

    async def send(self, *, tenant_id, sender_id, notification) -> None:
        self.sent.append(notification)


class FailingSender:
    async def send(self, *, tenant_id, sender_id, notification) -> None:
        raise RuntimeError("channel down")


async def test_dispatch_builds_one_notification_per_event():
    sender = CollectingSender()
    tenant, actor = uuid4(), uuid4()
    await dispatch_events(
        sender,
        [
            CattleCreatedEvent(tenant_id=tenant, actor_user_id=actor, cattle_id=uuid4(), name="Bo"),
            KraalDeletedEvent(tenant_id=tenant, actor_user_id=actor, kraal_id=uuid4()),
        ],
    )
    assert [n.type for n in sender.sent] == [
        NotificationType.CATTLE_CREATED,
        NotificationType.KRAAL_DELETED,
    ]
    assert sender.sent[0].message == "Bo has been created successfully"


async def test_dispatch_failure_is_logged_not_raised(caplog):
    event = CattleCreatedEvent(tenant_id=uuid4(), actor_user_id=uuid4(), cattle_id=uuid4())
    with caplog.at_level(logging.ERROR):
        await dispatch_events(FailingSender(), [event])
    assert "CattleCreatedEvent" in caplog.text


async def test_dispatch_ignores_unknown_events():
    sender = CollectingSender()
    await dispatch_events(sender, [object()])
    assert sender.sent == []


def test_build_notification_rejects_unknown_type():
    with pytest.raises(ValueError):
        build_notification("nope")
