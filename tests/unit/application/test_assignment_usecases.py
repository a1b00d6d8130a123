from __future__ import annotations

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from kraalhub.application.errors import ConflictError, NotFound, PermissionDenied
from kraalhub.application.events.models import CattleReassignedEvent
from kraalhub.application.use_cases.assignments import (
    list_assignments,
    reconcile_assignment,
    set_cattle_kraal,
)
from kraalhub.domain.models.assignment import CattleKraalAssignment, current_kraal_id
from kraalhub.domain.value_objects.role import Role


async def test_reconcile_without_kraal_is_noop(uow, tenant, add_cattle):
    cow = await add_cattle()
    result = await reconcile_assignment.execute(uow, tenant, cow.id, None)
    assert result.changed is False
    assert uow.assignments.rows == []


async def test_reconcile_opens_first_assignment(uow, tenant, add_cattle, add_kraal):
    cow = await add_cattle()
    north = await add_kraal()
    result = await reconcile_assignment.execute(uow, tenant, cow.id, north.id)
    assert result.changed is True
    assert result.closed is None
    assert result.opened.kraal_id == north.id
    assert result.opened.end_date is None


async def test_reconcile_same_kraal_is_idempotent(uow, tenant, add_cattle, add_kraal):
    cow = await add_cattle()
    north = await add_kraal()
    await reconcile_assignment.execute(uow, tenant, cow.id, north.id)
    again = await reconcile_assignment.execute(uow, tenant, cow.id, north.id)
    assert again.changed is False
    assert len(uow.assignments.rows) == 1


async def test_reconcile_move_closes_previous_interval(uow, tenant, add_cattle, add_kraal):
    cow = await add_cattle()
    north = await add_kraal("North")
    south = await add_kraal("South")
    t0 = datetime(2024, 1, 1, tzinfo=timezone.utc)
    t1 = t0 + timedelta(days=30)
    await reconcile_assignment.execute(uow, tenant, cow.id, north.id, now=t0)
    moved = await reconcile_assignment.execute(uow, tenant, cow.id, south.id, now=t1)

    assert moved.changed is True
    assert moved.closed.kraal_id == north.id
    assert moved.closed.end_date == t1
    assert moved.opened.start_date == t1
    history = await uow.assignments.list_for_cattle(tenant, cow.id)
    assert [a.kraal_id for a in history] == [north.id, south.id]
    assert sum(1 for a in history if a.is_open) == 1


async def test_reconcile_unknown_kraal_not_found(uow, tenant, add_cattle):
    cow = await add_cattle()
    with pytest.raises(NotFound) as exc:
        await reconcile_assignment.execute(uow, tenant, cow.id, uuid4())
    assert exc.value.details["field"] == "kraal_id"
    assert uow.assignments.rows == []


async def test_reconcile_unknown_cattle_not_found(uow, tenant, add_kraal):
    north = await add_kraal()
    with pytest.raises(NotFound):
        await reconcile_assignment.execute(uow, tenant, uuid4(), north.id)


async def test_reconcile_lost_close_race_raises_conflict(uow, tenant, add_cattle, add_kraal):
    cow = await add_cattle()
    north = await add_kraal("North")
    south = await add_kraal("South")
    await reconcile_assignment.execute(uow, tenant, cow.id, north.id)
    uow.assignments.close_result = False

    with pytest.raises(ConflictError):
        await reconcile_assignment.execute(uow, tenant, cow.id, south.id)
    assert len(uow.assignments.rows) == 1


async def test_set_cattle_kraal_denies_worker(uow, tenant, actor, add_cattle, add_kraal):
    cow = await add_cattle()
    north = await add_kraal()
    with pytest.raises(PermissionDenied):
        await set_cattle_kraal.execute(uow, tenant, Role.WORKER, actor, cow.id, north.id)
    assert uow.assignments.rows == []


async def test_set_cattle_kraal_records_event_and_commits(
    uow, tenant, actor, add_cattle, add_kraal
):
    cow = await add_cattle()
    north = await add_kraal("North")
    south = await add_kraal("South")
    await set_cattle_kraal.execute(uow, tenant, Role.MANAGER, actor, cow.id, north.id)
    await set_cattle_kraal.execute(uow, tenant, Role.MANAGER, actor, cow.id, south.id)

    events = uow.drain_events()
    assert uow.state.commits == 2
    assert all(isinstance(e, CattleReassignedEvent) for e in events)
    assert events[-1].previous_kraal_id == north.id
    assert events[-1].kraal_id == south.id


async def test_set_cattle_kraal_unchanged_skips_commit(uow, tenant, actor, add_cattle, add_kraal):
    cow = await add_cattle()
    north = await add_kraal()
    await set_cattle_kraal.execute(uow, tenant, Role.ADMIN, actor, cow.id, north.id)
    uow.drain_events()
    result = await set_cattle_kraal.execute(uow, tenant, Role.ADMIN, actor, cow.id, north.id)
    assert result.changed is False
    assert uow.state.commits == 1
    assert uow.drain_events() == []


async def test_list_assignments_requires_cattle(uow, tenant):
    with pytest.raises(NotFound):
        await list_assignments.execute(uow, tenant, uuid4())


def test_current_kraal_id_picks_open_assignment():
    tenant, cow = uuid4(), uuid4()
    closed = CattleKraalAssignment.open(tenant, cow, uuid4())
    closed.end_date = datetime.now(timezone.utc)
    current = CattleKraalAssignment.open(tenant, cow, uuid4())
    assert current_kraal_id([closed, current]) == current.kraal_id
    assert current_kraal_id([closed]) is None
    assert current_kraal_id([]) is None
