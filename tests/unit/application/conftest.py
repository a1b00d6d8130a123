from __future__ import annotations

from dataclasses import replace
from types import SimpleNamespace
from uuid import uuid4

import pytest

from kraalhub.application.errors import ConflictError
from kraalhub.domain.models.assignment import CattleKraalAssignment
from kraalhub.domain.models.cattle import Cattle
from kraalhub.domain.models.kraal import Kraal


class StubCattleRepo:
    def __init__(self) -> None:
        self.rows: dict = {}
        self.add_called = False

    async def add(self, cattle: Cattle) -> Cattle:
        self.add_called = True
        if cattle.tag_number and any(
            c.tag_number == cattle.tag_number and c.tenant_id == cattle.tenant_id
            for c in self.rows.values()
        ):
            raise ConflictError("Tag number already exists", details={"field": "tag_number"})
        self.rows[cattle.id] = cattle
        return cattle

    async def get(self, tenant_id, cattle_id):
        row = self.rows.get(cattle_id)
        return row if row and row.tenant_id == tenant_id else None

    async def lock(self, tenant_id, cattle_id):
        return await self.get(tenant_id, cattle_id)

    async def update(self, tenant_id, cattle_id, data):
        row = await self.get(tenant_id, cattle_id)
        if not row:
            return None
        updated = replace(row, **data)
        self.rows[cattle_id] = updated
        return updated

    async def delete(self, tenant_id, cattle_id):
        return self.rows.pop(cattle_id, None) is not None

    def _offspring(self, tenant_id, parent_id, relation, search):
        column = "dam_id" if relation == "DAM" else "sire_id"
        rows = [
            c
            for c in self.rows.values()
            if c.tenant_id == tenant_id and getattr(c, column) == parent_id
        ]
        if search:
            rows = [c for c in rows if search.lower() in (c.name or "").lower()]
        return sorted(rows, key=lambda c: (c.created_at, str(c.id)))

    async def list_offspring(self, tenant_id, parent_id, *, relation, offset, limit, search=None):
        return self._offspring(tenant_id, parent_id, relation, search)[offset : offset + limit]

    async def count_offspring(self, tenant_id, parent_id, *, relation, search=None):
        return len(self._offspring(tenant_id, parent_id, relation, search))

    async def list_by_gender(self, tenant_id, gender):
        return [c for c in self.rows.values() if c.tenant_id == tenant_id and c.gender == gender]

    async def list_by_ids(self, tenant_id, ids):
        return [self.rows[i] for i in ids if i in self.rows]


class StubKraalRepo:
    def __init__(self) -> None:
        self.rows: dict = {}

    async def add(self, kraal: Kraal) -> Kraal:
        self.rows[kraal.id] = kraal
        return kraal

    async def get(self, tenant_id, kraal_id):
        row = self.rows.get(kraal_id)
        return row if row and row.tenant_id == tenant_id else None

    async def find_by_name(self, tenant_id, name):
        for row in self.rows.values():
            if row.tenant_id == tenant_id and row.name.lower() == name.lower():
                return row
        return None

    async def list(self, tenant_id, *, offset, limit, search=None):
        rows = sorted(
            (k for k in self.rows.values() if k.tenant_id == tenant_id), key=lambda k: k.name
        )
        if search:
            rows = [k for k in rows if search.lower() in k.name.lower()]
        return rows[offset : offset + limit]

    async def count(self, tenant_id, *, search=None):
        return len(await self.list(tenant_id, offset=0, limit=len(self.rows), search=search))

    async def update(self, tenant_id, kraal_id, data):
        row = await self.get(tenant_id, kraal_id)
        if not row:
            return None
        updated = replace(row, **data)
        self.rows[kraal_id] = updated
        return updated

    async def delete(self, tenant_id, kraal_id):
        return self.rows.pop(kraal_id, None) is not None


class StubAssignmentRepo:
    def __init__(self) -> None:
        self.rows: list[CattleKraalAssignment] = []
        self.close_result: bool | None = None

    async def add(self, assignment: CattleKraalAssignment) -> CattleKraalAssignment:
        if any(a.cattle_id == assignment.cattle_id and a.is_open for a in self.rows):
            raise ConflictError("Cattle already has an open kraal assignment")
        self.rows.append(assignment)
        return assignment

    async def get_open(self, tenant_id, cattle_id):
        for row in self.rows:
            if row.cattle_id == cattle_id and row.is_open:
                return row
        return None

    async def close(self, tenant_id, assignment_id, end_date):
        if self.close_result is not None:
            return self.close_result
        for row in self.rows:
            if row.id == assignment_id and row.is_open:
                row.end_date = end_date
                return True
        return False

    async def list_for_cattle(self, tenant_id, cattle_id):
        return sorted(
            (a for a in self.rows if a.cattle_id == cattle_id), key=lambda a: a.start_date
        )

    async def list_open_cattle_ids(self, tenant_id, kraal_id, *, offset, limit):
        ids = [a.cattle_id for a in self.rows if a.kraal_id == kraal_id and a.is_open]
        return ids[offset : offset + limit]

    async def count_open_for_kraal(self, tenant_id, kraal_id):
        return sum(1 for a in self.rows if a.kraal_id == kraal_id and a.is_open)

    async def delete_for_kraal(self, tenant_id, kraal_id):
        before = len(self.rows)
        self.rows = [a for a in self.rows if a.kraal_id != kraal_id]
        return before - len(self.rows)


class StubLocationRepo:
    def __init__(self) -> None:
        self.rows: dict = {}

    async def get(self, tenant_id, location_id):
        return self.rows.get(location_id)


def make_uow():
    state = SimpleNamespace(commits=0, events=[])

    async def commit():
        state.commits += 1

    async def rollback():
        return None

    def add_event(event):
        state.events.append(event)

    def drain_events():
        evts, state.events = state.events, []
        return evts

    return SimpleNamespace(
        cattle=StubCattleRepo(),
        kraals=StubKraalRepo(),
        assignments=StubAssignmentRepo(),
        locations=StubLocationRepo(),
        state=state,
        commit=commit,
        rollback=rollback,
        add_event=add_event,
        drain_events=drain_events,
    )


@pytest.fixture()
def uow():
    return make_uow()


@pytest.fixture()
def tenant():
    return uuid4()


@pytest.fixture()
def actor():
    return uuid4()


@pytest.fixture()
def add_cattle(uow, tenant, actor):
    async def _add(name="Daisy", gender="Female", **kwargs):
        kwargs.setdefault("breed", "ANGUS")
        kwargs.setdefault("health_status", "Healthy")
        return await uow.cattle.add(
            Cattle.create(tenant_id=tenant, user_id=actor, gender=gender, name=name, **kwargs)
        )

    return _add


@pytest.fixture()
def add_kraal(uow, tenant, actor):
    async def _add(name="North", capacity=10):
        return await uow.kraals.add(
            Kraal.create(tenant_id=tenant, user_id=actor, name=name, capacity=capacity)
        )

    return _add
