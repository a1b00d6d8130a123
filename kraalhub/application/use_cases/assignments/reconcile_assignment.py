from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import UUID

from kraalhub.application.errors import ConflictError, NotFound
from kraalhub.application.interfaces.unit_of_work import UnitOfWork
from kraalhub.domain.models.assignment import CattleKraalAssignment


@dataclass(slots=True)
class ReconcileResult:
    changed: bool
    opened: CattleKraalAssignment | None = None
    closed: CattleKraalAssignment | None = None


async def execute(
    uow: UnitOfWork,
    tenant_id: UUID,
    cattle_id: UUID,
    kraal_id: UUID | None,
    *,
    now: datetime | None = None,
) -> ReconcileResult:
    """Make ``kraal_id`` the cattle's only open assignment.

    Runs inside the caller's unit of work and does not commit. Any failure
    must be followed by a rollback so a close without its matching open is
    never persisted.
    """
    if kraal_id is None:
        return ReconcileResult(changed=False)
    if not await uow.cattle.lock(tenant_id, cattle_id):
        raise NotFound("Cattle not found", details={"id": str(cattle_id)})
    kraal = await uow.kraals.get(tenant_id, kraal_id)
    if not kraal:
        raise NotFound("Kraal not found", details={"id": str(kraal_id), "field": "kraal_id"})

    current = await uow.assignments.get_open(tenant_id, cattle_id)
    if current is not None and current.kraal_id == kraal_id:
        return ReconcileResult(changed=False)

    now = now or datetime.now(timezone.utc)
    closed = None
    if current is not None:
        if not await uow.assignments.close(tenant_id, current.id, now):
            raise ConflictError(
                "Kraal assignment was changed concurrently",
                details={"id": str(cattle_id), "assignment_id": str(current.id)},
            )
        current.end_date = now
        closed = current

    opened = await uow.assignments.add(
        CattleKraalAssignment.open(tenant_id, cattle_id, kraal_id, start_date=now)
    )
    return ReconcileResult(changed=True, opened=opened, closed=closed)
