from __future__ import annotations

from uuid import UUID

from kraalhub.application.errors import NotFound
from kraalhub.application.interfaces.unit_of_work import UnitOfWork
from kraalhub.domain.models.assignment import CattleKraalAssignment


async def execute(
    uow: UnitOfWork, tenant_id: UUID, cattle_id: UUID
) -> list[CattleKraalAssignment]:
    cattle = await uow.cattle.get(tenant_id, cattle_id)
    if not cattle:
        raise NotFound("Cattle not found", details={"id": str(cattle_id)})
    return await uow.assignments.list_for_cattle(tenant_id, cattle_id)
