from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from kraalhub.application.errors import NotFound
from kraalhub.application.interfaces.unit_of_work import UnitOfWork
from kraalhub.domain.models.kraal import Kraal


@dataclass(slots=True)
class KraalView:
    kraal: Kraal
    occupancy: int

    @property
    def available(self) -> int:
        return max(self.kraal.capacity - self.occupancy, 0)


async def execute(uow: UnitOfWork, tenant_id: UUID, kraal_id: UUID) -> KraalView:
    kraal = await uow.kraals.get(tenant_id, kraal_id)
    if not kraal:
        raise NotFound("Kraal not found", details={"id": str(kraal_id)})
    occupancy = await uow.assignments.count_open_for_kraal(tenant_id, kraal_id)
    return KraalView(kraal=kraal, occupancy=occupancy)
