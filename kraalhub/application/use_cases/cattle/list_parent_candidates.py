from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from kraalhub.application.interfaces.unit_of_work import UnitOfWork
from kraalhub.domain.models.cattle import Cattle
from kraalhub.domain.value_objects.gender import Gender


@dataclass(slots=True)
class ParentCandidates:
    sires: list[Cattle]
    dams: list[Cattle]


async def execute(
    uow: UnitOfWork, tenant_id: UUID, *, exclude_id: UUID | None = None
) -> ParentCandidates:
    """Cattle eligible for the sire/dam pickers. Oxen are never offered as sires."""
    males = await uow.cattle.list_by_gender(tenant_id, Gender.MALE.value)
    females = await uow.cattle.list_by_gender(tenant_id, Gender.FEMALE.value)
    return ParentCandidates(
        sires=[c for c in males if not c.is_ox and c.id != exclude_id],
        dams=[c for c in females if c.id != exclude_id],
    )
