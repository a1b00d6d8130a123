from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from kraalhub.application.errors import NotFound
from kraalhub.application.interfaces.unit_of_work import UnitOfWork
from kraalhub.application.pagination import DEFAULT_PER_PAGE, page_request
from kraalhub.domain.models.assignment import current_kraal_id
from kraalhub.domain.models.cattle import Cattle
from kraalhub.domain.value_objects.parent_relation import ParentRelation


@dataclass(slots=True)
class CattleView:
    cattle: Cattle
    sire: Cattle | None
    dam: Cattle | None
    offspring_as_dam: list[Cattle]
    offspring_as_sire: list[Cattle]
    age: int | None
    # Offspring on this page only; see offspring_*_total for full counts.
    total_children: int
    offspring_as_dam_total: int
    offspring_as_sire_total: int
    kraal_id: UUID | None
    page: int
    per_page: int


async def execute(
    uow: UnitOfWork,
    tenant_id: UUID,
    cattle_id: UUID,
    *,
    page: int | None = 1,
    per_page: int | None = None,
    default_per_page: int = DEFAULT_PER_PAGE,
    search: str | None = None,
    today: date | None = None,
) -> CattleView:
    cattle = await uow.cattle.get(tenant_id, cattle_id)
    if not cattle:
        raise NotFound("Cattle not found", details={"id": str(cattle_id)})

    paging = page_request(page, per_page, default=default_per_page)
    search = search.strip() if search and search.strip() else None

    sire = await uow.cattle.get(tenant_id, cattle.sire_id) if cattle.sire_id else None
    dam = await uow.cattle.get(tenant_id, cattle.dam_id) if cattle.dam_id else None

    offspring: dict[ParentRelation, list[Cattle]] = {}
    totals: dict[ParentRelation, int] = {}
    for relation in (ParentRelation.DAM, ParentRelation.SIRE):
        offspring[relation] = await uow.cattle.list_offspring(
            tenant_id,
            cattle_id,
            relation=relation.value,
            offset=paging.offset,
            limit=paging.limit,
            search=search,
        )
        totals[relation] = await uow.cattle.count_offspring(
            tenant_id, cattle_id, relation=relation.value, search=search
        )

    assignments = await uow.assignments.list_for_cattle(tenant_id, cattle_id)
    return CattleView(
        cattle=cattle,
        sire=sire,
        dam=dam,
        offspring_as_dam=offspring[ParentRelation.DAM],
        offspring_as_sire=offspring[ParentRelation.SIRE],
        age=cattle.age_on(today or date.today()),
        total_children=len(offspring[ParentRelation.DAM]) + len(offspring[ParentRelation.SIRE]),
        offspring_as_dam_total=totals[ParentRelation.DAM],
        offspring_as_sire_total=totals[ParentRelation.SIRE],
        kraal_id=current_kraal_id(assignments),
        page=paging.page,
        per_page=paging.per_page,
    )
