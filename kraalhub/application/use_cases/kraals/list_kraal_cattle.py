from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from kraalhub.application.errors import NotFound
from kraalhub.application.interfaces.unit_of_work import UnitOfWork
from kraalhub.application.pagination import DEFAULT_PER_PAGE, page_request, total_pages
from kraalhub.domain.models.cattle import Cattle
from kraalhub.domain.models.kraal import Kraal


@dataclass(slots=True)
class KraalCattleResult:
    kraal: Kraal
    items: list[Cattle]
    total: int
    page: int
    per_page: int
    total_pages: int


async def execute(
    uow: UnitOfWork,
    tenant_id: UUID,
    kraal_id: UUID,
    *,
    page: int | None = 1,
    per_page: int | None = None,
    default_per_page: int = DEFAULT_PER_PAGE,
) -> KraalCattleResult:
    """Cattle currently housed in a kraal (open assignments only)."""
    kraal = await uow.kraals.get(tenant_id, kraal_id)
    if not kraal:
        raise NotFound("Kraal not found", details={"id": str(kraal_id)})
    paging = page_request(page, per_page, default=default_per_page)
    cattle_ids = await uow.assignments.list_open_cattle_ids(
        tenant_id, kraal_id, offset=paging.offset, limit=paging.limit
    )
    rows = {c.id: c for c in await uow.cattle.list_by_ids(tenant_id, cattle_ids)}
    total = await uow.assignments.count_open_for_kraal(tenant_id, kraal_id)
    return KraalCattleResult(
        kraal=kraal,
        items=[rows[cid] for cid in cattle_ids if cid in rows],
        total=total,
        page=paging.page,
        per_page=paging.per_page,
        total_pages=total_pages(total, paging.per_page),
    )
