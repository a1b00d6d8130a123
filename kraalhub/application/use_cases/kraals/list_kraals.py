from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from kraalhub.application.interfaces.unit_of_work import UnitOfWork
from kraalhub.application.pagination import DEFAULT_PER_PAGE, page_request, total_pages
from kraalhub.domain.models.kraal import Kraal


@dataclass(slots=True)
class ListKraalsResult:
    items: list[Kraal]
    total: int
    page: int
    per_page: int
    total_pages: int


async def execute(
    uow: UnitOfWork,
    tenant_id: UUID,
    *,
    page: int | None = 1,
    per_page: int | None = None,
    default_per_page: int = DEFAULT_PER_PAGE,
    search: str | None = None,
) -> ListKraalsResult:
    paging = page_request(page, per_page, default=default_per_page)
    search = search.strip() if search and search.strip() else None
    items = await uow.kraals.list(
        tenant_id, offset=paging.offset, limit=paging.limit, search=search
    )
    total = await uow.kraals.count(tenant_id, search=search)
    return ListKraalsResult(
        items=items,
        total=total,
        page=paging.page,
        per_page=paging.per_page,
        total_pages=total_pages(total, paging.per_page),
    )
