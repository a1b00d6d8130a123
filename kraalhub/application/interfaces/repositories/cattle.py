from __future__ import annotations

from typing import Protocol
from uuid import UUID

from kraalhub.domain.models.cattle import Cattle


class CattleRepository(Protocol):
    async def add(self, cattle: Cattle) -> Cattle: ...

    async def get(self, tenant_id: UUID, cattle_id: UUID) -> Cattle | None: ...

    async def lock(self, tenant_id: UUID, cattle_id: UUID) -> bool: ...

    async def update(self, tenant_id: UUID, cattle_id: UUID, data: dict) -> Cattle | None: ...

    async def delete(self, tenant_id: UUID, cattle_id: UUID) -> bool: ...

    async def list_offspring(
        self,
        tenant_id: UUID,
        parent_id: UUID,
        *,
        relation: str,
        offset: int,
        limit: int,
        search: str | None = None,
    ) -> list[Cattle]: ...

    async def count_offspring(
        self,
        tenant_id: UUID,
        parent_id: UUID,
        *,
        relation: str,
        search: str | None = None,
    ) -> int: ...

    async def list_by_gender(self, tenant_id: UUID, gender: str) -> list[Cattle]: ...

    async def list_by_ids(self, tenant_id: UUID, cattle_ids: list[UUID]) -> list[Cattle]: ...
