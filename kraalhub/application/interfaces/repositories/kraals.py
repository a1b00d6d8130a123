from __future__ import annotations

from typing import Protocol
from uuid import UUID

from kraalhub.domain.models.kraal import Kraal


class KraalRepository(Protocol):
    async def add(self, kraal: Kraal) -> Kraal: ...

    async def get(self, tenant_id: UUID, kraal_id: UUID) -> Kraal | None: ...

    async def find_by_name(self, tenant_id: UUID, name: str) -> Kraal | None: ...

    async def list(
        self,
        tenant_id: UUID,
        *,
        offset: int,
        limit: int,
        search: str | None = None,
    ) -> list[Kraal]: ...

    async def count(self, tenant_id: UUID, *, search: str | None = None) -> int: ...

    async def update(self, tenant_id: UUID, kraal_id: UUID, data: dict) -> Kraal | None: ...

    async def delete(self, tenant_id: UUID, kraal_id: UUID) -> bool: ...
