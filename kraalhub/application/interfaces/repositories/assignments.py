from __future__ import annotations

from datetime import datetime
from typing import Protocol
from uuid import UUID

from kraalhub.domain.models.assignment import CattleKraalAssignment


class AssignmentRepository(Protocol):
    async def add(self, assignment: CattleKraalAssignment) -> CattleKraalAssignment: ...

    async def get_open(self, tenant_id: UUID, cattle_id: UUID) -> CattleKraalAssignment | None: ...

    async def close(self, tenant_id: UUID, assignment_id: UUID, end_date: datetime) -> bool: ...

    async def list_for_cattle(
        self, tenant_id: UUID, cattle_id: UUID
    ) -> list[CattleKraalAssignment]: ...

    async def list_open_cattle_ids(
        self, tenant_id: UUID, kraal_id: UUID, *, offset: int, limit: int
    ) -> list[UUID]: ...

    async def count_open_for_kraal(self, tenant_id: UUID, kraal_id: UUID) -> int: ...

    async def delete_for_kraal(self, tenant_id: UUID, kraal_id: UUID) -> int: ...
