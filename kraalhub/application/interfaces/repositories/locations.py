from __future__ import annotations

from typing import Protocol
from uuid import UUID

from kraalhub.domain.models.location import Location


class LocationRepository(Protocol):
    async def add(self, location: Location) -> Location: ...

    async def get(self, tenant_id: UUID, location_id: UUID) -> Location | None: ...
