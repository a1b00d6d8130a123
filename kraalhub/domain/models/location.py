from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID, uuid4


@dataclass(slots=True)
class Location:
    id: UUID
    tenant_id: UUID
    name: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(cls, tenant_id: UUID, name: str) -> Location:
        return cls(id=uuid4(), tenant_id=tenant_id, name=name)
