from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID, uuid4


@dataclass(slots=True)
class Kraal:
    id: UUID
    tenant_id: UUID
    user_id: UUID
    name: str
    description: str | None = None
    capacity: int = 0
    location_id: UUID | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        tenant_id: UUID,
        user_id: UUID,
        name: str,
        *,
        description: str | None = None,
        capacity: int = 0,
        location_id: UUID | None = None,
    ) -> Kraal:
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            tenant_id=tenant_id,
            user_id=user_id,
            name=name,
            description=description,
            capacity=capacity,
            location_id=location_id,
            created_at=now,
            updated_at=now,
        )
