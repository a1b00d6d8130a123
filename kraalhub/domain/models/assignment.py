from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import UUID, uuid4


@dataclass(slots=True)
class CattleKraalAssignment:
    """Occupancy of one kraal by one animal. ``end_date`` is None while open."""

    id: UUID
    tenant_id: UUID
    cattle_id: UUID
    kraal_id: UUID
    start_date: datetime
    end_date: datetime | None = None

    @classmethod
    def open(
        cls,
        tenant_id: UUID,
        cattle_id: UUID,
        kraal_id: UUID,
        *,
        start_date: datetime | None = None,
    ) -> CattleKraalAssignment:
        return cls(
            id=uuid4(),
            tenant_id=tenant_id,
            cattle_id=cattle_id,
            kraal_id=kraal_id,
            start_date=start_date or datetime.now(timezone.utc),
            end_date=None,
        )

    @property
    def is_open(self) -> bool:
        return self.end_date is None


def current_kraal_id(assignments: list[CattleKraalAssignment]) -> UUID | None:
    for assignment in assignments:
        if assignment.is_open:
            return assignment.kraal_id
    return None
