from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from uuid import UUID, uuid4


@dataclass(slots=True)
class Cattle:
    id: UUID
    tenant_id: UUID
    user_id: UUID
    breed: str  # Breed
    gender: str  # Gender
    name: str | None = None
    tag_number: str | None = None
    is_ox: bool = False
    date_of_birth: date | None = None
    health_status: str | None = None  # HealthStatus
    vaccination_records: str | None = None
    main_image: str | None = None

    # Pedigree
    sire_id: UUID | None = None
    dam_id: UUID | None = None

    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        tenant_id: UUID,
        user_id: UUID,
        breed: str,
        gender: str,
        name: str | None = None,
        tag_number: str | None = None,
        is_ox: bool = False,
        date_of_birth: date | None = None,
        health_status: str | None = None,
        vaccination_records: str | None = None,
        main_image: str | None = None,
        sire_id: UUID | None = None,
        dam_id: UUID | None = None,
    ) -> Cattle:
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            tenant_id=tenant_id,
            user_id=user_id,
            breed=breed,
            gender=gender,
            name=name,
            tag_number=tag_number,
            is_ox=is_ox,
            date_of_birth=date_of_birth,
            health_status=health_status,
            vaccination_records=vaccination_records,
            main_image=main_image,
            sire_id=sire_id,
            dam_id=dam_id,
            created_at=now,
            updated_at=now,
        )

    def age_on(self, today: date) -> int | None:
        """Calendar-year age: the birth month and day are ignored."""
        if self.date_of_birth is None:
            return None
        return today.year - self.date_of_birth.year
