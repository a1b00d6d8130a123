from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from kraalhub.domain.value_objects.breed import Breed
from kraalhub.domain.value_objects.gender import Gender
from kraalhub.domain.value_objects.health_status import HealthStatus


class CattleCreate(BaseModel):
    name: str
    breed: Breed
    gender: Gender
    health_status: HealthStatus
    tag_number: str | None = None
    is_ox: bool = False
    date_of_birth: date | None = None
    vaccination_records: str | None = None
    main_image: str | None = None
    sire_id: UUID | None = None
    dam_id: UUID | None = None
    kraal_id: UUID | None = None


class CattleUpdate(BaseModel):
    # Omitted or null fields are left untouched; "" clears optional text fields
    name: str | None = None
    breed: Breed | None = None
    gender: Gender | None = None
    health_status: HealthStatus | None = None
    tag_number: str | None = None
    is_ox: bool | None = None
    date_of_birth: date | None = None
    vaccination_records: str | None = None
    main_image: str | None = None
    sire_id: UUID | None = None
    dam_id: UUID | None = None
    kraal_id: UUID | None = None


class CattleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str | None = None
    tag_number: str | None = None
    breed: str
    gender: str
    is_ox: bool = False
    date_of_birth: date | None = None
    health_status: str | None = None
    vaccination_records: str | None = None
    main_image: str | None = None
    sire_id: UUID | None = None
    dam_id: UUID | None = None
    user_id: UUID
    created_at: datetime
    updated_at: datetime


class CattleSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str | None = None
    tag_number: str | None = None
    breed: str
    gender: str
    date_of_birth: date | None = None
    main_image: str | None = None


class CattleDetailResponse(CattleResponse):
    sire: CattleSummary | None = None
    dam: CattleSummary | None = None
    offspring_as_dam: list[CattleSummary]
    offspring_as_sire: list[CattleSummary]
    age: int | None = None
    total_children: int
    offspring_as_dam_total: int
    offspring_as_sire_total: int
    kraal_id: UUID | None = None
    page: int
    per_page: int


class ParentCandidatesResponse(BaseModel):
    sires: list[CattleSummary]
    dams: list[CattleSummary]


class AssignmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    cattle_id: UUID
    kraal_id: UUID
    start_date: datetime
    end_date: datetime | None = None


class SetKraalRequest(BaseModel):
    kraal_id: UUID


class SetKraalResponse(BaseModel):
    changed: bool
    kraal_id: UUID
    previous_kraal_id: UUID | None = None


class PresignImageRequest(BaseModel):
    content_type: str


class PresignImageResponse(BaseModel):
    upload_url: str
    storage_key: str
    fields: dict[str, str] | None = None


class ConfirmImageRequest(BaseModel):
    storage_key: str
