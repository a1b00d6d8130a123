from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from kraalhub.interfaces.http.schemas.cattle import CattleSummary


class KraalCreate(BaseModel):
    name: str
    description: str | None = None
    capacity: int = 0
    location_id: UUID | None = None


class KraalUpdate(BaseModel):
    name: str | None = None
    description: str | None = None
    capacity: int | None = None
    location_id: UUID | None = None


class KraalResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    description: str | None = None
    capacity: int
    location_id: UUID | None = None
    user_id: UUID
    created_at: datetime
    updated_at: datetime


class KraalDetailResponse(KraalResponse):
    occupancy: int
    available: int


class KraalsListResponse(BaseModel):
    items: list[KraalResponse]
    total: int
    page: int
    per_page: int
    total_pages: int


class KraalCattleResponse(BaseModel):
    kraal: KraalResponse
    items: list[CattleSummary]
    total: int
    page: int
    per_page: int
    total_pages: int
