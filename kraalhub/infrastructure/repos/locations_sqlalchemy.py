from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from kraalhub.application.errors import ConflictError
from kraalhub.application.interfaces.repositories.locations import LocationRepository
from kraalhub.domain.models.location import Location
from kraalhub.infrastructure.db.orm.location import LocationORM
from kraalhub.utils.datetime_tz import ensure_utc


class LocationsSQLAlchemyRepository(LocationRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: LocationORM) -> Location:
        return Location(
            id=orm.id,
            tenant_id=orm.tenant_id,
            name=orm.name,
            created_at=ensure_utc(orm.created_at),
        )

    async def add(self, location: Location) -> Location:
        orm = LocationORM(
            id=location.id,
            tenant_id=location.tenant_id,
            name=location.name,
            created_at=location.created_at,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError("Failed to create location") from exc
        return self._to_domain(orm)

    async def get(self, tenant_id: UUID, location_id: UUID) -> Location | None:
        stmt = select(LocationORM).where(
            LocationORM.tenant_id == tenant_id, LocationORM.id == location_id
        )
        res = await self.session.execute(stmt)
        orm = res.scalar_one_or_none()
        return self._to_domain(orm) if orm else None
