from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import delete, func, or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from kraalhub.application.errors import ConflictError, StoreError
from kraalhub.application.interfaces.repositories.kraals import KraalRepository
from kraalhub.domain.models.kraal import Kraal
from kraalhub.infrastructure.db.orm.kraal import KraalORM
from kraalhub.utils.datetime_tz import ensure_utc


class KraalsSQLAlchemyRepository(KraalRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: KraalORM) -> Kraal:
        return Kraal(
            id=orm.id,
            tenant_id=orm.tenant_id,
            user_id=orm.user_id,
            name=orm.name,
            description=orm.description,
            capacity=orm.capacity,
            location_id=orm.location_id,
            created_at=ensure_utc(orm.created_at),
            updated_at=ensure_utc(orm.updated_at),
        )

    async def add(self, kraal: Kraal) -> Kraal:
        orm = KraalORM(
            id=kraal.id,
            tenant_id=kraal.tenant_id,
            user_id=kraal.user_id,
            name=kraal.name,
            description=kraal.description,
            capacity=kraal.capacity,
            location_id=kraal.location_id,
            created_at=kraal.created_at,
            updated_at=kraal.updated_at,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError(
                "Kraal name already exists for tenant", details={"field": "name"}
            ) from exc
        except SQLAlchemyError as exc:
            raise StoreError("Failed to create kraal", details={"id": str(kraal.id)}) from exc
        return self._to_domain(orm)

    async def get(self, tenant_id: UUID, kraal_id: UUID) -> Kraal | None:
        stmt = select(KraalORM).where(KraalORM.tenant_id == tenant_id, KraalORM.id == kraal_id)
        res = await self.session.execute(stmt)
        orm = res.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def find_by_name(self, tenant_id: UUID, name: str) -> Kraal | None:
        stmt = select(KraalORM).where(
            KraalORM.tenant_id == tenant_id, func.lower(KraalORM.name) == name.lower()
        )
        res = await self.session.execute(stmt)
        orm = res.scalars().first()
        return self._to_domain(orm) if orm else None

    def _filtered(self, stmt, tenant_id: UUID, search: str | None):
        stmt = stmt.where(KraalORM.tenant_id == tenant_id)
        if search:
            stmt = stmt.where(
                or_(
                    KraalORM.name.icontains(search, autoescape=True),
                    KraalORM.description.icontains(search, autoescape=True),
                )
            )
        return stmt

    async def list(
        self,
        tenant_id: UUID,
        *,
        offset: int,
        limit: int,
        search: str | None = None,
    ) -> list[Kraal]:
        stmt = self._filtered(select(KraalORM), tenant_id, search)
        stmt = stmt.order_by(KraalORM.name, KraalORM.id).offset(offset).limit(limit)
        res = await self.session.execute(stmt)
        return [self._to_domain(x) for x in res.scalars().all()]

    async def count(self, tenant_id: UUID, *, search: str | None = None) -> int:
        stmt = self._filtered(select(func.count(KraalORM.id)), tenant_id, search)
        res = await self.session.execute(stmt)
        return res.scalar() or 0

    async def update(self, tenant_id: UUID, kraal_id: UUID, data: dict) -> Kraal | None:
        stmt = select(KraalORM).where(KraalORM.tenant_id == tenant_id, KraalORM.id == kraal_id)
        orm = (await self.session.execute(stmt)).scalar_one_or_none()
        if not orm:
            return None
        for key, value in data.items():
            setattr(orm, key, value)
        orm.updated_at = datetime.now(timezone.utc)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError(
                "Kraal name already exists for tenant", details={"field": "name"}
            ) from exc
        except SQLAlchemyError as exc:
            raise StoreError("Failed to update kraal", details={"id": str(kraal_id)}) from exc
        return self._to_domain(orm)

    async def delete(self, tenant_id: UUID, kraal_id: UUID) -> bool:
        stmt = (
            delete(KraalORM)
            .where(KraalORM.tenant_id == tenant_id, KraalORM.id == kraal_id)
            .returning(KraalORM.id)
        )
        try:
            res = await self.session.execute(stmt)
        except IntegrityError as exc:
            raise ConflictError(
                "Kraal is still referenced by assignments", details={"id": str(kraal_id)}
            ) from exc
        except SQLAlchemyError as exc:
            raise StoreError("Failed to delete kraal", details={"id": str(kraal_id)}) from exc
        return res.scalar_one_or_none() is not None
