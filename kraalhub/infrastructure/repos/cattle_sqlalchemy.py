from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from kraalhub.application.errors import ConflictError, StoreError
from kraalhub.application.interfaces.repositories.cattle import CattleRepository
from kraalhub.domain.models.cattle import Cattle
from kraalhub.domain.value_objects.parent_relation import ParentRelation
from kraalhub.infrastructure.db.orm.assignment import CattleKraalAssignmentORM
from kraalhub.infrastructure.db.orm.cattle import CattleORM
from kraalhub.utils.datetime_tz import ensure_utc

TAG_CONFLICT = "Cattle tag number already exists for tenant"


class CattleSQLAlchemyRepository(CattleRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: CattleORM) -> Cattle:
        return Cattle(
            id=orm.id,
            tenant_id=orm.tenant_id,
            user_id=orm.user_id,
            breed=orm.breed,
            gender=orm.gender,
            name=orm.name,
            tag_number=orm.tag_number,
            is_ox=bool(orm.is_ox),
            date_of_birth=orm.date_of_birth,
            health_status=orm.health_status,
            vaccination_records=orm.vaccination_records,
            main_image=orm.main_image,
            sire_id=orm.sire_id,
            dam_id=orm.dam_id,
            created_at=ensure_utc(orm.created_at),
            updated_at=ensure_utc(orm.updated_at),
        )

    def _parent_column(self, relation: str):
        if relation == ParentRelation.DAM.value:
            return CattleORM.dam_id
        if relation == ParentRelation.SIRE.value:
            return CattleORM.sire_id
        raise ValueError(f"Unknown parent relation: {relation}")

    async def add(self, cattle: Cattle) -> Cattle:
        orm = CattleORM(
            id=cattle.id,
            tenant_id=cattle.tenant_id,
            user_id=cattle.user_id,
            name=cattle.name,
            tag_number=cattle.tag_number,
            breed=cattle.breed,
            gender=cattle.gender,
            is_ox=cattle.is_ox,
            date_of_birth=cattle.date_of_birth,
            health_status=cattle.health_status,
            vaccination_records=cattle.vaccination_records,
            main_image=cattle.main_image,
            sire_id=cattle.sire_id,
            dam_id=cattle.dam_id,
            created_at=cattle.created_at,
            updated_at=cattle.updated_at,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError(
                TAG_CONFLICT,
                details={"field": "tag_number", "tag_number": cattle.tag_number},
            ) from exc
        except SQLAlchemyError as exc:
            raise StoreError("Failed to create cattle", details={"id": str(cattle.id)}) from exc
        return self._to_domain(orm)

    async def get(self, tenant_id: UUID, cattle_id: UUID) -> Cattle | None:
        stmt = select(CattleORM).where(
            CattleORM.tenant_id == tenant_id, CattleORM.id == cattle_id
        )
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def lock(self, tenant_id: UUID, cattle_id: UUID) -> bool:
        # FOR UPDATE is dropped by dialects without row locks (SQLite)
        stmt = (
            select(CattleORM.id)
            .where(CattleORM.tenant_id == tenant_id, CattleORM.id == cattle_id)
            .with_for_update()
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def update(self, tenant_id: UUID, cattle_id: UUID, data: dict) -> Cattle | None:
        stmt = select(CattleORM).where(
            CattleORM.tenant_id == tenant_id, CattleORM.id == cattle_id
        )
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
                TAG_CONFLICT, details={"field": "tag_number", "tag_number": data.get("tag_number")}
            ) from exc
        except SQLAlchemyError as exc:
            raise StoreError("Failed to update cattle", details={"id": str(cattle_id)}) from exc
        return self._to_domain(orm)

    async def delete(self, tenant_id: UUID, cattle_id: UUID) -> bool:
        try:
            # Offspring keep existing; their parent pointer is cleared
            for column in (CattleORM.sire_id, CattleORM.dam_id):
                await self.session.execute(
                    update(CattleORM)
                    .where(CattleORM.tenant_id == tenant_id, column == cattle_id)
                    .values({column.key: None})
                    .execution_options(synchronize_session="fetch")
                )
            await self.session.execute(
                delete(CattleKraalAssignmentORM)
                .where(
                    CattleKraalAssignmentORM.tenant_id == tenant_id,
                    CattleKraalAssignmentORM.cattle_id == cattle_id,
                )
                .execution_options(synchronize_session=False)
            )
            result = await self.session.execute(
                delete(CattleORM)
                .where(CattleORM.tenant_id == tenant_id, CattleORM.id == cattle_id)
                .returning(CattleORM.id)
            )
        except SQLAlchemyError as exc:
            raise StoreError("Failed to delete cattle", details={"id": str(cattle_id)}) from exc
        return result.scalar_one_or_none() is not None

    def _offspring_stmt(self, stmt, tenant_id: UUID, parent_id: UUID, relation: str, search):
        stmt = stmt.where(
            CattleORM.tenant_id == tenant_id, self._parent_column(relation) == parent_id
        )
        if search:
            # Search text is literal; % and _ do not act as wildcards
            stmt = stmt.where(CattleORM.name.icontains(search, autoescape=True))
        return stmt

    async def list_offspring(
        self,
        tenant_id: UUID,
        parent_id: UUID,
        *,
        relation: str,
        offset: int,
        limit: int,
        search: str | None = None,
    ) -> list[Cattle]:
        stmt = self._offspring_stmt(select(CattleORM), tenant_id, parent_id, relation, search)
        stmt = stmt.order_by(CattleORM.created_at, CattleORM.id).offset(offset).limit(limit)
        result = await self.session.execute(stmt)
        return [self._to_domain(row) for row in result.scalars().all()]

    async def count_offspring(
        self,
        tenant_id: UUID,
        parent_id: UUID,
        *,
        relation: str,
        search: str | None = None,
    ) -> int:
        stmt = self._offspring_stmt(
            select(func.count(CattleORM.id)), tenant_id, parent_id, relation, search
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def list_by_gender(self, tenant_id: UUID, gender: str) -> list[Cattle]:
        stmt = (
            select(CattleORM)
            .where(CattleORM.tenant_id == tenant_id, CattleORM.gender == gender)
            .order_by(CattleORM.name, CattleORM.id)
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(row) for row in result.scalars().all()]

    async def list_by_ids(self, tenant_id: UUID, cattle_ids: list[UUID]) -> list[Cattle]:
        if not cattle_ids:
            return []
        stmt = select(CattleORM).where(
            CattleORM.tenant_id == tenant_id, CattleORM.id.in_(cattle_ids)
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(row) for row in result.scalars().all()]
