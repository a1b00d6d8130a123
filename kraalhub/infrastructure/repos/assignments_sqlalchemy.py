from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from kraalhub.application.errors import ConflictError, StoreError
from kraalhub.application.interfaces.repositories.assignments import AssignmentRepository
from kraalhub.domain.models.assignment import CattleKraalAssignment
from kraalhub.infrastructure.db.orm.assignment import CattleKraalAssignmentORM
from kraalhub.utils.datetime_tz import ensure_utc, ensure_utc_or_none

Row = CattleKraalAssignmentORM


class AssignmentsSQLAlchemyRepository(AssignmentRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: CattleKraalAssignmentORM) -> CattleKraalAssignment:
        return CattleKraalAssignment(
            id=orm.id,
            tenant_id=orm.tenant_id,
            cattle_id=orm.cattle_id,
            kraal_id=orm.kraal_id,
            start_date=ensure_utc(orm.start_date),
            end_date=ensure_utc_or_none(orm.end_date),
        )

    async def add(self, assignment: CattleKraalAssignment) -> CattleKraalAssignment:
        orm = CattleKraalAssignmentORM(
            id=assignment.id,
            tenant_id=assignment.tenant_id,
            cattle_id=assignment.cattle_id,
            kraal_id=assignment.kraal_id,
            start_date=assignment.start_date,
            end_date=assignment.end_date,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError(
                "Cattle already has an open kraal assignment",
                details={"id": str(assignment.cattle_id), "field": "kraal_id"},
            ) from exc
        except SQLAlchemyError as exc:
            raise StoreError(
                "Failed to create kraal assignment", details={"id": str(assignment.cattle_id)}
            ) from exc
        return self._to_domain(orm)

    async def get_open(self, tenant_id: UUID, cattle_id: UUID) -> CattleKraalAssignment | None:
        stmt = select(Row).where(
            Row.tenant_id == tenant_id, Row.cattle_id == cattle_id, Row.end_date.is_(None)
        )
        res = await self.session.execute(stmt)
        orm = res.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def close(self, tenant_id: UUID, assignment_id: UUID, end_date: datetime) -> bool:
        # Only an assignment that is still open can be closed
        stmt = (
            update(Row)
            .where(Row.tenant_id == tenant_id, Row.id == assignment_id, Row.end_date.is_(None))
            .values(end_date=end_date)
            .returning(Row.id)
            .execution_options(synchronize_session="fetch")
        )
        try:
            res = await self.session.execute(stmt)
        except SQLAlchemyError as exc:
            raise StoreError(
                "Failed to close kraal assignment", details={"assignment_id": str(assignment_id)}
            ) from exc
        return res.scalar_one_or_none() is not None

    async def list_for_cattle(
        self, tenant_id: UUID, cattle_id: UUID
    ) -> list[CattleKraalAssignment]:
        stmt = (
            select(Row)
            .where(Row.tenant_id == tenant_id, Row.cattle_id == cattle_id)
            .order_by(Row.start_date, Row.id)
        )
        res = await self.session.execute(stmt)
        return [self._to_domain(x) for x in res.scalars().all()]

    async def list_open_cattle_ids(
        self, tenant_id: UUID, kraal_id: UUID, *, offset: int, limit: int
    ) -> list[UUID]:
        stmt = (
            select(Row.cattle_id)
            .where(Row.tenant_id == tenant_id, Row.kraal_id == kraal_id, Row.end_date.is_(None))
            .order_by(Row.start_date, Row.id)
            .offset(offset)
            .limit(limit)
        )
        res = await self.session.execute(stmt)
        return list(res.scalars().all())

    async def count_open_for_kraal(self, tenant_id: UUID, kraal_id: UUID) -> int:
        stmt = select(func.count(Row.id)).where(
            Row.tenant_id == tenant_id, Row.kraal_id == kraal_id, Row.end_date.is_(None)
        )
        res = await self.session.execute(stmt)
        return res.scalar() or 0

    async def delete_for_kraal(self, tenant_id: UUID, kraal_id: UUID) -> int:
        stmt = (
            delete(Row)
            .where(Row.tenant_id == tenant_id, Row.kraal_id == kraal_id)
            .execution_options(synchronize_session=False)
        )
        try:
            res = await self.session.execute(stmt)
        except SQLAlchemyError as exc:
            raise StoreError(
                "Failed to delete kraal history", details={"id": str(kraal_id)}
            ) from exc
        return res.rowcount or 0
