from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, ForeignKey, Index, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from kraalhub.infrastructure.db.base import Base


class CattleKraalAssignmentORM(Base):
    __tablename__ = "cattle_kraal_assignments"
    __table_args__ = (
        Index("ix_cattle_kraal_assignments_cattle_id", "cattle_id"),
        Index("ix_cattle_kraal_assignments_kraal_id", "kraal_id"),
        # At most one open assignment per animal
        Index(
            "ux_cattle_kraal_assignments_open",
            "cattle_id",
            unique=True,
            postgresql_where=text("end_date IS NULL"),
            sqlite_where=text("end_date IS NULL"),
        ),
    )

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    tenant_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), nullable=False, index=True)
    cattle_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("cattle.id", ondelete="CASCADE"), nullable=False
    )
    kraal_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("kraals.id", ondelete="RESTRICT"), nullable=False
    )
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
