from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    ForeignKey,
    Index,
    String,
    Text,
    UniqueConstraint,
    Uuid,
    false,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from kraalhub.infrastructure.db.base import Base


class CattleORM(Base):
    __tablename__ = "cattle"
    __table_args__ = (
        UniqueConstraint("tenant_id", "tag_number", name="ux_cattle_tenant_tag_number"),
        Index("ix_cattle_sire_id", "sire_id"),
        Index("ix_cattle_dam_id", "dam_id"),
    )

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    tenant_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), nullable=False, index=True)
    user_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), nullable=False)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    tag_number: Mapped[str | None] = mapped_column(String(128), nullable=True)
    breed: Mapped[str] = mapped_column(String(32), nullable=False)
    gender: Mapped[str] = mapped_column(String(6), nullable=False)
    is_ox: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=false())
    date_of_birth: Mapped[date | None] = mapped_column(Date, nullable=True)
    health_status: Mapped[str | None] = mapped_column(String(32), nullable=True)
    vaccination_records: Mapped[str | None] = mapped_column(Text, nullable=True)
    main_image: Mapped[str | None] = mapped_column(String(1024), nullable=True)

    # Pedigree
    sire_id: Mapped[UUID | None] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("cattle.id", ondelete="SET NULL"), nullable=True
    )
    dam_id: Mapped[UUID | None] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("cattle.id", ondelete="SET NULL"), nullable=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
