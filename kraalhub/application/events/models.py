from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class CattleCreatedEvent:
    tenant_id: UUID
    actor_user_id: UUID
    cattle_id: UUID
    name: str | None = None
    kraal_id: UUID | None = None


@dataclass(frozen=True)
class CattleUpdatedEvent:
    tenant_id: UUID
    actor_user_id: UUID
    cattle_id: UUID
    name: str | None = None
    changed_fields: list[str] | None = None


@dataclass(frozen=True)
class CattleDeletedEvent:
    tenant_id: UUID
    actor_user_id: UUID
    cattle_id: UUID


@dataclass(frozen=True)
class CattleReassignedEvent:
    tenant_id: UUID
    actor_user_id: UUID
    cattle_id: UUID
    kraal_id: UUID
    previous_kraal_id: UUID | None = None


@dataclass(frozen=True)
class KraalCreatedEvent:
    tenant_id: UUID
    actor_user_id: UUID
    kraal_id: UUID
    name: str


@dataclass(frozen=True)
class KraalUpdatedEvent:
    tenant_id: UUID
    actor_user_id: UUID
    kraal_id: UUID
    name: str
    changed_fields: list[str] | None = None


@dataclass(frozen=True)
class KraalDeletedEvent:
    tenant_id: UUID
    actor_user_id: UUID
    kraal_id: UUID
