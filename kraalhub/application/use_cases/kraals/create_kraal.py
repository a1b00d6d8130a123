from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from kraalhub.application.errors import ConflictError, PermissionDenied, ValidationError
from kraalhub.application.events.models import KraalCreatedEvent
from kraalhub.application.interfaces.unit_of_work import UnitOfWork
from kraalhub.domain.models.kraal import Kraal
from kraalhub.domain.value_objects.role import Permission, Role


@dataclass(slots=True)
class CreateKraalInput:
    name: str
    description: str | None = None
    capacity: int = 0
    location_id: UUID | None = None


def ensure_can_create(role: Role) -> None:
    if not role.allows(Permission.EDIT_HERD):
        raise PermissionDenied("Role not allowed to create kraals")


async def validate_fields(
    uow: UnitOfWork,
    tenant_id: UUID,
    *,
    name: str | None,
    capacity: int | None,
    location_id: UUID | None,
) -> dict[str, str]:
    errors: dict[str, str] = {}
    if name is not None and len(name) < 2:
        errors["name"] = "Name is required"
    if capacity is not None and capacity < 0:
        errors["capacity"] = "Capacity cannot be negative"
    if location_id is not None and not await uow.locations.get(tenant_id, location_id):
        errors["location_id"] = "Location not found"
    return errors


async def execute(
    uow: UnitOfWork,
    tenant_id: UUID,
    role: Role,
    actor_user_id: UUID,
    payload: CreateKraalInput,
) -> Kraal:
    ensure_can_create(role)
    name = payload.name.strip()
    errors = await validate_fields(
        uow, tenant_id, name=name, capacity=payload.capacity, location_id=payload.location_id
    )
    if errors:
        raise ValidationError("Invalid kraal payload", details=errors)
    # Case-insensitive uniqueness on top of the store constraint
    if await uow.kraals.find_by_name(tenant_id, name):
        raise ConflictError(
            "Kraal name already exists for tenant",
            details={"field": "name", "name": name, "user_id": str(actor_user_id)},
        )
    description = payload.description.strip() if payload.description else None
    kraal = Kraal.create(
        tenant_id=tenant_id,
        user_id=actor_user_id,
        name=name,
        description=description or None,
        capacity=payload.capacity,
        location_id=payload.location_id,
    )
    created = await uow.kraals.add(kraal)
    uow.add_event(
        KraalCreatedEvent(
            tenant_id=tenant_id,
            actor_user_id=actor_user_id,
            kraal_id=created.id,
            name=created.name,
        )
    )
    await uow.commit()
    return created
