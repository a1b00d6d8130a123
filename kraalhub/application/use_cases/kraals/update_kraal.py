from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from kraalhub.application.errors import ConflictError, NotFound, PermissionDenied, ValidationError
from kraalhub.application.events.models import KraalUpdatedEvent
from kraalhub.application.interfaces.unit_of_work import UnitOfWork
from kraalhub.application.use_cases.kraals.create_kraal import validate_fields
from kraalhub.domain.models.kraal import Kraal
from kraalhub.domain.value_objects.role import Permission, Role


@dataclass(slots=True)
class UpdateKraalInput:
    name: str | None = None
    description: str | None = None
    capacity: int | None = None
    location_id: UUID | None = None


def ensure_can_update(role: Role) -> None:
    if not role.allows(Permission.EDIT_HERD):
        raise PermissionDenied("Role not allowed to update kraals")


async def execute(
    uow: UnitOfWork,
    tenant_id: UUID,
    role: Role,
    actor_user_id: UUID,
    kraal_id: UUID,
    payload: UpdateKraalInput,
) -> Kraal:
    ensure_can_update(role)
    existing = await uow.kraals.get(tenant_id, kraal_id)
    if not existing:
        raise NotFound("Kraal not found", details={"id": str(kraal_id)})

    name = payload.name.strip() if payload.name is not None else None
    errors = await validate_fields(
        uow, tenant_id, name=name, capacity=payload.capacity, location_id=payload.location_id
    )
    if errors:
        raise ValidationError("Invalid kraal payload", details=errors)

    data: dict = {}
    if name is not None and name != existing.name:
        clash = await uow.kraals.find_by_name(tenant_id, name)
        if clash and clash.id != kraal_id:
            raise ConflictError(
                "Kraal name already exists for tenant",
                details={"field": "name", "id": str(kraal_id), "user_id": str(actor_user_id)},
            )
        data["name"] = name
    if payload.description is not None:
        # Blank description clears it
        data["description"] = payload.description.strip() or None
    if payload.capacity is not None:
        data["capacity"] = payload.capacity
    if payload.location_id is not None:
        data["location_id"] = payload.location_id
    if not data:
        return existing

    try:
        updated = await uow.kraals.update(tenant_id, kraal_id, data)
    except ConflictError as exc:
        raise ConflictError(
            exc.message,
            details={**(exc.details or {}), "id": str(kraal_id), "user_id": str(actor_user_id)},
        ) from exc
    if not updated:
        raise NotFound("Kraal not found", details={"id": str(kraal_id)})
    uow.add_event(
        KraalUpdatedEvent(
            tenant_id=tenant_id,
            actor_user_id=actor_user_id,
            kraal_id=kraal_id,
            name=updated.name,
            changed_fields=list(data.keys()),
        )
    )
    await uow.commit()
    return updated
