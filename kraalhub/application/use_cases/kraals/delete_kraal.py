from __future__ import annotations

from uuid import UUID

from kraalhub.application.errors import ConflictError, NotFound, PermissionDenied
from kraalhub.application.events.models import KraalDeletedEvent
from kraalhub.application.interfaces.unit_of_work import UnitOfWork
from kraalhub.domain.value_objects.role import Permission, Role


def ensure_can_delete(role: Role) -> None:
    if not role.allows(Permission.REMOVE_RECORDS):
        raise PermissionDenied("Role not allowed to delete kraals")


async def execute(
    uow: UnitOfWork, tenant_id: UUID, role: Role, actor_user_id: UUID, kraal_id: UUID
) -> None:
    ensure_can_delete(role)
    existing = await uow.kraals.get(tenant_id, kraal_id)
    if not existing:
        raise NotFound("Kraal not found", details={"id": str(kraal_id)})
    occupied = await uow.assignments.count_open_for_kraal(tenant_id, kraal_id)
    if occupied > 0:
        raise ConflictError(
            "Kraal has cattle assigned; move them first",
            details={"id": str(kraal_id), "occupancy": occupied},
        )
    # Closed history has nothing left to point at once the kraal is gone
    await uow.assignments.delete_for_kraal(tenant_id, kraal_id)
    if not await uow.kraals.delete(tenant_id, kraal_id):
        raise NotFound("Kraal not found", details={"id": str(kraal_id)})
    uow.add_event(
        KraalDeletedEvent(tenant_id=tenant_id, actor_user_id=actor_user_id, kraal_id=kraal_id)
    )
    await uow.commit()
