from __future__ import annotations

from uuid import UUID

from kraalhub.application.errors import NotFound, PermissionDenied
from kraalhub.application.events.models import CattleDeletedEvent
from kraalhub.application.interfaces.unit_of_work import UnitOfWork
from kraalhub.domain.value_objects.role import Permission, Role


def ensure_can_delete(role: Role) -> None:
    if not role.allows(Permission.REMOVE_RECORDS):
        raise PermissionDenied("Role not allowed to delete cattle")


async def execute(
    uow: UnitOfWork, tenant_id: UUID, role: Role, actor_user_id: UUID, cattle_id: UUID
) -> None:
    ensure_can_delete(role)
    deleted = await uow.cattle.delete(tenant_id, cattle_id)
    if not deleted:
        raise NotFound("Cattle not found", details={"id": str(cattle_id)})
    uow.add_event(
        CattleDeletedEvent(tenant_id=tenant_id, actor_user_id=actor_user_id, cattle_id=cattle_id)
    )
    await uow.commit()
