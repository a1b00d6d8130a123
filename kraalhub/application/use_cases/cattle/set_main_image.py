from __future__ import annotations

from uuid import UUID

from kraalhub.application.errors import NotFound, PermissionDenied, ValidationError
from kraalhub.application.events.models import CattleUpdatedEvent
from kraalhub.application.interfaces.unit_of_work import UnitOfWork
from kraalhub.domain.models.cattle import Cattle
from kraalhub.domain.value_objects.role import Permission, Role


async def execute(
    uow: UnitOfWork,
    tenant_id: UUID,
    role: Role,
    actor_user_id: UUID,
    cattle_id: UUID,
    url: str,
) -> Cattle:
    if not role.allows(Permission.EDIT_HERD):
        raise PermissionDenied("Role not allowed to upload images")
    if not url.strip():
        raise ValidationError("Invalid image", details={"main_image": "URL is required"})
    updated = await uow.cattle.update(tenant_id, cattle_id, {"main_image": url.strip()})
    if not updated:
        raise NotFound("Cattle not found", details={"id": str(cattle_id)})
    uow.add_event(
        CattleUpdatedEvent(
            tenant_id=tenant_id,
            actor_user_id=actor_user_id,
            cattle_id=cattle_id,
            name=updated.name,
            changed_fields=["main_image"],
        )
    )
    await uow.commit()
    return updated
