from __future__ import annotations

from uuid import UUID

from kraalhub.application.errors import PermissionDenied
from kraalhub.application.events.models import CattleReassignedEvent
from kraalhub.application.interfaces.unit_of_work import UnitOfWork
from kraalhub.application.use_cases.assignments import reconcile_assignment
from kraalhub.domain.value_objects.role import Permission, Role


def ensure_can_move(role: Role) -> None:
    if not role.allows(Permission.MOVE_CATTLE):
        raise PermissionDenied("Role not allowed to move cattle")


async def execute(
    uow: UnitOfWork,
    tenant_id: UUID,
    role: Role,
    actor_user_id: UUID,
    cattle_id: UUID,
    kraal_id: UUID,
) -> reconcile_assignment.ReconcileResult:
    ensure_can_move(role)
    result = await reconcile_assignment.execute(uow, tenant_id, cattle_id, kraal_id)
    if result.changed:
        uow.add_event(
            CattleReassignedEvent(
                tenant_id=tenant_id,
                actor_user_id=actor_user_id,
                cattle_id=cattle_id,
                kraal_id=kraal_id,
                previous_kraal_id=result.closed.kraal_id if result.closed else None,
            )
        )
        await uow.commit()
    return result
