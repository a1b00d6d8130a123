from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from kraalhub.application.errors import PermissionDenied
from kraalhub.domain.value_objects.role import Role
from kraalhub.infrastructure.db.orm.membership import MembershipORM


@dataclass(slots=True, frozen=True)
class AuthContext:
    """Who is calling and which tenant's herd they act on."""

    user_id: UUID
    tenant_id: UUID
    role: Role


async def resolve_context(session: AsyncSession, user_id: UUID, tenant_id: UUID) -> AuthContext:
    membership = await session.get(MembershipORM, (user_id, tenant_id))
    if membership is None:
        raise PermissionDenied("User does not belong to tenant")
    return AuthContext(user_id=user_id, tenant_id=tenant_id, role=Role(membership.role))
