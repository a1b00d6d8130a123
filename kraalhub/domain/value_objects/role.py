from __future__ import annotations

from enum import Enum


class Permission(str, Enum):
    EDIT_HERD = "edit_herd"  # register and edit kraals and cattle
    MOVE_CATTLE = "move_cattle"
    REMOVE_RECORDS = "remove_records"


class Role(str, Enum):
    """Tenant membership role.

    Every role may read; writes are granted per permission.
    """

    ADMIN = "ADMIN"
    MANAGER = "MANAGER"
    WORKER = "WORKER"

    def allows(self, permission: Permission) -> bool:
        return permission in GRANTS[self]


GRANTS: dict[Role, frozenset[Permission]] = {
    Role.ADMIN: frozenset(Permission),
    Role.MANAGER: frozenset({Permission.EDIT_HERD, Permission.MOVE_CATTLE}),
    Role.WORKER: frozenset(),
}
