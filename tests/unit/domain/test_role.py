from __future__ import annotations

import pytest

from kraalhub.domain.value_objects.role import Permission, Role


@pytest.mark.parametrize(
    ("role", "granted"),
    [
        (Role.ADMIN, set(Permission)),
        (Role.MANAGER, {Permission.EDIT_HERD, Permission.MOVE_CATTLE}),
        (Role.WORKER, set()),
    ],
)
def test_role_grants(role, granted):
    assert {p for p in Permission if role.allows(p)} == granted
