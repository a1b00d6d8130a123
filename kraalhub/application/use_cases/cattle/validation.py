from __future__ import annotations

from collections import deque
from uuid import UUID

from kraalhub.application.interfaces.unit_of_work import UnitOfWork
from kraalhub.domain.value_objects.breed import Breed
from kraalhub.domain.value_objects.gender import Gender
from kraalhub.domain.value_objects.health_status import HealthStatus

BREEDS = {b.value for b in Breed}
GENDERS = {g.value for g in Gender}
HEALTH_STATUSES = {h.value for h in HealthStatus}


def clean_name(value: str, errors: dict[str, str]) -> str:
    name = value.strip()
    if len(name) < 2:
        errors["name"] = "Name is required"
    return name


def check_choice(field: str, value: str, allowed: set[str], errors: dict[str, str]) -> None:
    if value not in allowed:
        errors[field] = f"Invalid {field.replace('_', ' ')}: {value!r}"


def clean_optional_text(value: str | None) -> str | None:
    """Trim free text; a blank value becomes None (clears the column)."""
    if value is None:
        return None
    value = value.strip()
    return value or None


async def check_parents(
    uow: UnitOfWork,
    tenant_id: UUID,
    *,
    cattle_id: UUID | None,
    sire_id: UUID | None,
    dam_id: UUID | None,
    errors: dict[str, str],
) -> None:
    """Validate sire/dam references.

    A sire must be an existing Male, a dam an existing Female, and neither
    may be the animal itself or one of its descendants.
    """
    for field, parent_id, gender in (
        ("sire_id", sire_id, Gender.MALE.value),
        ("dam_id", dam_id, Gender.FEMALE.value),
    ):
        if parent_id is None:
            continue
        if cattle_id is not None and parent_id == cattle_id:
            errors[field] = "An animal cannot be its own parent"
            continue
        parent = await uow.cattle.get(tenant_id, parent_id)
        if not parent:
            errors[field] = "Parent not found"
            continue
        if parent.gender != gender:
            errors[field] = f"Parent must be {gender}"
            continue
        if cattle_id is not None and await is_ancestor(uow, tenant_id, cattle_id, parent_id):
            errors[field] = "Parent is a descendant of this animal"


async def is_ancestor(uow: UnitOfWork, tenant_id: UUID, candidate: UUID, of: UUID) -> bool:
    """True when ``candidate`` appears in the ancestry of ``of``."""
    seen: set[UUID] = {of}
    frontier: deque[UUID] = deque([of])
    while frontier:
        batch = list(frontier)
        frontier.clear()
        for row in await uow.cattle.list_by_ids(tenant_id, batch):
            for parent_id in (row.sire_id, row.dam_id):
                if parent_id is None or parent_id in seen:
                    continue
                if parent_id == candidate:
                    return True
                seen.add(parent_id)
                frontier.append(parent_id)
    return False
