from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from kraalhub.application.errors import ConflictError, NotFound, PermissionDenied, ValidationError
from kraalhub.application.events.models import CattleReassignedEvent, CattleUpdatedEvent
from kraalhub.application.interfaces.unit_of_work import UnitOfWork
from kraalhub.application.use_cases.assignments import reconcile_assignment
from kraalhub.application.use_cases.cattle.validation import (
    BREEDS,
    GENDERS,
    HEALTH_STATUSES,
    check_choice,
    check_parents,
    clean_name,
    clean_optional_text,
)
from kraalhub.domain.models.cattle import Cattle
from kraalhub.domain.value_objects.gender import Gender
from kraalhub.domain.value_objects.parent_relation import ParentRelation
from kraalhub.domain.value_objects.role import Permission, Role

# Blank strings clear these columns; None leaves them untouched.
CLEARABLE_FIELDS = ("tag_number", "vaccination_records", "main_image")


@dataclass(slots=True)
class UpdateCattleInput:
    name: str | None = None
    breed: str | None = None
    gender: str | None = None
    health_status: str | None = None
    tag_number: str | None = None
    is_ox: bool | None = None
    date_of_birth: date | None = None
    vaccination_records: str | None = None
    main_image: str | None = None
    sire_id: UUID | None = None
    dam_id: UUID | None = None
    kraal_id: UUID | None = None


def ensure_can_update(role: Role) -> None:
    if not role.allows(Permission.EDIT_HERD):
        raise PermissionDenied("Role not allowed to update cattle")


async def check_offspring_roles(
    uow: UnitOfWork,
    tenant_id: UUID,
    existing: Cattle,
    gender: str,
    is_ox: bool,
    errors: dict[str, str],
) -> None:
    """Keep gender and ox status consistent with the offspring already recorded.

    An animal that sired calves must stay an intact male; one that dammed
    calves must stay female.
    """
    if gender != existing.gender:
        held = (
            ParentRelation.SIRE if existing.gender == Gender.MALE.value else ParentRelation.DAM
        )
        if await uow.cattle.count_offspring(tenant_id, existing.id, relation=held.value):
            errors["gender"] = f"Cattle has offspring recorded as {held.value.lower()}"
    if is_ox and not existing.is_ox and "gender" not in errors:
        sired = await uow.cattle.count_offspring(
            tenant_id, existing.id, relation=ParentRelation.SIRE.value
        )
        if sired:
            errors["is_ox"] = "Cattle with sired offspring cannot be an ox"


async def execute(
    uow: UnitOfWork,
    tenant_id: UUID,
    role: Role,
    actor_user_id: UUID,
    cattle_id: UUID,
    payload: UpdateCattleInput,
) -> Cattle:
    ensure_can_update(role)
    existing = await uow.cattle.get(tenant_id, cattle_id)
    if not existing:
        raise NotFound("Cattle not found", details={"id": str(cattle_id)})

    errors: dict[str, str] = {}
    data: dict = {}
    if payload.name is not None:
        data["name"] = clean_name(payload.name, errors)
    for field_name, allowed in (
        ("breed", BREEDS),
        ("gender", GENDERS),
        ("health_status", HEALTH_STATUSES),
    ):
        value = getattr(payload, field_name)
        if value is not None:
            check_choice(field_name, value, allowed, errors)
            data[field_name] = value
    for field_name in CLEARABLE_FIELDS:
        value = getattr(payload, field_name)
        if value is not None:
            data[field_name] = clean_optional_text(value)
    if payload.is_ox is not None:
        data["is_ox"] = payload.is_ox
    if payload.date_of_birth is not None:
        data["date_of_birth"] = payload.date_of_birth
    if payload.sire_id is not None:
        data["sire_id"] = payload.sire_id
    if payload.dam_id is not None:
        data["dam_id"] = payload.dam_id

    gender = data.get("gender", existing.gender)
    is_ox = data.get("is_ox", existing.is_ox)
    if is_ox and gender == Gender.FEMALE.value:
        errors["is_ox"] = "Only male cattle can be oxen"
    if errors:
        raise ValidationError("Invalid cattle payload", details=errors)

    await check_offspring_roles(uow, tenant_id, existing, gender, is_ox, errors)

    await check_parents(
        uow,
        tenant_id,
        cattle_id=cattle_id,
        sire_id=payload.sire_id,
        dam_id=payload.dam_id,
        errors=errors,
    )
    if payload.kraal_id is not None and not await uow.kraals.get(tenant_id, payload.kraal_id):
        errors["kraal_id"] = "Kraal not found"
    if errors:
        raise ValidationError("Invalid cattle payload", details=errors)

    updated = existing
    if data:
        try:
            result = await uow.cattle.update(tenant_id, cattle_id, data)
        except ConflictError as exc:
            raise ConflictError(
                exc.message,
                details={
                    **(exc.details or {}),
                    "id": str(cattle_id),
                    "user_id": str(actor_user_id),
                    "tenant_id": str(tenant_id),
                },
            ) from exc
        if not result:
            raise NotFound("Cattle not found", details={"id": str(cattle_id)})
        updated = result

    moved = await reconcile_assignment.execute(uow, tenant_id, cattle_id, payload.kraal_id)
    if not data and not moved.changed:
        return existing

    if data:
        uow.add_event(
            CattleUpdatedEvent(
                tenant_id=tenant_id,
                actor_user_id=actor_user_id,
                cattle_id=cattle_id,
                name=updated.name,
                changed_fields=list(data.keys()),
            )
        )
    if moved.changed and payload.kraal_id is not None:
        uow.add_event(
            CattleReassignedEvent(
                tenant_id=tenant_id,
                actor_user_id=actor_user_id,
                cattle_id=cattle_id,
                kraal_id=payload.kraal_id,
                previous_kraal_id=moved.closed.kraal_id if moved.closed else None,
            )
        )
    await uow.commit()
    return updated
