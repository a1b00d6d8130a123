from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from kraalhub.application.errors import ConflictError, PermissionDenied, ValidationError
from kraalhub.application.events.models import CattleCreatedEvent
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
from kraalhub.domain.value_objects.role import Permission, Role


@dataclass(slots=True)
class CreateCattleInput:
    name: str
    breed: str
    gender: str
    health_status: str
    tag_number: str | None = None
    is_ox: bool = False
    date_of_birth: date | None = None
    vaccination_records: str | None = None
    main_image: str | None = None
    sire_id: UUID | None = None
    dam_id: UUID | None = None
    kraal_id: UUID | None = None


def ensure_can_create(role: Role) -> None:
    if not role.allows(Permission.EDIT_HERD):
        raise PermissionDenied("Role not allowed to create cattle")


async def execute(
    uow: UnitOfWork,
    tenant_id: UUID,
    role: Role,
    actor_user_id: UUID,
    payload: CreateCattleInput,
) -> Cattle:
    ensure_can_create(role)
    errors: dict[str, str] = {}
    name = clean_name(payload.name, errors)
    check_choice("breed", payload.breed, BREEDS, errors)
    check_choice("gender", payload.gender, GENDERS, errors)
    check_choice("health_status", payload.health_status, HEALTH_STATUSES, errors)
    if payload.is_ox and payload.gender == Gender.FEMALE.value:
        errors["is_ox"] = "Only male cattle can be oxen"
    if errors:
        raise ValidationError("Invalid cattle payload", details=errors)

    await check_parents(
        uow,
        tenant_id,
        cattle_id=None,
        sire_id=payload.sire_id,
        dam_id=payload.dam_id,
        errors=errors,
    )
    if payload.kraal_id is not None and not await uow.kraals.get(tenant_id, payload.kraal_id):
        errors["kraal_id"] = "Kraal not found"
    if errors:
        raise ValidationError("Invalid cattle payload", details=errors)

    cattle = Cattle.create(
        tenant_id=tenant_id,
        user_id=actor_user_id,
        breed=payload.breed,
        gender=payload.gender,
        name=name,
        tag_number=clean_optional_text(payload.tag_number),
        is_ox=payload.is_ox,
        date_of_birth=payload.date_of_birth,
        health_status=payload.health_status,
        vaccination_records=clean_optional_text(payload.vaccination_records),
        main_image=clean_optional_text(payload.main_image),
        sire_id=payload.sire_id,
        dam_id=payload.dam_id,
    )
    try:
        created = await uow.cattle.add(cattle)
    except ConflictError as exc:
        raise ConflictError(
            exc.message,
            details={
                **(exc.details or {}),
                "id": str(cattle.id),
                "user_id": str(actor_user_id),
                "tenant_id": str(tenant_id),
            },
        ) from exc
    if payload.kraal_id is not None:
        await reconcile_assignment.execute(uow, tenant_id, created.id, payload.kraal_id)
    uow.add_event(
        CattleCreatedEvent(
            tenant_id=tenant_id,
            actor_user_id=actor_user_id,
            cattle_id=created.id,
            name=created.name,
            kraal_id=payload.kraal_id,
        )
    )
    await uow.commit()
    return created
