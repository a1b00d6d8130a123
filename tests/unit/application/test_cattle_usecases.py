from __future__ import annotations

from datetime import date
from uuid import uuid4

import pytest

from kraalhub.application.errors import (
    ConflictError,
    NotFound,
    PermissionDenied,
    ValidationError,
)
from kraalhub.application.events.models import CattleCreatedEvent, CattleUpdatedEvent
from kraalhub.application.use_cases.cattle import (
    create_cattle,
    delete_cattle,
    get_cattle,
    list_parent_candidates,
    set_main_image,
    update_cattle,
)
from kraalhub.domain.models.assignment import CattleKraalAssignment
from kraalhub.domain.value_objects.role import Role


def cattle_input(**overrides):
    values = {"name": "Bessie", "breed": "ANGUS", "gender": "Female", "health_status": "Healthy"}
    values.update(overrides)
    return create_cattle.CreateCattleInput(**values)


async def test_create_cattle_denies_worker(uow, tenant, actor):
    with pytest.raises(PermissionDenied):
        await create_cattle.execute(uow, tenant, Role.WORKER, actor, cattle_input())
    assert not uow.cattle.add_called


async def test_create_cattle_rejects_short_name_before_writing(uow, tenant, actor):
    with pytest.raises(ValidationError) as exc:
        await create_cattle.execute(uow, tenant, Role.MANAGER, actor, cattle_input(name=" B "))
    assert "name" in exc.value.details
    assert not uow.cattle.add_called
    assert uow.state.commits == 0


async def test_create_cattle_rejects_unknown_breed_and_status(uow, tenant, actor):
    with pytest.raises(ValidationError) as exc:
        await create_cattle.execute(
            uow, tenant, Role.ADMIN, actor, cattle_input(breed="ZEBU", health_status="Fine")
        )
    assert set(exc.value.details) == {"breed", "health_status"}


async def test_create_cattle_opens_assignment_when_kraal_given(uow, tenant, actor, add_kraal):
    north = await add_kraal()
    created = await create_cattle.execute(
        uow, tenant, Role.MANAGER, actor, cattle_input(kraal_id=north.id, tag_number=" T-1 ")
    )
    assert created.tag_number == "T-1"
    open_row = await uow.assignments.get_open(tenant, created.id)
    assert open_row.kraal_id == north.id
    events = uow.drain_events()
    assert isinstance(events[0], CattleCreatedEvent)
    assert events[0].kraal_id == north.id
    assert uow.state.commits == 1


async def test_create_cattle_unknown_kraal_is_validation_error(uow, tenant, actor):
    with pytest.raises(ValidationError) as exc:
        await create_cattle.execute(uow, tenant, Role.MANAGER, actor, cattle_input(kraal_id=uuid4()))
    assert exc.value.details == {"kraal_id": "Kraal not found"}
    assert not uow.cattle.add_called


async def test_create_cattle_sire_must_be_male(uow, tenant, actor, add_cattle):
    cow = await add_cattle("Mother", gender="Female")
    with pytest.raises(ValidationError) as exc:
        await create_cattle.execute(uow, tenant, Role.MANAGER, actor, cattle_input(sire_id=cow.id))
    assert exc.value.details["sire_id"] == "Parent must be Male"


async def test_create_cattle_female_cannot_be_ox(uow, tenant, actor):
    with pytest.raises(ValidationError) as exc:
        await create_cattle.execute(uow, tenant, Role.MANAGER, actor, cattle_input(is_ox=True))
    assert "is_ox" in exc.value.details


async def test_create_cattle_duplicate_tag_conflicts(uow, tenant, actor, add_cattle):
    await add_cattle("First", tag_number="T-9")
    with pytest.raises(ConflictError):
        await create_cattle.execute(
            uow, tenant, Role.MANAGER, actor, cattle_input(tag_number="T-9")
        )


async def test_update_cattle_partial_preserves_other_fields(uow, tenant, actor, add_cattle):
    cow = await add_cattle("Daisy", tag_number="T-1", vaccination_records="FMD 2023")
    updated = await update_cattle.execute(
        uow,
        tenant,
        Role.MANAGER,
        actor,
        cow.id,
        update_cattle.UpdateCattleInput(health_status="Sick"),
    )
    assert updated.health_status == "Sick"
    assert updated.name == "Daisy"
    assert updated.tag_number == "T-1"
    assert updated.vaccination_records == "FMD 2023"
    event = uow.drain_events()[0]
    assert isinstance(event, CattleUpdatedEvent)
    assert event.changed_fields == ["health_status"]


async def test_update_cattle_blank_clears_optional_text(uow, tenant, actor, add_cattle):
    cow = await add_cattle("Daisy", tag_number="T-1")
    updated = await update_cattle.execute(
        uow, tenant, Role.ADMIN, actor, cow.id, update_cattle.UpdateCattleInput(tag_number="")
    )
    assert updated.tag_number is None


async def test_update_cattle_blank_name_rejected(uow, tenant, actor, add_cattle):
    cow = await add_cattle("Daisy")
    with pytest.raises(ValidationError):
        await update_cattle.execute(
            uow, tenant, Role.ADMIN, actor, cow.id, update_cattle.UpdateCattleInput(name="")
        )
    assert (await uow.cattle.get(tenant, cow.id)).name == "Daisy"


async def test_update_cattle_rejects_self_as_sire(uow, tenant, actor, add_cattle):
    bull = await add_cattle("Bull", gender="Male")
    with pytest.raises(ValidationError) as exc:
        await update_cattle.execute(
            uow, tenant, Role.ADMIN, actor, bull.id, update_cattle.UpdateCattleInput(sire_id=bull.id)
        )
    assert exc.value.details["sire_id"] == "An animal cannot be its own parent"


async def test_update_cattle_rejects_descendant_as_parent(uow, tenant, actor, add_cattle):
    grandsire = await add_cattle("Old Bull", gender="Male")
    son = await add_cattle("Son", gender="Male", sire_id=grandsire.id)
    grandson = await add_cattle("Grandson", gender="Male", sire_id=son.id)
    with pytest.raises(ValidationError) as exc:
        await update_cattle.execute(
            uow,
            tenant,
            Role.ADMIN,
            actor,
            grandsire.id,
            update_cattle.UpdateCattleInput(sire_id=grandson.id),
        )
    assert "descendant" in exc.value.details["sire_id"]


async def test_update_cattle_moves_kraal(uow, tenant, actor, add_cattle, add_kraal):
    cow = await add_cattle()
    north = await add_kraal("North")
    south = await add_kraal("South")
    await update_cattle.execute(
        uow, tenant, Role.ADMIN, actor, cow.id, update_cattle.UpdateCattleInput(kraal_id=north.id)
    )
    await update_cattle.execute(
        uow, tenant, Role.ADMIN, actor, cow.id, update_cattle.UpdateCattleInput(kraal_id=south.id)
    )
    history = await uow.assignments.list_for_cattle(tenant, cow.id)
    assert len(history) == 2
    assert [a.kraal_id for a in history if a.is_open] == [south.id]


async def test_update_cattle_unknown_kraal_is_validation_error(uow, tenant, actor, add_cattle):
    cow = await add_cattle()
    with pytest.raises(ValidationError) as exc:
        await update_cattle.execute(
            uow,
            tenant,
            Role.ADMIN,
            actor,
            cow.id,
            update_cattle.UpdateCattleInput(name="Renamed", kraal_id=uuid4()),
        )
    assert exc.value.details == {"kraal_id": "Kraal not found"}
    assert (await uow.cattle.get(tenant, cow.id)).name == "Daisy"
    assert uow.state.commits == 0


async def test_update_cattle_sire_with_calves_keeps_gender(uow, tenant, actor, add_cattle):
    bull = await add_cattle("Bull", gender="Male")
    await add_cattle("Calf", sire_id=bull.id)
    with pytest.raises(ValidationError) as exc:
        await update_cattle.execute(
            uow, tenant, Role.ADMIN, actor, bull.id, update_cattle.UpdateCattleInput(gender="Female")
        )
    assert set(exc.value.details) == {"gender"}
    assert (await uow.cattle.get(tenant, bull.id)).gender == "Male"
    assert uow.state.commits == 0


async def test_update_cattle_dam_with_calves_keeps_gender(uow, tenant, actor, add_cattle):
    cow = await add_cattle("Cow")
    await add_cattle("Calf", dam_id=cow.id)
    with pytest.raises(ValidationError) as exc:
        await update_cattle.execute(
            uow, tenant, Role.ADMIN, actor, cow.id, update_cattle.UpdateCattleInput(gender="Male")
        )
    assert "gender" in exc.value.details


async def test_update_cattle_sire_with_calves_cannot_become_ox(uow, tenant, actor, add_cattle):
    bull = await add_cattle("Bull", gender="Male")
    await add_cattle("Calf", sire_id=bull.id)
    with pytest.raises(ValidationError) as exc:
        await update_cattle.execute(
            uow, tenant, Role.ADMIN, actor, bull.id, update_cattle.UpdateCattleInput(is_ox=True)
        )
    assert set(exc.value.details) == {"is_ox"}
    assert (await uow.cattle.get(tenant, bull.id)).is_ox is False


async def test_update_cattle_gender_change_allowed_without_offspring(
    uow, tenant, actor, add_cattle
):
    young = await add_cattle("Young", gender="Male")
    updated = await update_cattle.execute(
        uow, tenant, Role.ADMIN, actor, young.id, update_cattle.UpdateCattleInput(gender="Female")
    )
    assert updated.gender == "Female"


async def test_update_cattle_without_changes_does_not_commit(uow, tenant, actor, add_cattle):
    cow = await add_cattle()
    result = await update_cattle.execute(
        uow, tenant, Role.ADMIN, actor, cow.id, update_cattle.UpdateCattleInput()
    )
    assert result is cow
    assert uow.state.commits == 0


async def test_update_missing_cattle_not_found(uow, tenant, actor):
    with pytest.raises(NotFound):
        await update_cattle.execute(
            uow, tenant, Role.ADMIN, actor, uuid4(), update_cattle.UpdateCattleInput(name="Zed")
        )


async def test_get_cattle_age_uses_calendar_years(uow, tenant, add_cattle):
    cow = await add_cattle(date_of_birth=date(2020, 6, 15))
    view = await get_cattle.execute(uow, tenant, cow.id, today=date(2024, 1, 1))
    assert view.age == 4


async def test_get_cattle_offspring_pages_and_totals(uow, tenant, add_cattle):
    dam = await add_cattle("Mother")
    for i in range(10):
        await add_cattle(f"Calf {i:02d}", dam_id=dam.id)

    first = await get_cattle.execute(uow, tenant, dam.id, page=1, per_page=0)
    assert first.per_page == 8
    assert len(first.offspring_as_dam) == 8
    assert first.offspring_as_sire == []
    assert first.total_children == 8
    assert first.offspring_as_dam_total == 10

    second = await get_cattle.execute(uow, tenant, dam.id, page=2, per_page=8)
    assert len(second.offspring_as_dam) == 2
    assert second.total_children == 2

    searched = await get_cattle.execute(uow, tenant, dam.id, search="calf 03")
    assert [c.name for c in searched.offspring_as_dam] == ["Calf 03"]


async def test_get_cattle_resolves_parents_and_kraal(uow, tenant, add_cattle, add_kraal):
    sire = await add_cattle("Bull", gender="Male")
    dam = await add_cattle("Cow")
    calf = await add_cattle("Calf", sire_id=sire.id, dam_id=dam.id)
    north = await add_kraal()
    await uow.assignments.add(CattleKraalAssignment.open(tenant, calf.id, north.id))
    view = await get_cattle.execute(uow, tenant, calf.id)
    assert view.sire.id == sire.id
    assert view.dam.id == dam.id
    assert view.kraal_id == north.id
    assert view.age is None


async def test_get_cattle_missing_not_found(uow, tenant):
    with pytest.raises(NotFound):
        await get_cattle.execute(uow, tenant, uuid4())


async def test_delete_cattle_requires_admin(uow, tenant, actor, add_cattle):
    cow = await add_cattle()
    with pytest.raises(PermissionDenied):
        await delete_cattle.execute(uow, tenant, Role.MANAGER, actor, cow.id)
    await delete_cattle.execute(uow, tenant, Role.ADMIN, actor, cow.id)
    assert await uow.cattle.get(tenant, cow.id) is None


async def test_delete_missing_cattle_not_found(uow, tenant, actor):
    with pytest.raises(NotFound):
        await delete_cattle.execute(uow, tenant, Role.ADMIN, actor, uuid4())


async def test_set_main_image_stores_url(uow, tenant, actor, add_cattle):
    cow = await add_cattle()
    updated = await set_main_image.execute(
        uow, tenant, Role.MANAGER, actor, cow.id, "https://cdn.test/cow.jpg"
    )
    assert updated.main_image == "https://cdn.test/cow.jpg"
    with pytest.raises(PermissionDenied):
        await set_main_image.execute(uow, tenant, Role.WORKER, actor, cow.id, "https://x")


async def test_parent_candidates_exclude_oxen_and_self(uow, tenant, add_cattle):
    bull = await add_cattle("Bull", gender="Male")
    await add_cattle("Ox", gender="Male", is_ox=True)
    cow = await add_cattle("Cow")
    result = await list_parent_candidates.execute(uow, tenant, exclude_id=cow.id)
    assert [c.id for c in result.sires] == [bull.id]
    assert result.dams == []
