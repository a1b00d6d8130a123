from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends, Query, Response, status

from kraalhub.application.errors import NotFound, PermissionDenied, ValidationError
from kraalhub.application.events.dispatcher import dispatch_events
from kraalhub.application.use_cases.assignments import list_assignments, set_cattle_kraal
from kraalhub.application.use_cases.cattle import (
    create_cattle,
    delete_cattle,
    get_cattle,
    list_parent_candidates,
    set_main_image,
    update_cattle,
)
from kraalhub.config.settings import Settings
from kraalhub.infrastructure.auth.context import AuthContext
from kraalhub.infrastructure.db.session import SQLAlchemyUnitOfWork
from kraalhub.infrastructure.notifications.sender import NotificationSender
from kraalhub.domain.value_objects.role import Permission
from kraalhub.infrastructure.storage.ports import (
    CattleImageStore,
    main_image_prefix,
    new_main_image_key,
)
from kraalhub.interfaces.http.deps import (
    get_app_settings,
    get_auth_context,
    get_notification_sender,
    get_image_store,
    get_uow,
)
from kraalhub.interfaces.http.schemas.cattle import (
    AssignmentResponse,
    CattleCreate,
    CattleDetailResponse,
    CattleResponse,
    CattleSummary,
    CattleUpdate,
    ConfirmImageRequest,
    ParentCandidatesResponse,
    PresignImageRequest,
    PresignImageResponse,
    SetKraalRequest,
    SetKraalResponse,
)

router = APIRouter(prefix="/cattle", tags=["cattle"])


def _schedule_notifications(
    background_tasks: BackgroundTasks, sender: NotificationSender, uow: SQLAlchemyUnitOfWork
) -> None:
    events = uow.drain_events()
    if events:
        background_tasks.add_task(dispatch_events, sender, events)


def _summary(cattle) -> CattleSummary | None:
    return CattleSummary.model_validate(cattle) if cattle else None


@router.post("/", response_model=CattleResponse, status_code=status.HTTP_201_CREATED)
async def create_cattle_endpoint(
    payload: CattleCreate,
    background_tasks: BackgroundTasks,
    context: AuthContext = Depends(get_auth_context),
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    sender: NotificationSender = Depends(get_notification_sender),
) -> CattleResponse:
    created = await create_cattle.execute(
        uow,
        context.tenant_id,
        context.role,
        context.user_id,
        create_cattle.CreateCattleInput(
            name=payload.name,
            breed=payload.breed.value,
            gender=payload.gender.value,
            health_status=payload.health_status.value,
            tag_number=payload.tag_number,
            is_ox=payload.is_ox,
            date_of_birth=payload.date_of_birth,
            vaccination_records=payload.vaccination_records,
            main_image=payload.main_image,
            sire_id=payload.sire_id,
            dam_id=payload.dam_id,
            kraal_id=payload.kraal_id,
        ),
    )
    _schedule_notifications(background_tasks, sender, uow)
    return CattleResponse.model_validate(created)


@router.get("/parents", response_model=ParentCandidatesResponse)
async def list_parent_candidates_endpoint(
    exclude_id: UUID | None = Query(None, description="Cattle being edited"),
    context: AuthContext = Depends(get_auth_context),
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
) -> ParentCandidatesResponse:
    result = await list_parent_candidates.execute(uow, context.tenant_id, exclude_id=exclude_id)
    return ParentCandidatesResponse(
        sires=[CattleSummary.model_validate(c) for c in result.sires],
        dams=[CattleSummary.model_validate(c) for c in result.dams],
    )


@router.get("/{cattle_id}", response_model=CattleDetailResponse)
async def get_cattle_endpoint(
    cattle_id: UUID,
    page: int = Query(1, description="Offspring page, starting at 1"),
    per_page: int | None = Query(None, description="Offspring per page (default 8)"),
    q: str | None = Query(None, description="Case-insensitive search on offspring name"),
    context: AuthContext = Depends(get_auth_context),
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    settings: Settings = Depends(get_app_settings),
) -> CattleDetailResponse:
    view = await get_cattle.execute(
        uow,
        context.tenant_id,
        cattle_id,
        page=page,
        per_page=per_page,
        search=q,
        default_per_page=settings.default_per_page,
    )
    data = CattleResponse.model_validate(view.cattle).model_dump()
    return CattleDetailResponse(
        **data,
        sire=_summary(view.sire),
        dam=_summary(view.dam),
        offspring_as_dam=[CattleSummary.model_validate(c) for c in view.offspring_as_dam],
        offspring_as_sire=[CattleSummary.model_validate(c) for c in view.offspring_as_sire],
        age=view.age,
        total_children=view.total_children,
        offspring_as_dam_total=view.offspring_as_dam_total,
        offspring_as_sire_total=view.offspring_as_sire_total,
        kraal_id=view.kraal_id,
        page=view.page,
        per_page=view.per_page,
    )


@router.put("/{cattle_id}", response_model=CattleResponse)
async def update_cattle_endpoint(
    cattle_id: UUID,
    payload: CattleUpdate,
    background_tasks: BackgroundTasks,
    context: AuthContext = Depends(get_auth_context),
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    sender: NotificationSender = Depends(get_notification_sender),
) -> CattleResponse:
    updated = await update_cattle.execute(
        uow,
        context.tenant_id,
        context.role,
        context.user_id,
        cattle_id,
        update_cattle.UpdateCattleInput(
            name=payload.name,
            breed=payload.breed.value if payload.breed else None,
            gender=payload.gender.value if payload.gender else None,
            health_status=payload.health_status.value if payload.health_status else None,
            tag_number=payload.tag_number,
            is_ox=payload.is_ox,
            date_of_birth=payload.date_of_birth,
            vaccination_records=payload.vaccination_records,
            main_image=payload.main_image,
            sire_id=payload.sire_id,
            dam_id=payload.dam_id,
            kraal_id=payload.kraal_id,
        ),
    )
    _schedule_notifications(background_tasks, sender, uow)
    return CattleResponse.model_validate(updated)


@router.delete("/{cattle_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_cattle_endpoint(
    cattle_id: UUID,
    background_tasks: BackgroundTasks,
    context: AuthContext = Depends(get_auth_context),
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    sender: NotificationSender = Depends(get_notification_sender),
) -> Response:
    await delete_cattle.execute(uow, context.tenant_id, context.role, context.user_id, cattle_id)
    _schedule_notifications(background_tasks, sender, uow)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{cattle_id}/assignments", response_model=list[AssignmentResponse])
async def list_assignments_endpoint(
    cattle_id: UUID,
    context: AuthContext = Depends(get_auth_context),
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
) -> list[AssignmentResponse]:
    items = await list_assignments.execute(uow, context.tenant_id, cattle_id)
    return [AssignmentResponse.model_validate(a) for a in items]


@router.put("/{cattle_id}/kraal", response_model=SetKraalResponse)
async def set_cattle_kraal_endpoint(
    cattle_id: UUID,
    payload: SetKraalRequest,
    background_tasks: BackgroundTasks,
    context: AuthContext = Depends(get_auth_context),
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    sender: NotificationSender = Depends(get_notification_sender),
) -> SetKraalResponse:
    result = await set_cattle_kraal.execute(
        uow, context.tenant_id, context.role, context.user_id, cattle_id, payload.kraal_id
    )
    _schedule_notifications(background_tasks, sender, uow)
    return SetKraalResponse(
        changed=result.changed,
        kraal_id=payload.kraal_id,
        previous_kraal_id=result.closed.kraal_id if result.closed else None,
    )


@router.post("/{cattle_id}/main-image/uploads", response_model=PresignImageResponse)
async def presign_main_image_upload(
    cattle_id: UUID,
    payload: PresignImageRequest,
    context: AuthContext = Depends(get_auth_context),
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    storage: CattleImageStore = Depends(get_image_store),
) -> PresignImageResponse:
    if not context.role.allows(Permission.EDIT_HERD):
        raise PermissionDenied("Role not allowed to upload images")
    if not await uow.cattle.get(context.tenant_id, cattle_id):
        raise NotFound("Cattle not found", details={"id": str(cattle_id)})
    presigned = await storage.presign_upload(
        new_main_image_key(context.tenant_id, cattle_id), payload.content_type
    )
    return PresignImageResponse(
        upload_url=presigned.upload_url,
        storage_key=presigned.storage_key,
        fields=presigned.fields,
    )


@router.put("/{cattle_id}/main-image", response_model=CattleResponse)
async def confirm_main_image(
    cattle_id: UUID,
    payload: ConfirmImageRequest,
    background_tasks: BackgroundTasks,
    context: AuthContext = Depends(get_auth_context),
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    storage: CattleImageStore = Depends(get_image_store),
    sender: NotificationSender = Depends(get_notification_sender),
) -> CattleResponse:
    if not payload.storage_key.startswith(main_image_prefix(context.tenant_id, cattle_id)):
        raise ValidationError(
            "Invalid image", details={"storage_key": "Key was not issued for this animal"}
        )
    url = storage.public_url(payload.storage_key)
    updated = await set_main_image.execute(
        uow, context.tenant_id, context.role, context.user_id, cattle_id, url
    )
    _schedule_notifications(background_tasks, sender, uow)
    return CattleResponse.model_validate(updated)
