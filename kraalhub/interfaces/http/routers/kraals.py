from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends, Query, Response, status

from kraalhub.application.events.dispatcher import dispatch_events
from kraalhub.application.use_cases.kraals import (
    create_kraal,
    delete_kraal,
    get_kraal,
    list_kraal_cattle,
    list_kraals,
    update_kraal,
)
from kraalhub.config.settings import Settings
from kraalhub.infrastructure.auth.context import AuthContext
from kraalhub.infrastructure.db.session import SQLAlchemyUnitOfWork
from kraalhub.infrastructure.notifications.sender import NotificationSender
from kraalhub.interfaces.http.deps import (
    get_app_settings,
    get_auth_context,
    get_notification_sender,
    get_uow,
)
from kraalhub.interfaces.http.schemas.cattle import CattleSummary
from kraalhub.interfaces.http.schemas.kraals import (
    KraalCattleResponse,
    KraalCreate,
    KraalDetailResponse,
    KraalResponse,
    KraalsListResponse,
    KraalUpdate,
)

router = APIRouter(prefix="/kraals", tags=["kraals"])


def _schedule_notifications(
    background_tasks: BackgroundTasks, sender: NotificationSender, uow: SQLAlchemyUnitOfWork
) -> None:
    events = uow.drain_events()
    if events:
        background_tasks.add_task(dispatch_events, sender, events)


@router.get("/", response_model=KraalsListResponse)
async def list_kraals_endpoint(
    page: int = Query(1),
    per_page: int | None = Query(None),
    q: str | None = Query(None, description="Case-insensitive search on name and description"),
    context: AuthContext = Depends(get_auth_context),
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    settings: Settings = Depends(get_app_settings),
) -> KraalsListResponse:
    result = await list_kraals.execute(
        uow,
        context.tenant_id,
        page=page,
        per_page=per_page,
        search=q,
        default_per_page=settings.default_per_page,
    )
    return KraalsListResponse(
        items=[KraalResponse.model_validate(k) for k in result.items],
        total=result.total,
        page=result.page,
        per_page=result.per_page,
        total_pages=result.total_pages,
    )


@router.post("/", response_model=KraalResponse, status_code=status.HTTP_201_CREATED)
async def create_kraal_endpoint(
    payload: KraalCreate,
    background_tasks: BackgroundTasks,
    context: AuthContext = Depends(get_auth_context),
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    sender: NotificationSender = Depends(get_notification_sender),
) -> KraalResponse:
    created = await create_kraal.execute(
        uow,
        context.tenant_id,
        context.role,
        context.user_id,
        create_kraal.CreateKraalInput(
            name=payload.name,
            description=payload.description,
            capacity=payload.capacity,
            location_id=payload.location_id,
        ),
    )
    _schedule_notifications(background_tasks, sender, uow)
    return KraalResponse.model_validate(created)


@router.get("/{kraal_id}", response_model=KraalDetailResponse)
async def get_kraal_endpoint(
    kraal_id: UUID,
    context: AuthContext = Depends(get_auth_context),
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
) -> KraalDetailResponse:
    view = await get_kraal.execute(uow, context.tenant_id, kraal_id)
    data = KraalResponse.model_validate(view.kraal).model_dump()
    return KraalDetailResponse(**data, occupancy=view.occupancy, available=view.available)


@router.put("/{kraal_id}", response_model=KraalResponse)
async def update_kraal_endpoint(
    kraal_id: UUID,
    payload: KraalUpdate,
    background_tasks: BackgroundTasks,
    context: AuthContext = Depends(get_auth_context),
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    sender: NotificationSender = Depends(get_notification_sender),
) -> KraalResponse:
    updated = await update_kraal.execute(
        uow,
        context.tenant_id,
        context.role,
        context.user_id,
        kraal_id,
        update_kraal.UpdateKraalInput(
            name=payload.name,
            description=payload.description,
            capacity=payload.capacity,
            location_id=payload.location_id,
        ),
    )
    _schedule_notifications(background_tasks, sender, uow)
    return KraalResponse.model_validate(updated)


@router.delete("/{kraal_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_kraal_endpoint(
    kraal_id: UUID,
    background_tasks: BackgroundTasks,
    context: AuthContext = Depends(get_auth_context),
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    sender: NotificationSender = Depends(get_notification_sender),
) -> Response:
    await delete_kraal.execute(uow, context.tenant_id, context.role, context.user_id, kraal_id)
    _schedule_notifications(background_tasks, sender, uow)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{kraal_id}/cattle", response_model=KraalCattleResponse)
async def list_kraal_cattle_endpoint(
    kraal_id: UUID,
    page: int = Query(1),
    per_page: int | None = Query(None),
    context: AuthContext = Depends(get_auth_context),
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    settings: Settings = Depends(get_app_settings),
) -> KraalCattleResponse:
    result = await list_kraal_cattle.execute(
        uow,
        context.tenant_id,
        kraal_id,
        page=page,
        per_page=per_page,
        default_per_page=settings.default_per_page,
    )
    return KraalCattleResponse(
        kraal=KraalResponse.model_validate(result.kraal),
        items=[CattleSummary.model_validate(c) for c in result.items],
        total=result.total,
        page=result.page,
        per_page=result.per_page,
        total_pages=result.total_pages,
    )
