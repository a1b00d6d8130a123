from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import APIRouter, Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from kraalhub.config.settings import Settings, get_settings
from kraalhub.infrastructure.auth.tokens import AccessTokens
from kraalhub.infrastructure.db.session import create_engine, create_session_factory
from kraalhub.infrastructure.notifications.sender import (
    LoggingNotificationSender,
    NotificationSender,
)
from kraalhub.infrastructure.storage.ports import CattleImageStore
from kraalhub.infrastructure.storage.s3 import S3ImageStore
from kraalhub.interfaces.http.deps import get_app_settings
from kraalhub.interfaces.http.routers import cattle, kraals
from kraalhub.interfaces.middleware.auth_middleware import AuthMiddleware
from kraalhub.interfaces.middleware.error_handler import register_error_handlers


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        yield
    finally:
        engine = getattr(app.state, "engine", None)
        if engine is not None:
            await engine.dispose()


def _configure_logging(level_name: str) -> None:
    level = getattr(logging, level_name.upper(), logging.INFO)
    root = logging.getLogger()
    if not any(isinstance(h, logging.StreamHandler) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter(fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s")
        )
        root.addHandler(handler)
    root.setLevel(level)
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access", "sqlalchemy.engine", "httpx"):
        logging.getLogger(name).setLevel(level)


def create_app(
    *,
    settings: Settings | None = None,
    tokens: AccessTokens | None = None,
    notification_sender: NotificationSender | None = None,
    image_store: CattleImageStore | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    _configure_logging(settings.log_level)
    app = FastAPI(
        title="KraalHub Backend",
        version="0.1.0",
        description="Multi-tenant API for kraal and cattle records",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = create_engine(settings.database_url)
    app.state.session_factory = create_session_factory(app.state.engine)
    app.state.tokens = tokens or AccessTokens.from_settings(settings)
    app.state.notification_sender = notification_sender or LoggingNotificationSender()
    app.state.image_store = image_store or S3ImageStore.from_settings(settings)
    register_error_handlers(app)

    api = APIRouter(prefix="/api/v1")
    api.include_router(kraals.router)
    api.include_router(cattle.router)

    @api.get("/health", tags=["health"])
    async def health(_: Settings = Depends(get_app_settings)) -> dict[str, str]:  # noqa: ANN001
        return {"status": "ok"}

    app.include_router(api)

    # CORS added last so it wraps auth and answers preflight
    app.add_middleware(AuthMiddleware, settings=settings, tokens=app.state.tokens)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    return app


app = create_app()
