from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Request

from kraalhub.application.errors import AuthError
from kraalhub.config.settings import Settings
from kraalhub.infrastructure.auth.context import AuthContext
from kraalhub.infrastructure.db.session import SQLAlchemyUnitOfWork
from kraalhub.infrastructure.notifications.sender import NotificationSender
from kraalhub.infrastructure.storage.ports import CattleImageStore


async def get_auth_context(request: Request) -> AuthContext:
    context = getattr(request.state, "auth_context", None)
    if context is None:
        raise AuthError("Authentication required")
    return context


async def get_uow(request: Request) -> AsyncIterator[SQLAlchemyUnitOfWork]:
    session_factory = getattr(request.app.state, "session_factory", None)
    if session_factory is None:
        raise RuntimeError("Session factory not configured")
    uow = SQLAlchemyUnitOfWork(session_factory)
    async with uow:
        yield uow


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_notification_sender(request: Request) -> NotificationSender:
    sender = getattr(request.app.state, "notification_sender", None)
    if sender is None:
        raise RuntimeError("Notification sender not configured")
    return sender


def get_image_store(request: Request) -> CattleImageStore:
    store = getattr(request.app.state, "image_store", None)
    if store is None:
        raise RuntimeError("Image storage not configured")
    return store
