from __future__ import annotations

import os
import sys
from collections.abc import AsyncIterator
from pathlib import Path
from typing import cast
from uuid import UUID, uuid4

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///default.db")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(PROJECT_ROOT))

# ruff: noqa: E402
from kraalhub.config.settings import Settings
from kraalhub.domain.value_objects.role import Role
from kraalhub.infrastructure.db.base import Base
from kraalhub.infrastructure.db.orm import assignment, cattle, kraal, location  # noqa: F401
from kraalhub.infrastructure.db.orm.membership import MembershipORM
from kraalhub.interfaces.http.main import create_app


class RecordingNotificationSender:
    def __init__(self) -> None:
        self.sent: list = []

    async def send(self, *, tenant_id, sender_id, notification) -> None:
        self.sent.append((tenant_id, sender_id, notification))


@pytest.fixture(scope="session")
def tenant_id() -> UUID:
    return uuid4()


@pytest.fixture()
def test_settings(tmp_path) -> Settings:
    db_path = tmp_path / "test.db"
    return Settings.model_validate(
        {
            "database_url": f"sqlite+aiosqlite:///{db_path}",
            "jwt_secret_key": "test-secret",
            "tenant_header": "X-Tenant-ID",
            "log_level": "INFO",
            "environment": "test",
        }
    )


@pytest.fixture()
def notification_sender() -> RecordingNotificationSender:
    return RecordingNotificationSender()


@pytest.fixture()
def app(test_settings: Settings, notification_sender: RecordingNotificationSender):
    return create_app(settings=test_settings, notification_sender=notification_sender)


@pytest.fixture()
async def client(app) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        engine = app.state.engine
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)
        yield client
    await app.state.engine.dispose()


@pytest.fixture()
async def seeded_memberships(app, client, tenant_id: UUID) -> dict[str, UUID]:
    admin_id = uuid4()
    manager_id = uuid4()
    worker_id = uuid4()
    async with app.state.session_factory() as session:  # type: ignore[attr-defined]
        async_session = cast(AsyncSession, session)
        async_session.add_all(
            [
                MembershipORM(user_id=admin_id, tenant_id=tenant_id, role=Role.ADMIN),
                MembershipORM(user_id=manager_id, tenant_id=tenant_id, role=Role.MANAGER),
                MembershipORM(user_id=worker_id, tenant_id=tenant_id, role=Role.WORKER),
            ]
        )
        await async_session.commit()
    return {"admin": admin_id, "manager": manager_id, "worker": worker_id}


@pytest.fixture()
def headers(app, seeded_memberships, tenant_id: UUID) -> dict[str, dict[str, str]]:
    tokens = app.state.tokens
    return {
        role: {
            "Authorization": f"Bearer {tokens.issue(user_id)}",
            "X-Tenant-ID": str(tenant_id),
        }
        for role, user_id in seeded_memberships.items()
    }
