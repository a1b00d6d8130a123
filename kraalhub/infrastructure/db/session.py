from __future__ import annotations

from collections.abc import Callable

from sqlalchemy import event
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from kraalhub.application.errors import ConflictError, StoreError
from kraalhub.application.interfaces.unit_of_work import UnitOfWork


def create_engine(database_url: str) -> AsyncEngine:
    engine = create_async_engine(database_url, echo=False, future=True)
    if engine.dialect.name == "sqlite":
        # SQLite leaves FK enforcement off unless asked per connection
        @event.listens_for(engine.sync_engine, "connect")
        def _enable_foreign_keys(dbapi_connection, _record) -> None:  # noqa: ANN001
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


class SQLAlchemyUnitOfWork(UnitOfWork):
    def __init__(self, session_factory: Callable[[], AsyncSession]) -> None:
        self._session_factory = session_factory
        self.session: AsyncSession | None = None
        self.cattle = None
        self.kraals = None
        self.assignments = None
        self.locations = None
        self.events: list = []

    async def __aenter__(self) -> UnitOfWork:
        self.session = self._session_factory()
        from kraalhub.infrastructure.repos.assignments_sqlalchemy import (
            AssignmentsSQLAlchemyRepository,
        )
        from kraalhub.infrastructure.repos.cattle_sqlalchemy import CattleSQLAlchemyRepository
        from kraalhub.infrastructure.repos.kraals_sqlalchemy import KraalsSQLAlchemyRepository
        from kraalhub.infrastructure.repos.locations_sqlalchemy import (
            LocationsSQLAlchemyRepository,
        )

        self.cattle = CattleSQLAlchemyRepository(self.session)
        self.kraals = KraalsSQLAlchemyRepository(self.session)
        self.assignments = AssignmentsSQLAlchemyRepository(self.session)
        self.locations = LocationsSQLAlchemyRepository(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if not self.session:
            return
        try:
            if exc:
                self.events = []
                await self.session.rollback()
        finally:
            await self.session.close()
            self.session = None
            self.cattle = None
            self.kraals = None
            self.assignments = None
            self.locations = None

    async def commit(self) -> None:
        if not self.session:
            return
        try:
            await self.session.commit()
        except IntegrityError as exc:
            raise ConflictError("Commit rejected by a store constraint") from exc
        except SQLAlchemyError as exc:
            raise StoreError("Failed to commit transaction") from exc

    async def rollback(self) -> None:
        if not self.session:
            return
        await self.session.rollback()

    def add_event(self, event: object) -> None:
        self.events.append(event)

    def drain_events(self) -> list:
        events, self.events = self.events, []
        return events
