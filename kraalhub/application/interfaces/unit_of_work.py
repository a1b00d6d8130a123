from __future__ import annotations

from typing import Protocol

from kraalhub.application.interfaces.repositories.assignments import AssignmentRepository
from kraalhub.application.interfaces.repositories.cattle import CattleRepository
from kraalhub.application.interfaces.repositories.kraals import KraalRepository
from kraalhub.application.interfaces.repositories.locations import LocationRepository


class UnitOfWork(Protocol):
    cattle: CattleRepository
    kraals: KraalRepository
    assignments: AssignmentRepository
    locations: LocationRepository
    # Domain events collected during the transaction
    events: list

    async def __aenter__(self) -> UnitOfWork: ...

    async def __aexit__(self, exc_type, exc, tb) -> None: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...

    # Record a domain event during the transaction
    def add_event(self, event: object) -> None: ...

    # Drain collected events (used for post-commit dispatch)
    def drain_events(self) -> list: ...
