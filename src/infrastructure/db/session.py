from __future__ import annotations

from collections.abc import Callable

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from src.application.interfaces.unit_of_work import UnitOfWork


def create_engine(database_url: str) -> AsyncEngine:
    return create_async_engine(database_url, echo=False, future=True)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


class SQLAlchemyUnitOfWork(UnitOfWork):
    def __init__(self, session_factory: Callable[[], AsyncSession]) -> None:
        self._session_factory = session_factory
        self.session: AsyncSession | None = None
        self.animals = None
        self.breeding_events = None
        self.breeding_settings = None
        self.calendar = None
        self.events: list = []

    async def __aenter__(self) -> UnitOfWork:
        self.session = self._session_factory()
        from src.infrastructure.repos.animals_sqlalchemy import AnimalsSQLAlchemyRepository
        from src.infrastructure.repos.breeding_events_sqlalchemy import (
            BreedingEventsSQLAlchemyRepository,
        )
        from src.infrastructure.repos.breeding_settings_sqlalchemy import (
            BreedingSettingsSQLAlchemyRepository,
        )
        from src.infrastructure.repos.calendar_sqlalchemy import CalendarSQLAlchemyRepository

        self.animals = AnimalsSQLAlchemyRepository(self.session)
        self.breeding_events = BreedingEventsSQLAlchemyRepository(self.session)
        self.breeding_settings = BreedingSettingsSQLAlchemyRepository(self.session)
        self.calendar = CalendarSQLAlchemyRepository(self.session)
        self.events = []
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if not self.session:
            return
        try:
            if exc:
                await self.session.rollback()
        finally:
            await self.session.close()
            self.session = None
            self.animals = None
            self.breeding_events = None
            self.breeding_settings = None
            self.calendar = None

    async def commit(self) -> None:
        if not self.session:
            return
        await self.session.commit()

    async def rollback(self) -> None:
        if not self.session:
            return
        await self.session.rollback()

    def add_event(self, event: object) -> None:
        self.events.append(event)

    def drain_events(self) -> list:
        drained = list(self.events)
        self.events.clear()
        return drained
