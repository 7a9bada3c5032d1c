"""SQLAlchemy Unit of Work — one AsyncSession shared by every repository.

Invariants:
    - All repositories of a unit of work write through the same session (same transaction)
    - Writes are flushed, never committed, by repositories
    - commit() is the only path that makes a unit of work durable

Design Decisions:
    - committed flag lets DatabaseSessionManager.unit_of_work() roll back work that
      was abandoned without an exception
"""

from sqlalchemy.ext.asyncio import AsyncSession

from courier.infrastructure.repositories import (
    SqlIdentityRepository, SqlMessageRepository, SqlSurveyRepository,
)


class SqlAlchemyUnitOfWork:
    """Transactional scope passed through the delivery orchestrator."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.identities = SqlIdentityRepository(session)
        self.messages = SqlMessageRepository(session)
        self.surveys = SqlSurveyRepository(session)
        self.committed = False

    async def commit(self) -> None:
        await self.session.commit()
        self.committed = True

    async def rollback(self) -> None:
        await self.session.rollback()
