"""SQLAlchemy Unit of Work implementation."""

from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from infrastructure.database.repositories.sqlalchemy_account_repo import (
    SQLAlchemyServiceAccountRepository,
)
from infrastructure.database.repositories.sqlalchemy_assignment_repo import (
    SQLAlchemyAssignmentRepository,
)
from infrastructure.database.repositories.sqlalchemy_client_repo import SQLAlchemyClientRepository


class SQLAlchemyUnitOfWork:
    """Unit of Work implementation using SQLAlchemy.

    One instance wraps one session, so everything done between entering
    the context and ``commit()`` lands in a single transaction. The
    repositories are created on entry and share that session.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._session: Optional[AsyncSession] = None
        self._clients: Optional[SQLAlchemyClientRepository] = None
        self._accounts: Optional[SQLAlchemyServiceAccountRepository] = None
        self._assignments: Optional[SQLAlchemyAssignmentRepository] = None

    @property
    def clients(self) -> SQLAlchemyClientRepository:
        return self._require(self._clients)

    @property
    def accounts(self) -> SQLAlchemyServiceAccountRepository:
        return self._require(self._accounts)

    @property
    def assignments(self) -> SQLAlchemyAssignmentRepository:
        return self._require(self._assignments)

    @staticmethod
    def _require(repository: Any) -> Any:
        if repository is None:
            raise RuntimeError("UnitOfWork not initialized. Use as context manager.")
        return repository

    async def commit(self) -> None:
        if self._session:
            await self._session.commit()

    async def rollback(self) -> None:
        if self._session:
            await self._session.rollback()

    async def __aenter__(self) -> "SQLAlchemyUnitOfWork":
        self._session = self._session_factory()
        self._clients = SQLAlchemyClientRepository(self._session)
        self._accounts = SQLAlchemyServiceAccountRepository(self._session)
        self._assignments = SQLAlchemyAssignmentRepository(self._session)
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[Exception],
        exc_tb: Any,
    ) -> None:
        """Roll back on error, then release the session."""
        if self._session is None:
            return
        try:
            if exc_type:
                await self.rollback()
        finally:
            await self._session.close()
            self._session = None
            self._clients = self._accounts = self._assignments = None
