"""Unit of Work protocol."""

from typing import Protocol

from domain.repositories.assignment_repository import IAssignmentRepository
from domain.repositories.client_repository import IClientRepository
from domain.repositories.service_account_repository import IServiceAccountRepository


class IUnitOfWork(Protocol):
    """One transaction spanning the client, account and assignment stores.

    Nothing is persisted until ``commit``; leaving the context on an
    exception rolls back, so multi-step writes such as cascade deletes and
    profile releases either land completely or not at all.
    """

    clients: IClientRepository
    accounts: IServiceAccountRepository
    assignments: IAssignmentRepository

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...

    async def __aenter__(self) -> "IUnitOfWork": ...

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # type: ignore
        ...
