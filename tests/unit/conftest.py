"""Shared fixtures for unit tests."""

from datetime import datetime
from typing import Any
from unittest.mock import AsyncMock

import pytest

from domain.entities.service_account import Profile, ServiceAccount
from infrastructure.security.fernet_vault import FernetCredentialVault


class FakeUnitOfWork:
    """Fake Unit of Work with repository mocks for unit testing."""

    def __init__(self) -> None:
        self.clients = AsyncMock()
        self.accounts = AsyncMock()
        self.assignments = AsyncMock()
        self.committed = False
        self.rolled_back = False

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True

    async def __aenter__(self) -> "FakeUnitOfWork":
        return self

    async def __aexit__(self, *args: Any) -> None:
        pass


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork."""
    return FakeUnitOfWork()


@pytest.fixture
def vault() -> FernetCredentialVault:
    return FernetCredentialVault("unit-test-secret")


@pytest.fixture
def now() -> datetime:
    """A fixed reference instant."""
    return datetime(2026, 3, 1, 12, 0, 0)


@pytest.fixture
def account(vault: FernetCredentialVault) -> ServiceAccount:
    """Account with three profiles and an encrypted password."""
    return ServiceAccount(
        name="Netflix1",
        email="family@example.com",
        password=vault.encrypt("s3cret"),
        profiles=[Profile("A", "1111"), Profile("B", "2222"), Profile("C", "3333")],
    )
