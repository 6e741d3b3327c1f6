"""Dependency injection factories for the API."""

from functools import lru_cache
from typing import Callable

from domain.services.access_service import AccessService
from domain.services.account_service import ServiceAccountService
from domain.services.assignment_service import AssignmentService
from domain.services.client_service import ClientService
from domain.services.dashboard_service import DashboardService
from infrastructure.database.session import async_session_factory
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
from infrastructure.security.fernet_vault import get_credential_vault


def get_uow_factory() -> Callable[[], SQLAlchemyUnitOfWork]:
    """Factory for creating Unit of Work instances."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(async_session_factory)

    return factory


@lru_cache
def get_client_service() -> ClientService:
    """Get Client service instance."""
    return ClientService(get_uow_factory())


@lru_cache
def get_account_service() -> ServiceAccountService:
    """Get ServiceAccount service instance."""
    return ServiceAccountService(get_uow_factory(), get_credential_vault())


@lru_cache
def get_assignment_service() -> AssignmentService:
    """Get Assignment service instance."""
    return AssignmentService(get_uow_factory())


@lru_cache
def get_dashboard_service() -> DashboardService:
    """Get Dashboard service instance."""
    return DashboardService(get_uow_factory())


@lru_cache
def get_access_service() -> AccessService:
    """Get client Access service instance."""
    return AccessService(get_uow_factory(), get_credential_vault())
