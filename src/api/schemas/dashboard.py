"""Pydantic schemas for the admin overview."""

from api.schemas.assignment import AssignmentResponse
from api.schemas.client import ClientResponse
from api.schemas.common import CamelModel
from api.schemas.service_account import ServiceAccountResponse
from domain.services.dashboard_service import DashboardSnapshot


class AdminDataResponse(CamelModel):
    """Everything the admin panel renders."""

    clients: list[ClientResponse]
    service_accounts: list[ServiceAccountResponse]
    active_assignments: list[AssignmentResponse]
    expired_assignments: list[AssignmentResponse]
    expiring_soon_assignments: list[AssignmentResponse]

    @classmethod
    def from_snapshot(cls, snapshot: DashboardSnapshot) -> "AdminDataResponse":
        return cls(
            clients=[ClientResponse.from_entity(c) for c in snapshot.clients],
            service_accounts=[
                ServiceAccountResponse.from_entity(item.account, item.availability)
                for item in snapshot.accounts
            ],
            active_assignments=[AssignmentResponse.from_detail(d) for d in snapshot.active],
            expired_assignments=[AssignmentResponse.from_detail(d) for d in snapshot.expired],
            expiring_soon_assignments=[
                AssignmentResponse.from_detail(d) for d in snapshot.expiring_soon
            ],
        )
