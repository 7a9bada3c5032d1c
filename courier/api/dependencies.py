"""Route Dependencies — builds core services from collaborators owned by the lifespan.

Invariants:
    - Collaborators (db_manager, membership) live on app.state, created once per process
    - Services are cheap and built per request around those collaborators

Design Decisions:
    - Dependencies instead of module globals: tests override them via dependency_overrides
"""

from fastapi import Depends, Request

from courier.core.repository_protocols import MembershipDirectory
from courier.infrastructure.database import DatabaseSessionManager, get_db_manager
from courier.services.delivery_orchestrator import DeliveryOrchestrator
from courier.services.message_reader import MessageReader


def get_membership(request: Request) -> MembershipDirectory:
    membership = getattr(request.app.state, "membership", None)
    if membership is None:
        raise RuntimeError("Membership client not initialized")
    return membership


def get_orchestrator(
    db_manager: DatabaseSessionManager = Depends(get_db_manager),
    membership: MembershipDirectory = Depends(get_membership),
) -> DeliveryOrchestrator:
    return DeliveryOrchestrator(db_manager.unit_of_work, membership)


def get_reader(
    db_manager: DatabaseSessionManager = Depends(get_db_manager),
) -> MessageReader:
    return MessageReader(db_manager.unit_of_work)
