"""Membership Client — wraps httpx.AsyncClient with timeout and error mapping.

Invariants:
    - Timeouts, connection failures and unexpected statuses -> MembershipServiceError
    - No retries: a failed lookup aborts the authoring request immediately
    - organization_exists: 200 -> True, 404 -> False, anything else -> MembershipServiceError
    - Ground-user lists: 404 -> empty list (the core turns that into EmptyMembershipError)

Design Decisions:
    - Wrapper over raw client: isolates HTTP details from the orchestrator (ADR: single responsibility)
    - httpx.AsyncClient injected or built from settings; owned by the FastAPI lifespan
    - Payload accepts either a bare list or {"ground_users": [...]}, and either
      author_handle or handle per entry
"""

import logging
from uuid import UUID

import httpx

from courier.core.domain_types import GroundUser
from courier.core.errors import ErrorContext, MembershipServiceError

logger = logging.getLogger(__name__)


def _parse_ground_users(payload: object) -> list[GroundUser]:
    """Map the membership payload to GroundUser values."""
    if isinstance(payload, dict):
        payload = payload.get("ground_users", [])
    if not isinstance(payload, list):
        raise MembershipServiceError(
            "Unexpected ground user payload", "invalid_payload",
        )
    users = []
    for entry in payload:
        if not isinstance(entry, dict):
            continue
        handle = entry.get("author_handle") or entry.get("handle")
        users.append(GroundUser(
            ground_user_id=str(entry.get("id") or entry.get("ground_user_id") or ""),
            author_handle=handle or None,
        ))
    return users


class HttpMembershipClient:
    """Membership directory backed by the membership HTTP API."""

    def __init__(
        self,
        base_url: str | None = None,
        api_token: str | None = None,
        timeout_seconds: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ):
        if client is None:
            headers = {"Accept": "application/json"}
            if api_token:
                headers["Authorization"] = f"Bearer {api_token}"
            client = httpx.AsyncClient(
                base_url=base_url or "",
                headers=headers,
                timeout=timeout_seconds,
            )
        self.client = client

    async def organization_exists(self, organization_id: UUID) -> bool:
        response = await self._get(f"/organizations/{organization_id}")
        if response.status_code == 404:
            return False
        self._raise_for_status(response)
        return True

    async def get_organization_ground_users(
        self, organization_id: UUID,
    ) -> list[GroundUser]:
        return await self._ground_users(
            f"/organizations/{organization_id}/ground-users", "organization",
        )

    async def get_region_ground_users(self, region_id: UUID) -> list[GroundUser]:
        return await self._ground_users(
            f"/regions/{region_id}/ground-users", "region",
        )

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _ground_users(self, path: str, scope: str) -> list[GroundUser]:
        response = await self._get(path)
        if response.status_code == 404:
            return []
        self._raise_for_status(response)
        try:
            payload = response.json()
        except ValueError:
            raise MembershipServiceError(
                "Response is not JSON", "invalid_payload",
                status_code=response.status_code,
            )
        users = _parse_ground_users(payload)
        logger.info(
            f"Resolved {len(users)} ground users for {scope}",
            extra={"target_kind": scope, "recipient_count": len(users)},
        )
        return users

    async def _get(self, path: str) -> httpx.Response:
        context = ErrorContext(debug_info={"path": path})
        try:
            return await self.client.get(path)
        except httpx.TimeoutException:
            raise MembershipServiceError(
                f"Timed out calling {path}", "timeout", context=context,
            )
        except httpx.HTTPError as e:
            logger.error(f"Membership request failed: {e}")
            raise MembershipServiceError(
                str(e), "connection_error", context=context,
            )

    def _raise_for_status(self, response: httpx.Response) -> None:
        if response.is_success:
            return
        raise MembershipServiceError(
            f"{response.request.method} {response.request.url.path} "
            f"returned {response.status_code}",
            "server_error" if response.status_code >= 500 else "client_error",
            status_code=response.status_code,
        )
