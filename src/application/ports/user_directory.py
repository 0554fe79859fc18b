"""User directory port (owner detail lookup)."""

from __future__ import annotations

from typing import Protocol

from src.domain.models.assessment import OwnerInfo
from src.domain.models.request_info import RequestInfo


class UserDirectoryProtocol(Protocol):
    """Protocol for looking up owner details by user uuid."""

    async def get_users(
        self,
        tenant_id: str | None,
        uuids: set[str],
        request_info: RequestInfo,
    ) -> dict[str, OwnerInfo]:
        """Return owner details keyed by uuid; unknown uuids are omitted."""
        ...
