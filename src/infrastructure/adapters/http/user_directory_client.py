"""User directory HTTP adapter (owner details)."""

from __future__ import annotations

from src.application.dtos.contracts import (
    RequestInfoContract,
    UserSearchRequestContract,
    UserSearchResponseContract,
)
from src.application.ports.user_directory import UserDirectoryProtocol
from src.domain.errors.integration import UpstreamServiceError
from src.domain.models.assessment import OwnerInfo
from src.domain.models.request_info import RequestInfo
from src.infrastructure.adapters.http.base import HttpAdapter

USER_SEARCH_PATH = "/user/_search"


def _user_error(detail: str, status_code: int | None) -> UpstreamServiceError:
    return UpstreamServiceError(
        "user", "search", f"UPSTREAM_ERROR: {detail}", status_code=status_code
    )


class HttpUserDirectory(HttpAdapter, UserDirectoryProtocol):
    async def get_users(
        self,
        tenant_id: str | None,
        uuids: set[str],
        request_info: RequestInfo,
    ) -> dict[str, OwnerInfo]:
        if not uuids:
            return {}
        body = UserSearchRequestContract(
            request_info=RequestInfoContract.from_domain(request_info),
            tenant_id=tenant_id,
            uuid=sorted(uuids),
        )
        payload = await self._post(USER_SEARCH_PATH, body.to_wire(), _user_error)
        response = self._parse(UserSearchResponseContract, payload, _user_error)
        return {user.uuid: user.to_domain() for user in response.users}
