"""User Directory Stub."""

from __future__ import annotations

import copy

from src.application.ports.user_directory import UserDirectoryProtocol
from src.domain.models.assessment import OwnerInfo
from src.domain.models.request_info import RequestInfo


class UserDirectoryStub(UserDirectoryProtocol):
    """Owner details served from an in-memory map keyed by uuid."""

    def __init__(self, users: list[OwnerInfo] | None = None) -> None:
        self._users: dict[str, OwnerInfo] = {}
        self.lookups: list[set[str]] = []
        for user in users or []:
            self.add(user)

    def add(self, user: OwnerInfo) -> None:
        if user.uuid is None:
            raise ValueError("directory users need a uuid")
        self._users[user.uuid] = user

    async def get_users(
        self,
        tenant_id: str | None,
        uuids: set[str],
        request_info: RequestInfo,
    ) -> dict[str, OwnerInfo]:
        self.lookups.append(set(uuids))
        return {uuid: copy.deepcopy(self._users[uuid]) for uuid in uuids if uuid in self._users}
