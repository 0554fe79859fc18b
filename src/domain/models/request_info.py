"""Request metadata carried with every assessment operation."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, eq=True)
class Role:
    """A role held by the calling user, scoped to a tenant."""

    code: str
    tenant_id: str | None = None
    name: str | None = None


@dataclass(frozen=True, eq=True)
class UserInfo:
    """The authenticated caller.

    Attributes:
        uuid: Stable user identifier, written into audit fields.
        type: User type (e.g. "CITIZEN", "EMPLOYEE").
        tenant_id: Tenant the user belongs to.
        roles: Roles held by the user.
    """

    uuid: str
    type: str = "EMPLOYEE"
    tenant_id: str | None = None
    name: str | None = None
    roles: tuple[Role, ...] = ()

    def has_role(self, code: str) -> bool:
        """Check whether the user holds a role with the given code."""
        return any(role.code == code for role in self.roles)


@dataclass(frozen=True, eq=True)
class RequestInfo:
    """Metadata about the request (caller, correlation)."""

    user_info: UserInfo | None = None
    correlation_id: str | None = None
    api_id: str = "Rainmaker"
    action: str | None = None
    extra: dict[str, str] = field(default_factory=dict, compare=False)
