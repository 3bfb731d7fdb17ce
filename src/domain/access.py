"""Access Domain Types

Principal, auth identity and the authorization requirements checked at the
top of every request.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, Optional
from src.domain.user import UserRole


@dataclass(frozen=True)
class AuthIdentity:
    """
    Identity yielded by the auth provider for a valid session

    organization_id is the tenant captured when the session was issued.
    It only drives scoped row visibility and is never trusted for
    authorization.
    """

    auth_id: str
    organization_id: Optional[str] = None


@dataclass(frozen=True)
class Principal:
    """
    Resolved caller for one request

    Rebuilt from the persisted user row on every request.
    """

    user_id: str
    organization_id: Optional[str]
    role: UserRole
    is_super_admin: bool = False

    @property
    def has_super_admin_access(self) -> bool:
        # both flags are required
        return self.is_super_admin and self.role == UserRole.ADMIN


@dataclass(frozen=True)
class ResourceDescriptor:
    """
    What the access decision needs to know about a resource

    resource_type/resource_id are used to look up explicit membership rows
    (e.g. project_members). organization_id is None for global resources.
    """

    resource_type: str
    resource_id: str
    organization_id: Optional[str] = None
    owner_id: Optional[str] = None
    is_publicly_available: bool = False


@dataclass(frozen=True)
class RoleRequirement:
    allowed_roles: FrozenSet[UserRole]

    @classmethod
    def of(cls, *roles: UserRole) -> "RoleRequirement":
        return cls(allowed_roles=frozenset(roles))


@dataclass(frozen=True)
class SuperAdminOnly:
    pass


@dataclass(frozen=True)
class ResourceAccess:
    resource: ResourceDescriptor
    write: bool = False
    requires_organization: bool = True


ADMIN_OR_PM = RoleRequirement.of(UserRole.ADMIN, UserRole.PM)
