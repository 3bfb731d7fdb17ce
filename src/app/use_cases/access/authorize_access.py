"""AuthorizeAccess Use Case

Single access decision used by every protected operation.
"""

from typing import Union
from libs.result import Result, Return
from src.app import errors
from src.app.repositories.membership_repository import MembershipRepository
from src.domain.access import (
    Principal,
    ResourceAccess,
    RoleRequirement,
    SuperAdminOnly,
)

Requirement = Union[RoleRequirement, SuperAdminOnly, ResourceAccess]


class AuthorizeAccess:
    """
    Use Case: Decide whether a principal satisfies a requirement

    Business Rules:
    1. Super-admin access (is_super_admin AND role=admin) short-circuits
       every check
    2. RoleRequirement: role must be in the allowed set
    3. SuperAdminOnly: nobody else passes
    4. ResourceAccess:
       - writes on publicly available resources are forbidden
       - an organization is required unless the requirement says otherwise
       - granted to the owner, same-organization callers and explicit
         members, and for reads of publicly available resources
    5. Denials never say why
    """

    def __init__(self, membership_repo: MembershipRepository):
        self.membership_repo = membership_repo

    async def execute(self, principal: Principal, requirement: Requirement) -> Result[None]:
        if principal.has_super_admin_access:
            return Return.ok()

        if isinstance(requirement, SuperAdminOnly):
            return Return.err(errors.forbidden("Super admin access required"))

        if isinstance(requirement, RoleRequirement):
            if principal.role in requirement.allowed_roles:
                return Return.ok()
            return Return.err(errors.forbidden(f"Role {principal.role.value} not allowed"))

        return await self._check_resource(principal, requirement)

    async def _check_resource(self, principal: Principal, requirement: ResourceAccess) -> Result[None]:
        resource = requirement.resource

        if requirement.write and resource.is_publicly_available:
            return Return.err(errors.forbidden("Publicly available resources are read-only"))

        if requirement.requires_organization and not principal.organization_id:
            return Return.err(errors.bad_request(errors.NO_ORGANIZATION_MESSAGE))

        if resource.owner_id is not None and resource.owner_id == principal.user_id:
            return Return.ok()

        if (
            resource.organization_id is not None
            and resource.organization_id == principal.organization_id
        ):
            return Return.ok()

        if resource.is_publicly_available and not requirement.write:
            return Return.ok()

        try:
            is_member = await self.membership_repo.is_member(
                resource.resource_type, resource.resource_id, principal.user_id
            )
        except Exception as e:
            return Return.err(errors.internal_error("Failed to check membership", e))

        if is_member:
            return Return.ok()

        return Return.err(errors.forbidden())
