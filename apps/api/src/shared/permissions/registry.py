from typing import Mapping, Optional

from .hierarchy import ROLE_ORDER, weaker_role
from .models import Grant, Role

GrantTable = Mapping[Role, Mapping[str, Optional[list[str]]]]

# Direct grants only; each role also inherits everything below it.
# Values are attribute rules, None meaning all fields.
ROLE_GRANTS: GrantTable = {
    Role.VIEWER: {
        # Read-only access to basic resources
        "read:asset:any": ["*", "!purchasePrice", "!receiptPath"],
        "read:component:any": ["*", "!purchasePrice", "!receiptPath"],
        "read:task:any": ["*", "!estimatedCost", "!actualCost"],
        "read:organization": ["id", "name", "createdAt"],
        "read:user:any": ["id", "email", "fullName", "role"],
        "read:file:any": ["originalFilename", "mimeType", "uploadDate"],
        "read:location:any": None,
        "read:asset-template:any": None,
        "read:schedule:any": None,
        "read:notification:own": None,
        "read:dashboard:any": None,
    },
    Role.MEMBER: {
        # Create new resources, change their own
        "create:asset:any": None,
        "update:asset:own": None,
        "delete:asset:own": None,
        "create:component:any": None,
        "update:component:own": None,
        "delete:component:own": None,
        "create:task:any": None,
        "update:task:own": None,
        "delete:task:own": None,
        "create:file:any": None,
        "delete:file:own": None,
        "read:api-token:own": None,
        "create:api-token:own": None,
        "delete:api-token:own": None,
        "update:user:own": ["fullName", "totpEnabled"],
        "create:location:any": None,
        "update:notification:own": ["isRead", "readAt"],
    },
    Role.MANAGER: {
        # Most resources across the organization
        "read:asset:any": None,
        "update:asset:any": None,
        "delete:asset:any": None,
        "read:component:any": None,
        "update:component:any": None,
        "delete:component:any": None,
        "read:task:any": None,
        "update:task:any": None,
        "delete:task:any": None,
        "read:file:any": None,
        "delete:file:any": None,
        "update:user:any": ["fullName", "role", "isActive"],
        "read:api-token:any": None,
        "delete:api-token:any": None,
        "read:report:any": None,
        "manage:location:any": None,
        "manage:asset-template:any": None,
        "create:schedule:any": None,
        "update:schedule:any": None,
        "delete:schedule:any": None,
        "read:notification:any": None,
        "create:notification:any": None,
        "read:audit:any": None,
    },
    Role.OWNER: {
        # Full access
        "manage:organization": None,
        "create:user:any": None,
        "delete:user:any": None,
        "manage:user:any": None,
        "manage:asset:any": None,
        "manage:component:any": None,
        "manage:task:any": None,
        "manage:file:any": None,
        "manage:api-token:any": None,
        "manage:report:any": None,
        "manage:location:any": None,
        "manage:asset-template:any": None,
        "manage:schedule:any": None,
        "manage:notification:any": None,
        "manage:audit:any": None,
        "manage:dashboard:any": None,
        "manage:backup:any": None,
    },
}


class PermissionRegistry:
    """
    Immutable table of grants per role with precomputed inheritance.

    Every grant string is parsed into a Grant once, here. The closure of
    each role (its direct grants followed by the closure of its weaker
    role) is resolved eagerly and never changes afterwards.
    """

    def __init__(self, role_grants: GrantTable = ROLE_GRANTS) -> None:
        self._direct: dict[Role, tuple[Grant, ...]] = {
            role: tuple(
                Grant.parse(role, permission, attributes)
                for permission, attributes in role_grants.get(role, {}).items()
            )
            for role in ROLE_ORDER
        }

        self._closure: dict[Role, tuple[Grant, ...]] = {}
        for role in ROLE_ORDER:
            weaker = weaker_role(role)
            inherited = self._closure[weaker] if weaker is not None else ()
            self._closure[role] = self._direct[role] + inherited

        self._by_resource: dict[Role, dict[str, tuple[Grant, ...]]] = {}
        for role, grants in self._closure.items():
            index: dict[str, list[Grant]] = {}
            for grant in grants:
                index.setdefault(grant.resource, []).append(grant)
            self._by_resource[role] = {
                resource: tuple(items) for resource, items in index.items()
            }

    def direct_grants(self, role: Role) -> tuple[Grant, ...]:
        return self._direct[role]

    def closure(self, role: Role) -> tuple[Grant, ...]:
        """Direct and inherited grants of ``role``, direct ones first."""
        return self._closure[role]

    def grants_for(self, role: Role, resource: str) -> tuple[Grant, ...]:
        return self._by_resource[role].get(resource, ())

    def resources(self) -> list[str]:
        """Every resource tag mentioned in the registry."""
        return list(self._by_resource[ROLE_ORDER[-1]])
