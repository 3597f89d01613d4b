from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .attributes import AttributeRule, parse_attribute_rule


class Role(str, Enum):
    """
    Organization roles, weakest first.

    Each role inherits every grant of the roles below it.
    """

    VIEWER = "VIEWER"
    MEMBER = "MEMBER"
    MANAGER = "MANAGER"
    OWNER = "OWNER"


class Action(str, Enum):
    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"
    MANAGE = "manage"  # all of the above on a resource


CRUD_ACTIONS = frozenset({Action.CREATE, Action.READ, Action.UPDATE, Action.DELETE})


class Scope(str, Enum):
    OWN = "own"
    ANY = "any"


class DenialReason(str, Enum):
    """Why a decision was denied."""

    INSUFFICIENT_PERMISSIONS = "insufficient_permissions"
    NOT_OWNED = "not_owned"
    CROSS_ORGANIZATION = "cross_organization"
    INVALID_PERMISSION = "invalid_permission"


def parse_permission(permission: str) -> tuple[Action, str, Scope]:
    """
    Parse an ``action:resource[:scope]`` string.

    Args:
        permission: Permission string such as ``read:asset`` or ``update:task:own``

    Returns:
        Tuple of (action, resource, scope); scope defaults to ``any``

    Raises:
        ValueError: If the string is not a well formed permission
    """
    if not isinstance(permission, str):
        raise ValueError(f"Permission must be a string, got {type(permission).__name__}")

    parts = permission.split(":")
    if len(parts) not in (2, 3) or not all(parts):
        raise ValueError(f"Malformed permission string: {permission!r}")

    action = Action(parts[0])
    scope = Scope(parts[2]) if len(parts) == 3 else Scope.ANY
    return action, parts[1], scope


@dataclass(frozen=True)
class Grant:
    """A single registry entry: ``role`` may ``action`` on ``resource``."""

    role: Role
    action: Action
    resource: str
    scope: Scope
    attributes: Optional[AttributeRule] = None

    @classmethod
    def parse(
        cls, role: Role, permission: str, attributes: Optional[list[str]] = None
    ) -> "Grant":
        action, resource, scope = parse_permission(permission)
        rule = parse_attribute_rule(attributes) if attributes is not None else None
        return cls(
            role=role,
            action=action,
            resource=resource,
            scope=scope,
            attributes=rule,
        )

    @property
    def permission(self) -> str:
        return f"{self.action.value}:{self.resource}:{self.scope.value}"

    def attribute_list(self) -> list[str]:
        """Attributes reported on a granted decision; no rule means all fields."""
        if self.attributes is None:
            return ["*"]
        return self.attributes.to_list()


class PermissionContext(BaseModel):
    """Per-request description of the acting principal and target resource."""

    model_config = ConfigDict(frozen=True)

    user_id: str = Field(..., description="Identity of the acting principal")
    user_role: Role = Field(..., description="Role of the principal in its organization")
    organization_id: str = Field(..., description="Organization of the principal")
    resource_owner_id: Optional[str] = Field(
        None, description="Owner of the resource being acted on"
    )
    resource_organization_id: Optional[str] = Field(
        None, description="Organization the resource belongs to"
    )


class Decision(BaseModel):
    model_config = ConfigDict(frozen=True)

    granted: bool
    attributes: Optional[list[str]] = None
    message: Optional[str] = None
    reason: Optional[DenialReason] = None

    @classmethod
    def allow(cls, attributes: list[str]) -> "Decision":
        return cls(granted=True, attributes=attributes)

    @classmethod
    def deny(cls, reason: DenialReason, message: str) -> "Decision":
        return cls(granted=False, attributes=[], message=message, reason=reason)


class RoleCapabilities(BaseModel):
    role: Role
    inherits: list[Role]
    can_manage: list[str]
    permissions: list[str]
