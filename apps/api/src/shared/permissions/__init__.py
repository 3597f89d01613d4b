"""
Shared permission system for role-based, attribute-scoped access control.

This module provides the policy engine every route consults: a registry of
grants per role, the role hierarchy, the decision engine and the attribute
filter applied to entities before they are returned.

Usage:
    from src.shared.permissions import Decision, redact, require_permission

    @router.get("/assets/{asset_id}")
    async def get_asset(
        asset_id: str,
        decision: Decision = Depends(
            require_permission("read", "asset", include_attributes=True)
        ),
    ):
        return redact(asset, decision)
"""

from .attributes import (
    AllowAll,
    AllowAllExcept,
    AllowOnly,
    AttributeRule,
    filter_attributes,
    parse_attribute_rule,
)
from .dependencies import (
    get_permission_service,
    require_manage_permission,
    require_organization_access,
    require_ownership,
    require_permission,
    require_role,
)
from .hierarchy import ROLE_ORDER, can_assume_role, role_rank
from .models import (
    Action,
    Decision,
    DenialReason,
    Grant,
    PermissionContext,
    Role,
    RoleCapabilities,
    Scope,
)
from .registry import ROLE_GRANTS, PermissionRegistry
from .services import PermissionService, redact

__all__ = [
    "Action",
    "AllowAll",
    "AllowAllExcept",
    "AllowOnly",
    "AttributeRule",
    "Decision",
    "DenialReason",
    "Grant",
    "PermissionContext",
    "PermissionRegistry",
    "PermissionService",
    "ROLE_GRANTS",
    "ROLE_ORDER",
    "Role",
    "RoleCapabilities",
    "Scope",
    "can_assume_role",
    "filter_attributes",
    "get_permission_service",
    "parse_attribute_rule",
    "redact",
    "require_manage_permission",
    "require_organization_access",
    "require_ownership",
    "require_permission",
    "require_role",
    "role_rank",
]
