"""
Dynamic permission testing utilities for sustainable test maintenance.

These utilities derive expectations from the actual ROLE_GRANTS table, so
tests stay valid when grants or resources are added.
"""

from typing import Set

from src.shared.permissions import ROLE_GRANTS, ROLE_ORDER, Action, Role
from src.shared.permissions.models import parse_permission


class PermissionTestHelpers:
    """Helper class for dynamic permission testing."""

    @staticmethod
    def get_all_resources() -> Set[str]:
        """Every resource tag mentioned in the grant table."""
        return {
            parse_permission(permission)[1]
            for grants in ROLE_GRANTS.values()
            for permission in grants
        }

    @staticmethod
    def get_direct_permissions(role: Role) -> Set[str]:
        """Normalized ``action:resource:scope`` strings granted directly to a role."""
        normalized = set()
        for permission in ROLE_GRANTS.get(role, {}):
            action, resource, scope = parse_permission(permission)
            normalized.add(f"{action.value}:{resource}:{scope.value}")
        return normalized

    @staticmethod
    def get_expected_closure(role: Role) -> Set[str]:
        """Union of the direct permissions of ``role`` and every weaker role."""
        expected: Set[str] = set()
        for candidate in ROLE_ORDER[: ROLE_ORDER.index(role) + 1]:
            expected |= PermissionTestHelpers.get_direct_permissions(candidate)
        return expected

    @staticmethod
    def get_managed_resources(role: Role) -> Set[str]:
        """Resources the role (or a weaker one) holds ``manage`` on."""
        return {
            permission.split(":")[1]
            for permission in PermissionTestHelpers.get_expected_closure(role)
            if permission.startswith(f"{Action.MANAGE.value}:")
        }
