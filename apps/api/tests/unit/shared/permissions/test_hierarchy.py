"""
Tests for the role hierarchy and role assumption checker.
"""

import itertools

import pytest

from src.shared.permissions.hierarchy import (
    ROLE_ORDER,
    can_assume_role,
    role_rank,
    weaker_role,
    weaker_roles,
)
from src.shared.permissions.models import Role


class TestRoleOrder:
    """Test the fixed total order of roles."""

    def test_ranks(self):
        """Test that ranks follow VIEWER < MEMBER < MANAGER < OWNER."""
        assert role_rank(Role.VIEWER) == 0
        assert role_rank(Role.MEMBER) == 1
        assert role_rank(Role.MANAGER) == 2
        assert role_rank(Role.OWNER) == 3

    def test_order_covers_every_role(self):
        """Test that no role is missing from the order."""
        assert set(ROLE_ORDER) == set(Role)

    def test_weaker_role_chain(self):
        """Test that each role has exactly one immediate weaker role."""
        assert weaker_role(Role.VIEWER) is None
        assert weaker_role(Role.MEMBER) is Role.VIEWER
        assert weaker_role(Role.MANAGER) is Role.MEMBER
        assert weaker_role(Role.OWNER) is Role.MANAGER

    def test_weaker_roles_strongest_first(self):
        """Test the full inheritance chain of each role."""
        assert weaker_roles(Role.VIEWER) == ()
        assert weaker_roles(Role.MEMBER) == (Role.VIEWER,)
        assert weaker_roles(Role.OWNER) == (Role.MANAGER, Role.MEMBER, Role.VIEWER)


class TestCanAssumeRole:
    """Test the can_assume_role function."""

    def test_assumption_down_the_hierarchy(self):
        """Test that stronger roles can act as weaker ones."""
        assert can_assume_role(Role.OWNER, Role.MANAGER) is True
        assert can_assume_role(Role.OWNER, Role.VIEWER) is True
        assert can_assume_role(Role.MANAGER, Role.MEMBER) is True
        assert can_assume_role(Role.MEMBER, Role.VIEWER) is True

    def test_assumption_up_the_hierarchy_denied(self):
        """Test that weaker roles can never act as stronger ones."""
        assert can_assume_role(Role.VIEWER, Role.MEMBER) is False
        assert can_assume_role(Role.MEMBER, Role.MANAGER) is False
        assert can_assume_role(Role.MANAGER, Role.OWNER) is False

    @pytest.mark.parametrize("role", list(Role))
    def test_role_cannot_assume_itself(self, role: Role):
        """Test that assuming the same role is never allowed."""
        assert can_assume_role(role, role) is False

    def test_matches_rank_order_for_all_pairs(self):
        """Test can_assume_role(a, b) == rank(b) < rank(a) for every pair."""
        for acting, target in itertools.product(Role, repeat=2):
            assert can_assume_role(acting, target) is (
                role_rank(target) < role_rank(acting)
            )

    def test_accepts_role_values(self):
        """Test that plain string role values are accepted."""
        assert can_assume_role("OWNER", "VIEWER") is True  # type: ignore[arg-type]

    def test_unknown_role_is_denied(self):
        """Test that unknown roles fail closed instead of raising."""
        assert can_assume_role(Role.OWNER, "ADMIN") is False  # type: ignore[arg-type]
