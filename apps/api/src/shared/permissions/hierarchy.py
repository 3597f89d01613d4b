"""
Fixed role order and the helpers derived from it.

Roles form a chain: every role except VIEWER has exactly one immediate
weaker role it inherits grants from.
"""

from typing import Optional

from .models import Role

ROLE_ORDER: tuple[Role, ...] = (
    Role.VIEWER,
    Role.MEMBER,
    Role.MANAGER,
    Role.OWNER,
)

_RANKS: dict[Role, int] = {role: rank for rank, role in enumerate(ROLE_ORDER)}


def role_rank(role: Role) -> int:
    """Position of ``role`` in the hierarchy, VIEWER being 0."""
    return _RANKS[role]


def weaker_role(role: Role) -> Optional[Role]:
    """The immediate role ``role`` inherits from, or None for VIEWER."""
    rank = role_rank(role)
    return ROLE_ORDER[rank - 1] if rank > 0 else None


def weaker_roles(role: Role) -> tuple[Role, ...]:
    """All roles ``role`` inherits from, strongest first."""
    return tuple(reversed(ROLE_ORDER[: role_rank(role)]))


def can_assume_role(acting_role: Role, target_role: Role) -> bool:
    """
    Check if a principal holding ``acting_role`` may act as ``target_role``.

    Assumption only flows strictly downward: a role can never assume itself
    or a role of equal or greater rank.

    Args:
        acting_role: Role currently held by the principal
        target_role: Role the principal wants to act as

    Returns:
        True if the target role is strictly weaker, False otherwise
    """
    try:
        return role_rank(Role(target_role)) < role_rank(Role(acting_role))
    except ValueError:
        return False
