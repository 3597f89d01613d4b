import logging
from typing import Any, Mapping, NamedTuple, Optional

from .attributes import filter_attributes
from .hierarchy import can_assume_role, role_rank, weaker_roles
from .models import (
    CRUD_ACTIONS,
    Action,
    Decision,
    DenialReason,
    Grant,
    PermissionContext,
    Role,
    RoleCapabilities,
    Scope,
    parse_permission,
)
from .registry import PermissionRegistry

logger = logging.getLogger(__name__)

CROSS_ORGANIZATION_MESSAGE = "Access denied: resource belongs to different organization"
NOT_OWNED_MESSAGE = "Access denied: resource not owned by user"


class _Candidate(NamedTuple):
    """A grant able to satisfy a request, ordered by precedence."""

    narrow: bool  # own-scoped, needs an ownership match
    depth: int  # 0 for the role's direct grants, +1 per inherited level
    derived: bool  # satisfied through a manage grant
    grant: Grant


class PermissionService:
    """
    Decision engine over an immutable PermissionRegistry.

    Holds no mutable state; a single instance can serve concurrent
    requests.
    """

    def __init__(self, registry: PermissionRegistry) -> None:
        self.registry = registry

    def can(
        self,
        context: PermissionContext,
        action: Action | str,
        resource: str,
        scope: Scope | str = Scope.ANY,
    ) -> Decision:
        """
        Decide whether the principal in ``context`` may act on ``resource``.

        Tenant isolation is checked before any grant lookup. Among grants
        able to satisfy the request, an ``any`` grant beats an ``own`` one,
        a direct grant beats an inherited one, and an exact action beats a
        ``manage`` grant.

        Args:
            context: Principal and target resource description
            action: Requested action
            resource: Resource tag, e.g. "asset"
            scope: Requested scope, ``any`` by default

        Returns:
            Decision carrying the allowed attributes or the denial reason
        """
        if (
            context.resource_organization_id is not None
            and context.resource_organization_id != context.organization_id
        ):
            logger.debug(
                f"Denied {action}:{resource} for user {context.user_id}: "
                f"organization {context.resource_organization_id} is not "
                f"{context.organization_id}"
            )
            return Decision.deny(
                DenialReason.CROSS_ORGANIZATION, CROSS_ORGANIZATION_MESSAGE
            )

        try:
            action = Action(action)
            scope = Scope(scope)
        except ValueError:
            requested = ":".join(
                str(getattr(part, "value", part)) for part in (action, resource, scope)
            )
            return Decision.deny(
                DenialReason.INVALID_PERMISSION,
                f"Permission denied: invalid request {requested}",
            )

        candidate = self._best_candidate(context.user_role, action, resource, scope)
        if candidate is None:
            logger.debug(
                f"Denied {action.value}:{resource}:{scope.value} for role "
                f"{context.user_role.value}: no matching grant"
            )
            return Decision.deny(
                DenialReason.INSUFFICIENT_PERMISSIONS,
                f"Insufficient permissions: "
                f"{action.value}:{resource}:{scope.value} required",
            )

        if candidate.narrow and context.resource_owner_id != context.user_id:
            logger.debug(
                f"Denied {action.value}:{resource}:own for user {context.user_id}: "
                f"resource owned by {context.resource_owner_id}"
            )
            return Decision.deny(DenialReason.NOT_OWNED, NOT_OWNED_MESSAGE)

        return Decision.allow(candidate.grant.attribute_list())

    def has_permission(self, context: PermissionContext, permission: str) -> Decision:
        """
        String form of ``can``: ``"action:resource[:scope]"``, scope ``any``
        by default.

        Malformed strings are denied, never raised. An ``own`` request denied
        for anything other than tenant isolation is retried once at ``any``.
        """
        try:
            action, resource, scope = parse_permission(permission)
        except ValueError:
            logger.warning(f"Rejected malformed permission string: {permission!r}")
            return Decision.deny(
                DenialReason.INVALID_PERMISSION,
                f"Permission denied: malformed permission {permission!r}",
            )

        decision = self.can(context, action, resource, scope)
        if (
            decision.granted
            or scope is not Scope.OWN
            or decision.reason is DenialReason.CROSS_ORGANIZATION
        ):
            return decision

        fallback = self.can(context, action, resource, Scope.ANY)
        return fallback if fallback.granted else decision

    def can_assume_role(self, acting_role: Role, target_role: Role) -> bool:
        return can_assume_role(acting_role, target_role)

    def get_role_capabilities(self, role: Role) -> RoleCapabilities:
        """Summarize the grants ``role`` holds, inherited ones included."""
        closure = self.registry.closure(role)
        return RoleCapabilities(
            role=role,
            inherits=list(weaker_roles(role)),
            can_manage=list(
                dict.fromkeys(
                    grant.resource for grant in closure if grant.action is Action.MANAGE
                )
            ),
            permissions=list(dict.fromkeys(grant.permission for grant in closure)),
        )

    def get_available_actions(self, role: Role, resource: str) -> list[Action]:
        """
        Actions ``role`` holds on ``resource``.

        ``manage`` is reported as-is, not expanded into CRUD.
        """
        held = {grant.action for grant in self.registry.grants_for(role, resource)}
        return [action for action in Action if action in held]

    def _best_candidate(
        self, role: Role, action: Action, resource: str, scope: Scope
    ) -> Optional[_Candidate]:
        rank = role_rank(role)
        candidates: list[_Candidate] = []

        for grant in self.registry.grants_for(role, resource):
            depth = rank - role_rank(grant.role)
            if grant.action is action:
                if grant.scope is Scope.ANY:
                    candidates.append(_Candidate(False, depth, False, grant))
                elif scope is Scope.OWN:
                    candidates.append(_Candidate(True, depth, False, grant))
            elif grant.action is Action.MANAGE and action in CRUD_ACTIONS:
                candidates.append(_Candidate(False, depth, True, grant))

        if not candidates:
            return None
        return min(candidates, key=lambda candidate: candidate[:3])


def redact(data: Mapping[str, Any], decision: Decision) -> dict[str, Any]:
    """
    Apply a decision's attribute rule to an entity before it is returned.

    A decision carrying no attributes leaves the entity whole. Decisions from
    ``require_permission`` only carry attributes when the dependency was built
    with ``include_attributes=True``; without it nothing is redacted.
    """
    if decision.attributes is None:
        return dict(data)
    return filter_attributes(data, decision.attributes)
