from typing import Awaitable, Callable, Optional

from fastapi import Depends, Request

from src.domains.auth import dependencies as auth_dependencies
from src.shared.exceptions import AuthenticationRequiredError, PermissionDeniedError

from .models import Action, Decision, PermissionContext, Role, Scope
from .services import NOT_OWNED_MESSAGE, PermissionService

ORGANIZATION_ACCESS_MESSAGE = "Access denied to this organization"


def get_permission_service(request: Request) -> PermissionService:
    """PermissionService built at application start-up."""
    return request.app.state.permission_service


def require_permission(
    action: Action | str,
    resource: str,
    scope: Scope | str = Scope.ANY,
    resource_owner_param: Optional[str] = None,
    resource_org_param: Optional[str] = None,
    include_attributes: bool = False,
) -> Callable[..., Awaitable[Decision]]:
    """
    Dependency factory for permission-based authorization.

    Args:
        action: Action being performed
        resource: Resource tag being accessed
        scope: Requested scope, ``any`` by default
        resource_owner_param: Path parameter holding the resource owner ID
        resource_org_param: Path parameter holding the resource organization ID
        include_attributes: Whether to hand the allowed attributes to the route

    Returns:
        Async dependency function that validates the permission and returns
        the decision
    """

    async def check_permission(
        request: Request,
        context: PermissionContext = Depends(
            auth_dependencies.get_permission_context
        ),
        service: PermissionService = Depends(get_permission_service),
    ) -> Decision:
        """
        Validate the principal may perform the action.

        Raises:
            HTTPException: 401 without a principal, 403 when denied
        """
        if context is None:
            raise AuthenticationRequiredError()

        updates: dict[str, str] = {}
        if resource_owner_param and request.path_params.get(resource_owner_param):
            updates["resource_owner_id"] = request.path_params[resource_owner_param]
        if resource_org_param and request.path_params.get(resource_org_param):
            updates["resource_organization_id"] = request.path_params[
                resource_org_param
            ]

        decision = service.can(
            context.model_copy(update=updates), action, resource, scope
        )
        if not decision.granted:
            raise PermissionDeniedError(decision.message or "Insufficient permissions")

        if not include_attributes:
            return decision.model_copy(update={"attributes": None})
        return decision

    return check_permission


def require_manage_permission(resource: str) -> Callable[..., Awaitable[Decision]]:
    """Shorthand for ``require_permission("manage", resource, scope="any")``."""
    return require_permission(Action.MANAGE, resource, scope=Scope.ANY)


def require_ownership(
    resource_owner_param: str = "user_id",
) -> Callable[..., Awaitable[PermissionContext]]:
    """
    Dependency factory requiring the principal to own the resource.

    The owner is read from the named path parameter. OWNER principals pass
    regardless of ownership.
    """

    async def check_ownership(
        request: Request,
        context: PermissionContext = Depends(
            auth_dependencies.get_permission_context
        ),
    ) -> PermissionContext:
        if context is None:
            raise AuthenticationRequiredError()

        resource_owner_id = request.path_params.get(resource_owner_param)
        if not resource_owner_id:
            raise PermissionDeniedError("Resource owner not specified")

        if resource_owner_id != context.user_id and context.user_role is not Role.OWNER:
            raise PermissionDeniedError(NOT_OWNED_MESSAGE)

        return context.model_copy(update={"resource_owner_id": resource_owner_id})

    return check_ownership


def require_role(
    *allowed_roles: Role | str,
) -> Callable[..., Awaitable[PermissionContext]]:
    """
    Dependency factory admitting only the listed roles.

    Roles are matched exactly; a stronger role is not admitted unless listed.

    Raises:
        HTTPException: 401 without a principal, 403 for any other role
    """
    roles = frozenset(Role(role) for role in allowed_roles)

    async def check_role(
        context: PermissionContext = Depends(
            auth_dependencies.get_permission_context
        ),
    ) -> PermissionContext:
        if context is None:
            raise AuthenticationRequiredError()

        if context.user_role not in roles:
            raise PermissionDeniedError("Insufficient permissions")

        return context

    return check_role


def require_organization_access(
    org_param: str = "organization_id",
) -> Callable[..., Awaitable[PermissionContext]]:
    """
    Dependency factory keeping the principal inside its own organization.

    The organization is read from the named path parameter; routes without it
    pass unchanged.
    """

    async def check_organization_access(
        request: Request,
        context: PermissionContext = Depends(
            auth_dependencies.get_permission_context
        ),
    ) -> PermissionContext:
        if context is None:
            raise AuthenticationRequiredError()

        organization_id = request.path_params.get(org_param)
        if not organization_id:
            return context

        if organization_id != context.organization_id:
            raise PermissionDeniedError(ORGANIZATION_ACCESS_MESSAGE)

        return context.model_copy(
            update={"resource_organization_id": organization_id}
        )

    return check_organization_access
