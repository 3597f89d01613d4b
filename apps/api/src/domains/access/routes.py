# apps/api/src/domains/access/routes.py
import logging

from fastapi import APIRouter, Depends

from src.domains.access.models import (
    AvailableActionsResponse,
    PermissionCheckRequest,
    RoleAssumptionRequest,
    RoleAssumptionResponse,
)
from src.domains.auth.dependencies import get_permission_context
from src.shared.exceptions import PermissionDeniedError
from src.shared.permissions import (
    Decision,
    PermissionContext,
    PermissionService,
    Role,
    RoleCapabilities,
    get_permission_service,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/access", tags=["Access"])


@router.get(
    "/roles/{role}/capabilities",
    response_model=RoleCapabilities,
    operation_id="getRoleCapabilities",
)
async def get_role_capabilities(
    role: Role,
    context: PermissionContext = Depends(get_permission_context),
    service: PermissionService = Depends(get_permission_service),
) -> RoleCapabilities:
    """
    Summarize what a role can do, inherited grants included.
    """
    return service.get_role_capabilities(role)


@router.get(
    "/roles/{role}/resources/{resource}/actions",
    response_model=AvailableActionsResponse,
    operation_id="getAvailableActions",
)
async def get_available_actions(
    role: Role,
    resource: str,
    context: PermissionContext = Depends(get_permission_context),
    service: PermissionService = Depends(get_permission_service),
) -> AvailableActionsResponse:
    """
    List the actions a role holds on a resource type.

    ``manage`` is listed as granted, not expanded into the CRUD actions it
    implies.
    """
    return AvailableActionsResponse(
        role=role,
        resource=resource,
        actions=service.get_available_actions(role, resource),
    )


@router.post("/check", response_model=Decision, operation_id="checkPermission")
async def check_permission(
    payload: PermissionCheckRequest,
    context: PermissionContext = Depends(get_permission_context),
    service: PermissionService = Depends(get_permission_service),
) -> Decision:
    """
    Evaluate a permission string for the current user.

    Denials are part of the response body, not HTTP errors, so clients can
    decide which controls to show.
    """
    scoped = context.model_copy(
        update={
            "resource_owner_id": payload.resource_owner_id,
            "resource_organization_id": payload.resource_organization_id,
        }
    )
    return service.has_permission(scoped, payload.permission)


@router.post(
    "/assume-role",
    response_model=RoleAssumptionResponse,
    operation_id="assumeRole",
)
async def assume_role(
    payload: RoleAssumptionRequest,
    context: PermissionContext = Depends(get_permission_context),
    service: PermissionService = Depends(get_permission_service),
) -> RoleAssumptionResponse:
    """
    Act as a weaker role, e.g. to preview what a viewer sees.

    Only strictly weaker roles can be assumed.
    """
    if not service.can_assume_role(context.user_role, payload.target_role):
        logger.info(
            f"User {context.user_id} denied assuming {payload.target_role.value} "
            f"from {context.user_role.value}"
        )
        raise PermissionDeniedError(
            f"Role {context.user_role.value} cannot assume "
            f"{payload.target_role.value}"
        )

    logger.info(
        f"User {context.user_id} assumed {payload.target_role.value} "
        f"from {context.user_role.value}"
    )
    return RoleAssumptionResponse(
        acting_role=context.user_role,
        target_role=payload.target_role,
        context=context.model_copy(update={"user_role": payload.target_role}),
    )
