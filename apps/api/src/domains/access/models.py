# apps/api/src/domains/access/models.py
from typing import Optional

from pydantic import BaseModel, Field

from src.shared.permissions.models import Action, PermissionContext, Role


class AvailableActionsResponse(BaseModel):
    role: Role
    resource: str
    actions: list[Action]


class PermissionCheckRequest(BaseModel):
    permission: str = Field(..., description="Permission as action:resource[:scope]")
    resource_owner_id: Optional[str] = None
    resource_organization_id: Optional[str] = None


class RoleAssumptionRequest(BaseModel):
    target_role: Role


class RoleAssumptionResponse(BaseModel):
    acting_role: Role
    target_role: Role
    context: PermissionContext
