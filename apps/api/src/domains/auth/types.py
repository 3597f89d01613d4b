"""Auth domain type definitions for type safety."""

from typing import Optional

from pydantic import BaseModel, Field

from src.shared.permissions.models import Role


class AccessTokenPayload(BaseModel):
    """Access token payload structure."""

    # Standard JWT claims
    sub: Optional[str] = Field(None, description="Subject (user ID)")
    iss: Optional[str] = Field(None, description="Token issuer")
    exp: Optional[int] = Field(None, description="Expiration timestamp")
    iat: Optional[int] = Field(None, description="Issued at timestamp")
    jti: Optional[str] = Field(None, description="JWT ID")

    # Application claims
    email: Optional[str] = Field(None, description="User email address")
    role: Optional[Role] = Field(None, description="Role within the organization")
    organization_id: Optional[str] = Field(
        None, description="Organization the user belongs to"
    )

    model_config = {"extra": "allow"}
