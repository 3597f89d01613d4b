# apps/api/src/domains/auth/dependencies.py
import jwt
from fastapi import Header, HTTPException, status
from pydantic import ValidationError

from src.core.settings import settings
from src.shared.exceptions import (
    AuthenticationRequiredError,
    InvalidTokenError,
    TokenVerificationUnavailableError,
)
from src.shared.permissions.models import PermissionContext

from .types import AccessTokenPayload


def decode_access_token(token: str) -> AccessTokenPayload:
    """
    Verifies an access token signed with JWT_SECRET and returns its claims.
    """
    if not settings.JWT_SECRET:
        raise TokenVerificationUnavailableError()

    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            options={"verify_aud": False},
        )
        return AccessTokenPayload(**dict(payload))
    except (jwt.PyJWTError, ValidationError):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )


def get_permission_context(authorization: str = Header(None)) -> PermissionContext:
    """
    Extracts the bearer token from the Authorization header and builds the
    permission context of the authenticated principal.
    """
    if not authorization or not authorization.startswith("Bearer "):
        raise AuthenticationRequiredError()

    token = authorization.split(" ", 1)[1]
    payload = decode_access_token(token)

    if not payload.sub or payload.role is None or not payload.organization_id:
        raise InvalidTokenError()

    return PermissionContext(
        user_id=payload.sub,
        user_role=payload.role,
        organization_id=payload.organization_id,
    )
