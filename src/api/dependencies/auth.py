"""Authentication dependencies for FastAPI."""

from typing import Annotated

import structlog
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from api.v1.dependencies import get_profile_reconciler
from core.exceptions import AuthRequiredError
from domain.entities.principal import Principal
from domain.entities.profile import Profile
from domain.services.profile_reconciler import ProfileReconciler
from infrastructure.auth.jwt_provider import JWTAuthProvider

# Security scheme for OpenAPI docs
security = HTTPBearer(auto_error=False)

# Singleton auth provider
_auth_provider: JWTAuthProvider | None = None


def get_auth_provider() -> JWTAuthProvider:
    """Get or create the auth provider singleton."""
    global _auth_provider
    if _auth_provider is None:
        _auth_provider = JWTAuthProvider()
    return _auth_provider


async def get_current_principal(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None,
        Depends(security),
    ],
    auth_provider: JWTAuthProvider = Depends(get_auth_provider),
) -> Principal:
    """
    Dependency to get the authenticated principal.

    Raises:
        AuthRequiredError: If no token provided or token is invalid
    """
    if not credentials:
        raise AuthRequiredError()

    principal = await auth_provider.validate_token(credentials.credentials)
    if not principal:
        raise AuthRequiredError("Invalid or expired token, log in again")

    return principal


async def get_optional_principal(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None,
        Depends(security),
    ],
    auth_provider: JWTAuthProvider = Depends(get_auth_provider),
) -> Principal | None:
    """
    Dependency to get the principal if authenticated.

    Returns:
        Principal if authenticated, None otherwise (no exception raised)
    """
    if not credentials:
        return None

    return await auth_provider.validate_token(credentials.credentials)


async def get_current_profile(
    request: Request,
    principal: Annotated[Principal, Depends(get_current_principal)],
    reconciler: ProfileReconciler = Depends(get_profile_reconciler),
) -> Profile:
    """
    Dependency that reconciles the caller into their canonical profile.

    Every profile-dependent route goes through here, so a profile exists
    before any work that references it.
    """
    profile = await reconciler.reconcile(principal)
    request.state.profile_id = str(profile.id)
    structlog.contextvars.bind_contextvars(profile_id=str(profile.id))
    return profile


# Type aliases for convenience in route handlers
CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]
OptionalPrincipal = Annotated[Principal | None, Depends(get_optional_principal)]
CurrentProfile = Annotated[Profile, Depends(get_current_profile)]
