"""Profile creation endpoint used right after sign-up."""

import hmac
from typing import Annotated
from uuid import UUID

import structlog
from fastapi import APIRouter, Depends, Header, Request, Response, status

from api.dependencies.auth import OptionalPrincipal
from api.v1.dependencies import get_profile_reconciler
from api.v1.schemas.common import ErrorResponse
from api.v1.schemas.profile import MeResponse
from api.v1.schemas.user import UserCreate, UserCreateResponse
from core.config import settings
from core.exceptions import (
    AppException,
    AuthorizationError,
    AuthRequiredError,
    ErrorCode,
    MissingFieldsError,
)
from core.rate_limit import limiter
from domain.entities.principal import Principal
from domain.services.profile_reconciler import ProfileReconciler

logger = structlog.get_logger()

router = APIRouter(tags=["users"])


def _is_service_caller(apikey: str | None) -> bool:
    expected = settings.supabase_service_role_key
    return bool(expected and apikey) and hmac.compare_digest(apikey, expected)


@router.post(
    "/users",
    response_model=UserCreateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create the profile for a new sign-up",
    responses={
        200: {"description": "Profile already existed (skipped)"},
        201: {"description": "Profile created"},
        400: {"model": ErrorResponse, "description": "Missing required fields"},
        403: {"model": ErrorResponse, "description": "Token does not match the id or email"},
        409: {"model": ErrorResponse, "description": "Handle conflict, try again"},
        500: {"model": ErrorResponse, "description": "Store failure"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def create_user(
    request: Request,
    response: Response,
    body: UserCreate,
    principal: OptionalPrincipal,
    apikey: Annotated[str | None, Header()] = None,
    reconciler: ProfileReconciler = Depends(get_profile_reconciler),
) -> UserCreateResponse:
    """Idempotently create the caller's profile.

    Runs the same reconciliation as every other request path, with the
    name/username from the sign-up form as hints, so racing it against
    ``GET /me`` still yields one profile. Signed-in callers may only
    create their own profile with the email from their token; the
    service-role key may create any profile.
    """
    missing = body.missing_fields()
    if missing:
        raise MissingFieldsError(missing)

    try:
        user_id = UUID(body.id.strip())  # type: ignore[union-attr]
    except ValueError:
        raise AppException(
            error_code=ErrorCode.VALIDATION_ERROR,
            message="id must be a UUID",
            status_code=400,
        ) from None

    hints = {"name": body.name, "username": body.username}
    if _is_service_caller(apikey):
        # Trusted server: the body is authoritative.
        result = await reconciler.ensure(
            Principal(
                principal_id=user_id,
                email=body.email,
                email_confirmed=True,
                metadata=hints,
            ),
            require_confirmed_email=False,
        )
    else:
        if principal is None:
            raise AuthRequiredError()
        if principal.principal_id != user_id:
            raise AuthorizationError("Cannot create a profile for another user")
        # The email drives re-keying, so only the token's email counts.
        if (body.email or "").strip().lower() != (principal.normalized_email or ""):
            raise AuthorizationError("Email does not match the signed-in account")
        result = await reconciler.ensure(
            Principal(
                principal_id=user_id,
                email=principal.email,
                email_confirmed=principal.email_confirmed,
                metadata={**principal.metadata, **hints},
            )
        )

    if result.created:
        return UserCreateResponse(
            status="created",
            message="User profile created successfully.",
            data=MeResponse.model_validate(result.profile),
        )

    logger.info(
        "profile_creation_skipped",
        profile_id=str(user_id),
        outcome=result.outcome.value,
    )
    response.status_code = status.HTTP_200_OK
    return UserCreateResponse(
        status="skipped",
        message="Profile already exists.",
        data=MeResponse.model_validate(result.profile),
        meta={"outcome": result.outcome.value},
    )
