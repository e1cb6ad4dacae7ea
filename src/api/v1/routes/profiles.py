"""Public profile routes."""

from fastapi import APIRouter, Depends, Query, Request

from api.dependencies.auth import CurrentPrincipal
from api.v1.dependencies import get_profile_service, get_thought_service
from api.v1.schemas.profile import (
    EmailCheckResponse,
    HandleCheckResponse,
    ProfileDetailResponse,
    ProfileResponse,
    ProfileStatsResponse,
)
from api.v1.schemas.thought import ThoughtListResponse, ThoughtResponse
from core.rate_limit import limiter
from domain.services.profile_service import ProfileService
from domain.services.thought_service import ThoughtService

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.get(
    "/check-email",
    response_model=EmailCheckResponse,
    summary="Check whether an email has a profile",
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def check_email(
    request: Request,
    email: str = Query(..., min_length=3, max_length=255),
    service: ProfileService = Depends(get_profile_service),
) -> EmailCheckResponse:
    """Used by the magic-link login form before sending a link."""
    return EmailCheckResponse(registered=await service.is_email_registered(email))


@router.get(
    "/check-handle",
    response_model=HandleCheckResponse,
    summary="Check whether a handle is free",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def check_handle(
    request: Request,
    principal: CurrentPrincipal,
    handle: str = Query(..., min_length=1, max_length=40),
    service: ProfileService = Depends(get_profile_service),
) -> HandleCheckResponse:
    """Informational only; saving the profile is what claims a handle."""
    normalized = handle.strip().lower()
    return HandleCheckResponse(
        handle=normalized,
        available=await service.is_handle_available(normalized),
    )


@router.get(
    "/{handle}",
    response_model=ProfileDetailResponse,
    summary="Get a public profile",
    responses={404: {"description": "Profile not found"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_profile(
    request: Request,
    handle: str,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Get a profile by handle (case-insensitive) with its counters."""
    profile, stats = await service.get_by_handle(handle)
    return ProfileDetailResponse(
        data=ProfileResponse.model_validate(profile),
        stats=ProfileStatsResponse.model_validate(stats),
    )


@router.get(
    "/{handle}/thoughts",
    response_model=ThoughtListResponse,
    summary="List a profile's thoughts",
    responses={404: {"description": "Profile not found"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_profile_thoughts(
    request: Request,
    handle: str,
    limit: int = Query(50, ge=1, le=100, description="Page size"),
    service: ThoughtService = Depends(get_thought_service),
) -> ThoughtListResponse:
    """A profile's thoughts, newest first."""
    thoughts = await service.get_by_handle(handle, limit)
    data = [ThoughtResponse.model_validate(t) for t in thoughts]
    return ThoughtListResponse(data=data, meta={"total": len(data)})
