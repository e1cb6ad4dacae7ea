"""Follow API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentProfile
from api.v1.dependencies import get_follow_service
from api.v1.schemas.follow import FollowResponse
from core.rate_limit import limiter
from domain.services.follow_service import FollowService

router = APIRouter(prefix="/follows", tags=["follows"])


@router.get(
    "/{profile_id}",
    response_model=FollowResponse,
    summary="Whether the caller follows a profile",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_follow_state(
    request: Request,
    profile_id: UUID,
    profile: CurrentProfile,
    service: FollowService = Depends(get_follow_service),
) -> FollowResponse:
    following = await service.is_following(profile.id, profile_id)
    return FollowResponse(profile_id=profile_id, following=following, changed=False)


@router.post(
    "/{profile_id}",
    response_model=FollowResponse,
    summary="Follow a profile",
    responses={
        400: {"description": "Cannot follow yourself"},
        404: {"description": "Profile not found"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def follow(
    request: Request,
    profile_id: UUID,
    profile: CurrentProfile,
    service: FollowService = Depends(get_follow_service),
) -> FollowResponse:
    """Follow a profile. Idempotent; notifies the followed profile once."""
    changed = await service.follow(profile.id, profile_id)
    return FollowResponse(profile_id=profile_id, following=True, changed=changed)


@router.delete(
    "/{profile_id}",
    response_model=FollowResponse,
    summary="Unfollow a profile",
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def unfollow(
    request: Request,
    profile_id: UUID,
    profile: CurrentProfile,
    service: FollowService = Depends(get_follow_service),
) -> FollowResponse:
    """Unfollow a profile. Idempotent."""
    changed = await service.unfollow(profile.id, profile_id)
    return FollowResponse(profile_id=profile_id, following=False, changed=changed)
