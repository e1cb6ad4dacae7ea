"""Routes for the caller's own profile, social graph and bookmarks."""

from uuid import UUID

from fastapi import APIRouter, Depends, File, Request, UploadFile

from api.dependencies.auth import CurrentProfile
from api.v1.dependencies import (
    get_bookmark_service,
    get_follow_service,
    get_profile_service,
)
from api.v1.schemas.bookmark import BookmarkResponse
from api.v1.schemas.common import ErrorResponse
from api.v1.schemas.profile import (
    MeDetailResponse,
    MeResponse,
    ProfileListResponse,
    ProfileResponse,
    ProfileUpdate,
)
from api.v1.schemas.thought import ThoughtFeedResponse, feed_item
from core.exceptions import InvalidAvatarError
from core.rate_limit import limiter
from domain.services.bookmark_service import BookmarkService
from domain.services.follow_service import FollowService
from domain.services.profile_service import ProfileService

router = APIRouter(prefix="/me", tags=["me"])

MAX_AVATAR_BYTES = 2 * 1024 * 1024


@router.get(
    "",
    response_model=MeDetailResponse,
    summary="Get the caller's profile",
    responses={
        200: {"description": "The caller's profile (created on first contact)"},
        401: {"model": ErrorResponse, "description": "Not logged in"},
        403: {"model": ErrorResponse, "description": "Email not confirmed"},
    },
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_me(request: Request, profile: CurrentProfile) -> MeDetailResponse:
    """Return the caller's canonical profile."""
    return MeDetailResponse(data=MeResponse.model_validate(profile))


@router.patch(
    "",
    response_model=MeDetailResponse,
    summary="Edit the caller's profile",
    responses={
        200: {"description": "Profile updated"},
        400: {"model": ErrorResponse, "description": "Blank field or invalid handle"},
        409: {"model": ErrorResponse, "description": "Handle taken"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def update_me(
    request: Request,
    body: ProfileUpdate,
    profile: CurrentProfile,
    service: ProfileService = Depends(get_profile_service),
) -> MeDetailResponse:
    """Edit display name, handle and bio. Omitted fields are unchanged."""
    updated = await service.update(
        profile.id,
        display_name=body.display_name,
        handle=body.handle,
        bio=body.bio,
    )
    return MeDetailResponse(data=MeResponse.model_validate(updated))


@router.post(
    "/avatar",
    response_model=MeDetailResponse,
    summary="Upload an avatar image",
    responses={
        200: {"description": "Avatar stored and profile updated"},
        400: {"description": "Not an image or too large"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def upload_avatar(
    request: Request,
    profile: CurrentProfile,
    file: UploadFile = File(...),
    service: ProfileService = Depends(get_profile_service),
) -> MeDetailResponse:
    """Store an avatar in the public bucket and point the profile at it."""
    if not (file.content_type or "").startswith("image/"):
        raise InvalidAvatarError("Avatar must be an image")
    data = await file.read()
    if not data or len(data) > MAX_AVATAR_BYTES:
        raise InvalidAvatarError("Avatar must be between 1 byte and 2 MB")

    updated = await service.upload_avatar(
        profile.id,
        data=data,
        filename=file.filename,
        content_type=file.content_type,
    )
    return MeDetailResponse(data=MeResponse.model_validate(updated))


@router.get(
    "/followers",
    response_model=ProfileListResponse,
    summary="List the caller's followers",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_followers(
    request: Request,
    profile: CurrentProfile,
    service: FollowService = Depends(get_follow_service),
) -> ProfileListResponse:
    """Profiles following the caller, most recent first."""
    followers = await service.get_followers(profile.id)
    data = [ProfileResponse.model_validate(p) for p in followers]
    return ProfileListResponse(data=data, meta={"total": len(data)})


@router.get(
    "/following",
    response_model=ProfileListResponse,
    summary="List profiles the caller follows",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_following(
    request: Request,
    profile: CurrentProfile,
    service: FollowService = Depends(get_follow_service),
) -> ProfileListResponse:
    """Profiles the caller follows, most recent first."""
    following = await service.get_following(profile.id)
    data = [ProfileResponse.model_validate(p) for p in following]
    return ProfileListResponse(data=data, meta={"total": len(data)})


@router.get(
    "/bookmarks",
    response_model=ThoughtFeedResponse,
    summary="List bookmarked thoughts",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_bookmarks(
    request: Request,
    profile: CurrentProfile,
    service: BookmarkService = Depends(get_bookmark_service),
) -> ThoughtFeedResponse:
    """Bookmarked thoughts that still exist, newest first."""
    views = await service.get_bookmarks(profile.id)
    data = [feed_item(v) for v in views]
    return ThoughtFeedResponse(data=data, meta={"total": len(data)})


@router.put(
    "/bookmarks/{thought_id}",
    response_model=BookmarkResponse,
    summary="Bookmark a thought",
    responses={404: {"description": "Thought not found"}},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def add_bookmark(
    request: Request,
    thought_id: UUID,
    profile: CurrentProfile,
    service: BookmarkService = Depends(get_bookmark_service),
) -> BookmarkResponse:
    """Bookmark a thought. Idempotent."""
    changed = await service.add(profile.id, thought_id)
    return BookmarkResponse(thought_id=thought_id, bookmarked=True, changed=changed)


@router.delete(
    "/bookmarks/{thought_id}",
    response_model=BookmarkResponse,
    summary="Remove a bookmark",
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def remove_bookmark(
    request: Request,
    thought_id: UUID,
    profile: CurrentProfile,
    service: BookmarkService = Depends(get_bookmark_service),
) -> BookmarkResponse:
    """Remove a bookmark. Idempotent."""
    changed = await service.remove(profile.id, thought_id)
    return BookmarkResponse(thought_id=thought_id, bookmarked=False, changed=changed)
