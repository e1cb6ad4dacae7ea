"""Thought API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status

from api.dependencies.auth import CurrentProfile
from api.v1.dependencies import get_thought_service
from api.v1.schemas.thought import (
    ThoughtCreate,
    ThoughtDetailResponse,
    ThoughtFeedResponse,
    ThoughtResponse,
    feed_item,
)
from core.rate_limit import limiter
from domain.services.thought_service import ThoughtService

router = APIRouter(prefix="/thoughts", tags=["thoughts"])


@router.get(
    "",
    response_model=ThoughtFeedResponse,
    summary="Global feed",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_feed(
    request: Request,
    limit: int = Query(50, ge=1, le=100, description="Page size"),
    service: ThoughtService = Depends(get_thought_service),
) -> ThoughtFeedResponse:
    """Recent thoughts from everyone with author details, newest first."""
    views = await service.get_feed(limit)
    data = [feed_item(v) for v in views]
    return ThoughtFeedResponse(data=data, meta={"total": len(data)})


@router.post(
    "",
    response_model=ThoughtDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Post a thought",
    responses={
        201: {"description": "Thought posted"},
        400: {"description": "Empty or longer than 280 characters"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def post_thought(
    request: Request,
    body: ThoughtCreate,
    profile: CurrentProfile,
    service: ThoughtService = Depends(get_thought_service),
) -> ThoughtDetailResponse:
    """Publish a thought as the caller."""
    thought = await service.post(profile.id, body.content)
    return ThoughtDetailResponse(data=ThoughtResponse.model_validate(thought))


@router.delete(
    "/{thought_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a thought",
    responses={
        204: {"description": "Thought deleted"},
        404: {"description": "Thought not found or not the caller's"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def delete_thought(
    request: Request,
    thought_id: UUID,
    profile: CurrentProfile,
    service: ThoughtService = Depends(get_thought_service),
) -> None:
    """Delete one of the caller's thoughts."""
    await service.delete(thought_id, profile.id)
