"""Manga API endpoints."""

from fastapi import APIRouter, Depends, Query

from watchboard.api.deps import get_tracker_client, get_user_id, parse_media_id
from watchboard.schemas import ApiResponse, MediaType
from watchboard.services.tracker_client import TrackerClient

router = APIRouter()


@router.get("/manga/list", response_model=ApiResponse)
async def get_manga_list(
    status: list[str] = Query(default=[], description="List statuses to include (default: all)"),
    user_id: int = Depends(get_user_id),
    tracker: TrackerClient = Depends(get_tracker_client),
) -> ApiResponse:
    """Get the user's manga list, flattened across status lists."""
    entries = await tracker.fetch(user_id, MediaType.MANGA, status)
    return ApiResponse(data=entries)


@router.get("/manga/{media_id}", response_model=ApiResponse)
async def get_manga(
    media_id: str,
    user_id: int = Depends(get_user_id),
    tracker: TrackerClient = Depends(get_tracker_client),
) -> ApiResponse:
    entry = await tracker.fetch_one(user_id, MediaType.MANGA, parse_media_id(MediaType.MANGA, media_id))
    return ApiResponse(data=entry)
