"""Anime API endpoints."""

from fastapi import APIRouter, Depends, Query

from watchboard.api.deps import get_aggregator, get_tracker_client, get_user_id, parse_media_id
from watchboard.schemas import ApiResponse, MediaType
from watchboard.services.aggregator import Aggregator
from watchboard.services.tracker_client import TrackerClient

router = APIRouter()


@router.get("/anime/list", response_model=ApiResponse)
async def get_anime_list(
    status: list[str] = Query(default=[], description="List statuses to include (default: all)"),
    user_id: int = Depends(get_user_id),
    tracker: TrackerClient = Depends(get_tracker_client),
) -> ApiResponse:
    """Get the user's anime list, flattened across status lists."""
    entries = await tracker.fetch(user_id, MediaType.ANIME, status)
    return ApiResponse(data=entries)


@router.get("/anime/schedule", response_model=ApiResponse)
async def get_anime_schedule(
    user_id: int = Depends(get_user_id),
    aggregator: Aggregator = Depends(get_aggregator),
) -> ApiResponse:
    """
    Get the user's current anime merged with recent releases and alt titles.

    Fails as a whole if any one of the three sources fails.
    """
    view = await aggregator.fetch_schedule(user_id)
    return ApiResponse(data=view)


@router.get("/anime/{media_id}", response_model=ApiResponse)
async def get_anime(
    media_id: str,
    user_id: int = Depends(get_user_id),
    tracker: TrackerClient = Depends(get_tracker_client),
) -> ApiResponse:
    """Get a single anime from the user's list; 404 when unknown or malformed."""
    entry = await tracker.fetch_one(user_id, MediaType.ANIME, parse_media_id(MediaType.ANIME, media_id))
    return ApiResponse(data=entry)
