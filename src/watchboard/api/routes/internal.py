"""Internal endpoints exposing each source on its own, for workers and debugging."""

from fastapi import APIRouter, Depends

from watchboard.api.deps import (
    get_aggregator,
    get_alt_title_store,
    get_release_feed_client,
    get_user_id,
)
from watchboard.schemas import ApiResponse
from watchboard.services.aggregator import Aggregator
from watchboard.services.alt_title_store import AltTitleStore
from watchboard.services.release_feed_client import ReleaseFeedClient

router = APIRouter()


@router.get("/internal/alt-titles", response_model=ApiResponse)
async def get_alt_titles(
    store: AltTitleStore = Depends(get_alt_title_store),
) -> ApiResponse:
    """Get every cached alt-title record keyed by media id."""
    return ApiResponse(data=await store.fetch_alt_titles())


@router.get("/internal/current", response_model=ApiResponse)
async def get_current(
    user_id: int = Depends(get_user_id),
    aggregator: Aggregator = Depends(get_aggregator),
) -> ApiResponse:
    """Get the user's current anime and manga, fetched concurrently."""
    return ApiResponse(data=await aggregator.fetch_current(user_id))


@router.get("/internal/latest", response_model=ApiResponse)
async def get_latest(
    release_feed: ReleaseFeedClient = Depends(get_release_feed_client),
) -> ApiResponse:
    """Get the latest release per show from the release feed."""
    return ApiResponse(data=await release_feed.fetch_latest())
