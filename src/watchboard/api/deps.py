"""Per-request dependencies wiring the source clients into the aggregator."""

from typing import Any

from fastapi import Depends
from pymongo.asynchronous.database import AsyncDatabase

from watchboard.config import settings
from watchboard.database import get_db
from watchboard.errors import NotFoundError
from watchboard.schemas.media import MediaType
from watchboard.services.aggregator import Aggregator
from watchboard.services.alt_title_store import AltTitleStore
from watchboard.services.release_feed_client import ReleaseFeedClient
from watchboard.services.tracker_client import TrackerClient


def get_user_id() -> int:
    """The dashboard serves a single configured tracker user."""
    return settings.tracker_user_id


def get_tracker_client() -> TrackerClient:
    return TrackerClient()


def get_release_feed_client() -> ReleaseFeedClient:
    return ReleaseFeedClient()


def get_alt_title_store(db: AsyncDatabase[dict[str, Any]] = Depends(get_db)) -> AltTitleStore:
    return AltTitleStore(db[settings.alt_titles_collection])


def get_aggregator(
    tracker: TrackerClient = Depends(get_tracker_client),
    release_feed: ReleaseFeedClient = Depends(get_release_feed_client),
    alt_title_store: AltTitleStore = Depends(get_alt_title_store),
) -> Aggregator:
    return Aggregator(tracker, release_feed, alt_title_store)


def parse_media_id(media_type: MediaType, raw_id: str) -> int:
    """Parse a path media id, treating anything non-numeric as not found."""
    try:
        return int(raw_id)
    except ValueError:
        raise NotFoundError(media_type.value.lower(), raw_id) from None
