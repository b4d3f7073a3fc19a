"""GraphQL media tracker client for fetching a user's anime/manga lists."""

import logging
from collections.abc import Iterable
from functools import cache
from pathlib import Path
from typing import Any

import httpx
from pydantic import ValidationError

from watchboard.config import settings
from watchboard.errors import NotFoundError, ParseError, TransportError, UpstreamAPIError
from watchboard.schemas.media import MediaEntry, MediaType
from watchboard.schemas.tracker import TrackerErrorResponse, TrackerResponse

logger = logging.getLogger(__name__)

DEFAULT_QUERY_PATH = Path(__file__).resolve().parent.parent / "graphql" / "media_list.graphql"

DEFAULT_STATUSES = ("CURRENT", "PLANNING", "COMPLETED", "DROPPED", "PAUSED", "REPEATING")

UNKNOWN_UPSTREAM_ERROR = "could not get upstream API error"


@cache
def load_query(path: str | Path | None = None) -> str:
    """Read the list query text from disk once per path (the packaged query by default)."""
    query_path = Path(path) if path else DEFAULT_QUERY_PATH
    return query_path.read_text(encoding="utf-8")


class TrackerClient:
    """Client for the media tracker's GraphQL API."""

    HEADERS = {
        "Content-Type": "application/json",
        "Accept": "application/json",
    }

    def __init__(
        self,
        api_url: str | None = None,
        query: str | None = None,
        timeout: float | None = None,
    ) -> None:
        """
        Initialize tracker client.

        Args:
            api_url: GraphQL endpoint (uses settings if not provided)
            query: List query text (loaded from TRACKER_QUERY_PATH or the packaged file)
            timeout: Request timeout in seconds (uses settings if not provided)
        """
        self.api_url = api_url or settings.tracker_api_url
        self.query = query if query is not None else load_query(settings.tracker_query_path)
        self.timeout = timeout if timeout is not None else settings.http_timeout

    def build_payload(
        self,
        user_id: int,
        media_type: MediaType,
        status_filter: Iterable[str] = (),
    ) -> dict[str, Any]:
        """Build the GraphQL request body; an empty filter means every status."""
        statuses = list(status_filter) or list(DEFAULT_STATUSES)
        return {
            "query": self.query,
            "variables": {
                "userId": user_id,
                "type": media_type.value,
                "status_in": statuses,
            },
        }

    async def fetch(
        self,
        user_id: int,
        media_type: MediaType,
        status_filter: Iterable[str] = (),
    ) -> list[MediaEntry]:
        """
        Fetch and flatten a user's media lists.

        Args:
            user_id: Tracker user id
            media_type: ANIME or MANGA
            status_filter: List statuses to include (empty means all statuses)

        Returns:
            One MediaEntry per entry across all returned lists, in list-then-entry order

        Raises:
            TransportError: The tracker could not be reached
            UpstreamAPIError: The tracker answered with a non-success status
            ParseError: The success body did not have the expected shape
        """
        media_type = MediaType(media_type)
        payload = self.build_payload(user_id, media_type, status_filter)

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(self.api_url, json=payload, headers=self.HEADERS)
        except httpx.HTTPError as e:
            logger.error(f"Tracker request failed for user {user_id}: {e}")
            raise TransportError(f"Could not reach tracker: {e}") from e

        if not response.is_success:
            raise self._upstream_error(response)

        try:
            result = TrackerResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.error(f"Unexpected tracker response for user {user_id}: {e}")
            raise ParseError(f"Could not parse tracker response: {e}") from e

        entries = self.flatten(result, media_type)
        logger.info(f"Tracker: {len(entries)} {media_type.value.lower()} entries for user {user_id}")
        return entries

    async def fetch_one(self, user_id: int, media_type: MediaType, media_id: int) -> MediaEntry:
        """
        Fetch a single entry from the user's lists by media id.

        Raises:
            NotFoundError: The media id is not on any of the user's lists
        """
        for entry in await self.fetch(user_id, media_type):
            if entry.media_id == media_id:
                return entry
        raise NotFoundError(media_type.value.lower(), str(media_id))

    def flatten(self, result: TrackerResponse, media_type: MediaType) -> list[MediaEntry]:
        """Flatten the nested list-of-lists response into one list of entries."""
        collection = result.data.media_list_collection
        if collection is None:
            return []

        flattened: list[MediaEntry] = []
        for media_list in collection.lists:
            for entry in media_list.entries:
                media = entry.media
                flattened.append(
                    MediaEntry(
                        media_id=media.id,
                        media_type=media.type or media_type,
                        status=entry.status,
                        format=media.format,
                        season=media.season,
                        season_year=media.season_year,
                        title_romaji=media.title.romaji,
                        title_english=media.title.english,
                        cover_image_url=media.cover_image.large,
                        episodes=media.episodes,
                        score=entry.score,
                        progress=entry.progress,
                    )
                )
        return flattened

    def _upstream_error(self, response: httpx.Response) -> UpstreamAPIError:
        """Turn a non-success response into an UpstreamAPIError.

        Never raises itself: a body that is not a usable error payload yields a
        generic 500.
        """
        try:
            payload = TrackerErrorResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.warning(f"Tracker returned HTTP {response.status_code} with unreadable body: {e}")
            return UpstreamAPIError(500, UNKNOWN_UPSTREAM_ERROR)

        if not payload.errors:
            logger.warning(f"Tracker returned HTTP {response.status_code} with no error entries")
            return UpstreamAPIError(500, UNKNOWN_UPSTREAM_ERROR)

        first = payload.errors[0]
        logger.warning(f"Tracker error {first.status}: {first.message}")
        return UpstreamAPIError(first.status, first.message)
