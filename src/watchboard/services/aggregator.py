"""Concurrent aggregation of the tracker, release feed and alt-title sources."""

import asyncio
import logging
from collections.abc import Awaitable, Mapping
from dataclasses import dataclass
from typing import Any

from watchboard.config import settings
from watchboard.errors import TransportError
from watchboard.schemas.alt_title import AltTitleRecord
from watchboard.schemas.media import CurrentLists, MediaEntry, MediaType
from watchboard.schemas.release import LatestRelease
from watchboard.schemas.schedule import AggregatedView, ScheduleEntry
from watchboard.services.alt_title_store import AltTitleStore
from watchboard.services.release_feed_client import ReleaseFeedClient
from watchboard.services.title_matcher import match_latest_releases
from watchboard.services.tracker_client import TrackerClient

logger = logging.getLogger(__name__)

TRACKER = "tracker"
RELEASE_FEED = "release_feed"
ALT_TITLES = "alt_titles"

CURRENT_STATUSES = ("CURRENT",)


@dataclass
class SourceSignal:
    """The single result or error a source task posts to the fan-in queue."""

    source: str
    result: Any = None
    error: Exception | None = None


def build_view(
    entries: list[MediaEntry],
    latest: dict[str, LatestRelease],
    alt_titles: dict[int, AltTitleRecord],
) -> AggregatedView:
    """Join the three datasets into one view keyed by tracker entry."""
    matches = match_latest_releases(entries, latest, alt_titles)
    rows = [
        ScheduleEntry(
            media=entry,
            latest=matches.get(entry.media_id),
            alt_titles=alt_titles.get(entry.media_id),
        )
        for entry in entries
    ]
    matched = sum(1 for row in rows if row.latest)
    logger.info(f"Aggregated {len(rows)} entries, {matched} with a recent release")
    return AggregatedView(entries=rows, latest=latest, alt_titles=alt_titles)


class Aggregator:
    """
    Fans out to independent sources and fans their results back in.

    Every source runs as its own task and posts exactly one SourceSignal to a
    shared queue. The aggregator consumes one signal per source in arrival
    order. The first error is raised straight away and the sources still in
    flight are cancelled; partial results are never returned.
    """

    def __init__(
        self,
        tracker: TrackerClient,
        release_feed: ReleaseFeedClient,
        alt_title_store: AltTitleStore,
        timeout: float | None = None,
    ) -> None:
        """
        Initialize aggregator.

        Args:
            tracker: Media tracker client
            release_feed: Release feed client
            alt_title_store: Alt-title document store
            timeout: Deadline in seconds for the whole fan-in (uses settings if not
                provided; None means wait indefinitely)
        """
        self.tracker = tracker
        self.release_feed = release_feed
        self.alt_title_store = alt_title_store
        self.timeout = timeout if timeout is not None else settings.aggregation_timeout

    async def fetch_schedule(self, user_id: int) -> AggregatedView:
        """
        Fetch the user's current anime alongside recent releases and alt titles.

        Args:
            user_id: Tracker user id

        Returns:
            Aggregated view of all three sources

        Raises:
            WatchboardError: Whichever source failed first
        """
        results = await self.gather_sources(
            {
                TRACKER: self.tracker.fetch(user_id, MediaType.ANIME, CURRENT_STATUSES),
                RELEASE_FEED: self.release_feed.fetch_latest(),
                ALT_TITLES: self.alt_title_store.fetch_alt_titles(),
            }
        )
        return build_view(results[TRACKER], results[RELEASE_FEED], results[ALT_TITLES])

    async def fetch_current(self, user_id: int) -> CurrentLists:
        """Fetch the user's current anime and manga lists concurrently."""
        results = await self.gather_sources(
            {
                MediaType.ANIME.value: self.tracker.fetch(user_id, MediaType.ANIME, CURRENT_STATUSES),
                MediaType.MANGA.value: self.tracker.fetch(user_id, MediaType.MANGA, CURRENT_STATUSES),
            }
        )
        return CurrentLists(anime=results[MediaType.ANIME.value], manga=results[MediaType.MANGA.value])

    async def gather_sources(self, calls: Mapping[str, Awaitable[Any]]) -> dict[str, Any]:
        """
        Run every call concurrently and collect one signal per call.

        Args:
            calls: Source name to the awaitable that fetches it

        Returns:
            Source name to result, once every source has succeeded

        Raises:
            Exception: The first error posted by any source
            TransportError: The deadline expired before every source reported
        """
        queue: asyncio.Queue[SourceSignal] = asyncio.Queue()
        tasks = [
            asyncio.create_task(self._run_source(name, call, queue), name=f"source:{name}")
            for name, call in calls.items()
        ]

        results: dict[str, Any] = {}
        deadline = asyncio.timeout(self.timeout)
        try:
            async with deadline:
                for _ in range(len(tasks)):
                    signal = await queue.get()
                    if signal.error is not None:
                        logger.warning(f"Source '{signal.source}' failed: {signal.error}")
                        raise signal.error
                    results[signal.source] = signal.result
        except TimeoutError as e:
            if not deadline.expired():
                raise
            waiting = ", ".join(name for name in calls if name not in results)
            logger.error(f"Timed out after {self.timeout}s waiting for: {waiting}")
            raise TransportError(f"Timed out waiting for {waiting}") from e
        finally:
            await self._cancel_pending(tasks)

        return results

    @staticmethod
    async def _run_source(
        name: str,
        call: Awaitable[Any],
        queue: asyncio.Queue[SourceSignal],
    ) -> None:
        """Await one source and post its outcome; cancellation propagates."""
        try:
            result = await call
        except Exception as e:
            queue.put_nowait(SourceSignal(source=name, error=e))
        else:
            queue.put_nowait(SourceSignal(source=name, result=result))

    @staticmethod
    async def _cancel_pending(tasks: list[asyncio.Task[None]]) -> None:
        """Cancel unfinished sources and wait for them to unwind."""
        pending = [task for task in tasks if not task.done()]
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
            logger.info(f"Cancelled {len(pending)} abandoned source task(s)")
