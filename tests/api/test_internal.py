"""Tests for the internal per-source endpoints."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from watchboard.api.deps import (
    get_aggregator,
    get_alt_title_store,
    get_release_feed_client,
    get_user_id,
)
from watchboard.errors import ParseError, StoreError
from watchboard.schemas import AltTitleRecord, CurrentLists, LatestRelease, MediaEntry, MediaType


async def request(app: FastAPI, path: str, dependency, value: object) -> tuple[int, dict]:
    app.dependency_overrides[get_user_id] = lambda: 7
    app.dependency_overrides[dependency] = lambda: value
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app, raise_app_exceptions=False), base_url="http://test"
        ) as client:
            response = await client.get(path)
    finally:
        app.dependency_overrides.clear()
    return response.status_code, response.json()


async def test_alt_titles_keyed_by_media_id(test_app: FastAPI) -> None:
    store = MagicMock()
    store.fetch_alt_titles = AsyncMock(
        return_value={1: AltTitleRecord(media_id=1, alt_titles=["gintama"])}
    )

    status, body = await request(test_app, "/api/v1/internal/alt-titles", get_alt_title_store, store)

    assert status == 200
    assert body == {"status": 200, "data": {"1": {"media_id": 1, "alt_titles": ["gintama"]}}}


async def test_alt_titles_store_failure_is_generic_500(test_app: FastAPI) -> None:
    store = MagicMock()
    store.fetch_alt_titles = AsyncMock(side_effect=StoreError("Could not read alt titles: no primary"))

    status, body = await request(test_app, "/api/v1/internal/alt-titles", get_alt_title_store, store)

    assert status == 500
    assert body == {"status": 500, "message": "Whoops..."}


async def test_latest_returns_feed_mapping(test_app: FastAPI) -> None:
    feed = MagicMock()
    feed.fetch_latest = AsyncMock(
        return_value={
            "Naruto": LatestRelease(
                title_key="Naruto",
                title="[SubsPlease] Naruto - 01 (720p)",
                link="https://feed.test/naruto-01",
                category="Naruto - 01",
                published_at=datetime(2023, 10, 5, 12, 0, tzinfo=timezone.utc),
                episode=1,
            )
        }
    )

    status, body = await request(test_app, "/api/v1/internal/latest", get_release_feed_client, feed)

    assert status == 200
    assert body["data"]["Naruto"]["link"] == "https://feed.test/naruto-01"
    assert body["data"]["Naruto"]["published_at"].startswith("2023-10-05T12:00:00")


async def test_latest_parse_failure_is_500(test_app: FastAPI) -> None:
    feed = MagicMock()
    feed.fetch_latest = AsyncMock(side_effect=ParseError("Release feed is not an RSS document"))

    status, _ = await request(test_app, "/api/v1/internal/latest", get_release_feed_client, feed)

    assert status == 500


async def test_current_returns_both_lists(test_app: FastAPI) -> None:
    aggregator = MagicMock()
    aggregator.fetch_current = AsyncMock(
        return_value=CurrentLists(
            anime=[MediaEntry(media_id=1, media_type=MediaType.ANIME, status="CURRENT")],
            manga=[],
        )
    )

    status, body = await request(test_app, "/api/v1/internal/current", get_aggregator, aggregator)

    assert status == 200
    assert body["data"]["anime"][0]["media_id"] == 1
    assert body["data"]["manga"] == []
    aggregator.fetch_current.assert_awaited_once_with(7)
