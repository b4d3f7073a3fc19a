"""Unit tests for the title-based release join."""

from datetime import datetime, timezone

from watchboard.schemas.alt_title import AltTitleRecord
from watchboard.schemas.media import MediaEntry, MediaType
from watchboard.schemas.release import LatestRelease
from watchboard.services.title_matcher import (
    candidate_titles,
    match_latest_releases,
    normalise_title,
)


def make_entry(media_id: int, romaji: str | None, english: str | None = None) -> MediaEntry:
    return MediaEntry(
        media_id=media_id,
        media_type=MediaType.ANIME,
        status="CURRENT",
        title_romaji=romaji,
        title_english=english,
    )


def make_release(key: str) -> LatestRelease:
    return LatestRelease(
        title_key=key,
        title=f"[SubsPlease] {key} - 01 (720p)",
        link=f"https://feed.test/{key}",
        category=f"{key} - 720",
        published_at=datetime(2023, 10, 6, tzinfo=timezone.utc),
        episode=1,
    )


class TestNormaliseTitle:
    def test_strips_and_collapses_whitespace(self) -> None:
        assert normalise_title("  Sousou   no\tFrieren ") == "Sousou no Frieren"

    def test_keeps_case(self) -> None:
        assert normalise_title("ONE PIECE") == "ONE PIECE"

    def test_keeps_punctuation(self) -> None:
        assert normalise_title("Re:Zero") == "Re:Zero"


class TestCandidateTitles:
    def test_orders_romaji_english_then_alt_titles(self) -> None:
        entry = make_entry(1, "Gintama", "Gin Tama")
        alt = AltTitleRecord(media_id=1, alt_titles=["Gintama.", "Gin Tama"])
        assert candidate_titles(entry, alt) == ["Gintama", "Gin Tama", "Gintama."]

    def test_skips_missing_titles(self) -> None:
        assert candidate_titles(make_entry(1, None, "Frieren")) == ["Frieren"]


class TestMatchLatestReleases:
    def test_matches_on_romaji(self) -> None:
        releases = {"Sousou no Frieren": make_release("Sousou no Frieren")}
        matches = match_latest_releases([make_entry(1, "Sousou no Frieren")], releases)
        assert matches == {1: releases["Sousou no Frieren"]}

    def test_falls_back_to_english_title(self) -> None:
        releases = {"Frieren": make_release("Frieren")}
        matches = match_latest_releases([make_entry(1, "Sousou no Frieren", "Frieren")], releases)
        assert matches[1] is releases["Frieren"]

    def test_falls_back_to_alt_titles(self) -> None:
        releases = {"Gintama.": make_release("Gintama.")}
        alt_titles = {1: AltTitleRecord(media_id=1, alt_titles=["Gintama."])}
        matches = match_latest_releases([make_entry(1, "Gintama")], releases, alt_titles)
        assert matches[1] is releases["Gintama."]

    def test_no_match_is_none_not_error(self) -> None:
        matches = match_latest_releases([make_entry(1, "Naruto")], {"Bleach": make_release("Bleach")})
        assert matches == {1: None}

    def test_case_differences_do_not_match(self) -> None:
        matches = match_latest_releases([make_entry(1, "One Piece")], {"ONE PIECE": make_release("ONE PIECE")})
        assert matches[1] is None

    def test_near_misses_do_not_match(self) -> None:
        releases = {"Sousou no Frieren 2": make_release("Sousou no Frieren 2")}
        matches = match_latest_releases([make_entry(1, "Sousou no Frieren")], releases)
        assert matches[1] is None

    def test_feed_keys_are_normalized_too(self) -> None:
        releases = {"Sousou no  Frieren ": make_release("Sousou no  Frieren ")}
        matches = match_latest_releases([make_entry(1, "Sousou no Frieren")], releases)
        assert matches[1] is not None

    def test_empty_inputs(self) -> None:
        assert match_latest_releases([], {}) == {}
        assert match_latest_releases([make_entry(1, "Naruto")], {}) == {1: None}
