"""Title-based join between tracker entries and release feed items."""

import logging
import re
from collections.abc import Mapping, Sequence

from rapidfuzz import fuzz, process

from watchboard.schemas.alt_title import AltTitleRecord
from watchboard.schemas.media import MediaEntry
from watchboard.schemas.release import LatestRelease

logger = logging.getLogger(__name__)

NEAR_MISS_THRESHOLD = 85  # similarity score worth logging when no exact match is found


def normalise_title(title: str) -> str:
    """
    Normalize a show title for matching.

    Only whitespace is touched: leading/trailing whitespace is removed and runs
    of whitespace collapse to one space. Case and punctuation are significant.

    Args:
        title: Raw title from the tracker, the feed or the alt-title store

    Returns:
        Normalized title
    """
    return re.sub(r"\s+", " ", title).strip()


def candidate_titles(entry: MediaEntry, alt_titles: AltTitleRecord | None = None) -> list[str]:
    """Titles to try for an entry, in priority order: romaji, english, alt titles."""
    candidates = [entry.title_romaji, entry.title_english]
    if alt_titles:
        candidates.extend(alt_titles.alt_titles)

    seen: set[str] = set()
    ordered: list[str] = []
    for title in candidates:
        if not title:
            continue
        normalized = normalise_title(title)
        if normalized and normalized not in seen:
            seen.add(normalized)
            ordered.append(normalized)
    return ordered


def match_latest_release(
    entry: MediaEntry,
    releases: Mapping[str, LatestRelease],
    alt_titles: AltTitleRecord | None = None,
) -> LatestRelease | None:
    """Find the release whose normalized key equals one of the entry's titles."""
    for title in candidate_titles(entry, alt_titles):
        release = releases.get(title)
        if release:
            return release
    return None


def match_latest_releases(
    entries: Sequence[MediaEntry],
    releases_by_title: Mapping[str, LatestRelease],
    alt_titles: Mapping[int, AltTitleRecord] | None = None,
) -> dict[int, LatestRelease | None]:
    """
    Join tracker entries to feed releases by exact normalized title.

    Args:
        entries: Flattened tracker entries
        releases_by_title: Feed releases keyed by title key
        alt_titles: Optional alt-title records keyed by media id

    Returns:
        Mapping of media id to its release, or None when nothing matched
    """
    releases = {normalise_title(key): release for key, release in releases_by_title.items()}
    alt_titles = alt_titles or {}

    matches: dict[int, LatestRelease | None] = {}
    for entry in entries:
        release = match_latest_release(entry, releases, alt_titles.get(entry.media_id))
        if release is None and releases:
            _log_near_miss(entry, releases)
        matches[entry.media_id] = release
    return matches


def _log_near_miss(entry: MediaEntry, releases: Mapping[str, LatestRelease]) -> None:
    """Log the closest feed key for an unmatched entry; never used to match."""
    if not logger.isEnabledFor(logging.DEBUG) or not entry.title_romaji:
        return

    best = process.extractOne(normalise_title(entry.title_romaji), releases.keys(), scorer=fuzz.ratio)
    if best and best[1] >= NEAR_MISS_THRESHOLD:
        logger.debug(
            f"No exact release for '{entry.title_romaji}' "
            f"(closest feed title '{best[0]}', {best[1]:.1f}%)"
        )
