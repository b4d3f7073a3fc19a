"""Pydantic schemas for flattened tracker media entries."""

from enum import Enum

from pydantic import BaseModel


class MediaType(str, Enum):
    """Media kinds understood by the tracker."""

    ANIME = "ANIME"
    MANGA = "MANGA"


class MediaEntry(BaseModel):
    """One entry of a user's list, flattened out of the tracker's nested response."""

    media_id: int
    media_type: MediaType
    status: str
    format: str | None = None
    season: str | None = None
    season_year: int | None = None
    title_romaji: str | None = None
    title_english: str | None = None
    cover_image_url: str | None = None
    episodes: int | None = None
    score: int | None = None
    progress: int | None = None


class CurrentLists(BaseModel):
    """The user's in-progress anime and manga lists."""

    anime: list[MediaEntry]
    manga: list[MediaEntry]
