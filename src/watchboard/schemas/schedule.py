"""Pydantic schemas for the aggregated watch-list view."""

from pydantic import BaseModel, Field

from watchboard.schemas.alt_title import AltTitleRecord
from watchboard.schemas.media import MediaEntry
from watchboard.schemas.release import LatestRelease


class ScheduleEntry(BaseModel):
    """A tracker entry joined with whatever the other sources know about it."""

    media: MediaEntry
    latest: LatestRelease | None = None
    alt_titles: AltTitleRecord | None = None


class AggregatedView(BaseModel):
    """All three source datasets for one request, plus the joined rows."""

    entries: list[ScheduleEntry] = Field(default_factory=list)
    latest: dict[str, LatestRelease] = Field(default_factory=dict)
    alt_titles: dict[int, AltTitleRecord] = Field(default_factory=dict)
