"""Pydantic schemas for source data and API responses."""

from watchboard.schemas.alt_title import AltTitleRecord
from watchboard.schemas.media import CurrentLists, MediaEntry, MediaType
from watchboard.schemas.release import LatestRelease
from watchboard.schemas.response import ApiResponse, ErrorResponse
from watchboard.schemas.schedule import AggregatedView, ScheduleEntry

__all__ = [
    "AltTitleRecord",
    "CurrentLists",
    "MediaEntry",
    "MediaType",
    "LatestRelease",
    "ApiResponse",
    "ErrorResponse",
    "AggregatedView",
    "ScheduleEntry",
]
