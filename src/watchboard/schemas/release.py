"""Pydantic schemas for release feed data."""

from datetime import datetime

from pydantic import BaseModel


class LatestRelease(BaseModel):
    """Most recent feed item for one show, keyed by ``title_key``."""

    title_key: str
    title: str
    link: str
    category: str
    published_at: datetime
    episode: int | None = None
