"""Pydantic schemas for cached alternate titles."""

from pydantic import BaseModel, ConfigDict, Field


class AltTitleRecord(BaseModel):
    """Alternate titles for one tracker media id.

    Stored as ``{media_id, alt_titles}`` documents; Mongo's ``_id`` is ignored.
    """

    model_config = ConfigDict(extra="ignore")

    media_id: int
    alt_titles: list[str] = Field(default_factory=list)
