"""Pydantic models mirroring the tracker's GraphQL payloads."""

from pydantic import BaseModel, ConfigDict, Field

from watchboard.schemas.media import MediaType


class TrackerModel(BaseModel):
    """Base for upstream payload models; unknown fields are ignored."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class TrackerTitle(TrackerModel):
    romaji: str | None = None
    english: str | None = None


class TrackerCoverImage(TrackerModel):
    large: str | None = None


class TrackerMedia(TrackerModel):
    id: int
    type: MediaType | None = None
    format: str | None = None
    season: str | None = None
    season_year: int | None = Field(default=None, alias="seasonYear")
    title: TrackerTitle = Field(default_factory=TrackerTitle)
    cover_image: TrackerCoverImage = Field(default_factory=TrackerCoverImage, alias="coverImage")
    episodes: int | None = None


class TrackerListEntry(TrackerModel):
    media: TrackerMedia
    status: str
    score: int | None = None
    progress: int | None = None


class TrackerMediaList(TrackerModel):
    name: str | None = None
    status: str | None = None
    entries: list[TrackerListEntry] = Field(default_factory=list)


class TrackerMediaListCollection(TrackerModel):
    lists: list[TrackerMediaList] = Field(default_factory=list)


class TrackerData(TrackerModel):
    media_list_collection: TrackerMediaListCollection | None = Field(
        default=None, alias="mediaListCollection"
    )


class TrackerResponse(TrackerModel):
    """Successful response body: ``{data: {mediaListCollection: {lists: [...]}}}``."""

    data: TrackerData


class TrackerErrorEntry(TrackerModel):
    message: str
    status: int


class TrackerErrorResponse(TrackerModel):
    """Error response body: ``{errors: [{message, status}]}``."""

    errors: list[TrackerErrorEntry] = Field(default_factory=list)
