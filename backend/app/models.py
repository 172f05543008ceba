from pydantic import BaseModel, ConfigDict, Field


class ShortVideo(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = ""
    title: str = ""
    channel_title: str = Field("", alias="channelTitle")
    published_at: str = Field("", alias="publishedAt")
    thumbnail_url: str = Field("", alias="thumbnail")
    description: str = ""


class ShortsResult(BaseModel):
    """Payload of the shorts endpoint; also the cached value per channel."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    shorts: list[ShortVideo] = Field(default_factory=list)
    channel_id: str = Field(alias="channelId")
    channel_title: str = Field("", alias="channelTitle")


class ChannelSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = ""
    title: str = ""
    thumbnail_url: str = Field("", alias="thumbnail")
    description: str = ""


class SearchResult(BaseModel):
    channels: list[ChannelSummary] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    error: str
    details: str | None = None
    reason: str | None = None
