"""Channel shorts feed and channel search on top of the YouTube Data API."""

import logging
import re
from typing import Any

from ..errors import ConfigurationError, NotFoundError
from ..models import ChannelSummary, ShortsResult, ShortVideo
from .cache import ExpiringCache
from .youtube import YouTubeClient

logger = logging.getLogger(__name__)

SHORT_MAX_SECONDS = 60
DURATION_RE = re.compile(r"PT(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?")


def iso8601_duration_to_seconds(duration: str) -> int:
    # The PT..H..M..S part may appear anywhere; a string without one counts as zero seconds.
    match = DURATION_RE.search(duration or "")
    if not match:
        return 0
    hours = int(match.group(1) or 0)
    minutes = int(match.group(2) or 0)
    seconds = int(match.group(3) or 0)
    return hours * 3600 + minutes * 60 + seconds


def channel_cache_key(channel_id: str) -> str:
    return f"channel_{channel_id}"


def short_from_video(video: dict[str, Any]) -> ShortVideo:
    snippet = video.get("snippet") or {}
    thumbnails = snippet.get("thumbnails") or {}
    return ShortVideo(
        id=video.get("id") or "",
        title=snippet.get("title") or "",
        channel_title=snippet.get("channelTitle") or "",
        published_at=snippet.get("publishedAt") or "",
        thumbnail_url=(thumbnails.get("high") or {}).get("url") or "",
        description=snippet.get("description") or "",
    )


def filter_shorts(videos: list[dict[str, Any]]) -> list[ShortVideo]:
    """Keep videos of at most a minute, in the order YouTube returned them."""
    shorts = []
    for video in videos:
        duration = iso8601_duration_to_seconds((video.get("contentDetails") or {}).get("duration") or "")
        if duration <= SHORT_MAX_SECONDS:
            shorts.append(short_from_video(video))
    return shorts


def channel_from_search_item(item: dict[str, Any]) -> ChannelSummary:
    snippet = item.get("snippet") or {}
    thumbnails = snippet.get("thumbnails") or {}
    return ChannelSummary(
        id=snippet.get("channelId") or "",
        title=snippet.get("title") or "",
        thumbnail_url=(thumbnails.get("default") or {}).get("url") or "",
        description=snippet.get("description") or "",
    )


class ShortsService:
    """Holds the YouTube client and the per-channel result cache for the request handlers."""

    def __init__(self, client: YouTubeClient, cache: ExpiringCache[ShortsResult] | None = None):
        self.client = client
        self.cache: ExpiringCache[ShortsResult] = cache if cache is not None else ExpiringCache()

    @property
    def api_key_configured(self) -> bool:
        return bool(self.client.api_key)

    def _require_api_key(self) -> None:
        if not self.api_key_configured:
            raise ConfigurationError()

    def get_channel_shorts(self, channel_id: str) -> ShortsResult:
        cache_key = channel_cache_key(channel_id)
        cached, found = self.cache.get(cache_key)
        if found:
            logger.info("Cache hit for channel: %s", channel_id)
            return cached

        self._require_api_key()
        logger.info("Fetching shorts for channel: %s", channel_id)

        channel_data = self.client.fetch_channel(channel_id)
        channels = channel_data.get("items") or []
        if not channels:
            raise NotFoundError()
        channel = channels[0]
        uploads_playlist_id = (
            ((channel.get("contentDetails") or {}).get("relatedPlaylists") or {}).get("uploads") or ""
        )
        channel_title = (channel.get("snippet") or {}).get("title") or ""

        playlist_data = self.client.fetch_playlist_items(uploads_playlist_id)
        playlist_items = playlist_data.get("items") or []
        if not playlist_items:
            result = ShortsResult(shorts=[], channel_id=channel_id, channel_title=channel_title)
            self.cache.set(cache_key, result)
            return result

        video_ids = [
            ((item.get("snippet") or {}).get("resourceId") or {}).get("videoId") or ""
            for item in playlist_items
        ]
        videos_data = self.client.fetch_videos(video_ids)
        videos = videos_data.get("items") or []

        shorts = filter_shorts(videos)
        logger.info("Channel %s: %d of %d recent uploads are shorts", channel_id, len(shorts), len(videos))

        result = ShortsResult(shorts=shorts, channel_id=channel_id, channel_title=channel_title)
        self.cache.set(cache_key, result)
        return result

    def search_channels(self, query: str) -> list[ChannelSummary]:
        self._require_api_key()
        logger.info("Searching channels: %s", query)

        search_data = self.client.search_channels(query)
        items = search_data.get("items") or []
        if not items:
            raise NotFoundError()
        return [channel_from_search_item(item) for item in items]
