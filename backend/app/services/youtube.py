"""Thin client for the YouTube Data API v3 endpoints the shorts feed needs.

Every call returns the decoded JSON body. Transport problems (connection
errors, timeouts, unreadable bodies) raise `UpstreamTransportError`; a body
carrying an `error` object raises `UpstreamAPIError` with the upstream message
and the first reported reason. HTTP status codes are not inspected on their
own since YouTube reports failures in the body.
"""

import logging
from typing import Any

import requests

from ..errors import UpstreamAPIError, UpstreamTransportError

logger = logging.getLogger(__name__)

YOUTUBE_API_BASE = "https://www.googleapis.com/youtube/v3"
YOUTUBE_CHANNELS_LIST = f"{YOUTUBE_API_BASE}/channels"
YOUTUBE_PLAYLIST_ITEMS_LIST = f"{YOUTUBE_API_BASE}/playlistItems"
YOUTUBE_VIDEOS_LIST = f"{YOUTUBE_API_BASE}/videos"
YOUTUBE_SEARCH_LIST = f"{YOUTUBE_API_BASE}/search"

UPLOADS_PAGE_SIZE = 50
SEARCH_PAGE_SIZE = 5


def first_error_reason(error: dict[str, Any]) -> str | None:
    errors = error.get("errors") or []
    if errors and isinstance(errors[0], dict):
        return errors[0].get("reason") or None
    return None


class YouTubeClient:
    def __init__(self, api_key: str | None, timeout: float = 15):
        self.api_key = api_key
        self.timeout = timeout

    def youtube_api_get(
        self,
        url: str,
        params: dict[str, Any],
        failure_message: str,
        api_error_message: str,
    ) -> dict[str, Any]:
        logger.debug("YouTube API request: %s %s", url, params)
        params = {**params, "key": self.api_key}
        try:
            response = requests.get(url, params=params, timeout=self.timeout)
            payload = response.json()
        except (requests.RequestException, ValueError) as exc:
            raise UpstreamTransportError(failure_message, details=str(exc)) from exc

        if not isinstance(payload, dict):
            raise UpstreamTransportError(failure_message, details="Unexpected response body")

        error = payload.get("error")
        if error:
            if isinstance(error, dict):
                raise UpstreamAPIError(
                    api_error_message,
                    details=error.get("message"),
                    reason=first_error_reason(error),
                )
            raise UpstreamAPIError(api_error_message, details=str(error))

        return payload

    def fetch_channel(self, channel_id: str) -> dict[str, Any]:
        return self.youtube_api_get(
            YOUTUBE_CHANNELS_LIST,
            {"part": "contentDetails,snippet", "id": channel_id},
            failure_message="Failed to fetch channel data",
            api_error_message="YouTube API error",
        )

    def fetch_playlist_items(self, playlist_id: str, max_results: int = UPLOADS_PAGE_SIZE) -> dict[str, Any]:
        # First page only.
        return self.youtube_api_get(
            YOUTUBE_PLAYLIST_ITEMS_LIST,
            {"part": "snippet", "playlistId": playlist_id, "maxResults": max_results},
            failure_message="Failed to fetch playlist data",
            api_error_message="YouTube API error (playlist)",
        )

    def fetch_videos(self, video_ids: list[str]) -> dict[str, Any]:
        return self.youtube_api_get(
            YOUTUBE_VIDEOS_LIST,
            {"part": "contentDetails,snippet", "id": ",".join(video_ids)},
            failure_message="Failed to fetch videos data",
            api_error_message="YouTube API error (videos)",
        )

    def search_channels(self, query: str, max_results: int = SEARCH_PAGE_SIZE) -> dict[str, Any]:
        return self.youtube_api_get(
            YOUTUBE_SEARCH_LIST,
            {"part": "snippet", "q": query, "type": "channel", "maxResults": max_results},
            failure_message="Failed to search channels",
            api_error_message="YouTube API error (search)",
        )
