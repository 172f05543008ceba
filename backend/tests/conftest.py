import pytest

from backend.app.services.cache import ExpiringCache
from backend.app.services.shorts import ShortsService


def make_video(video_id: str, duration: str) -> dict:
    return {
        "id": video_id,
        "snippet": {
            "title": f"Video {video_id}",
            "channelTitle": "Test Channel",
            "publishedAt": "2025-01-01T00:00:00Z",
            "thumbnails": {
                "default": {"url": f"https://img/{video_id}_default.jpg"},
                "high": {"url": f"https://img/{video_id}.jpg"},
            },
            "description": f"About {video_id}",
        },
        "contentDetails": {"duration": duration},
    }


def make_playlist_item(video_id: str) -> dict:
    return {"snippet": {"resourceId": {"kind": "youtube#video", "videoId": video_id}}}


class FakeClock:
    def __init__(self, now: float = 1_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeYouTubeClient:
    """Stands in for YouTubeClient; records every upstream call."""

    def __init__(self, api_key: str | None = "test-key"):
        self.api_key = api_key
        self.calls: list[tuple[str, object]] = []
        self.failures: dict[str, Exception] = {}
        self.channels = {
            "items": [
                {
                    "contentDetails": {"relatedPlaylists": {"uploads": "UU_TEST"}},
                    "snippet": {"title": "Test Channel"},
                }
            ]
        }
        self.playlist = {"items": [make_playlist_item(v) for v in ("a", "b", "c", "d")]}
        self.videos = {
            "items": [
                make_video("a", "PT30S"),
                make_video("b", "PT1M"),
                make_video("c", "PT1M1S"),
                make_video("d", "PT1H2M3S"),
            ]
        }
        self.search = {
            "items": [
                {
                    "snippet": {
                        "channelId": f"UC_{n}",
                        "title": f"Channel {n}",
                        "description": f"Channel number {n}",
                        "thumbnails": {"default": {"url": f"https://img/UC_{n}.jpg"}},
                    }
                }
                for n in range(1, 4)
            ]
        }

    def _call(self, name: str, arg: object) -> dict:
        self.calls.append((name, arg))
        if name in self.failures:
            raise self.failures[name]
        return getattr(self, name)

    def fetch_channel(self, channel_id: str) -> dict:
        return self._call("channels", channel_id)

    def fetch_playlist_items(self, playlist_id: str, max_results: int = 50) -> dict:
        return self._call("playlist", playlist_id)

    def fetch_videos(self, video_ids: list[str]) -> dict:
        return self._call("videos", list(video_ids))

    def search_channels(self, query: str, max_results: int = 5) -> dict:
        return self._call("search", query)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fake_client() -> FakeYouTubeClient:
    return FakeYouTubeClient()


@pytest.fixture
def service(fake_client, clock) -> ShortsService:
    return ShortsService(fake_client, ExpiringCache(clock=clock))


@pytest.fixture
def video_factory():
    return make_video
