# -----------------------------------------------------------------------------
# Video sources: the slow collaborators that the caching proxy stands in front of.
#
# Every source honours the same two-call contract (`VideoSource`):
#   - list_videos()            -> list[Video]
#   - get_video_info(video_id) -> Video | None
#
# Two implementations ship with the package:
#
# 1. VideoLibrary
#    An in-memory catalogue with an optional artificial delay and per-call
#    counters. It backs the CLI demo, the API default and the tests.
#
# 2. HttpVideoSource
#    A JSON-over-HTTP client built on the standard library (`urllib.request`),
#    so it adds no dependencies. Unit tests patch the internal `_get()` seam so
#    no real HTTP calls happen during CI.
# -----------------------------------------------------------------------------
from __future__ import annotations

import json
import time
import urllib.error
import urllib.parse
import urllib.request
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from pydantic import ValidationError

from patternlab.core.settings import Settings, get_logger, load_settings

from .models import Video, VideoSourceError

logger = get_logger(__name__)


@runtime_checkable
class VideoSource(Protocol):
    """Request contract shared by real sources and the caching proxy."""

    def list_videos(self) -> list[Video]: ...

    def get_video_info(self, video_id: str) -> Video | None: ...


def demo_catalogue() -> list[Video]:
    """Return the small catalogue used by the CLI demo and the API default."""
    return [
        Video(id="1", title="Design Patterns in 10 Minutes", channel="CodeCraft",
              duration_seconds=612, views=182_000),
        Video(id="7", title="Undo Without Tears: The Memento", channel="CodeCraft",
              duration_seconds=845, views=41_200),
        Video(id="42", title="Proxies, Caches and Lazy Loading", channel="Systems Hour",
              duration_seconds=1_390, views=96_500),
        Video(id="99", title="Composite Calendars", channel="UI Lab",
              duration_seconds=508, views=12_750),
    ]


class VideoLibrary:
    """
    In-memory video catalogue that pretends to be slow.

    Parameters
    ----------
    videos:
        Initial catalogue; defaults to :func:`demo_catalogue`.
    latency_seconds:
        Artificial delay applied to every call.

    Attributes
    ----------
    calls : Counter[str]
        Number of invocations per operation name (``"list_videos"`` and
        ``"get_video_info"``), handy for observing cache behaviour.
    """

    def __init__(
        self, videos: Iterable[Video] | None = None, latency_seconds: float = 0.0
    ) -> None:
        source = demo_catalogue() if videos is None else videos
        self._videos: dict[str, Video] = {v.id: v for v in source}
        self.latency_seconds = latency_seconds
        self.calls: Counter[str] = Counter()

    def publish(self, video: Video) -> None:
        """Add or replace a catalogue entry."""
        self._videos[video.id] = video

    def _wait(self) -> None:
        if self.latency_seconds > 0:
            time.sleep(self.latency_seconds)

    def list_videos(self) -> list[Video]:
        self.calls["list_videos"] += 1
        self._wait()
        return [v.model_copy() for v in self._videos.values()]

    def get_video_info(self, video_id: str) -> Video | None:
        self.calls["get_video_info"] += 1
        self._wait()
        video = self._videos.get(video_id)
        return video.model_copy() if video is not None else None


@dataclass(slots=True)
class HttpVideoSource:
    """Video catalogue reached over HTTP.

    Endpoints
    ---------
    - ``GET {base_url}/videos``       -> JSON list, or ``{"items": [...]}``
    - ``GET {base_url}/videos/{id}``  -> JSON object; 404 means "no such video"

    Parameters
    ----------
    base_url:
        Root of the catalogue API, without a trailing slash.
    api_key:
        Optional bearer token sent as ``Authorization``.
    timeout_seconds:
        Network timeout for each request.
    """

    base_url: str
    api_key: str | None = None
    timeout_seconds: float = 10.0

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> HttpVideoSource:
        """Build a source from ``PATTERNLAB_VIDEO_API_URL`` / ``_KEY``.

        Raises
        ------
        ValueError
            If no catalogue URL is configured.
        """
        cfg = settings or load_settings()
        if not cfg.video_api_url:
            raise ValueError("PATTERNLAB_VIDEO_API_URL is not set")
        return cls(base_url=cfg.video_api_url.rstrip("/"), api_key=cfg.video_api_key)

    # ----------------------------------------------------------------- #
    # VideoSource contract
    # ----------------------------------------------------------------- #
    def list_videos(self) -> list[Video]:
        payload = self._get(f"{self.base_url}/videos")
        if payload is None:
            raise VideoSourceError("Video list endpoint returned 404")
        items = payload.get("items") if isinstance(payload, dict) else payload
        if not isinstance(items, list):
            raise VideoSourceError("Video list response is not a list")
        return [self._parse(item) for item in items]

    def get_video_info(self, video_id: str) -> Video | None:
        quoted = urllib.parse.quote(video_id, safe="")
        payload = self._get(f"{self.base_url}/videos/{quoted}")
        if payload is None:
            return None
        return self._parse(payload)

    # ----------------------------------------------------------------- #
    # Internal helpers (test seams)
    # ----------------------------------------------------------------- #
    @staticmethod
    def _parse(raw: Any) -> Video:
        try:
            return Video.model_validate(raw)
        except ValidationError as exc:
            raise VideoSourceError(f"Malformed video payload: {exc}") from exc

    def _get(self, url: str) -> Any:
        """Perform an HTTP GET and decode the JSON body.

        Returns ``None`` for a 404 so callers can map it to "absent".

        Raises
        ------
        VideoSourceError
            On any other HTTP error, transport failure, or undecodable body.
        """
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        request = urllib.request.Request(url=url, headers=headers, method="GET")

        logger.debug("GET %s", url)
        try:
            with urllib.request.urlopen(request, timeout=self.timeout_seconds) as resp:
                raw = resp.read()
        except urllib.error.HTTPError as exc:
            if exc.code == 404:
                return None
            detail = exc.read().decode("utf-8", errors="ignore")
            raise VideoSourceError(
                f"Video API HTTP error {exc.code}: {exc.reason}; body={detail!r}"
            ) from exc
        except urllib.error.URLError as exc:
            raise VideoSourceError(f"Video API network error: {exc}") from exc
        except OSError as exc:
            # Read timeouts and dropped connections while reading the body.
            raise VideoSourceError(f"Video API transport error: {exc}") from exc

        try:
            return json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise VideoSourceError("Failed to decode video API response as JSON") from exc


__all__ = ["VideoSource", "VideoLibrary", "HttpVideoSource", "demo_catalogue"]
