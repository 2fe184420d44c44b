"""Video catalogue contracts.

- `Video`      : one catalogue entry as returned by every video source.
- `CacheStats` : counters reported by the caching proxy.

Both are Pydantic v2 models so the API can return them directly.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Video(BaseModel):
    """A single video in the catalogue; frozen so cached entries cannot be altered."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1, description="Catalogue identifier")
    title: str
    channel: str = ""
    duration_seconds: int = Field(default=0, ge=0)
    views: int = Field(default=0, ge=0)


class CacheStats(BaseModel):
    """Snapshot of the proxy's cache counters."""

    hits: int = 0
    misses: int = 0
    entries: int = Field(default=0, description="Per-video entries currently stored")
    list_cached: bool = False
    max_entries: int | None = Field(default=None, description="None means unbounded")


class VideoSourceError(RuntimeError):
    """Raised when a video source cannot answer a request."""


__all__ = ["Video", "CacheStats", "VideoSourceError"]
