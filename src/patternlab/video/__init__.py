from __future__ import annotations

from .models import CacheStats, Video, VideoSourceError
from .proxy import CachingVideoSource
from .source import HttpVideoSource, VideoLibrary, VideoSource, demo_catalogue

__all__ = [
    "Video",
    "CacheStats",
    "VideoSourceError",
    "VideoSource",
    "VideoLibrary",
    "HttpVideoSource",
    "CachingVideoSource",
    "demo_catalogue",
]
