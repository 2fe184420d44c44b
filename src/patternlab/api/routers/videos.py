"""
API routes for the cached video catalogue.

Endpoints
---------
- `GET /videos`: Full catalogue (cached after the first call).
- `GET /videos/cache/stats`: Hit/miss counters.
- `DELETE /videos/cache`: Drop every cached entry.
- `GET /videos/{video_id}`: One video (cached per id).

Source failures (:class:`VideoSourceError`) are mapped to 502 by the app.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status

from patternlab.video import CacheStats, CachingVideoSource, Video

router = APIRouter(prefix="/videos", tags=["Videos"])


def get_video_cache(request: Request) -> CachingVideoSource:
    """FastAPI dependency returning the app-owned caching proxy."""
    cache: CachingVideoSource = request.app.state.videos
    return cache


Cache = Annotated[CachingVideoSource, Depends(get_video_cache)]


@router.get("", response_model=list[Video])
def list_videos(cache: Cache) -> list[Video]:
    return cache.fetch_list()


@router.get("/cache/stats", response_model=CacheStats)
def cache_stats(cache: Cache) -> CacheStats:
    return cache.stats()


@router.delete("/cache", status_code=status.HTTP_204_NO_CONTENT)
def clear_cache(cache: Cache) -> None:
    cache.invalidate()


@router.get("/{video_id}", response_model=Video)
def get_video(video_id: str, cache: Cache) -> Video:
    video = cache.fetch_by_id(video_id)
    if video is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Video {video_id} not found",
        )
    return video


__all__ = ["router", "get_video_cache"]
