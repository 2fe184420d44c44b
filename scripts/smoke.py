# scripts/smoke.py
"""
Smoke Test Script for PatternLab.

Runs the two mechanisms end to end with visible timing:
an undo session on an editor, and repeated lookups through the video cache.

Usage
-----
1. Against the in-memory library with a simulated delay:
    $ python scripts/smoke.py --latency 0.3

2. Against a remote catalogue:
    $ PATTERNLAB_VIDEO_API_URL=https://videos.example.com/api python scripts/smoke.py
"""

import argparse
import logging
import sys
import time
from pathlib import Path

from dotenv import load_dotenv

from patternlab.api.app import build_video_source
from patternlab.core.history import Editor
from patternlab.core.settings import load_settings
from patternlab.video import CachingVideoSource, VideoLibrary

env_path = Path(".env")
if env_path.exists():
    load_dotenv(env_path)
    print("✅ Loaded .env file")

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
log = logging.getLogger("smoke")


def main() -> None:
    """Execute the smoke test workflow."""
    parser = argparse.ArgumentParser(description="Run PatternLab Smoke Test")
    parser.add_argument("--latency", type=float, default=0.2, help="Simulated source delay")
    parser.add_argument("--video", default="42", help="Video id to look up twice")
    args = parser.parse_args()

    # 1. Undo session
    editor = Editor()
    editor.capture("empty")
    editor.add("Circle")
    editor.capture("circle")
    editor.add("Rectangle")
    for _ in range(3):
        editor.restore()
        log.info("after undo: %s", editor.items)

    # 2. Cached lookups
    settings = load_settings()
    source = (
        build_video_source(settings)
        if settings.video_api_url
        else VideoLibrary(latency_seconds=args.latency)
    )
    cache = CachingVideoSource(source, max_entries=settings.cache_max_entries)
    for attempt in (1, 2):
        start = time.perf_counter()
        video = cache.fetch_by_id(args.video)
        log.info(
            "lookup %d: %s in %.3fs",
            attempt,
            video.title if video else "<absent>",
            time.perf_counter() - start,
        )
    log.info("cache stats: %s", cache.stats().model_dump())


if __name__ == "__main__":
    main()
