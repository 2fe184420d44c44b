"""
ASGI Entry Point for the PatternLab API.

This module exposes the `app` object required by ASGI servers (Uvicorn/Gunicorn).
It loads environment variables from `.env` before the application factory runs
so settings such as `PATTERNLAB_VIDEO_API_URL` are visible to it.

Usage
-----
Run via the module entry point:
    $ python -m patternlab.api.server

Or via uvicorn directly:
    $ uvicorn patternlab.api.server:app --reload
"""

from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from patternlab.api.app import create_app
from patternlab.core.settings import load_settings

load_dotenv(dotenv_path=Path(".env"))
load_settings.cache_clear()

app = create_app()


def main() -> None:
    """Run the API server locally for development."""
    settings = load_settings()
    uvicorn.run(
        "patternlab.api.server:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.is_dev,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
