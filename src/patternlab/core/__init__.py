"""Core package initializer for PatternLab.

Settings and logging live in :mod:`patternlab.core.settings`:
    from patternlab.core.settings import settings, load_settings, Settings, get_logger
"""

from __future__ import annotations

__all__ = ["__doc__"]
