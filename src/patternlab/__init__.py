"""PatternLab package bootstrap.

Exposes the package version. The undo history lives in
``patternlab.core.history`` and the caching video proxy in ``patternlab.video``.
"""

from __future__ import annotations

__all__ = ["__version__"]
__version__ = "0.1.0"
