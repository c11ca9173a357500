from __future__ import annotations

from xtop.config.models import (
    DEFAULT_CONCURRENCY,
    DEFAULT_HEADER,
    DEFAULT_INTERVAL_SEC,
    RenderConfig,
    TargetConfig,
    normalize_url,
)

__all__ = [
    "DEFAULT_CONCURRENCY",
    "DEFAULT_HEADER",
    "DEFAULT_INTERVAL_SEC",
    "RenderConfig",
    "TargetConfig",
    "normalize_url",
]
