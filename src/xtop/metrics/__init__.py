from __future__ import annotations

from xtop.metrics.aggregator import Aggregator
from xtop.metrics.models import ErrorType, Metrics, Result, Snapshot

__all__ = ["Aggregator", "ErrorType", "Metrics", "Result", "Snapshot"]
