"""Canvass analytics engine."""

from app.services.analytics.assembler import assemble
from app.services.analytics.cache import MetricsCache, cache_key, snapshot_fingerprint
from app.services.analytics.config import AnalyticsConfig

__all__ = [
    "AnalyticsConfig",
    "MetricsCache",
    "assemble",
    "cache_key",
    "snapshot_fingerprint",
]
