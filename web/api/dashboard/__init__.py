"""Dashboard API."""

from web.api.dashboard.views import (
    get_alerts,
    get_metrics,
    get_mohalla,
    get_mohallas,
    get_overview,
    get_swing_families,
    get_voters,
)

__all__ = [
    "get_overview",
    "get_metrics",
    "get_mohallas",
    "get_mohalla",
    "get_swing_families",
    "get_alerts",
    "get_voters",
]
