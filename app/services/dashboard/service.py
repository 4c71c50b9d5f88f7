"""Dashboard service."""

from datetime import datetime, timezone

from loguru import logger

from app.models.analytics import DashboardMetrics
from app.models.canvass import EnhancedVoter
from app.repositories.canvass import CanvassRepository
from app.services.analytics import AnalyticsConfig, MetricsCache, assemble, cache_key


def today_utc() -> datetime:
    """Start of the current UTC day."""
    return datetime.now(timezone.utc).replace(hour=0, minute=0, second=0, microsecond=0)


class DashboardService:
    """Dashboard business logic."""

    def __init__(
        self,
        repo: CanvassRepository,
        cache: MetricsCache | None = None,
        config: AnalyticsConfig | None = None,
    ):
        self._repo = repo
        self._cache = cache if cache is not None else MetricsCache()
        self._config = config if config is not None else AnalyticsConfig.from_settings()
        logger.debug("DashboardService initialized")

    @property
    def config(self) -> AnalyticsConfig:
        return self._config

    def get_metrics(self, as_of: datetime | None = None) -> DashboardMetrics:
        """Full dashboard for the stored snapshot, memoized on its content."""
        as_of = as_of or today_utc()
        snapshot = self._repo.load_snapshot()
        key = cache_key(snapshot, as_of, self._config)

        return self._cache.get_or_compute(
            key,
            lambda: assemble(
                snapshot.mohallas,
                snapshot.households,
                snapshot.voters,
                snapshot.influencers,
                config=self._config,
                as_of=as_of,
            ),
        )

    def get_overview(self, as_of: datetime | None = None) -> dict:
        """Headline numbers for the dashboard header."""
        m = self.get_metrics(as_of)
        return {
            "win_probability_band": m.win_probability_band.value,
            "win_probability_percent": m.win_probability_percent,
            "vote_share_percent": m.vote_share_percent,
            "expected_votes_if_today_polling": m.expected_votes_if_today_polling,
            "expected_turnout": m.expected_turnout,
            "total_voters": m.total_voters,
            "total_present_voters": m.total_present_voters,
            "total_households": m.total_households,
            "coverage_percent": m.coverage_percent,
            "freshness_percent": m.freshness_percent,
            "mohallas_count": len(m.mohalla_metrics),
            "swing_family_count": m.swing_family_count,
            "alerts_count": len(m.risk_alerts),
        }

    def get_voters(self) -> list[EnhancedVoter]:
        """Stored voters, in id order, unchanged."""
        return list(self._repo.voters())

    def refresh(self) -> None:
        """Reopen the store and drop cached reads and computed dashboards."""
        self._repo.refresh()
        self._cache.invalidate()
        logger.info("Dashboard refreshed")
