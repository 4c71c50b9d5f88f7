"""Dependency Injection container - initialized at app startup."""

import duckdb

from app.repositories.canvass import CanvassRepository
from app.services.analytics import AnalyticsConfig, MetricsCache
from app.services.dashboard.service import DashboardService
from app.services.seeding.service import SeedService


class Container:
    """Application DI container - holds all singleton instances."""

    _instance = None
    _initialized = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def init(self, conn: duckdb.DuckDBPyConnection | None = None) -> None:
        """Initialize all dependencies. Call once at app startup.

        Pass ``conn`` to run against a specific connection (e.g. in-memory).
        """
        if self._initialized:
            return

        # Repositories (singletons)
        self._canvass_repo = CanvassRepository(read_only=False, conn=conn)

        # Services (with injected repos)
        self.config = AnalyticsConfig.from_settings()
        self.metrics_cache = MetricsCache()

        self.dashboard = DashboardService(
            repo=self._canvass_repo,
            cache=self.metrics_cache,
            config=self.config,
        )

        self.seeding = SeedService(repo=self._canvass_repo)

        self._initialized = True

    def reset(self) -> None:
        """Forget all instances; next init() builds them again."""
        self._initialized = False


# Global container instance
container = Container()
