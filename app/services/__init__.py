"""Services package - service class exports."""

from app.services.dashboard.service import DashboardService
from app.services.seeding.service import SeedService

__all__ = [
    "DashboardService",
    "SeedService",
]
