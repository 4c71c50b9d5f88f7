"""Seeding API views - thin layer over services."""

from app.container import container
from app.models.canvass import Collection

from .schemas import DemoStatusResponse, SeedResponse


def seed_demo_data() -> SeedResponse:
    """Load the demo dataset."""
    result = container.seeding.seed_all()
    if result.success:
        container.dashboard.refresh()
    return SeedResponse(success=result.success, message=result.message, summary=result.summary)


def clear_demo_data() -> SeedResponse:
    """Remove all demo records."""
    result = container.seeding.clear()
    container.dashboard.refresh()
    return SeedResponse(success=result.success, message=result.message, summary=result.summary)


def get_demo_status() -> DemoStatusResponse:
    """Check if demo data is loaded and count stored records."""
    return DemoStatusResponse(
        exists=container.seeding.demo_data_exists(),
        counts={c.value: container.seeding.count(c) for c in Collection},
    )
