"""Seeding API."""

from web.api.seeding.views import clear_demo_data, get_demo_status, seed_demo_data

__all__ = [
    "seed_demo_data",
    "clear_demo_data",
    "get_demo_status",
]
