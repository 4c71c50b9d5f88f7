"""Seeding API response schemas."""

from pydantic import BaseModel


class SeedResponse(BaseModel):
    """Outcome of a seed or clear run."""

    success: bool
    message: str
    summary: dict[str, int] = {}


class DemoStatusResponse(BaseModel):
    """Whether demo data is loaded."""

    exists: bool
    counts: dict[str, int]
