"""Dashboard API views - thin layer over services."""

from datetime import date
from enum import Enum

from app.container import container
from web.api.errors import NotFoundError, parse_as_of, validate_id, validate_limit

from .schemas import (
    AlertsResponse,
    MetricsResponse,
    MohallaItem,
    MohallasResponse,
    OverviewResponse,
    RiskAlertItem,
    SwingFamilyItem,
    VoterItem,
    VotersResponse,
)


def _value(field: Enum | str | None) -> str | None:
    return field.value if isinstance(field, Enum) else field


def get_overview(as_of: str | date | None = None) -> OverviewResponse:
    """Get dashboard headline numbers."""
    data = container.dashboard.get_overview(parse_as_of(as_of))
    return OverviewResponse(**data)


def get_metrics(as_of: str | date | None = None) -> MetricsResponse:
    """Get the complete dashboard."""
    metrics = container.dashboard.get_metrics(parse_as_of(as_of))
    return MetricsResponse(**metrics.to_dict())


def get_mohallas(as_of: str | date | None = None) -> MohallasResponse:
    """Get per-mohalla metrics."""
    metrics = container.dashboard.get_metrics(parse_as_of(as_of))
    return MohallasResponse(items=[MohallaItem(**m.to_dict()) for m in metrics.mohalla_metrics])


def get_mohalla(mohalla_id: str, as_of: str | date | None = None) -> MohallaItem:
    """Get metrics for one mohalla."""
    validate_id("mohalla_id", mohalla_id)
    metrics = container.dashboard.get_metrics(parse_as_of(as_of))

    for m in metrics.mohalla_metrics:
        if m.mohalla_id == mohalla_id:
            return MohallaItem(**m.to_dict())
    raise NotFoundError(f"Mohalla not found: {mohalla_id}")


def get_swing_families(limit: int | None = None) -> list[SwingFamilyItem]:
    """Get swing families in household order."""
    validate_limit(limit)
    families = container.dashboard.get_metrics().swing_families
    return [SwingFamilyItem(**f.to_dict()) for f in families[:limit]]


def get_alerts(limit: int | None = None) -> AlertsResponse:
    """Get risk alerts, most severe first."""
    validate_limit(limit)
    alerts = container.dashboard.get_metrics().risk_alerts
    return AlertsResponse(
        items=[RiskAlertItem(**a.to_dict()) for a in alerts[:limit]],
        total=len(alerts),
    )


def get_voters(limit: int | None = None) -> VotersResponse:
    """Get stored voters."""
    validate_limit(limit)
    voters = container.dashboard.get_voters()

    items = [
        VoterItem(
            id=v.id,
            household_id=v.household_id,
            present=v.present,
            current_stance=_value(v.current_stance),
            turnout_propensity=_value(v.turnout_propensity),
            tagged_by_influencer=v.tagged_by_influencer,
            transport_needed=v.transport_needed,
            away_status=v.away_status,
            name=v.name,
        )
        for v in voters[:limit]
    ]

    return VotersResponse(items=items, total=len(voters))
