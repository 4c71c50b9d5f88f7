"""Analytics models - computed metrics records."""

from app.models.analytics.entities import (
    DashboardMetrics,
    FamilyMetrics,
    MohallaMetrics,
    Projection,
    ResourceRecommendation,
    RiskAlert,
    RiskReport,
    SwingFamily,
)
from app.models.analytics.enums import ResourceKind, RiskKind, Severity, WinBand

__all__ = [
    "MohallaMetrics",
    "FamilyMetrics",
    "SwingFamily",
    "RiskAlert",
    "ResourceRecommendation",
    "Projection",
    "RiskReport",
    "DashboardMetrics",
    "WinBand",
    "RiskKind",
    "Severity",
    "ResourceKind",
]
