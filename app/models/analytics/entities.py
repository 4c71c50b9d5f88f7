"""Analytics entities - computed, immutable results.

Percent fields are integers rounded half-up and always within [0, 100].
Sequences are tuples so a result can be shared and hashed safely.
"""

from dataclasses import dataclass

from app.models.analytics.enums import ResourceKind, RiskKind, Severity, WinBand
from app.models.canvass.enums import SentimentBucket
from app.models.common import BaseEntity


@dataclass(frozen=True)
class MohallaMetrics(BaseEntity):
    """Per-mohalla rollup."""

    mohalla_id: str
    mohalla_name: str
    parent_ward_id: str | None

    # Households
    total_households: int
    surveyed_households: int
    fresh_households: int
    coverage_percent: int
    freshness_percent: int
    favorable_households: int
    dicey_households: int
    unfavorable_households: int
    unknown_households: int
    unfavorable_percent: int

    # Voters (stance counts are over present voters)
    total_voters: int
    present_voters: int
    confirmed_voters: int
    likely_voters: int
    swing_voters: int
    actionable_swing_voters: int
    opposition_voters: int
    unknown_voters: int
    vote_share_percent: int
    opposition_percent: int
    tagged_voters: int
    tagging_percent: int
    transport_needed: int
    expected_turnout: float

    opportunity_score: float


@dataclass(frozen=True)
class FamilyMetrics(BaseEntity):
    """Per-household rollup."""

    household_id: str
    mohalla_id: str
    mohalla_name: str
    head_name: str
    sentiment: SentimentBucket
    surveyed: bool
    influence_level: int

    total_voters: int
    present_voters: int
    confirmed_voters: int
    likely_voters: int
    swing_voters: int
    opposition_voters: int
    unknown_voters: int
    away_voters: int
    transport_needed: int
    expected_turnout: float

    strength_score: float
    priority_score: float
    is_swing: bool

    @property
    def committed_voters(self) -> int:
        return self.confirmed_voters + self.likely_voters


@dataclass(frozen=True)
class SwingFamily(BaseEntity):
    """Household that is neither solidly for nor solidly against."""

    household_id: str
    mohalla_id: str
    head_name: str
    sentiment: SentimentBucket
    present_voters: int
    committed_voters: int
    swing_voters: int
    opposition_voters: int


@dataclass(frozen=True)
class RiskAlert(BaseEntity):
    """One triggered risk condition for one mohalla or influencer."""

    id: str
    entity_type: str
    entity_id: str
    entity_name: str
    kind: RiskKind
    severity: Severity
    value: float
    threshold: float
    message: str


@dataclass(frozen=True)
class ResourceRecommendation(BaseEntity):
    """Suggested deployment of a campaign resource."""

    kind: ResourceKind
    mohalla_id: str
    mohalla_name: str
    priority: Severity
    reason: str
    quantity: int | None = None


@dataclass(frozen=True)
class Projection(BaseEntity):
    """Vote share, win probability and turnout projection."""

    vote_share_percent: int
    win_probability_percent: int
    win_probability_band: WinBand
    expected_votes_if_today_polling: int
    expected_turnout: int
    high_turnout_voters: int
    medium_turnout_voters: int
    low_turnout_voters: int


@dataclass(frozen=True)
class RiskReport(BaseEntity):
    """Risk pockets and alerts."""

    danger_pockets: tuple[MohallaMetrics, ...] = ()
    weak_pockets: tuple[MohallaMetrics, ...] = ()
    under_surveyed_mohallas: tuple[MohallaMetrics, ...] = ()
    risk_alerts: tuple[RiskAlert, ...] = ()


@dataclass(frozen=True)
class DashboardMetrics(BaseEntity):
    """Complete campaign-health picture for one snapshot."""

    # Win meter
    win_probability_band: WinBand
    win_probability_percent: int
    vote_share_percent: int
    expected_votes_if_today_polling: int
    total_present_voters: int
    total_voters: int

    # Support composition (present voters)
    confirmed_votes: int
    likely_votes: int
    swing_votes: int
    opposition_votes: int
    unknown_votes: int
    actionable_swing_votes: int

    # Turnout projection
    expected_turnout: int
    high_turnout_voters: int
    medium_turnout_voters: int
    low_turnout_voters: int

    # Coverage & data quality
    total_households: int
    surveyed_households: int
    coverage_percent: int
    fresh_households: int
    freshness_percent: int
    tagged_voters: int
    tagging_percent: int
    orphaned_households: int
    orphaned_voters: int

    # Sentiment summary
    favorable_households: int
    dicey_households: int
    unfavorable_households: int
    unknown_households: int

    # Special needs & influencers
    transport_required_count: int
    away_voters_count: int
    unconverted_influencers: int
    opposed_influencers: int
    swing_family_count: int

    # Rollups
    mohalla_metrics: tuple[MohallaMetrics, ...] = ()
    family_metrics: tuple[FamilyMetrics, ...] = ()
    swing_families: tuple[SwingFamily, ...] = ()

    # Action lists
    top_swing_mohallas: tuple[MohallaMetrics, ...] = ()
    strongest_families: tuple[FamilyMetrics, ...] = ()
    priority_targets: tuple[FamilyMetrics, ...] = ()
    high_support_low_turnout: tuple[FamilyMetrics, ...] = ()
    families_with_dicey_voters: tuple[FamilyMetrics, ...] = ()
    high_influence_families: tuple[FamilyMetrics, ...] = ()
    danger_pockets: tuple[MohallaMetrics, ...] = ()
    weak_pockets: tuple[MohallaMetrics, ...] = ()
    under_surveyed_mohallas: tuple[MohallaMetrics, ...] = ()
    risk_alerts: tuple[RiskAlert, ...] = ()
    resource_recommendations: tuple[ResourceRecommendation, ...] = ()
