"""Dashboard API response schemas."""

from pydantic import BaseModel


class OverviewResponse(BaseModel):
    """Dashboard headline numbers."""

    win_probability_band: str
    win_probability_percent: int
    vote_share_percent: int
    expected_votes_if_today_polling: int
    expected_turnout: int
    total_voters: int
    total_present_voters: int
    total_households: int
    coverage_percent: int
    freshness_percent: int
    mohallas_count: int
    swing_family_count: int
    alerts_count: int


class MohallaItem(BaseModel):
    """Per-mohalla rollup."""

    mohalla_id: str
    mohalla_name: str
    parent_ward_id: str | None
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


class FamilyItem(BaseModel):
    """Per-household rollup."""

    household_id: str
    mohalla_id: str
    mohalla_name: str
    head_name: str
    sentiment: str
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


class SwingFamilyItem(BaseModel):
    """Household neither solidly for nor against."""

    household_id: str
    mohalla_id: str
    head_name: str
    sentiment: str
    present_voters: int
    committed_voters: int
    swing_voters: int
    opposition_voters: int


class RiskAlertItem(BaseModel):
    """Risk alert."""

    id: str
    entity_type: str
    entity_id: str
    entity_name: str
    kind: str
    severity: str
    value: float
    threshold: float
    message: str


class ResourceItem(BaseModel):
    """Resource recommendation."""

    kind: str
    mohalla_id: str
    mohalla_name: str
    priority: str
    reason: str
    quantity: int | None = None


class MetricsResponse(BaseModel):
    """Complete dashboard."""

    win_probability_band: str
    win_probability_percent: int
    vote_share_percent: int
    expected_votes_if_today_polling: int
    total_present_voters: int
    total_voters: int
    confirmed_votes: int
    likely_votes: int
    swing_votes: int
    opposition_votes: int
    unknown_votes: int
    actionable_swing_votes: int
    expected_turnout: int
    high_turnout_voters: int
    medium_turnout_voters: int
    low_turnout_voters: int
    total_households: int
    surveyed_households: int
    coverage_percent: int
    fresh_households: int
    freshness_percent: int
    tagged_voters: int
    tagging_percent: int
    orphaned_households: int
    orphaned_voters: int
    favorable_households: int
    dicey_households: int
    unfavorable_households: int
    unknown_households: int
    transport_required_count: int
    away_voters_count: int
    unconverted_influencers: int
    opposed_influencers: int
    swing_family_count: int
    mohalla_metrics: list[MohallaItem]
    family_metrics: list[FamilyItem]
    swing_families: list[SwingFamilyItem]
    top_swing_mohallas: list[MohallaItem]
    strongest_families: list[FamilyItem]
    priority_targets: list[FamilyItem]
    high_support_low_turnout: list[FamilyItem]
    families_with_dicey_voters: list[FamilyItem]
    high_influence_families: list[FamilyItem]
    danger_pockets: list[MohallaItem]
    weak_pockets: list[MohallaItem]
    under_surveyed_mohallas: list[MohallaItem]
    risk_alerts: list[RiskAlertItem]
    resource_recommendations: list[ResourceItem]


class MohallasResponse(BaseModel):
    items: list[MohallaItem]


class AlertsResponse(BaseModel):
    items: list[RiskAlertItem]
    total: int


class VoterItem(BaseModel):
    """Voter record as stored."""

    id: str
    household_id: str
    present: bool
    current_stance: str | None
    turnout_propensity: str | None
    tagged_by_influencer: bool
    transport_needed: bool
    away_status: bool
    name: str


class VotersResponse(BaseModel):
    items: list[VoterItem]
    total: int
