"""Ranker - ordered action lists for field teams.

Every ranking sorts on a score and breaks ties by ascending id.
"""

from math import ceil

from app.models.analytics import (
    FamilyMetrics,
    MohallaMetrics,
    ResourceKind,
    ResourceRecommendation,
    Severity,
    SwingFamily,
)
from app.models.canvass import SentimentBucket
from app.services.analytics.config import AnalyticsConfig
from helpers import formulas


def rank_swing_mohallas(mohalla_metrics: tuple[MohallaMetrics, ...], n: int) -> tuple[MohallaMetrics, ...]:
    """Top ``n`` mohallas by opportunity score (positive scores only)."""
    candidates = [m for m in mohalla_metrics if m.opportunity_score > 0]
    candidates.sort(key=lambda m: (-m.opportunity_score, m.mohalla_id))
    return tuple(candidates[: max(n, 0)])


def rank_strongest_families(family_metrics: tuple[FamilyMetrics, ...], n: int) -> tuple[FamilyMetrics, ...]:
    """Top ``n`` households by strength score."""
    ranked = sorted(family_metrics, key=lambda f: (-f.strength_score, f.household_id))
    return tuple(ranked[: max(n, 0)])


def rank_swing_families(family_metrics: tuple[FamilyMetrics, ...]) -> tuple[SwingFamily, ...]:
    return tuple(
        SwingFamily(
            household_id=f.household_id,
            mohalla_id=f.mohalla_id,
            head_name=f.head_name,
            sentiment=f.sentiment,
            present_voters=f.present_voters,
            committed_voters=f.committed_voters,
            swing_voters=f.swing_voters,
            opposition_voters=f.opposition_voters,
        )
        for f in sorted(family_metrics, key=lambda f: f.household_id)
        if f.is_swing
    )


def rank_priority_targets(
    family_metrics: tuple[FamilyMetrics, ...],
    n: int,
    config: AnalyticsConfig,
) -> tuple[FamilyMetrics, ...]:
    """Households to visit first: swing families and influential Dicey ones."""
    targets = [
        f
        for f in family_metrics
        if f.is_swing
        or (f.sentiment == SentimentBucket.DICEY and f.influence_level >= config.priority_influence_level)
    ]
    targets.sort(key=lambda f: (-f.priority_score, f.household_id))
    return tuple(targets[: max(n, 0)])


def families_with_dicey_voters(
    family_metrics: tuple[FamilyMetrics, ...],
    config: AnalyticsConfig,
) -> tuple[FamilyMetrics, ...]:
    """Dicey households with several voters, largest first."""
    found = [
        f
        for f in family_metrics
        if f.sentiment == SentimentBucket.DICEY and f.total_voters >= config.dicey_family_min_voters
    ]
    found.sort(key=lambda f: (-f.total_voters, f.household_id))
    return tuple(found)


def high_influence_families(
    family_metrics: tuple[FamilyMetrics, ...],
    config: AnalyticsConfig,
) -> tuple[FamilyMetrics, ...]:
    found = [f for f in family_metrics if f.influence_level >= config.high_influence_level]
    found.sort(key=lambda f: (-f.influence_level, f.household_id))
    return tuple(found)


def high_support_low_turnout(
    family_metrics: tuple[FamilyMetrics, ...],
    config: AnalyticsConfig,
) -> tuple[FamilyMetrics, ...]:
    """Solidly committed households unlikely to turn out without a push."""
    found = [
        f
        for f in family_metrics
        if f.present_voters
        and formulas.safe_ratio(f.committed_voters, f.present_voters) >= config.solid_family_share
        and formulas.safe_ratio(f.expected_turnout, f.present_voters) < config.low_turnout_rate
    ]
    found.sort(key=lambda f: (-f.strength_score, f.household_id))
    return tuple(found)


def _vehicle_priority(transport_needed: int, config: AnalyticsConfig) -> Severity:
    if transport_needed > config.vehicle_high_transport:
        return Severity.HIGH
    if transport_needed > config.vehicle_medium_transport:
        return Severity.MEDIUM
    return Severity.LOW


def recommend_resources(
    mohalla_metrics: tuple[MohallaMetrics, ...],
    swing_mohalla_ids: set[str] | frozenset[str],
    config: AnalyticsConfig,
) -> tuple[ResourceRecommendation, ...]:
    """Vehicles, workers and events per mohalla.

    Vehicles go where voters need transport, prioritized by how many do.
    Workers go to the top swing mohallas, one per ``swing_voters_per_worker``
    actionable swing voters. Outreach events go to under-surveyed mohallas
    with more than ``event_min_dicey_households`` Dicey households.
    """
    recs: list[ResourceRecommendation] = []

    for m in mohalla_metrics:
        if m.transport_needed > 0:
            recs.append(
                ResourceRecommendation(
                    kind=ResourceKind.VEHICLE,
                    mohalla_id=m.mohalla_id,
                    mohalla_name=m.mohalla_name,
                    priority=_vehicle_priority(m.transport_needed, config),
                    reason=f"{m.transport_needed} voters need transport to the booth",
                    quantity=ceil(m.transport_needed / config.voters_per_vehicle),
                )
            )

        if m.mohalla_id in swing_mohalla_ids:
            recs.append(
                ResourceRecommendation(
                    kind=ResourceKind.MANPOWER,
                    mohalla_id=m.mohalla_id,
                    mohalla_name=m.mohalla_name,
                    priority=Severity.HIGH,
                    reason=(
                        f"{m.actionable_swing_voters} actionable swing voters "
                        f"at {m.vote_share_percent}% vote share"
                    ),
                    quantity=max(1, ceil(m.actionable_swing_voters / config.swing_voters_per_worker)),
                )
            )

        coverage = formulas.percent(m.surveyed_households, m.total_households)
        if (
            m.total_households
            and coverage < config.coverage_floor_pct
            and m.dicey_households > config.event_min_dicey_households
        ):
            recs.append(
                ResourceRecommendation(
                    kind=ResourceKind.EVENT,
                    mohalla_id=m.mohalla_id,
                    mohalla_name=m.mohalla_name,
                    priority=Severity.MEDIUM,
                    reason=(
                        f"{m.dicey_households} dicey families, only {m.coverage_percent}% surveyed; "
                        "hold a community meeting"
                    ),
                )
            )

    recs.sort(key=lambda r: (r.priority.rank, r.mohalla_id, r.kind.value))
    return tuple(recs)
