"""Metrics assembler - runs the whole engine over one snapshot."""

from collections.abc import Iterable, Mapping
from datetime import datetime, timezone

from loguru import logger

from app.models.analytics import DashboardMetrics
from app.models.canvass import EnhancedVoter, Household, Influencer, Mohalla, SentimentBucket, StanceBucket
from app.services.analytics.classifier import is_opposed, is_unconverted
from app.services.analytics.config import AnalyticsConfig
from app.services.analytics.projection import project
from app.services.analytics.ranking import (
    families_with_dicey_voters,
    high_influence_families,
    high_support_low_turnout,
    rank_priority_targets,
    rank_strongest_families,
    rank_swing_families,
    rank_swing_mohallas,
    recommend_resources,
)
from app.services.analytics.risk import detect_risks
from app.services.analytics.rollup import aggregate, as_utc, build_family_metrics, build_mohalla_metrics, ordered
from helpers import formulas

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def default_as_of(households: Iterable[Household]) -> datetime:
    """Latest survey timestamp in the data, or the Unix epoch when there is none."""
    stamps = [as_utc(h.last_surveyed_at) for h in households if h.last_surveyed_at is not None]
    return max(stamps, default=EPOCH)


def assemble(
    mohallas: Mapping[str, Mohalla] | Iterable[Mohalla],
    households: Mapping[str, Household] | Iterable[Household],
    voters: Mapping[str, EnhancedVoter] | Iterable[EnhancedVoter],
    influencers: Mapping[str, Influencer] | Iterable[Influencer],
    *,
    config: AnalyticsConfig | None = None,
    as_of: datetime | None = None,
) -> DashboardMetrics:
    """Compute the full dashboard for one snapshot.

    Pure and deterministic: the same collections (in any order), config and
    ``as_of`` always give an equal result. Never raises on malformed records;
    unknown values land in Unknown buckets and dangling references are
    reported as orphans.
    """
    config = config if config is not None else AnalyticsConfig.from_settings()
    mohallas, households = ordered(mohallas), ordered(households)
    voters, influencers = ordered(voters), ordered(influencers)
    as_of = as_utc(as_of) if as_of is not None else default_as_of(households)

    rollups = aggregate(mohallas, households, voters, as_of=as_of, config=config)
    mohalla_metrics = build_mohalla_metrics(rollups, config)
    family_metrics = build_family_metrics(rollups, config)
    projection = project(rollups, config)
    risks = detect_risks(rollups, mohalla_metrics, config, influencers)

    top_swing = rank_swing_mohallas(mohalla_metrics, config.top_swing_mohallas)
    swing_families = rank_swing_families(family_metrics)
    resources = recommend_resources(mohalla_metrics, frozenset(m.mohalla_id for m in top_swing), config)

    totals = rollups.totals
    v = totals.voters

    metrics = DashboardMetrics(
        win_probability_band=projection.win_probability_band,
        win_probability_percent=projection.win_probability_percent,
        vote_share_percent=projection.vote_share_percent,
        expected_votes_if_today_polling=projection.expected_votes_if_today_polling,
        total_present_voters=v.present,
        total_voters=v.total,
        confirmed_votes=v.stances[StanceBucket.CONFIRMED],
        likely_votes=v.stances[StanceBucket.LIKELY],
        swing_votes=v.stances[StanceBucket.SWING],
        opposition_votes=v.stances[StanceBucket.OPPOSITION],
        unknown_votes=v.stances[StanceBucket.UNKNOWN],
        actionable_swing_votes=v.actionable_swing,
        expected_turnout=projection.expected_turnout,
        high_turnout_voters=projection.high_turnout_voters,
        medium_turnout_voters=projection.medium_turnout_voters,
        low_turnout_voters=projection.low_turnout_voters,
        total_households=totals.households,
        surveyed_households=totals.surveyed,
        coverage_percent=formulas.pct(totals.surveyed, totals.households),
        fresh_households=totals.fresh,
        freshness_percent=formulas.pct(totals.fresh, totals.surveyed),
        tagged_voters=v.tagged,
        tagging_percent=formulas.pct(v.tagged, v.total),
        orphaned_households=rollups.orphaned_households,
        orphaned_voters=rollups.orphaned_voters,
        favorable_households=totals.sentiments[SentimentBucket.FAVORABLE],
        dicey_households=totals.sentiments[SentimentBucket.DICEY],
        unfavorable_households=totals.sentiments[SentimentBucket.UNFAVORABLE],
        unknown_households=totals.sentiments[SentimentBucket.UNKNOWN],
        transport_required_count=v.transport_needed,
        away_voters_count=v.away,
        unconverted_influencers=sum(1 for i in influencers if is_unconverted(i)),
        opposed_influencers=sum(1 for i in influencers if is_opposed(i)),
        swing_family_count=len(swing_families),
        mohalla_metrics=mohalla_metrics,
        family_metrics=family_metrics,
        swing_families=swing_families,
        top_swing_mohallas=top_swing,
        strongest_families=rank_strongest_families(family_metrics, config.top_strongest_families),
        priority_targets=rank_priority_targets(family_metrics, config.top_priority_targets, config),
        high_support_low_turnout=high_support_low_turnout(family_metrics, config),
        families_with_dicey_voters=families_with_dicey_voters(family_metrics, config),
        high_influence_families=high_influence_families(family_metrics, config),
        danger_pockets=risks.danger_pockets,
        weak_pockets=risks.weak_pockets,
        under_surveyed_mohallas=risks.under_surveyed_mohallas,
        risk_alerts=risks.risk_alerts,
        resource_recommendations=resources,
    )
    logger.info(
        "Dashboard assembled: {} present voters, {}% share, {} ({}%), {} alerts",
        metrics.total_present_voters,
        metrics.vote_share_percent,
        metrics.win_probability_band.value,
        metrics.win_probability_percent,
        len(metrics.risk_alerts),
    )
    return metrics
