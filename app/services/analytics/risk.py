"""Risk detector - danger, weak and under-surveyed pockets plus alerts."""

from collections.abc import Iterable

from loguru import logger

from app.models.analytics import MohallaMetrics, RiskAlert, RiskKind, RiskReport, Severity
from app.models.canvass import Influencer, SentimentBucket, StanceBucket
from app.services.analytics.classifier import is_opposed
from app.services.analytics.config import AnalyticsConfig
from app.services.analytics.rollup import AreaRollup, Rollups, ordered
from helpers import formulas

_MESSAGES = {
    RiskKind.DANGER_POCKET: "{name}: {value:.0f}% of present voters are opposition",
    RiskKind.WEAK_POCKET: "{name}: only {value:.0f}% committed support",
    RiskKind.UNDER_SURVEYED: "{name} has only {value:.0f}% survey coverage",
    RiskKind.STALE_SURVEYS: "{name}: only {value:.0f}% of surveys are recent",
    RiskKind.HIGH_UNFAVORABLE: "{name} has {value:.0f}% unfavorable families",
    RiskKind.INFLUENCER_OPPOSED: "{name} is opposed and controls ~{value:.0f} votes",
}


def _alert(
    area: AreaRollup,
    kind: RiskKind,
    value: float,
    threshold: float,
    severe: bool,
) -> RiskAlert:
    return RiskAlert(
        id=f"{kind.value}:{area.mohalla_id}",
        entity_type="mohalla",
        entity_id=area.mohalla_id,
        entity_name=area.name,
        kind=kind,
        severity=Severity.HIGH if severe else Severity.MEDIUM,
        value=round(value, 1),
        threshold=threshold,
        message=_MESSAGES[kind].format(name=area.name, value=value),
    )


def _area_alerts(area: AreaRollup, config: AnalyticsConfig) -> dict[RiskKind, RiskAlert]:
    """All triggered conditions for one mohalla, at most one per kind."""
    alerts: dict[RiskKind, RiskAlert] = {}
    v = area.voters
    sampled = v.present > config.min_sample_voters

    opposition = formulas.percent(v.stances[StanceBucket.OPPOSITION], v.present)
    if sampled and opposition > config.danger_opposition_pct:
        alerts[RiskKind.DANGER_POCKET] = _alert(
            area,
            RiskKind.DANGER_POCKET,
            opposition,
            config.danger_opposition_pct,
            opposition >= config.danger_severe_pct,
        )

    support = formulas.percent(v.committed, v.present)
    if sampled and support < config.weak_support_pct and RiskKind.DANGER_POCKET not in alerts:
        alerts[RiskKind.WEAK_POCKET] = _alert(
            area,
            RiskKind.WEAK_POCKET,
            support,
            config.weak_support_pct,
            support < config.weak_severe_pct,
        )

    coverage = formulas.percent(area.surveyed, area.households)
    if area.households and coverage < config.coverage_floor_pct:
        alerts[RiskKind.UNDER_SURVEYED] = _alert(
            area,
            RiskKind.UNDER_SURVEYED,
            coverage,
            config.coverage_floor_pct,
            coverage < config.coverage_severe_pct,
        )

    freshness = formulas.percent(area.fresh, area.surveyed)
    if area.surveyed and freshness < config.freshness_floor_pct:
        alerts[RiskKind.STALE_SURVEYS] = _alert(
            area,
            RiskKind.STALE_SURVEYS,
            freshness,
            config.freshness_floor_pct,
            area.fresh == 0,
        )

    unfavorable = formulas.percent(area.sentiments[SentimentBucket.UNFAVORABLE], area.households)
    if area.households and unfavorable > config.unfavorable_household_pct:
        alerts[RiskKind.HIGH_UNFAVORABLE] = _alert(
            area,
            RiskKind.HIGH_UNFAVORABLE,
            unfavorable,
            config.unfavorable_household_pct,
            unfavorable > config.unfavorable_severe_pct,
        )

    return alerts


def influencer_alerts(influencers: Iterable[Influencer], config: AnalyticsConfig) -> list[RiskAlert]:
    """One alert per opposed influencer; HIGH once they control more than the severe vote count."""
    alerts = []
    for i in ordered(influencers):
        if not is_opposed(i):
            continue
        control = i.estimated_vote_control or 0
        name = i.name or i.id
        alerts.append(
            RiskAlert(
                id=f"{RiskKind.INFLUENCER_OPPOSED.value}:{i.id}",
                entity_type="influencer",
                entity_id=i.id,
                entity_name=name,
                kind=RiskKind.INFLUENCER_OPPOSED,
                severity=Severity.HIGH if control > config.influencer_control_severe else Severity.MEDIUM,
                value=float(control),
                threshold=float(config.influencer_control_severe),
                message=_MESSAGES[RiskKind.INFLUENCER_OPPOSED].format(name=name, value=control),
            )
        )
    return alerts


def detect_risks(
    rollups: Rollups,
    mohalla_metrics: tuple[MohallaMetrics, ...],
    config: AnalyticsConfig,
    influencers: Iterable[Influencer] = (),
) -> RiskReport:
    """Flag risk pockets per mohalla and raise one alert per (entity, kind).

    Share-based pockets only fire once a mohalla has more present voters than
    ``min_sample_voters``; thresholds are evaluated on unrounded shares.
    Opposed influencers raise their own alerts.
    """
    alerts: dict[tuple[str, RiskKind], RiskAlert] = {}
    danger, weak, under_surveyed = [], [], []

    for m in mohalla_metrics:
        area = rollups.by_mohalla.get(m.mohalla_id)
        if area is None:
            continue
        found = _area_alerts(area, config)
        for kind, alert in found.items():
            alerts[(m.mohalla_id, kind)] = alert
        if RiskKind.DANGER_POCKET in found:
            danger.append(m)
        if RiskKind.WEAK_POCKET in found:
            weak.append(m)
        if RiskKind.UNDER_SURVEYED in found:
            under_surveyed.append(m)

    for alert in influencer_alerts(influencers, config):
        alerts[(alert.entity_id, alert.kind)] = alert

    ordered_alerts = sorted(
        alerts.values(),
        key=lambda a: (a.severity.rank, a.entity_type, a.entity_id, a.kind.value),
    )
    logger.debug(
        "Risk scan: {} danger, {} weak, {} under-surveyed, {} alerts",
        len(danger),
        len(weak),
        len(under_surveyed),
        len(ordered_alerts),
    )
    return RiskReport(
        danger_pockets=tuple(sorted(danger, key=lambda m: m.mohalla_id)),
        weak_pockets=tuple(sorted(weak, key=lambda m: m.mohalla_id)),
        under_surveyed_mohallas=tuple(
            sorted(
                under_surveyed,
                key=lambda m: (formulas.safe_ratio(m.surveyed_households, m.total_households), m.mohalla_id),
            )
        ),
        risk_alerts=tuple(ordered_alerts),
    )
