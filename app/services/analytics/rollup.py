"""Rollup aggregator - per-household, per-mohalla and global sums.

Records are visited in ascending id order so the result never depends on the
order of the source collections. Households whose mohalla does not exist, and
voters whose household is not attached, are orphans: they are counted and
otherwise left out of every sum and denominator.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any

from loguru import logger

from app.models.analytics import FamilyMetrics, MohallaMetrics
from app.models.canvass import (
    EnhancedVoter,
    Household,
    Mohalla,
    SentimentBucket,
    StanceBucket,
    TurnoutPropensity,
)
from app.services.analytics.classifier import classify_household, classify_turnout, classify_voter
from app.services.analytics.config import AnalyticsConfig
from helpers import formulas


def ordered(collection: Mapping[str, Any] | Iterable[Any]) -> list[Any]:
    """Records of a mapping or iterable, sorted by id."""
    records = collection.values() if isinstance(collection, Mapping) else collection
    return sorted(records, key=lambda r: r.id)


def as_utc(ts: datetime) -> datetime:
    """Naive timestamps are taken to be UTC."""
    return ts.replace(tzinfo=timezone.utc) if ts.tzinfo is None else ts.astimezone(timezone.utc)


@dataclass
class VoterTally:
    """Voter counts.

    Stance counts and expected turnout cover present voters only; turnout
    propensity counts cover every attached voter.
    """

    total: int = 0
    present: int = 0
    away: int = 0
    tagged: int = 0
    transport_needed: int = 0
    actionable_swing: int = 0
    stances: dict[StanceBucket, int] = field(default_factory=lambda: dict.fromkeys(StanceBucket, 0))
    turnout: dict[TurnoutPropensity, int] = field(default_factory=lambda: dict.fromkeys(TurnoutPropensity, 0))
    present_turnout: dict[TurnoutPropensity, int] = field(
        default_factory=lambda: dict.fromkeys(TurnoutPropensity, 0)
    )

    def add(self, voter: EnhancedVoter, stance: StanceBucket, turnout: TurnoutPropensity) -> None:
        self.total += 1
        self.tagged += bool(voter.tagged_by_influencer)
        self.transport_needed += bool(voter.transport_needed)
        self.turnout[turnout] += 1
        if voter.away_status:
            self.away += 1
        if voter.present and not voter.away_status:
            self.present += 1
            self.stances[stance] += 1
            self.present_turnout[turnout] += 1
            if stance == StanceBucket.SWING and turnout != TurnoutPropensity.LOW:
                self.actionable_swing += 1

    @property
    def committed(self) -> int:
        return self.stances[StanceBucket.CONFIRMED] + self.stances[StanceBucket.LIKELY]

    def expected_turnout(self, config: AnalyticsConfig) -> float:
        return (
            self.present_turnout[TurnoutPropensity.HIGH] * config.turnout_weight_high
            + self.present_turnout[TurnoutPropensity.MEDIUM] * config.turnout_weight_medium
            + self.present_turnout[TurnoutPropensity.LOW] * config.turnout_weight_low
        )



@dataclass
class HouseholdRollup:
    household_id: str
    mohalla_id: str
    head_name: str
    sentiment: SentimentBucket
    surveyed: bool
    fresh: bool
    influence_level: int
    voters: VoterTally = field(default_factory=VoterTally)


@dataclass
class AreaRollup:
    """Sums for one mohalla, or for the whole constituency (mohalla_id None)."""

    mohalla_id: str | None
    name: str
    parent_ward_id: str | None = None
    households: int = 0
    surveyed: int = 0
    fresh: int = 0
    sentiments: dict[SentimentBucket, int] = field(default_factory=lambda: dict.fromkeys(SentimentBucket, 0))
    voters: VoterTally = field(default_factory=VoterTally)

    def add_household(self, household: HouseholdRollup) -> None:
        self.households += 1
        self.surveyed += household.surveyed
        self.fresh += household.fresh
        self.sentiments[household.sentiment] += 1


@dataclass
class Rollups:
    as_of: datetime
    totals: AreaRollup
    by_mohalla: dict[str, AreaRollup]
    by_household: dict[str, HouseholdRollup]
    orphaned_households: int = 0
    orphaned_voters: int = 0


def is_fresh(household: Household, as_of: datetime, window: timedelta) -> bool:
    """Surveyed within the recency window (future timestamps count as fresh)."""
    if not household.surveyed or household.last_surveyed_at is None:
        return False
    return as_utc(as_of) - as_utc(household.last_surveyed_at) <= window


def aggregate(
    mohallas: Mapping[str, Mohalla] | Iterable[Mohalla],
    households: Mapping[str, Household] | Iterable[Household],
    voters: Mapping[str, EnhancedVoter] | Iterable[EnhancedVoter],
    *,
    as_of: datetime,
    config: AnalyticsConfig,
) -> Rollups:
    """Reduce raw collections into household, mohalla and global rollups."""
    window = timedelta(days=config.freshness_days)
    totals = AreaRollup(mohalla_id=None, name="All mohallas")
    by_mohalla = {m.id: AreaRollup(m.id, m.name, m.parent_ward_id) for m in ordered(mohallas)}
    by_household: dict[str, HouseholdRollup] = {}
    orphaned_households = orphaned_voters = 0

    for h in ordered(households):
        area = by_mohalla.get(h.mohalla_id)
        if area is None:
            orphaned_households += 1
            continue
        rollup = HouseholdRollup(
            household_id=h.id,
            mohalla_id=h.mohalla_id,
            head_name=h.head_name or "",
            sentiment=classify_household(h),
            surveyed=bool(h.surveyed),
            fresh=is_fresh(h, as_of, window),
            influence_level=h.influence_level or 0,
        )
        by_household[h.id] = rollup
        area.add_household(rollup)
        totals.add_household(rollup)

    for v in ordered(voters):
        household = by_household.get(v.household_id)
        if household is None:
            orphaned_voters += 1
            continue
        stance, turnout = classify_voter(v), classify_turnout(v)
        for tally in (household.voters, by_mohalla[household.mohalla_id].voters, totals.voters):
            tally.add(v, stance, turnout)

    if orphaned_households or orphaned_voters:
        logger.warning(
            "Orphaned records excluded: {} households, {} voters",
            orphaned_households,
            orphaned_voters,
        )
    logger.debug(
        "Aggregated {} mohallas, {} households, {} voters",
        len(by_mohalla),
        totals.households,
        totals.voters.total,
    )
    return Rollups(
        as_of=as_of,
        totals=totals,
        by_mohalla=by_mohalla,
        by_household=by_household,
        orphaned_households=orphaned_households,
        orphaned_voters=orphaned_voters,
    )


def build_mohalla_metrics(rollups: Rollups, config: AnalyticsConfig) -> tuple[MohallaMetrics, ...]:
    """MohallaMetrics for every known mohalla, in id order."""
    result = []
    for area in rollups.by_mohalla.values():
        v = area.voters
        result.append(
            MohallaMetrics(
                mohalla_id=area.mohalla_id,
                mohalla_name=area.name,
                parent_ward_id=area.parent_ward_id,
                total_households=area.households,
                surveyed_households=area.surveyed,
                fresh_households=area.fresh,
                coverage_percent=formulas.pct(area.surveyed, area.households),
                freshness_percent=formulas.pct(area.fresh, area.surveyed),
                favorable_households=area.sentiments[SentimentBucket.FAVORABLE],
                dicey_households=area.sentiments[SentimentBucket.DICEY],
                unfavorable_households=area.sentiments[SentimentBucket.UNFAVORABLE],
                unknown_households=area.sentiments[SentimentBucket.UNKNOWN],
                unfavorable_percent=formulas.pct(area.sentiments[SentimentBucket.UNFAVORABLE], area.households),
                total_voters=v.total,
                present_voters=v.present,
                confirmed_voters=v.stances[StanceBucket.CONFIRMED],
                likely_voters=v.stances[StanceBucket.LIKELY],
                swing_voters=v.stances[StanceBucket.SWING],
                actionable_swing_voters=v.actionable_swing,
                opposition_voters=v.stances[StanceBucket.OPPOSITION],
                unknown_voters=v.stances[StanceBucket.UNKNOWN],
                vote_share_percent=formulas.pct(v.committed, v.present),
                opposition_percent=formulas.pct(v.stances[StanceBucket.OPPOSITION], v.present),
                tagged_voters=v.tagged,
                tagging_percent=formulas.pct(v.tagged, v.total),
                transport_needed=v.transport_needed,
                expected_turnout=round(v.expected_turnout(config), 2),
                opportunity_score=formulas.opportunity_score(
                    v.stances[StanceBucket.SWING],
                    formulas.safe_ratio(v.committed, v.present),
                    config.proximity_weight,
                ),
            )
        )
    return tuple(result)


def household_strength(household: HouseholdRollup, config: AnalyticsConfig) -> float:
    """Weighted support of present members plus a sentiment term."""
    stance_part = formulas.weighted_sum(household.voters.stances, config.stance_weight_map())
    sentiment_part = config.sentiment_weight * config.sentiment_weight_map().get(household.sentiment, 0.0)
    return round(stance_part + sentiment_part, 2)


def is_swing_household(household: HouseholdRollup, config: AnalyticsConfig) -> bool:
    """Present members are neither solidly committed nor solidly opposed."""
    v = household.voters
    if not v.present:
        return False
    committed = formulas.safe_ratio(v.committed, v.present)
    opposed = formulas.safe_ratio(v.stances[StanceBucket.OPPOSITION], v.present)
    return committed < config.solid_family_share and opposed < config.solid_family_share


def priority_score(household: HouseholdRollup, config: AnalyticsConfig) -> float:
    """Targeting priority: swing voters and influence up, opposition down."""
    v = household.voters
    return (
        config.priority_swing_weight * v.stances[StanceBucket.SWING]
        + config.priority_influence_weight * household.influence_level
        + (config.priority_dicey_bonus if household.sentiment == SentimentBucket.DICEY else 0.0)
        - config.priority_opposition_weight * v.stances[StanceBucket.OPPOSITION]
    )


def build_family_metrics(rollups: Rollups, config: AnalyticsConfig) -> tuple[FamilyMetrics, ...]:
    """FamilyMetrics for every attached household, in id order."""
    result = []
    for h in rollups.by_household.values():
        v = h.voters
        result.append(
            FamilyMetrics(
                household_id=h.household_id,
                mohalla_id=h.mohalla_id,
                mohalla_name=rollups.by_mohalla[h.mohalla_id].name,
                head_name=h.head_name,
                sentiment=h.sentiment,
                surveyed=h.surveyed,
                influence_level=h.influence_level,
                total_voters=v.total,
                present_voters=v.present,
                confirmed_voters=v.stances[StanceBucket.CONFIRMED],
                likely_voters=v.stances[StanceBucket.LIKELY],
                swing_voters=v.stances[StanceBucket.SWING],
                opposition_voters=v.stances[StanceBucket.OPPOSITION],
                unknown_voters=v.stances[StanceBucket.UNKNOWN],
                away_voters=v.away,
                transport_needed=v.transport_needed,
                expected_turnout=round(v.expected_turnout(config), 2),
                strength_score=household_strength(h, config),
                priority_score=priority_score(h, config),
                is_swing=is_swing_household(h, config),
            )
        )
    return tuple(result)
