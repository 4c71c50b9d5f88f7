"""Classifier - map raw record fields onto closed buckets.

Total lookups: enum members pass through, strings are matched on their
trimmed, case-folded value, anything else lands in the Unknown bucket
(Low for turnout).
"""

from enum import Enum
from typing import TypeVar

from app.models.canvass import (
    EnhancedVoter,
    Household,
    Influencer,
    InfluencerStance,
    SentimentBucket,
    StanceBucket,
    TurnoutPropensity,
)

E = TypeVar("E", bound=Enum)


def _lookup(enum_cls: type[E], aliases: dict[str, E] | None = None) -> dict[str, E]:
    table = {m.value.casefold(): m for m in enum_cls}
    table.update(aliases or {})
    return table


_STANCES = _lookup(StanceBucket)
_SENTIMENTS = _lookup(SentimentBucket)
_TURNOUTS = _lookup(TurnoutPropensity)
# the field app stores supportive influencers as "Supportive"
_INFLUENCER_STANCES = _lookup(InfluencerStance, {"supportive": InfluencerStance.FAVORABLE})


def _classify(value: object, enum_cls: type[E], table: dict[str, E], default: E) -> E:
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        return table.get(value.strip().casefold(), default)
    return default


def classify_stance(value: object) -> StanceBucket:
    return _classify(value, StanceBucket, _STANCES, StanceBucket.UNKNOWN)


def classify_sentiment(value: object) -> SentimentBucket:
    return _classify(value, SentimentBucket, _SENTIMENTS, SentimentBucket.UNKNOWN)


def classify_voter(voter: EnhancedVoter) -> StanceBucket:
    """Stance bucket of a voter."""
    return classify_stance(voter.current_stance)


def classify_household(household: Household) -> SentimentBucket:
    """Sentiment bucket of a household."""
    return classify_sentiment(household.sentiment)


def classify_turnout(voter: EnhancedVoter) -> TurnoutPropensity:
    """Turnout propensity of a voter, Low when unset."""
    return _classify(voter.turnout_propensity, TurnoutPropensity, _TURNOUTS, TurnoutPropensity.LOW)


def classify_influencer(influencer: Influencer) -> InfluencerStance:
    """Stance of an influencer."""
    return _classify(influencer.current_stance, InfluencerStance, _INFLUENCER_STANCES, InfluencerStance.UNKNOWN)


def is_unconverted(influencer: Influencer) -> bool:
    """Influencer who can still be won over: convertible and not yet decided."""
    return influencer.can_be_influenced and classify_influencer(influencer) in (
        InfluencerStance.NEUTRAL,
        InfluencerStance.UNKNOWN,
    )


def is_opposed(influencer: Influencer) -> bool:
    return classify_influencer(influencer) == InfluencerStance.OPPOSED
