"""Canvass domain entities - raw records as entered in the field.

Enum-typed fields also tolerate raw strings or None coming from the store;
they are interpreted by the classifier, never validated here.
"""

from dataclasses import dataclass
from datetime import datetime

from app.models.canvass.enums import InfluencerStance, SentimentBucket, StanceBucket, TurnoutPropensity
from app.models.common import BaseEntity


@dataclass(frozen=True)
class Mohalla(BaseEntity):
    """Neighborhood / ward subdivision."""

    id: str
    name: str
    parent_ward_id: str | None = None


@dataclass(frozen=True)
class Household(BaseEntity):
    """Family unit surveyed at one address."""

    id: str
    mohalla_id: str
    surveyed: bool = False
    sentiment: SentimentBucket | str | None = SentimentBucket.UNKNOWN
    last_surveyed_at: datetime | None = None
    head_name: str = ""
    influence_level: int = 0


@dataclass(frozen=True)
class EnhancedVoter(BaseEntity):
    """Individual voter with political intelligence fields."""

    id: str
    household_id: str
    present: bool = True
    current_stance: StanceBucket | str | None = StanceBucket.UNKNOWN
    turnout_propensity: TurnoutPropensity | str | None = TurnoutPropensity.LOW
    tagged_by_influencer: bool = False
    transport_needed: bool = False
    away_status: bool = False
    name: str = ""


@dataclass(frozen=True)
class Influencer(BaseEntity):
    """Key opinion leader."""

    id: str
    current_stance: InfluencerStance | str | None = InfluencerStance.UNKNOWN
    can_be_influenced: bool = False
    name: str = ""
    estimated_vote_control: int = 0


@dataclass(frozen=True)
class CanvassSnapshot(BaseEntity):
    """Point-in-time copy of the four collections, in id order."""

    mohallas: tuple[Mohalla, ...] = ()
    households: tuple[Household, ...] = ()
    voters: tuple[EnhancedVoter, ...] = ()
    influencers: tuple[Influencer, ...] = ()
