"""Closed value sets for canvass records."""

from enum import StrEnum


class StanceBucket(StrEnum):
    """Voter support stance."""

    CONFIRMED = "Confirmed"
    LIKELY = "Likely"
    SWING = "Swing"
    OPPOSITION = "Opposition"
    UNKNOWN = "Unknown"


class SentimentBucket(StrEnum):
    """Household (family) sentiment."""

    FAVORABLE = "Favorable"
    DICEY = "Dicey"
    UNFAVORABLE = "Unfavorable"
    UNKNOWN = "Unknown"


class TurnoutPropensity(StrEnum):
    """Likelihood a voter shows up on polling day."""

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class InfluencerStance(StrEnum):
    """Local influencer position."""

    FAVORABLE = "Favorable"
    NEUTRAL = "Neutral"
    OPPOSED = "Opposed"
    UNKNOWN = "Unknown"


class Collection(StrEnum):
    """Store collections; values are table names."""

    MOHALLAS = "mohalla"
    HOUSEHOLDS = "household"
    VOTERS = "enhanced_voter"
    INFLUENCERS = "influencer"
