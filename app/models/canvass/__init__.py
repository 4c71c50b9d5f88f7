"""Canvass domain models - raw field records and their tables."""

from app.models.canvass.entities import (
    CanvassSnapshot,
    EnhancedVoter,
    Household,
    Influencer,
    Mohalla,
)
from app.models.canvass.enums import (
    Collection,
    InfluencerStance,
    SentimentBucket,
    StanceBucket,
    TurnoutPropensity,
)
from app.models.canvass.tables import (
    CANVASS_INDEXES,
    HOUSEHOLD_DDL,
    INFLUENCER_DDL,
    MOHALLA_DDL,
    VOTER_DDL,
)

__all__ = [
    # Entities
    "Mohalla",
    "Household",
    "EnhancedVoter",
    "Influencer",
    "CanvassSnapshot",
    # Enums
    "Collection",
    "StanceBucket",
    "SentimentBucket",
    "TurnoutPropensity",
    "InfluencerStance",
    # DDL
    "MOHALLA_DDL",
    "HOUSEHOLD_DDL",
    "VOTER_DDL",
    "INFLUENCER_DDL",
    "CANVASS_INDEXES",
]
