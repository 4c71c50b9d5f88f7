"""Models package - DDL and entities for all domains."""

from app.models.canvass import (
    CANVASS_INDEXES,
    HOUSEHOLD_DDL,
    INFLUENCER_DDL,
    MOHALLA_DDL,
    VOTER_DDL,
    CanvassSnapshot,
    EnhancedVoter,
    Household,
    Influencer,
    Mohalla,
)
from app.models.common import BaseEntity

ALL_DDL = [
    MOHALLA_DDL,
    HOUSEHOLD_DDL,
    VOTER_DDL,
    INFLUENCER_DDL,
    *CANVASS_INDEXES,
]

__all__ = [
    # Common
    "BaseEntity",
    # Canvass
    "Mohalla",
    "Household",
    "EnhancedVoter",
    "Influencer",
    "CanvassSnapshot",
    "MOHALLA_DDL",
    "HOUSEHOLD_DDL",
    "VOTER_DDL",
    "INFLUENCER_DDL",
    "CANVASS_INDEXES",
    # All DDL
    "ALL_DDL",
]
