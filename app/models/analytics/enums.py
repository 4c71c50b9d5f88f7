"""Analytics value sets."""

from enum import StrEnum


class WinBand(StrEnum):
    """Win probability band, strongest first."""

    STRONG = "Strong"
    LEANING = "Leaning"
    TOSSUP = "Tossup"
    TRAILING = "Trailing"
    WEAK = "Weak"


class RiskKind(StrEnum):
    """Risk condition raised for a mohalla or an influencer."""

    DANGER_POCKET = "danger_pocket"
    WEAK_POCKET = "weak_pocket"
    UNDER_SURVEYED = "under_surveyed"
    STALE_SURVEYS = "stale_surveys"
    HIGH_UNFAVORABLE = "high_unfavorable"
    INFLUENCER_OPPOSED = "influencer_opposed"


class Severity(StrEnum):
    """Alert severity / recommendation priority."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {Severity.HIGH: 0, Severity.MEDIUM: 1, Severity.LOW: 2}


class ResourceKind(StrEnum):
    """Campaign resource type."""

    VEHICLE = "vehicle"
    MANPOWER = "manpower"
    EVENT = "event"
