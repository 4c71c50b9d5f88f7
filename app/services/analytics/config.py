"""Analytics tunables.

Every cut-point used by the engine lives here. Defaults come from ``settings``
(environment driven) so operators can retune without touching the algorithms.
"""

from dataclasses import dataclass, field

import settings
from app.models.analytics import WinBand
from app.models.canvass import SentimentBucket, StanceBucket


def _default_win_bands() -> tuple[tuple[float, WinBand], ...]:
    return (
        (settings.WIN_BAND_STRONG, WinBand.STRONG),
        (settings.WIN_BAND_LEANING, WinBand.LEANING),
        (settings.WIN_BAND_TOSSUP, WinBand.TOSSUP),
        (settings.WIN_BAND_TRAILING, WinBand.TRAILING),
    )


def _default_stance_weights() -> tuple[tuple[StanceBucket, float], ...]:
    return (
        (StanceBucket.CONFIRMED, 1.0),
        (StanceBucket.LIKELY, 0.75),
        (StanceBucket.SWING, 0.5),
        (StanceBucket.UNKNOWN, 0.25),
        (StanceBucket.OPPOSITION, 0.0),
    )


def _default_sentiment_weights() -> tuple[tuple[SentimentBucket, float], ...]:
    return (
        (SentimentBucket.FAVORABLE, 1.0),
        (SentimentBucket.DICEY, 0.5),
        (SentimentBucket.UNKNOWN, 0.25),
        (SentimentBucket.UNFAVORABLE, 0.0),
    )


@dataclass(frozen=True)
class AnalyticsConfig:
    """Named thresholds and weights for the analytics engine.

    Frozen and built from tuples so a config can be part of a cache key.
    """

    freshness_days: int = settings.FRESHNESS_DAYS

    turnout_weight_high: float = settings.TURNOUT_WEIGHT_HIGH
    turnout_weight_medium: float = settings.TURNOUT_WEIGHT_MEDIUM
    turnout_weight_low: float = settings.TURNOUT_WEIGHT_LOW

    swing_conversion: float = settings.SWING_CONVERSION
    win_steepness: float = settings.WIN_STEEPNESS
    win_midpoint: float = settings.WIN_MIDPOINT
    # (lower bound percent, band), checked highest first; below all -> WEAK
    win_bands: tuple[tuple[float, WinBand], ...] = field(default_factory=_default_win_bands)

    danger_opposition_pct: float = settings.DANGER_OPPOSITION_PCT
    danger_severe_pct: float = settings.DANGER_SEVERE_PCT
    weak_support_pct: float = settings.WEAK_SUPPORT_PCT
    weak_severe_pct: float = settings.WEAK_SEVERE_PCT
    min_sample_voters: int = settings.MIN_SAMPLE_VOTERS
    coverage_floor_pct: float = settings.COVERAGE_FLOOR_PCT
    coverage_severe_pct: float = settings.COVERAGE_SEVERE_PCT
    freshness_floor_pct: float = settings.FRESHNESS_FLOOR_PCT
    unfavorable_household_pct: float = settings.UNFAVORABLE_HOUSEHOLD_PCT
    unfavorable_severe_pct: float = settings.UNFAVORABLE_SEVERE_PCT

    stance_weights: tuple[tuple[StanceBucket, float], ...] = field(default_factory=_default_stance_weights)
    sentiment_weights: tuple[tuple[SentimentBucket, float], ...] = field(default_factory=_default_sentiment_weights)
    sentiment_weight: float = 2.0
    solid_family_share: float = 0.75
    low_turnout_rate: float = 0.5
    proximity_weight: float = 1.0

    # Household priority: swing and influence up, opposition down
    priority_swing_weight: float = 2.0
    priority_influence_weight: float = 0.5
    priority_dicey_bonus: float = 1.0
    priority_opposition_weight: float = 0.5
    # Dicey families at or above this influence are worth a visit even when not swing
    priority_influence_level: int = 3
    high_influence_level: int = 4
    dicey_family_min_voters: int = 2
    influencer_control_severe: int = 50

    top_swing_mohallas: int = 3
    top_strongest_families: int = 20
    top_priority_targets: int = 30

    voters_per_vehicle: int = 10
    swing_voters_per_worker: int = 20
    # Vehicle priority by transport-needed voters: above high -> HIGH, above medium -> MEDIUM
    vehicle_high_transport: int = 20
    vehicle_medium_transport: int = 10
    event_min_dicey_households: int = 5

    def __post_init__(self):
        if not 0 <= self.turnout_weight_low <= self.turnout_weight_medium <= self.turnout_weight_high <= 1:
            raise ValueError("Turnout weights must satisfy 0 <= low <= medium <= high <= 1")
        if not 0 < self.swing_conversion <= 1:
            raise ValueError(f"swing_conversion must be in (0, 1], got {self.swing_conversion}")
        if self.win_steepness <= 0:
            raise ValueError(f"win_steepness must be positive, got {self.win_steepness}")
        if not 0 < self.win_midpoint < 1:
            raise ValueError(f"win_midpoint must be in (0, 1), got {self.win_midpoint}")
        bounds = [b for b, _ in self.win_bands]
        if bounds != sorted(bounds, reverse=True):
            raise ValueError("win_bands must be ordered from highest to lowest cut-point")
        if self.freshness_days < 0:
            raise ValueError("freshness_days must not be negative")
        if self.min_sample_voters < 0:
            raise ValueError("min_sample_voters must not be negative")
        if self.voters_per_vehicle < 1 or self.swing_voters_per_worker < 1:
            raise ValueError("Resource ratios must be at least 1")
        if self.vehicle_medium_transport > self.vehicle_high_transport:
            raise ValueError("vehicle_medium_transport must not exceed vehicle_high_transport")

    @property
    def turnout_weights(self) -> dict[str, float]:
        return {
            "high": self.turnout_weight_high,
            "medium": self.turnout_weight_medium,
            "low": self.turnout_weight_low,
        }

    def stance_weight_map(self) -> dict[StanceBucket, float]:
        return dict(self.stance_weights)

    def sentiment_weight_map(self) -> dict[SentimentBucket, float]:
        return dict(self.sentiment_weights)

    @classmethod
    def from_settings(cls) -> "AnalyticsConfig":
        """Config from settings (environment as read at import)."""
        return cls()
