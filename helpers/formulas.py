"""Pure math formulas - no dependencies, easily testable."""

from decimal import ROUND_HALF_UP, Decimal
from math import exp


def clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    """Clamp value into [low, high]."""
    return max(low, min(high, value))


def safe_ratio(num: float, den: float) -> float:
    """num / den, 0.0 when the denominator is not positive."""
    return num / den if den > 0 else 0.0


def percent(num: float, den: float) -> float:
    """Share as a percentage, clamped to [0, 100]."""
    return clamp(safe_ratio(num, den) * 100)


def round_half_up(value: float, ndigits: int = 0) -> float | int:
    """Round half away from zero; returns int when ndigits == 0."""
    quantum = Decimal(1).scaleb(-ndigits)
    rounded = Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    return int(rounded) if ndigits == 0 else float(rounded)


def pct(num: float, den: float) -> int:
    """Integer percentage, half-up, always within [0, 100]."""
    return round_half_up(percent(num, den))


def sigmoid(z: float) -> float:
    """Logistic function."""
    z = max(-500.0, min(500.0, z))
    return 1 / (1 + exp(-z))


def win_probability(
    committed_share: float,
    swing_share: float,
    swing_conversion: float,
    steepness: float,
    midpoint: float,
) -> float:
    """Win probability (0-100) from committed and swing vote shares.

    Swing voters are credited at ``swing_conversion``. The logistic curve is
    rescaled so that an effective share of 0 maps to 0 and 1 maps to 100.
    """
    effective = clamp(committed_share + swing_conversion * swing_share, 0.0, 1.0)
    floor = sigmoid(-steepness * midpoint)
    ceiling = sigmoid(steepness * (1 - midpoint))
    scaled = (sigmoid(steepness * (effective - midpoint)) - floor) / (ceiling - floor)
    return clamp(scaled * 100)


def closeness(share: float) -> float:
    """1.0 at a 50/50 split, 0.0 at a 0% or 100% share."""
    return clamp(1 - abs(share - 0.5) / 0.5, 0.0, 1.0)


def opportunity_score(swing_voters: int, vote_share: float, proximity_weight: float) -> float:
    """Swing voter count boosted by how close the race is to 50%."""
    return round(swing_voters * (1 + proximity_weight * closeness(vote_share)), 4)


def weighted_sum(counts: dict, weights: dict) -> float:
    """Sum of count * weight over shared keys."""
    return sum(c * weights.get(k, 0.0) for k, c in counts.items())
