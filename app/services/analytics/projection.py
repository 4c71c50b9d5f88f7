"""Projection model - vote share, win probability and turnout."""

from app.models.analytics import Projection, WinBand
from app.models.canvass import StanceBucket, TurnoutPropensity
from app.services.analytics.config import AnalyticsConfig
from app.services.analytics.rollup import Rollups
from helpers import formulas


def win_band(probability: float, config: AnalyticsConfig) -> WinBand:
    """First band whose lower bound the probability reaches, else WEAK."""
    for lower, band in config.win_bands:
        if probability >= lower:
            return band
    return WinBand.WEAK


def project(rollups: Rollups, config: AnalyticsConfig) -> Projection:
    """Project vote share, win probability and expected turnout from rollups.

    All shares are over present voters and are 0 when there are none. Bands
    and derived counts use unrounded values; only reported percents are
    rounded.
    """
    v = rollups.totals.voters
    committed_share = formulas.safe_ratio(v.committed, v.present)
    swing_share = formulas.safe_ratio(v.stances[StanceBucket.SWING], v.present)

    if v.present:
        probability = formulas.win_probability(
            committed_share,
            swing_share,
            config.swing_conversion,
            config.win_steepness,
            config.win_midpoint,
        )
        band = win_band(probability, config)
    else:
        probability, band = 0.0, WinBand.WEAK

    expected_turnout = formulas.round_half_up(v.expected_turnout(config))

    return Projection(
        vote_share_percent=formulas.pct(v.committed, v.present),
        win_probability_percent=formulas.round_half_up(probability),
        win_probability_band=band,
        expected_votes_if_today_polling=formulas.round_half_up(committed_share * expected_turnout),
        expected_turnout=expected_turnout,
        high_turnout_voters=v.turnout[TurnoutPropensity.HIGH],
        medium_turnout_voters=v.turnout[TurnoutPropensity.MEDIUM],
        low_turnout_voters=v.turnout[TurnoutPropensity.LOW],
    )
