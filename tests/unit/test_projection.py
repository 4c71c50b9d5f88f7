"""Tests for the projection model."""

from datetime import datetime, timezone

from app.models.analytics import WinBand
from app.models.canvass import EnhancedVoter, Household, Mohalla
from app.services.analytics import AnalyticsConfig
from app.services.analytics.projection import project, win_band
from app.services.analytics.rollup import aggregate

AS_OF = datetime(2026, 1, 15, tzinfo=timezone.utc)
CONFIG = AnalyticsConfig()


def _project(voters):
    r = aggregate([Mohalla("m1", "One")], [Household("h1", "m1")], voters, as_of=AS_OF, config=CONFIG)
    return project(r, CONFIG)


def _voters(**stances):
    voters, n = [], 0
    for stance, count in stances.items():
        for _ in range(count):
            voters.append(EnhancedVoter(f"v{n:02d}", "h1", current_stance=stance.capitalize()))
            n += 1
    return voters


class TestWinBand:
    def test_cut_points(self):
        assert win_band(70, CONFIG) == WinBand.STRONG
        assert win_band(69.9, CONFIG) == WinBand.LEANING
        assert win_band(55, CONFIG) == WinBand.LEANING
        assert win_band(45, CONFIG) == WinBand.TOSSUP
        assert win_band(30, CONFIG) == WinBand.TRAILING
        assert win_band(29.9, CONFIG) == WinBand.WEAK
        assert win_band(0, CONFIG) == WinBand.WEAK


class TestProject:
    def test_no_voters(self):
        p = _project([])
        assert p.vote_share_percent == 0
        assert p.win_probability_percent == 0
        assert p.win_probability_band == WinBand.WEAK
        assert p.expected_turnout == 0
        assert p.expected_votes_if_today_polling == 0

    def test_ten_voters(self):
        p = _project(_voters(confirmed=6, swing=2, opposition=2))
        assert p.vote_share_percent == 60
        # effective share 0.7 on the default curve
        assert p.win_probability_percent == 89
        assert p.win_probability_band == WinBand.STRONG
        # ten Low-propensity voters at 0.3
        assert p.expected_turnout == 3
        assert p.low_turnout_voters == 10
        assert p.expected_votes_if_today_polling == 2

    def test_propensity_counts_include_absent_voters(self):
        voters = [
            EnhancedVoter("v1", "h1", turnout_propensity="High"),
            EnhancedVoter("v2", "h1", turnout_propensity="High", present=False),
            EnhancedVoter("v3", "h1", turnout_propensity="Medium", away_status=True),
        ]
        p = _project(voters)
        assert (p.high_turnout_voters, p.medium_turnout_voters, p.low_turnout_voters) == (2, 1, 0)
        # only the present High voter is expected at the booth
        assert p.expected_turnout == 1

    def test_all_opposition(self):
        p = _project(_voters(opposition=5))
        assert p.vote_share_percent == 0
        assert p.win_probability_percent == 0
        assert p.win_probability_band == WinBand.WEAK

    def test_all_confirmed(self):
        p = _project(_voters(confirmed=5))
        assert p.vote_share_percent == 100
        assert p.win_probability_percent == 100
        assert p.win_probability_band == WinBand.STRONG

    def test_likely_counts_as_committed(self):
        p = _project(_voters(confirmed=1, likely=1, opposition=2))
        assert p.vote_share_percent == 50
