"""Tests for the rollup aggregator."""

from datetime import datetime, timedelta, timezone

from app.models.canvass import EnhancedVoter, Household, Mohalla, SentimentBucket, StanceBucket, TurnoutPropensity
from app.services.analytics import AnalyticsConfig
from app.services.analytics.rollup import aggregate, build_family_metrics, build_mohalla_metrics, is_fresh

AS_OF = datetime(2026, 1, 15, tzinfo=timezone.utc)
CONFIG = AnalyticsConfig()


def _rollups(mohallas, households, voters, as_of=AS_OF):
    return aggregate(mohallas, households, voters, as_of=as_of, config=CONFIG)


class TestAttachment:
    def test_orphan_household(self):
        r = _rollups(
            [Mohalla("m1", "One")],
            [Household("h1", "m1"), Household("h2", "missing")],
            [EnhancedVoter("v1", "h1"), EnhancedVoter("v2", "h2")],
        )
        assert r.orphaned_households == 1
        assert r.orphaned_voters == 1
        assert r.totals.households == 1
        assert r.totals.voters.total == 1

    def test_orphan_voter(self):
        r = _rollups([Mohalla("m1", "One")], [Household("h1", "m1")], [EnhancedVoter("v1", "nope")])
        assert r.orphaned_voters == 1
        assert r.totals.voters.total == 0


class TestPresence:
    def test_away_is_not_present(self):
        voters = [
            EnhancedVoter("v1", "h1", current_stance="Confirmed"),
            EnhancedVoter("v2", "h1", current_stance="Confirmed", away_status=True),
            EnhancedVoter("v3", "h1", current_stance="Swing", present=False),
        ]
        r = _rollups([Mohalla("m1", "One")], [Household("h1", "m1")], voters)
        v = r.totals.voters
        assert v.total == 3
        assert v.present == 1
        assert v.away == 1
        assert v.stances[StanceBucket.CONFIRMED] == 1
        assert v.stances[StanceBucket.SWING] == 0

    def test_stance_counts_sum_to_present(self):
        stances = ["Confirmed", "Likely", "Swing", "Opposition", None, "junk"]
        voters = [EnhancedVoter(f"v{i}", "h1", current_stance=s, present=i != 2) for i, s in enumerate(stances)]
        r = _rollups([Mohalla("m1", "One")], [Household("h1", "m1")], voters)
        v = r.totals.voters
        assert sum(v.stances.values()) == v.present == 5
        assert sum(v.present_turnout.values()) == v.present
        assert sum(v.turnout.values()) == v.total == 6

    def test_turnout_counts_cover_absent_voters(self):
        voters = [
            EnhancedVoter("v1", "h1", turnout_propensity="High"),
            EnhancedVoter("v2", "h1", turnout_propensity="High", present=False),
            EnhancedVoter("v3", "h1", turnout_propensity="Medium", away_status=True),
        ]
        r = _rollups([Mohalla("m1", "One")], [Household("h1", "m1")], voters)
        v = r.totals.voters
        assert v.turnout[TurnoutPropensity.HIGH] == 2
        assert v.turnout[TurnoutPropensity.MEDIUM] == 1
        assert v.present_turnout[TurnoutPropensity.HIGH] == 1
        assert v.expected_turnout(CONFIG) == CONFIG.turnout_weight_high

    def test_actionable_swing(self):
        voters = [
            EnhancedVoter("v1", "h1", current_stance="Swing", turnout_propensity="High"),
            EnhancedVoter("v2", "h1", current_stance="Swing", turnout_propensity="Medium"),
            EnhancedVoter("v3", "h1", current_stance="Swing", turnout_propensity="Low"),
            EnhancedVoter("v4", "h1", current_stance="Swing", turnout_propensity="High", present=False),
            EnhancedVoter("v5", "h1", current_stance="Confirmed", turnout_propensity="High"),
        ]
        r = _rollups([Mohalla("m1", "One")], [Household("h1", "m1")], voters)
        assert r.totals.voters.actionable_swing == 2
        assert build_mohalla_metrics(r, CONFIG)[0].actionable_swing_voters == 2


class TestFreshness:
    def test_window(self):
        window = timedelta(days=14)
        recent = Household("h1", "m1", surveyed=True, last_surveyed_at=AS_OF - timedelta(days=3))
        old = Household("h2", "m1", surveyed=True, last_surveyed_at=AS_OF - timedelta(days=30))
        assert is_fresh(recent, AS_OF, window)
        assert not is_fresh(old, AS_OF, window)

    def test_unsurveyed_never_fresh(self):
        h = Household("h1", "m1", surveyed=False, last_surveyed_at=AS_OF)
        assert not is_fresh(h, AS_OF, timedelta(days=14))

    def test_naive_timestamp_is_utc(self):
        h = Household("h1", "m1", surveyed=True, last_surveyed_at=datetime(2026, 1, 10))
        assert is_fresh(h, AS_OF, timedelta(days=14))

    def test_future_counts_as_fresh(self):
        h = Household("h1", "m1", surveyed=True, last_surveyed_at=AS_OF + timedelta(days=2))
        assert is_fresh(h, AS_OF, timedelta(days=14))


class TestMohallaMetrics:
    def test_coverage_and_sentiment(self):
        households = [
            Household("h1", "m1", surveyed=True, sentiment="Favorable", last_surveyed_at=AS_OF),
            Household("h2", "m1", sentiment="Unfavorable"),
            Household("h3", "m1"),
        ]
        r = _rollups([Mohalla("m1", "One")], households, [])
        (m,) = build_mohalla_metrics(r, CONFIG)
        assert m.coverage_percent == 33
        assert m.freshness_percent == 100
        assert m.favorable_households == 1
        assert m.unfavorable_percent == 33
        assert m.unknown_households == 1

    def test_empty_mohalla_is_all_zero(self):
        r = _rollups([Mohalla("m1", "One")], [], [])
        (m,) = build_mohalla_metrics(r, CONFIG)
        assert m.coverage_percent == m.vote_share_percent == m.opportunity_score == 0

    def test_expected_turnout(self):
        voters = [
            EnhancedVoter("v1", "h1", turnout_propensity=TurnoutPropensity.HIGH),
            EnhancedVoter("v2", "h1", turnout_propensity="Medium"),
            EnhancedVoter("v3", "h1"),
        ]
        r = _rollups([Mohalla("m1", "One")], [Household("h1", "m1")], voters)
        (m,) = build_mohalla_metrics(r, CONFIG)
        assert m.expected_turnout == 1.8


class TestFamilyMetrics:
    def test_swing_household(self):
        voters = [
            EnhancedVoter("v1", "h1", current_stance="Confirmed"),
            EnhancedVoter("v2", "h1", current_stance="Swing"),
        ]
        r = _rollups([Mohalla("m1", "One")], [Household("h1", "m1", sentiment="Dicey")], voters)
        (f,) = build_family_metrics(r, CONFIG)
        assert f.is_swing
        assert f.committed_voters == 1
        assert f.sentiment == SentimentBucket.DICEY

    def test_solid_household_not_swing(self):
        voters = [EnhancedVoter(f"v{i}", "h1", current_stance="Confirmed") for i in range(4)]
        r = _rollups([Mohalla("m1", "One")], [Household("h1", "m1")], voters)
        (f,) = build_family_metrics(r, CONFIG)
        assert not f.is_swing

    def test_strength(self):
        voters = [EnhancedVoter("v1", "h1", current_stance="Confirmed")]
        r = _rollups([Mohalla("m1", "One")], [Household("h1", "m1", sentiment="Favorable")], voters)
        (f,) = build_family_metrics(r, CONFIG)
        assert f.strength_score == 3.0

    def test_priority_weights_from_config(self):
        voters = [
            EnhancedVoter("v1", "h1", current_stance="Swing"),
            EnhancedVoter("v2", "h1", current_stance="Opposition"),
        ]
        households = [Household("h1", "m1", sentiment="Dicey", influence_level=2)]
        r = _rollups([Mohalla("m1", "One")], households, voters)
        (f,) = build_family_metrics(r, CONFIG)
        # 2*1 + 0.5*2 + 1 - 0.5*1
        assert f.priority_score == 3.5

        tuned = AnalyticsConfig(priority_swing_weight=4.0, priority_dicey_bonus=0.0)
        (g,) = build_family_metrics(r, tuned)
        assert g.priority_score == 4.5
