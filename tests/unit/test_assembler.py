"""Tests for the metrics assembler."""

import random
from dataclasses import fields
from datetime import datetime, timedelta, timezone

import pytest

from app.models.analytics import DashboardMetrics, WinBand
from app.models.canvass import EnhancedVoter, Household, Influencer, Mohalla
from app.services.analytics import AnalyticsConfig, assemble
from app.services.analytics.assembler import EPOCH, default_as_of
from app.services.seeding import build_demo_dataset
from app.services.seeding.demo_data import DEMO_SURVEY_DATE

AS_OF = datetime(2026, 1, 15, tzinfo=timezone.utc)


@pytest.fixture(scope="module")
def demo():
    return build_demo_dataset(7)


def _percent_fields(metrics) -> list[int]:
    values = [getattr(metrics, f.name) for f in fields(metrics) if f.name.endswith("_percent")]
    for m in metrics.mohalla_metrics:
        values += [getattr(m, f.name) for f in fields(m) if f.name.endswith("_percent")]
    return values


class TestEmpty:
    def test_all_zero(self):
        m = assemble([], [], [], [])
        assert m.vote_share_percent == 0
        assert m.win_probability_percent == 0
        assert m.win_probability_band == WinBand.WEAK
        assert m.expected_turnout == 0
        assert m.risk_alerts == ()
        assert m.mohalla_metrics == m.family_metrics == m.swing_families == ()
        assert m.top_swing_mohallas == m.strongest_families == m.priority_targets == ()
        assert m.resource_recommendations == ()

    def test_mapping_input(self):
        assert assemble({}, {}, {}, {}) == assemble([], [], [], [])


class TestScenarios:
    def test_ten_present_voters(self):
        stances = ["Confirmed"] * 6 + ["Swing"] * 2 + ["Opposition"] * 2
        voters = [EnhancedVoter(f"v{i:02d}", "h1", current_stance=s) for i, s in enumerate(stances)]
        m = assemble([Mohalla("m1", "One")], [Household("h1", "m1")], voters, [], as_of=AS_OF)
        assert m.vote_share_percent == 60
        assert m.swing_votes == 2
        assert m.danger_pockets == ()
        assert m.weak_pockets == ()
        assert m.total_present_voters == 10

    def test_three_households_one_surveyed(self):
        households = [
            Household("h1", "m1", surveyed=True, last_surveyed_at=AS_OF),
            Household("h2", "m1"),
            Household("h3", "m1"),
        ]
        m = assemble([Mohalla("m1", "One")], households, [], [], as_of=AS_OF)
        assert m.coverage_percent == 33
        assert m.mohalla_metrics[0].coverage_percent == 33
        assert [x.mohalla_id for x in m.under_surveyed_mohallas] == ["m1"]

    def test_orphans_reported(self):
        m = assemble(
            [Mohalla("m1", "One")],
            [Household("h1", "m1"), Household("h2", "gone")],
            [EnhancedVoter("v1", "h1"), EnhancedVoter("v2", "h2"), EnhancedVoter("v3", "none")],
            [],
            as_of=AS_OF,
        )
        assert m.orphaned_households == 1
        assert m.orphaned_voters == 2
        assert m.total_voters == 1
        assert m.total_households == 1

    def test_simple_counts(self):
        voters = [
            EnhancedVoter("v1", "h1", transport_needed=True, tagged_by_influencer=True),
            EnhancedVoter("v2", "h1", away_status=True),
        ]
        influencers = [
            Influencer("i1", current_stance="Neutral", can_be_influenced=True),
            Influencer("i2", current_stance="Supportive", can_be_influenced=True),
        ]
        m = assemble([Mohalla("m1", "One")], [Household("h1", "m1")], voters, influencers, as_of=AS_OF)
        assert m.transport_required_count == 1
        assert m.away_voters_count == 1
        assert m.tagged_voters == 1
        assert m.tagging_percent == 50
        assert m.unconverted_influencers == 1

    def test_opposed_influencer_alert(self):
        influencers = [Influencer("i1", current_stance="Opposed", name="Sarpanch", estimated_vote_control=80)]
        m = assemble([Mohalla("m1", "One")], [Household("h1", "m1")], [], influencers, as_of=AS_OF)
        assert m.opposed_influencers == 1
        assert [a.id for a in m.risk_alerts] == ["influencer_opposed:i1", "under_surveyed:m1"]

    def test_family_lists(self):
        households = [
            Household("h1", "m1", sentiment="Dicey", influence_level=4),
            Household("h2", "m1", sentiment="Favorable", influence_level=1),
        ]
        voters = [
            EnhancedVoter("v1", "h1", current_stance="Swing", turnout_propensity="High"),
            EnhancedVoter("v2", "h1", current_stance="Swing"),
            EnhancedVoter("v3", "h2", current_stance="Confirmed"),
        ]
        m = assemble([Mohalla("m1", "One")], households, voters, [], as_of=AS_OF)
        assert m.actionable_swing_votes == 1
        assert [f.household_id for f in m.families_with_dicey_voters] == ["h1"]
        assert [f.household_id for f in m.high_influence_families] == ["h1"]


class TestInvariants:
    def test_percentages_in_range(self, demo):
        m = assemble(demo.mohallas, demo.households, demo.voters, demo.influencers, as_of=DEMO_SURVEY_DATE)
        assert all(0 <= p <= 100 for p in _percent_fields(m))

    def test_stance_counts_sum_to_present(self, demo):
        m = assemble(demo.mohallas, demo.households, demo.voters, demo.influencers)
        total = m.confirmed_votes + m.likely_votes + m.swing_votes + m.opposition_votes + m.unknown_votes
        assert total == m.total_present_voters
        for mm in m.mohalla_metrics:
            stance_sum = (
                mm.confirmed_voters + mm.likely_voters + mm.swing_voters + mm.opposition_voters + mm.unknown_voters
            )
            assert stance_sum == mm.present_voters

    def test_turnout_counts_sum_to_total(self, demo):
        m = assemble(demo.mohallas, demo.households, demo.voters, demo.influencers)
        assert m.high_turnout_voters + m.medium_turnout_voters + m.low_turnout_voters == m.total_voters
        assert m.actionable_swing_votes <= m.swing_votes

    def test_deterministic(self, demo):
        first = assemble(demo.mohallas, demo.households, demo.voters, demo.influencers, as_of=AS_OF)
        second = assemble(demo.mohallas, demo.households, demo.voters, demo.influencers, as_of=AS_OF)
        assert first == second

    def test_order_independent(self, demo):
        rng = random.Random(1)
        shuffled = [list(c) for c in (demo.mohallas, demo.households, demo.voters, demo.influencers)]
        for c in shuffled:
            rng.shuffle(c)
        expected = assemble(demo.mohallas, demo.households, demo.voters, demo.influencers, as_of=AS_OF)
        assert assemble(*shuffled, as_of=AS_OF) == expected

    def test_mapping_equals_sequence(self, demo):
        as_maps = [{r.id: r for r in c} for c in (demo.mohallas, demo.households, demo.voters, demo.influencers)]
        expected = assemble(demo.mohallas, demo.households, demo.voters, demo.influencers, as_of=AS_OF)
        assert assemble(*as_maps, as_of=AS_OF) == expected

    def test_result_is_complete(self, demo):
        m = assemble(demo.mohallas, demo.households, demo.voters, demo.influencers)
        assert isinstance(m, DashboardMetrics)
        assert len(m.mohalla_metrics) == 5
        assert len(m.family_metrics) == 55
        assert m.swing_family_count == len(m.swing_families)


class TestAsOf:
    def test_defaults_to_latest_survey(self):
        households = [
            Household("h1", "m1", surveyed=True, last_surveyed_at=AS_OF - timedelta(days=20)),
            Household("h2", "m1", surveyed=True, last_surveyed_at=AS_OF),
        ]
        assert default_as_of(households) == AS_OF
        m = assemble([Mohalla("m1", "One")], households, [], [])
        assert m.fresh_households == 1
        assert m.freshness_percent == 50

    def test_epoch_without_surveys(self):
        assert default_as_of([Household("h1", "m1")]) == EPOCH

    def test_explicit_as_of(self):
        households = [Household("h1", "m1", surveyed=True, last_surveyed_at=AS_OF)]
        m = assemble([Mohalla("m1", "One")], households, [], [], as_of=AS_OF + timedelta(days=30))
        assert m.fresh_households == 0


class TestConfig:
    def test_custom_thresholds(self):
        stances = ["Confirmed"] * 7 + ["Opposition"] * 3
        voters = [EnhancedVoter(f"v{i}", "h1", current_stance=s) for i, s in enumerate(stances)]
        args = ([Mohalla("m1", "One")], [Household("h1", "m1")], voters, [])
        assert assemble(*args, as_of=AS_OF).danger_pockets == ()
        strict = AnalyticsConfig(danger_opposition_pct=25)
        assert len(assemble(*args, as_of=AS_OF, config=strict).danger_pockets) == 1

    def test_invalid_config(self):
        with pytest.raises(ValueError):
            AnalyticsConfig(turnout_weight_low=0.9, turnout_weight_high=0.3)
        with pytest.raises(ValueError):
            AnalyticsConfig(win_midpoint=1.5)
        with pytest.raises(ValueError):
            AnalyticsConfig(swing_conversion=0)
        with pytest.raises(ValueError):
            AnalyticsConfig(vehicle_medium_transport=30, vehicle_high_transport=20)

    def test_hashable(self):
        assert hash(AnalyticsConfig()) == hash(AnalyticsConfig())
