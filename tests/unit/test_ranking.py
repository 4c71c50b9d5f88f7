"""Tests for the ranker."""

from datetime import datetime, timezone

from app.models.analytics import ResourceKind, Severity
from app.models.canvass import EnhancedVoter, Household, Mohalla, TurnoutPropensity
from app.services.analytics import AnalyticsConfig
from app.services.analytics.ranking import (
    families_with_dicey_voters,
    high_influence_families,
    high_support_low_turnout,
    rank_priority_targets,
    rank_strongest_families,
    rank_swing_families,
    rank_swing_mohallas,
    recommend_resources,
)
from app.services.analytics.rollup import aggregate, build_family_metrics, build_mohalla_metrics

AS_OF = datetime(2026, 1, 15, tzinfo=timezone.utc)
CONFIG = AnalyticsConfig()


def _metrics(mohallas, households, voters):
    r = aggregate(mohallas, households, voters, as_of=AS_OF, config=CONFIG)
    return build_mohalla_metrics(r, CONFIG), build_family_metrics(r, CONFIG)


def _family(hid, mid, prefix, stances, **voter_fields):
    return [EnhancedVoter(f"{prefix}{i}", hid, current_stance=s, **voter_fields) for i, s in enumerate(stances)]


class TestSwingMohallas:
    def test_ties_by_id(self):
        mohallas = [Mohalla("m-b", "B"), Mohalla("m-a", "A")]
        households = [Household("hb", "m-b"), Household("ha", "m-a")]
        stances = ["Swing", "Swing", "Confirmed", "Opposition"]
        voters = _family("hb", "m-b", "vb", stances) + _family("ha", "m-a", "va", stances)
        mohalla_metrics, _ = _metrics(mohallas, households, voters)

        for _ in range(3):
            ranked = rank_swing_mohallas(tuple(reversed(mohalla_metrics)), 3)
            assert [m.mohalla_id for m in ranked] == ["m-a", "m-b"]

    def test_higher_score_first_and_limit(self):
        mohallas = [Mohalla("m1", "One"), Mohalla("m2", "Two"), Mohalla("m3", "Three")]
        households = [Household("h1", "m1"), Household("h2", "m2"), Household("h3", "m3")]
        voters = (
            _family("h1", "m1", "a", ["Swing"])
            + _family("h2", "m2", "b", ["Swing"] * 3 + ["Confirmed"] * 3)
            + _family("h3", "m3", "c", ["Confirmed"] * 3)
        )
        mohalla_metrics, _ = _metrics(mohallas, households, voters)
        ranked = rank_swing_mohallas(mohalla_metrics, 1)
        assert [m.mohalla_id for m in ranked] == ["m2"]

    def test_zero_score_excluded(self):
        mohalla_metrics, _ = _metrics(
            [Mohalla("m1", "One")], [Household("h1", "m1")], _family("h1", "m1", "v", ["Confirmed"])
        )
        assert rank_swing_mohallas(mohalla_metrics, 3) == ()


class TestFamilies:
    def test_strongest_ties_by_id(self):
        households = [Household("h2", "m1"), Household("h1", "m1"), Household("h3", "m1")]
        voters = (
            _family("h2", "m1", "a", ["Confirmed"])
            + _family("h1", "m1", "b", ["Confirmed"])
            + _family("h3", "m1", "c", ["Confirmed", "Confirmed"])
        )
        _, families = _metrics([Mohalla("m1", "One")], households, voters)
        ranked = rank_strongest_families(families, 2)
        assert [f.household_id for f in ranked] == ["h3", "h1"]

    def test_swing_families(self):
        households = [Household("h1", "m1"), Household("h2", "m1")]
        voters = _family("h1", "m1", "a", ["Confirmed", "Swing"]) + _family("h2", "m1", "b", ["Confirmed"] * 4)
        _, families = _metrics([Mohalla("m1", "One")], households, voters)
        swing = rank_swing_families(families)
        assert [s.household_id for s in swing] == ["h1"]
        assert swing[0].committed_voters == 1
        assert swing[0].swing_voters == 1

    def test_priority_targets(self):
        households = [
            Household("h1", "m1"),
            Household("h2", "m1", sentiment="Dicey", influence_level=4),
            Household("h3", "m1", sentiment="Dicey", influence_level=1),
        ]
        voters = (
            _family("h1", "m1", "a", ["Swing", "Swing"])
            + _family("h2", "m1", "b", ["Confirmed"] * 4)
            + _family("h3", "m1", "c", ["Confirmed"] * 4)
        )
        _, families = _metrics([Mohalla("m1", "One")], households, voters)
        targets = rank_priority_targets(families, 30, CONFIG)
        # h1: 2*2 = 4.0, h2: 0.5*4 + 1 = 3.0, h3 neither swing nor influential
        assert [f.household_id for f in targets] == ["h1", "h2"]

    def test_high_support_low_turnout(self):
        households = [Household("h1", "m1"), Household("h2", "m1")]
        voters = _family("h1", "m1", "a", ["Confirmed"] * 4) + _family(
            "h2", "m1", "b", ["Confirmed"] * 4, turnout_propensity=TurnoutPropensity.HIGH
        )
        _, families = _metrics([Mohalla("m1", "One")], households, voters)
        found = high_support_low_turnout(families, CONFIG)
        assert [f.household_id for f in found] == ["h1"]

    def test_dicey_families_largest_first(self):
        households = [
            Household("h1", "m1", sentiment="Dicey"),
            Household("h2", "m1", sentiment="Dicey"),
            Household("h3", "m1", sentiment="Dicey"),
            Household("h4", "m1", sentiment="Favorable"),
        ]
        voters = (
            _family("h1", "m1", "a", ["Swing"] * 2)
            + _family("h2", "m1", "b", ["Swing"] * 3)
            + _family("h3", "m1", "c", ["Swing"])
            + _family("h4", "m1", "d", ["Swing"] * 5)
        )
        _, families = _metrics([Mohalla("m1", "One")], households, voters)
        found = families_with_dicey_voters(families, CONFIG)
        assert [f.household_id for f in found] == ["h2", "h1"]

    def test_high_influence_families(self):
        households = [
            Household("h1", "m1", influence_level=4),
            Household("h2", "m1", influence_level=5),
            Household("h3", "m1", influence_level=3),
            Household("h0", "m1", influence_level=4),
        ]
        _, families = _metrics([Mohalla("m1", "One")], households, [])
        found = high_influence_families(families, CONFIG)
        assert [f.household_id for f in found] == ["h2", "h0", "h1"]

    def test_priority_influence_level_configurable(self):
        households = [Household("h1", "m1", sentiment="Dicey", influence_level=2)]
        voters = _family("h1", "m1", "a", ["Confirmed"] * 4)
        _, families = _metrics([Mohalla("m1", "One")], households, voters)
        assert rank_priority_targets(families, 30, CONFIG) == ()
        relaxed = AnalyticsConfig(priority_influence_level=2)
        assert [f.household_id for f in rank_priority_targets(families, 30, relaxed)] == ["h1"]


class TestResources:
    def test_vehicles_and_manpower(self):
        voters = _family("h1", "m1", "t", ["Swing"] * 11, transport_needed=True, turnout_propensity="High") + _family(
            "h1", "m1", "c", ["Confirmed"] * 11
        )
        mohalla_metrics, _ = _metrics([Mohalla("m1", "One")], [Household("h1", "m1", surveyed=True)], voters)
        recs = recommend_resources(mohalla_metrics, {"m1"}, CONFIG)
        by_kind = {r.kind: r for r in recs}
        assert by_kind[ResourceKind.VEHICLE].quantity == 2
        assert by_kind[ResourceKind.VEHICLE].priority == Severity.MEDIUM
        assert by_kind[ResourceKind.MANPOWER].quantity == 1
        assert "11 actionable swing voters" in by_kind[ResourceKind.MANPOWER].reason

    def test_vehicle_priority_by_transport_count(self):
        def vehicle(count):
            voters = _family("h1", "m1", "t", ["Confirmed"] * count, transport_needed=True)
            mohalla_metrics, _ = _metrics([Mohalla("m1", "One")], [Household("h1", "m1", surveyed=True)], voters)
            (rec,) = recommend_resources(mohalla_metrics, set(), CONFIG)
            return rec

        assert vehicle(21).priority == Severity.HIGH
        assert vehicle(21).quantity == 3
        assert vehicle(20).priority == Severity.MEDIUM
        assert vehicle(10).priority == Severity.LOW

    def test_manpower_scales_with_actionable_swing(self):
        voters = _family("h1", "m1", "s", ["Swing"] * 41, turnout_propensity="Medium") + _family(
            "h1", "m1", "l", ["Swing"] * 30
        )
        mohalla_metrics, _ = _metrics([Mohalla("m1", "One")], [Household("h1", "m1", surveyed=True)], voters)
        (rec,) = recommend_resources(mohalla_metrics, {"m1"}, CONFIG)
        assert rec.kind == ResourceKind.MANPOWER
        assert rec.quantity == 3

    def test_event_for_under_surveyed_dicey(self):
        households = [Household(f"h{i}", "m1", sentiment="Dicey") for i in range(6)]
        mohalla_metrics, _ = _metrics([Mohalla("m1", "One")], households, [])
        recs = recommend_resources(mohalla_metrics, set(), CONFIG)
        assert [(r.kind, r.priority) for r in recs] == [(ResourceKind.EVENT, Severity.MEDIUM)]

    def test_no_event_for_few_dicey_families(self):
        households = [Household(f"h{i}", "m1", sentiment="Dicey") for i in range(5)]
        mohalla_metrics, _ = _metrics([Mohalla("m1", "One")], households, [])
        assert recommend_resources(mohalla_metrics, set(), CONFIG) == ()

    def test_sorted(self):
        mohallas = [Mohalla("m2", "Two"), Mohalla("m1", "One")]
        households = [Household("h1", "m1"), Household("h2", "m2", sentiment="Dicey")]
        voters = _family("h1", "m1", "a", ["Swing"], transport_needed=True)
        mohalla_metrics, _ = _metrics(mohallas, households, voters)
        recs = recommend_resources(mohalla_metrics, {"m1"}, CONFIG)
        keys = [(r.priority.rank, r.mohalla_id, r.kind.value) for r in recs]
        assert keys == sorted(keys)
