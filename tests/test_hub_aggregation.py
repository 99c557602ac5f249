from __future__ import annotations

import json

import pytest

from core import (
    ALL_TIERS,
    RIDERSHIP_CONVERSION,
    FeederRoute,
    HubRollup,
    Tier,
    aggregate_hub_stats,
    compute_hub_analytics,
    filter_features_by_tier,
    sort_hubs_by_ridership,
    summarize_hubs,
)


def _by_hub(rollups):
    return {h.target_hub: h for h in rollups}


def test_all_tiers_returns_precomputed_stats_unchanged():
    routes = [FeederRoute(Tier.TIER_1, "A", 10.0, 100.0)]
    precomputed = [HubRollup("A", 7, 123.0, 4.2, 99.9)]

    assert aggregate_hub_stats(routes, ALL_TIERS, precomputed) is precomputed
    # raw checklist values select the same short-circuit
    assert aggregate_hub_stats(routes, [t.value for t in Tier], precomputed) is precomputed


def test_empty_selection_returns_empty_sequence():
    routes = [FeederRoute(Tier.TIER_1, "A", 10.0, 100.0), FeederRoute(Tier.TIER_3, "B", 2.0, 5.0)]
    precomputed = [HubRollup("A", 1, 100.0, 10.0, 15.0)]

    assert list(aggregate_hub_stats(routes, set(), precomputed)) == []
    assert list(aggregate_hub_stats(routes, None, precomputed)) == []


def test_single_tier_rollup_for_one_hub():
    routes = [
        FeederRoute(Tier.TIER_1, "A", route_distance_km=10.0, population_weight=100.0),
        FeederRoute(Tier.TIER_1, "A", route_distance_km=20.0, population_weight=50.0),
    ]

    out = aggregate_hub_stats(routes, {Tier.TIER_1}, [])

    assert len(out) == 1
    hub = out[0]
    assert hub.target_hub == "A"
    assert hub.total_feeder_routes == 2
    assert hub.total_population_served == pytest.approx(150.0)
    assert hub.avg_feeder_distance == pytest.approx(15.0)
    assert hub.estimated_daily_ridership == pytest.approx(22.5)


def test_only_selected_tiers_participate():
    routes = [
        FeederRoute(Tier.TIER_1, "A", 10.0, 100.0),
        FeederRoute(Tier.TIER_2, "A", 30.0, 1000.0),
        FeederRoute(Tier.TIER_2, "B", 5.0, 10.0),
    ]

    out = _by_hub(aggregate_hub_stats(routes, {Tier.TIER_1}, []))

    assert set(out) == {"A"}
    assert out["A"].total_feeder_routes == 1
    assert out["A"].avg_feeder_distance == pytest.approx(10.0)


def test_two_tiers_from_snapshot(snapshot):
    out = _by_hub(aggregate_hub_stats(snapshot.feeder_routes, {Tier.TIER_1, Tier.TIER_3}, snapshot.hub_stats))

    assert set(out) == {"CBD", "Westlands"}
    cbd = out["CBD"]
    assert cbd.total_feeder_routes == 3
    assert cbd.total_population_served == pytest.approx(1000.0)
    assert cbd.avg_feeder_distance == pytest.approx((10 + 20 + 4) / 3)
    assert cbd.estimated_daily_ridership == pytest.approx(1000.0 * RIDERSHIP_CONVERSION)

    # route with no distance / population counts, contributing zeros
    west = out["Westlands"]
    assert west.total_feeder_routes == 1
    assert west.total_population_served == 0.0
    assert west.avg_feeder_distance == 0.0
    assert west.estimated_daily_ridership == 0.0


def test_unknown_tier_routes_never_match(snapshot):
    # the Tier_9 route (population 1000 on CBD) was dropped at load time
    two_tiers = _by_hub(aggregate_hub_stats(snapshot.feeder_routes, {Tier.TIER_1, Tier.TIER_2}, snapshot.hub_stats))
    assert two_tiers["CBD"].total_population_served == pytest.approx(150.0)


def test_aggregation_ignores_route_order():
    routes = [
        FeederRoute(Tier.TIER_2, "A", 1.0, 10.0),
        FeederRoute(Tier.TIER_2, "B", 2.0, 20.0),
        FeederRoute(Tier.TIER_2, "A", 3.0, 30.0),
    ]
    forward = _by_hub(aggregate_hub_stats(routes, {Tier.TIER_2}, []))
    backward = _by_hub(aggregate_hub_stats(list(reversed(routes)), {Tier.TIER_2}, []))

    assert forward == backward


def test_selection_with_no_matching_routes_is_empty():
    routes = [FeederRoute(Tier.TIER_1, "A", 1.0, 1.0)]
    assert list(aggregate_hub_stats(routes, {Tier.TIER_3}, [])) == []


def test_sort_and_summarize():
    hubs = [
        HubRollup("A", 1, 100.0, 2.0, 15.0),
        HubRollup("B", 4, 1000.0, 5.0, 150.0),
        HubRollup("C", 2, 400.0, 3.0, 60.0),
    ]

    assert [h.target_hub for h in sort_hubs_by_ridership(hubs)] == ["B", "C", "A"]

    summary = summarize_hubs(hubs)
    assert summary.hub_count == 3
    assert summary.total_daily_ridership == pytest.approx(225.0)
    assert summary.total_population_served == pytest.approx(1500.0)

    empty = summarize_hubs([])
    assert (empty.hub_count, empty.total_daily_ridership, empty.total_population_served) == (0, 0.0, 0.0)


def test_compute_hub_analytics_uses_precomputed_for_all_tiers(snapshot):
    out = compute_hub_analytics(snapshot, ALL_TIERS)

    assert out["all_tiers"] is True
    assert out["selected_tiers"] == [t.value for t in Tier]
    assert [h["target_hub"] for h in out["hubs"]] == ["CBD", "Westlands"]
    assert out["hubs"][0]["avg_feeder_distance"] == pytest.approx(11.3)
    assert out["summary"]["hub_count"] == 2
    assert out["summary"]["total_daily_ridership"] == pytest.approx(210.0)
    json.dumps(out)


def test_compute_hub_analytics_partial_selection(snapshot):
    out = compute_hub_analytics(snapshot, ["Tier_2_Informal"])

    assert out["all_tiers"] is False
    assert out["selected_tiers"] == ["Tier_2_Informal"]
    assert out["hubs"] == [
        {
            "target_hub": "Westlands",
            "total_feeder_routes": 1,
            "total_population_served": pytest.approx(400.0),
            "avg_feeder_distance": pytest.approx(3.0),
            "estimated_daily_ridership": pytest.approx(60.0),
        }
    ]


def test_filter_features_by_tier(snapshot):
    fc = snapshot.residential_nodes_geojson

    t3 = filter_features_by_tier(fc, {Tier.TIER_3})
    assert t3["type"] == "FeatureCollection"
    assert [f["properties"]["neighborhood"] for f in t3["features"]] == ["Embakasi", "Kasarani"]

    everything = filter_features_by_tier(fc, ALL_TIERS)
    assert len(everything["features"]) == 4  # unknown tier excluded

    assert filter_features_by_tier(fc, [])["features"] == []
    # source collection untouched
    assert len(fc["features"]) == 5
