from __future__ import annotations

import json
import textwrap
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

from core import load_snapshot


def _line(props: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "type": "Feature",
        "geometry": {"type": "LineString", "coordinates": [[36.80, -1.30], [36.82, -1.28]]},
        "properties": props,
    }


def _point(lon: float, lat: float, props: Dict[str, Any]) -> Dict[str, Any]:
    return {"type": "Feature", "geometry": {"type": "Point", "coordinates": [lon, lat]}, "properties": props}


def _fc(features: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {"type": "FeatureCollection", "features": features}


FEEDER_ROUTES = _fc([
    _line({"neighborhood": "Kilimani", "tier": "Tier_1_WhiteCollar", "target_hub": "CBD",
           "route_distance_km": 10, "population_weight": 100}),
    _line({"neighborhood": "Lavington", "tier": "Tier_1_WhiteCollar", "target_hub": "CBD",
           "route_distance_km": 20, "population_weight": 50}),
    _line({"neighborhood": "Embakasi", "tier": "Tier_3_MiddleIncome", "target_hub": "CBD",
           "route_distance_km": 4, "population_weight": 850}),
    _line({"neighborhood": "Kibera", "tier": "Tier_2_Informal", "target_hub": "Westlands",
           "route_distance_km": 3, "population_weight": 400}),
    # no distance / population
    _line({"neighborhood": "Kasarani", "tier": "Tier_3_MiddleIncome", "target_hub": "Westlands"}),
    _line({"neighborhood": "Nowhere", "tier": "Tier_9_Unknown", "target_hub": "CBD",
           "route_distance_km": 1, "population_weight": 1000}),
])

RESIDENTIAL_NODES = _fc([
    _point(36.78, -1.29, {"neighborhood": "Kilimani", "tier": "Tier_1_WhiteCollar", "population": 1200}),
    _point(36.79, -1.31, {"neighborhood": "Kibera", "tier": "Tier_2_Informal", "population": 5400}),
    _point(36.89, -1.32, {"neighborhood": "Embakasi", "tier": "Tier_3_MiddleIncome", "population": 3100}),
    _point(36.90, -1.22, {"neighborhood": "Kasarani", "tier": "Tier_3_MiddleIncome", "population": 2800}),
    _point(36.70, -1.20, {"neighborhood": "Nowhere", "tier": "Tier_9_Unknown", "population": 10}),
])

HUBS_DESTINATIONS = _fc([
    _point(36.82, -1.286, {"hub_id": "H1", "name": "CBD", "type": "employment"}),
    _point(36.80, -1.265, {"hub_id": "H2", "name": "Westlands", "type": "employment"}),
])

NEIGHBORHOOD_HUBS = _fc([
    _point(36.79, -1.30, {"neighborhood": "Kibera", "tier": "Tier_2_Informal", "population": 5400}),
    _point(36.89, -1.32, {"neighborhood": "Embakasi", "tier": "Tier_3_MiddleIncome", "population": 3100}),
])

HEAVY_RAIL = _fc([
    {
        "type": "Feature",
        "geometry": {"type": "LineString", "coordinates": [[36.70, -1.30], [36.83, -1.29], [36.95, -1.32]]},
        "properties": {"track_length_km": 27.4},
    }
])

EXECUTIVE_METRICS_CSV = textwrap.dedent(
    """
    total_network_km,avg_tier1_commute_km,avg_tier3_commute_km,commute_penalty_multiplier,total_daily_ridership_est
    120.5,6.0,9.0,1.5,200000
    """
).strip()

HUB_STATS_CSV = textwrap.dedent(
    """
    target_hub,total_feeder_routes,total_population_served,avg_feeder_distance,estimated_daily_ridership
    Westlands,2,400,3.0,60.0
    CBD,3,1000,11.3,150.0
    ,,,,
    """
).strip()


def write_dataset(
    data_dir: Path,
    *,
    executive_metrics: Optional[str] = None,
    hub_stats: Optional[str] = None,
) -> Path:
    data_dir.mkdir(parents=True, exist_ok=True)
    (data_dir / "executive_metrics.csv").write_text(executive_metrics or EXECUTIVE_METRICS_CSV, encoding="utf-8")
    (data_dir / "hub_connectivity_stats.csv").write_text(hub_stats or HUB_STATS_CSV, encoding="utf-8")
    for name, fc in (
        ("feeder_routes.geojson", FEEDER_ROUTES),
        ("residential_nodes.geojson", RESIDENTIAL_NODES),
        ("hubs_destinations.geojson", HUBS_DESTINATIONS),
        ("neighborhood_hubs.geojson", NEIGHBORHOOD_HUBS),
        ("heavy_rail_backbone.geojson", HEAVY_RAIL),
    ):
        (data_dir / name).write_text(json.dumps(fc), encoding="utf-8")
    return data_dir


@pytest.fixture
def dataset_dir(tmp_path):
    return write_dataset(tmp_path / "web_exports")


@pytest.fixture
def snapshot(dataset_dir):
    return load_snapshot(dataset_dir)
