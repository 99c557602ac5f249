"""
core.py — Nairobi transit dashboard backend (dataset snapshot + hub rollups + impact formulas)

What this file does
-------------------
1) Loads the exported dataset once (executive KPIs, hub connectivity CSV, five GeoJSON layers).
2) On each tier-filter change:
   - filters residential nodes / feeder routes for the map
   - re-aggregates feeder routes into per-hub rollups (count, population, mean distance, ridership)
3) On each simulator slider change:
   - averages the representative commute distance over the selected tiers
   - converts distance + speeds into matatu/train trip times and weekly savings
   - scales the network ridership estimate by the adoption rate
   - returns a single JSON-serializable payload for the frontend to render

Assumptions / Notes
-------------------
- The snapshot is read-only after load; every function here is pure and cheap enough
  to recompute on every UI interaction.
- When all three tiers are selected the hub connectivity CSV is returned as-is instead of
  being recomputed from feeder routes (the two paths are not guaranteed to agree).
- Missing numeric properties count as 0. Records with an unknown tier never match a filter.
- No formatting happens here: values are plain floats/ints, units are implied by field names.

Dependencies
------------
pandas
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import asdict, dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple, Union

import pandas as pd


logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


# ----------------------------
# Tiers
# ----------------------------

class Tier(str, Enum):
    TIER_1 = "Tier_1_WhiteCollar"
    TIER_2 = "Tier_2_Informal"
    TIER_3 = "Tier_3_MiddleIncome"

    @classmethod
    def parse(cls, value: Any) -> Optional[Tier]:
        """Return the matching tier, or None for anything outside the fixed three."""
        try:
            return cls(value)
        except (TypeError, ValueError):
            return None

    @property
    def label(self) -> str:
        return _TIER_LABELS[self]

    @property
    def short_label(self) -> str:
        return "Tier " + self.value.split("_")[1]


_TIER_LABELS = {
    Tier.TIER_1: "Tier 1 (White-Collar)",
    Tier.TIER_2: "Tier 2 (Informal)",
    Tier.TIER_3: "Tier 3 (Middle-Income)",
}

ALL_TIERS: FrozenSet[Tier] = frozenset(Tier)

TierSelection = FrozenSet[Tier]


def as_tier_selection(values: Optional[Iterable[Any]]) -> TierSelection:
    """
    Freeze a UI selection (checklist values, enum members, any iterable) into a TierSelection.
    Unknown values are dropped.
    """
    if values is None:
        return frozenset()
    out = (Tier.parse(v) for v in values)
    return frozenset(t for t in out if t is not None)


# ----------------------------
# Fixed model constants
# ----------------------------

RIDERSHIP_CONVERSION = 0.15      # share of served population assumed to ride daily
TIER2_REPRESENTATIVE_KM = 4.87   # no measured Tier 2 distance; midpoint of Tier 1 / Tier 3
TRIPS_PER_DAY = 2
WORKING_DAYS_PER_WEEK = 6
WEEKS_PER_MONTH = 4
WEEKS_PER_YEAR = 52

ADOPTION_RATE_BOUNDS = (10.0, 100.0)   # percent
MATATU_SPEED_BOUNDS = (5.0, 30.0)      # km/h
TRAIN_SPEED_BOUNDS = (20.0, 300.0)     # km/h


# ----------------------------
# Data containers
# ----------------------------

@dataclass(frozen=True)
class FeederRoute:
    """
    One feeder edge from a residential area to a target hub (properties only; geometry
    stays in the raw GeoJSON used for the map).
    """
    tier: Tier
    target_hub: str
    route_distance_km: float = 0.0
    population_weight: float = 0.0
    neighborhood: Optional[str] = None


@dataclass(frozen=True)
class HubRollup:
    target_hub: str
    total_feeder_routes: int
    total_population_served: float
    avg_feeder_distance: float
    estimated_daily_ridership: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class HubSummary:
    hub_count: int
    total_daily_ridership: float
    total_population_served: float


@dataclass(frozen=True)
class ExecutiveMetrics:
    total_network_km: float
    avg_tier1_commute_km: float
    avg_tier3_commute_km: float
    commute_penalty_multiplier: float
    total_daily_ridership_est: float


@dataclass(frozen=True)
class SimulatorInputs:
    adoption_rate_percent: float = 15.0
    matatu_speed_kmh: float = 15.0
    train_speed_kmh: float = 40.0
    selected_tiers: TierSelection = field(default_factory=lambda: frozenset({Tier.TIER_3}))

    def __post_init__(self) -> None:
        for name, (lo, hi) in (
            ("adoption_rate_percent", ADOPTION_RATE_BOUNDS),
            ("matatu_speed_kmh", MATATU_SPEED_BOUNDS),
            ("train_speed_kmh", TRAIN_SPEED_BOUNDS),
        ):
            v = float(getattr(self, name))
            if not lo <= v <= hi:
                raise ValueError(f"{name} must be within [{lo:g}, {hi:g}], got {v:g}")
            object.__setattr__(self, name, v)
        object.__setattr__(self, "selected_tiers", as_tier_selection(self.selected_tiers))


@dataclass(frozen=True)
class TimeSavings:
    matatu_time_hours: float
    train_time_hours: float
    time_saved_per_trip_hours: float
    hours_saved_per_week: float

    @property
    def matatu_time_minutes(self) -> float:
        return self.matatu_time_hours * 60.0

    @property
    def train_time_minutes(self) -> float:
        return self.train_time_hours * 60.0

    @property
    def time_saved_per_trip_minutes(self) -> float:
        return self.time_saved_per_trip_hours * 60.0

    @property
    def minutes_saved_per_week(self) -> float:
        return self.hours_saved_per_week * 60.0

    @property
    def hours_saved_per_month(self) -> float:
        return self.hours_saved_per_week * WEEKS_PER_MONTH

    @property
    def hours_saved_per_year(self) -> float:
        return self.hours_saved_per_week * WEEKS_PER_YEAR

    def to_dict(self) -> Dict[str, float]:
        out = asdict(self)
        out.update({
            "matatu_time_minutes": self.matatu_time_minutes,
            "train_time_minutes": self.train_time_minutes,
            "time_saved_per_trip_minutes": self.time_saved_per_trip_minutes,
            "minutes_saved_per_week": self.minutes_saved_per_week,
            "hours_saved_per_month": self.hours_saved_per_month,
            "hours_saved_per_year": self.hours_saved_per_year,
        })
        return out


@dataclass(frozen=True)
class DatasetSnapshot:
    """
    Everything the dashboard reads, fully materialized.

    hub_stats are the precomputed all-tier rollups from hub_connectivity_stats.csv.
    feeder_routes are parsed properties; the *_geojson fields keep raw FeatureCollections
    for the map layers.
    """
    executive_metrics: ExecutiveMetrics
    hub_stats: Tuple[HubRollup, ...]
    feeder_routes: Tuple[FeederRoute, ...]
    feeder_routes_geojson: Dict[str, Any]
    residential_nodes_geojson: Dict[str, Any]
    neighborhood_hubs_geojson: Dict[str, Any]
    hubs_destinations_geojson: Dict[str, Any]
    heavy_rail_backbone_geojson: Dict[str, Any]


# ----------------------------
# Loaders
# ----------------------------

DATA_FILES = {
    "executive_metrics": "executive_metrics.csv",
    "hub_stats": "hub_connectivity_stats.csv",
    "hubs_destinations": "hubs_destinations.geojson",
    "neighborhood_hubs": "neighborhood_hubs.geojson",
    "residential_nodes": "residential_nodes.geojson",
    "heavy_rail_backbone": "heavy_rail_backbone.geojson",
    "feeder_routes": "feeder_routes.geojson",
}

EXECUTIVE_METRIC_COLUMNS = (
    "total_network_km",
    "avg_tier1_commute_km",
    "avg_tier3_commute_km",
    "commute_penalty_multiplier",
    "total_daily_ridership_est",
)

HUB_STAT_COLUMNS = (
    "target_hub",
    "total_feeder_routes",
    "total_population_served",
    "avg_feeder_distance",
    "estimated_daily_ridership",
)


def _to_float(value: Any) -> float:
    # missing / empty / non-numeric -> 0
    if value is None:
        return 0.0
    try:
        out = float(value)
    except (TypeError, ValueError):
        return 0.0
    return 0.0 if math.isnan(out) else out


def _properties(feat: Any) -> Dict[str, Any]:
    # non-dict feature / properties -> {}
    props = feat.get("properties") if isinstance(feat, dict) else None
    return props if isinstance(props, dict) else {}


def load_executive_metrics(path: PathLike) -> ExecutiveMetrics:
    """
    Load the single-row executive KPI table.

    Expected columns:
      total_network_km, avg_tier1_commute_km, avg_tier3_commute_km,
      commute_penalty_multiplier, total_daily_ridership_est
    """
    df = pd.read_csv(path)

    missing = set(EXECUTIVE_METRIC_COLUMNS) - set(df.columns)
    if missing:
        raise ValueError(f"Executive metrics missing columns: {sorted(missing)}")
    if df.empty:
        raise ValueError(f"Executive metrics file has no data rows: {path}")

    row = df.iloc[0]
    blank = [c for c in EXECUTIVE_METRIC_COLUMNS if pd.isna(pd.to_numeric(row[c], errors="coerce"))]
    if blank:
        logger.warning("Executive metrics at %s have blank or non-numeric values for %s; using 0", path, blank)
    return ExecutiveMetrics(**{c: _to_float(row[c]) for c in EXECUTIVE_METRIC_COLUMNS})


def load_hub_stats(path: PathLike) -> List[HubRollup]:
    """
    Load the precomputed (all tiers) hub connectivity table.
    Rows without a target_hub are dropped.
    """
    df = pd.read_csv(path, dtype={"target_hub": str})

    missing = set(HUB_STAT_COLUMNS) - set(df.columns)
    if missing:
        raise ValueError(f"Hub connectivity stats missing columns: {sorted(missing)}")

    keep = df["target_hub"].notna() & (df["target_hub"].str.strip() != "")
    if not keep.all():
        logger.info("Dropped %d hub stat rows without target_hub", int((~keep).sum()))
    df = df.loc[keep]

    return [
        HubRollup(
            target_hub=str(r.target_hub),
            total_feeder_routes=int(_to_float(r.total_feeder_routes)),
            total_population_served=_to_float(r.total_population_served),
            avg_feeder_distance=_to_float(r.avg_feeder_distance),
            estimated_daily_ridership=_to_float(r.estimated_daily_ridership),
        )
        for r in df.itertuples(index=False)
    ]


def load_feature_collection(path: PathLike) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        fc = json.load(f)

    if not isinstance(fc, dict) or fc.get("type") != "FeatureCollection":
        raise ValueError(f"{path} is not a GeoJSON FeatureCollection")
    features = fc.get("features") or []
    if not isinstance(features, list):
        raise ValueError(f"{path}: 'features' must be a list")

    return {**fc, "features": features}


def parse_feeder_routes(fc: Dict[str, Any]) -> List[FeederRoute]:
    """
    Pull the aggregation-relevant properties out of the feeder route FeatureCollection.

    Features with an unrecognized tier or no target_hub are dropped (they could never
    match a tier filter or a hub key anyway).
    """
    routes: List[FeederRoute] = []
    unknown_tier = 0
    no_hub = 0

    for feat in fc.get("features", []):
        props = _properties(feat)
        tier = Tier.parse(props.get("tier"))
        if tier is None:
            unknown_tier += 1
            continue
        hub = props.get("target_hub")
        if hub is None or str(hub).strip() == "":
            no_hub += 1
            continue
        routes.append(
            FeederRoute(
                tier=tier,
                target_hub=str(hub),
                route_distance_km=_to_float(props.get("route_distance_km")),
                population_weight=_to_float(props.get("population_weight")),
                neighborhood=props.get("neighborhood"),
            )
        )

    if unknown_tier:
        logger.warning("Skipped %d feeder routes with an unknown tier", unknown_tier)
    if no_hub:
        logger.warning("Skipped %d feeder routes without target_hub", no_hub)
    return routes


def load_snapshot(data_dir: PathLike) -> DatasetSnapshot:
    """
    Read every export file from data_dir. Raises OSError for missing files and
    ValueError for malformed ones.
    """
    d = Path(data_dir)
    paths = {k: d / name for k, name in DATA_FILES.items()}

    metrics = load_executive_metrics(paths["executive_metrics"])
    hub_stats = load_hub_stats(paths["hub_stats"])
    feeder_fc = load_feature_collection(paths["feeder_routes"])

    snapshot = DatasetSnapshot(
        executive_metrics=metrics,
        hub_stats=tuple(hub_stats),
        feeder_routes=tuple(parse_feeder_routes(feeder_fc)),
        feeder_routes_geojson=feeder_fc,
        residential_nodes_geojson=load_feature_collection(paths["residential_nodes"]),
        neighborhood_hubs_geojson=load_feature_collection(paths["neighborhood_hubs"]),
        hubs_destinations_geojson=load_feature_collection(paths["hubs_destinations"]),
        heavy_rail_backbone_geojson=load_feature_collection(paths["heavy_rail_backbone"]),
    )

    if not snapshot.hub_stats:
        logger.warning("Hub connectivity stats at %s are empty", paths["hub_stats"])
    return snapshot


# ----------------------------
# Core algorithms
# ----------------------------

def filter_features_by_tier(fc: Dict[str, Any], selected_tiers: Iterable[Any]) -> Dict[str, Any]:
    """
    Keep features whose properties.tier is selected. Empty selection -> empty collection.
    """
    selected = as_tier_selection(selected_tiers)
    if not selected:
        return {"type": "FeatureCollection", "features": []}

    features = [
        feat for feat in fc.get("features", [])
        if Tier.parse(_properties(feat).get("tier")) in selected
    ]
    return {"type": "FeatureCollection", "features": features}


def aggregate_hub_stats(
    feeder_routes: Sequence[FeederRoute],
    selected_tiers: Iterable[Any],
    precomputed_stats: Sequence[HubRollup],
) -> Sequence[HubRollup]:
    """
    Per-hub rollups over the feeder routes of the selected tiers.

    - all three tiers selected: precomputed_stats is returned as-is (same object)
    - no tiers selected: []
    - otherwise: group matching routes by target_hub; count, sum population_weight,
      mean route_distance_km, ridership = population * RIDERSHIP_CONVERSION

    Output order is not meaningful; see sort_hubs_by_ridership().
    """
    selected = as_tier_selection(selected_tiers)
    if ALL_TIERS <= selected:
        return precomputed_stats
    if not selected:
        return []

    frame = pd.DataFrame(
        [(r.target_hub, r.route_distance_km, r.population_weight) for r in feeder_routes if r.tier in selected],
        columns=["target_hub", "route_distance_km", "population_weight"],
    )
    if frame.empty:
        return []

    grouped = frame.groupby("target_hub", sort=False).agg(
        total_feeder_routes=("route_distance_km", "size"),
        total_population_served=("population_weight", "sum"),
        avg_feeder_distance=("route_distance_km", "mean"),
    )

    return [
        HubRollup(
            target_hub=str(r.Index),
            total_feeder_routes=int(r.total_feeder_routes),
            total_population_served=float(r.total_population_served),
            avg_feeder_distance=float(r.avg_feeder_distance),
            estimated_daily_ridership=float(r.total_population_served) * RIDERSHIP_CONVERSION,
        )
        for r in grouped.itertuples()
    ]


def sort_hubs_by_ridership(rollups: Iterable[HubRollup]) -> List[HubRollup]:
    return sorted(rollups, key=lambda h: h.estimated_daily_ridership, reverse=True)


def summarize_hubs(rollups: Sequence[HubRollup]) -> HubSummary:
    return HubSummary(
        hub_count=len(rollups),
        total_daily_ridership=float(sum(h.estimated_daily_ridership for h in rollups)),
        total_population_served=float(sum(h.total_population_served for h in rollups)),
    )


def compute_weighted_distance(
    selected_tiers: Iterable[Any],
    tier1_avg_km: float,
    tier3_avg_km: float,
) -> float:
    """
    Mean representative commute distance over the selected tiers (not population-weighted).
    Tier 2 uses TIER2_REPRESENTATIVE_KM. Empty selection falls back to tier3_avg_km.
    """
    selected = as_tier_selection(selected_tiers)
    if not selected:
        return float(tier3_avg_km)

    representative = {
        Tier.TIER_1: float(tier1_avg_km),
        Tier.TIER_2: TIER2_REPRESENTATIVE_KM,
        Tier.TIER_3: float(tier3_avg_km),
    }
    total = 0.0
    for tier in Tier:
        if tier in selected:
            total += representative[tier]
    return total / len(selected)


def compute_time_savings(
    base_distance_km: float,
    matatu_speed_kmh: float,
    train_speed_kmh: float,
) -> TimeSavings:
    """
    Trip times (hours) by matatu and by train over the same distance.
    Savings can be negative when the train is slower; zero speeds are the caller's problem.
    """
    d = float(base_distance_km)
    matatu_h = d / float(matatu_speed_kmh)
    train_h = d / float(train_speed_kmh)
    saved_h = matatu_h - train_h
    return TimeSavings(
        matatu_time_hours=matatu_h,
        train_time_hours=train_h,
        time_saved_per_trip_hours=saved_h,
        hours_saved_per_week=saved_h * TRIPS_PER_DAY * WORKING_DAYS_PER_WEEK,
    )


def compute_total_daily_passengers(total_daily_ridership_est: float, adoption_rate_percent: float) -> float:
    return float(total_daily_ridership_est) * (float(adoption_rate_percent) / 100.0)


# ----------------------------
# Main interactive entrypoints
# ----------------------------

def compute_hub_analytics(snapshot: DatasetSnapshot, selected_tiers: Iterable[Any]) -> Dict[str, Any]:
    """
    Call on every Hub Analytics tier toggle.

    Output:
      JSON-serializable dict with:
        - selected_tiers (tier values, enum order)
        - all_tiers: True when the precomputed table was used
        - summary: hub_count, total_daily_ridership, total_population_served
        - hubs: rollups sorted by estimated_daily_ridership, descending
    """
    selected = as_tier_selection(selected_tiers)
    rollups = aggregate_hub_stats(snapshot.feeder_routes, selected, snapshot.hub_stats)
    ordered = sort_hubs_by_ridership(rollups)

    return {
        "selected_tiers": [t.value for t in Tier if t in selected],
        "all_tiers": ALL_TIERS <= selected,
        "summary": asdict(summarize_hubs(ordered)),
        "hubs": [h.to_dict() for h in ordered],
    }


def run_impact_simulation(metrics: ExecutiveMetrics, inputs: SimulatorInputs) -> Dict[str, Any]:
    """
    Call on every Impact Simulator slider/tier change.

    Output:
      JSON-serializable dict with:
        - inputs (as given, tiers as values)
        - base_distance_km
        - base_network_capacity / total_daily_passengers (adoption simulator)
        - time_savings (hours, minutes, weekly/monthly/yearly projections)
    """
    base_km = compute_weighted_distance(
        inputs.selected_tiers, metrics.avg_tier1_commute_km, metrics.avg_tier3_commute_km
    )
    savings = compute_time_savings(base_km, inputs.matatu_speed_kmh, inputs.train_speed_kmh)
    passengers = compute_total_daily_passengers(metrics.total_daily_ridership_est, inputs.adoption_rate_percent)

    return {
        "inputs": {
            "adoption_rate_percent": inputs.adoption_rate_percent,
            "matatu_speed_kmh": inputs.matatu_speed_kmh,
            "train_speed_kmh": inputs.train_speed_kmh,
            "selected_tiers": [t.value for t in Tier if t in inputs.selected_tiers],
        },
        "base_distance_km": base_km,
        "base_network_capacity": float(metrics.total_daily_ridership_est),
        "total_daily_passengers": passengers,
        "time_savings": savings.to_dict(),
        "constants": {
            "trips_per_day": TRIPS_PER_DAY,
            "working_days_per_week": WORKING_DAYS_PER_WEEK,
        },
    }


# ----------------------------
# Optional: convenience for app start-up caching
# ----------------------------

def warm_start(data_dir: PathLike) -> DatasetSnapshot:
    """
    Convenience wrapper you call once from app.py.

    In Dash:
        @lru_cache(maxsize=4)
        def get_snapshot_cached(data_dir):
            return warm_start(data_dir)
    """
    snapshot = load_snapshot(data_dir)
    logger.info(
        "Loaded dataset from %s: %d hubs, %d feeder routes, %d residential nodes",
        data_dir,
        len(snapshot.hub_stats),
        len(snapshot.feeder_routes),
        len(snapshot.residential_nodes_geojson["features"]),
    )
    return snapshot
