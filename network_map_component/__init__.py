from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

import dash_leaflet as dl
from shapely.geometry import box, mapping

from core import Tier, as_tier_selection, filter_features_by_tier

# Dash assets folder (stylesheet + leaflet helper functions), shipped as package data
ASSETS_DIR = Path(__file__).resolve().parent / "assets"
TIER_CIRCLE_FN = {"variable": "nairobiTransit.tierCircle"}

DEFAULT_CENTER = (-1.29, 36.82)  # (lat, lon) central Nairobi
DEFAULT_ZOOM = 11

DARK_TILES_URL = "https://{s}.basemaps.cartocdn.com/dark_all/{z}/{x}/{y}{r}.png"
DARK_TILES_ATTRIBUTION = "&copy; OpenStreetMap contributors &copy; CARTO"

# Approximate Nairobi County extent, (min_lon, min_lat, max_lon, max_lat)
COUNTY_BBOX = (36.65, -1.45, 37.10, -1.15)

TIER_COLORS = {
    Tier.TIER_1: "#3B82F6",
    Tier.TIER_2: "#F59E0B",
    Tier.TIER_3: "#8B5CF6",
}
UNKNOWN_TIER_COLOR = "#666666"
RAIL_COLOR = "#E5E7EB"
HUB_COLOR = "#EF4444"
NEIGHBORHOOD_HUB_COLOR = "#10B981"


def tier_color(value: Any) -> str:
    tier = Tier.parse(value)
    return TIER_COLORS[tier] if tier is not None else UNKNOWN_TIER_COLOR


def county_boundary_geojson() -> Dict[str, Any]:
    return {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "properties": {"name": "Nairobi County (approx.)"},
                "geometry": mapping(box(*COUNTY_BBOX)),
            }
        ],
    }


def _point_latlon(feat: Dict[str, Any]) -> Optional[Tuple[float, float]]:
    geom = feat.get("geometry") if isinstance(feat, dict) else None
    if not isinstance(geom, dict) or geom.get("type") != "Point":
        return None
    coords = geom.get("coordinates")  # [lon, lat]
    try:
        return float(coords[1]), float(coords[0])
    except (TypeError, ValueError, IndexError):
        return None


def point_markers(
    fc: Dict[str, Any],
    *,
    radius: float,
    fill_color: Optional[str] = None,
    fill_opacity: float = 1.0,
    stroke_color: Optional[str] = None,
    stroke_weight: float = 0,
    tooltip_key: Optional[str] = None,
) -> List[dl.CircleMarker]:
    """
    One CircleMarker per Point feature. With fill_color=None the marker is colored by
    properties.tier.
    """
    markers = []
    for feat in fc.get("features", []):
        latlon = _point_latlon(feat)
        if latlon is None:
            continue
        props = feat.get("properties")
        if not isinstance(props, dict):
            props = {}
        color = fill_color or tier_color(props.get("tier"))
        tip = props.get(tooltip_key) if tooltip_key else None
        markers.append(
            dl.CircleMarker(
                center=latlon,
                radius=radius,
                color=stroke_color or color,
                weight=stroke_weight,
                stroke=stroke_weight > 0,
                fillColor=color,
                fillOpacity=fill_opacity,
                children=dl.Tooltip(str(tip)) if tip is not None else None,
            )
        )
    return markers


def residential_layer(fc: Dict[str, Any], selected_tiers: Iterable[Any]) -> dl.GeoJSON:
    """
    Tier-filtered residential nodes as a single GeoJSON layer. Points are drawn as
    circles client-side by nairobiTransit.tierCircle (assets/map_layers.js), which
    reads its colors from hideout.
    """
    return dl.GeoJSON(
        data=filter_features_by_tier(fc, selected_tiers),
        id="residential_nodes",
        pointToLayer=TIER_CIRCLE_FN,
        hideout=dict(
            colors={t.value: TIER_COLORS[t] for t in Tier},
            fallbackColor=UNKNOWN_TIER_COLOR,
            radius=2,
            fillOpacity=0.3,
        ),
    )


def feeder_route_layers(fc: Dict[str, Any], selected_tiers: Iterable[Any]) -> List[dl.GeoJSON]:
    """One GeoJSON line layer per selected tier, in tier order."""
    selected = as_tier_selection(selected_tiers)
    layers = []
    for tier in Tier:
        if tier not in selected:
            continue
        layers.append(
            dl.GeoJSON(
                data=filter_features_by_tier(fc, {tier}),
                id=f"feeder_routes_{tier.name.lower()}",
                options=dict(style=dict(color=TIER_COLORS[tier], weight=2, opacity=0.7)),
            )
        )
    return layers


def legend_items() -> List[Dict[str, str]]:
    """
    Returns [{label, color, kind}, ...] where kind is "dot", "line" or "dashed".
    """
    items = [{"label": t.label, "color": TIER_COLORS[t], "kind": "dot"} for t in Tier]
    items += [{"label": f"{t.short_label} Routes", "color": TIER_COLORS[t], "kind": "line"} for t in Tier]
    items += [
        {"label": "Heavy Rail Backbone", "color": RAIL_COLOR, "kind": "line"},
        {"label": "Destination Hubs", "color": HUB_COLOR, "kind": "dot"},
        {"label": "Neighborhood Hubs", "color": NEIGHBORHOOD_HUB_COLOR, "kind": "dot"},
        {"label": "Nairobi Boundary", "color": HUB_COLOR, "kind": "dashed"},
    ]
    return items


def network_map(
    *,
    residential_nodes: Dict[str, Any],
    feeder_routes: Dict[str, Any],
    heavy_rail: Dict[str, Any],
    hubs_destinations: Dict[str, Any],
    neighborhood_hubs: Dict[str, Any],
    selected_tiers: Iterable[Any],
    center: Tuple[float, float] = DEFAULT_CENTER,
    zoom: int = DEFAULT_ZOOM,
    height: str = "100%",
    map_id: str = "network_map",
) -> dl.Map:
    """
    Builds the Spatial Network map. Layer order (bottom to top):
      residential nodes (tier-filtered), feeder routes (tier-filtered), heavy rail,
      destination hubs, neighborhood hubs, county boundary.
    """
    selected = as_tier_selection(selected_tiers)

    children = [
        dl.TileLayer(url=DARK_TILES_URL, attribution=DARK_TILES_ATTRIBUTION),
        residential_layer(residential_nodes, selected),
        dl.LayerGroup(feeder_route_layers(feeder_routes, selected), id="feeder_routes"),
        dl.GeoJSON(
            data=heavy_rail,
            id="heavy_rail",
            options=dict(style=dict(color=RAIL_COLOR, weight=3, opacity=0.9)),
        ),
        dl.LayerGroup(
            point_markers(
                hubs_destinations,
                radius=8,
                fill_color=HUB_COLOR,
                stroke_color="#FFFFFF",
                stroke_weight=2,
                tooltip_key="name",
            ),
            id="hubs_destinations",
        ),
        dl.LayerGroup(
            point_markers(
                neighborhood_hubs,
                radius=5,
                fill_color=NEIGHBORHOOD_HUB_COLOR,
                stroke_color="#FFFFFF",
                stroke_weight=1,
                tooltip_key="neighborhood",
            ),
            id="neighborhood_hubs",
        ),
        dl.GeoJSON(
            data=county_boundary_geojson(),
            id="county_boundary",
            options=dict(style=dict(color=HUB_COLOR, weight=2, opacity=0.8, fill=False, dashArray="4 2")),
        ),
    ]

    return dl.Map(
        id=map_id,
        center=list(center),
        zoom=int(zoom),
        children=children,
        style={"width": "100%", "height": height},
    )
