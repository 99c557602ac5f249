"""
app.py — Dash + dash-leaflet front-end for the Nairobi Transit & Socio-Economic Optimizer.

Pages
-----
- The Spatial Network: residential nodes + feeder routes (tier-filtered) over the rail
  backbone, destination hubs and neighborhood hubs
- Hub Analytics: per-hub ridership / connectivity charts, recomputed on every tier toggle
- The Impact Simulator: adoption-rate and matatu-vs-train commute what-ifs

The dataset is loaded once per data directory and cached for the process lifetime.
All numbers come from core.py; this file only lays them out and formats them.

Run:
  python app.py --data-dir path/to/web_exports
Then open:
  http://127.0.0.1:8050
"""

from __future__ import annotations

import argparse
import json
import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

import numpy as np
import plotly.graph_objects as go
from dash import Dash, Input, Output, State, dcc, html, no_update

# Backend
from core import (
    ADOPTION_RATE_BOUNDS,
    MATATU_SPEED_BOUNDS,
    TRAIN_SPEED_BOUNDS,
    DatasetSnapshot,
    ExecutiveMetrics,
    SimulatorInputs,
    Tier,
    as_tier_selection,
    compute_hub_analytics,
    run_impact_simulation,
    warm_start,
)
from network_map_component import ASSETS_DIR, TIER_COLORS, legend_items, network_map


logger = logging.getLogger(__name__)


# ----------------------------
# Defaults / config
# ----------------------------

# relative to the working directory
DATA_DIR = Path(
    os.environ.get("NAIROBI_TRANSIT_DATA_DIR", "web_exports")
).expanduser()

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8050

ALL_TIER_VALUES = [t.value for t in Tier]
DEFAULT_SIMULATOR = SimulatorInputs()

SURFACE = "#1E1E1E"
GRID = "#374151"
MUTED = "#9CA3AF"
GREEN = "#10B981"


# ----------------------------
# Cached dataset load (process lifetime)
# ----------------------------

@lru_cache(maxsize=4)
def get_snapshot_cached(data_dir: str) -> DatasetSnapshot:
    return warm_start(data_dir)


def get_snapshot() -> DatasetSnapshot:
    return get_snapshot_cached(str(DATA_DIR))


# ----------------------------
# Small helpers
# ----------------------------

def _format_compact(x: float) -> str:
    """1234567 -> 1.2M, 45300 -> 45.3K, 812.4 -> 812"""
    x = float(x)
    if x >= 1_000_000:
        return f"{x / 1_000_000:.1f}M"
    if x >= 1_000:
        return f"{x / 1_000:.1f}K"
    return f"{x:.0f}"


def _format_int(x: Any) -> str:
    try:
        return f"{float(x):,.0f}"
    except (TypeError, ValueError):
        return str(x)


def _clamp(value: Any, bounds: Tuple[float, float], default: float) -> float:
    try:
        v = float(value)
    except (TypeError, ValueError):
        return default
    if v != v:  # NaN
        return default
    return min(max(v, bounds[0]), bounds[1])


def _simulator_inputs_from_values(adoption: Any, matatu: Any, train: Any, tiers: Optional[Iterable[Any]]) -> SimulatorInputs:
    return SimulatorInputs(
        adoption_rate_percent=_clamp(adoption, ADOPTION_RATE_BOUNDS, DEFAULT_SIMULATOR.adoption_rate_percent),
        matatu_speed_kmh=_clamp(matatu, MATATU_SPEED_BOUNDS, DEFAULT_SIMULATOR.matatu_speed_kmh),
        train_speed_kmh=_clamp(train, TRAIN_SPEED_BOUNDS, DEFAULT_SIMULATOR.train_speed_kmh),
        selected_tiers=as_tier_selection(tiers),
    )


def _tier_heading(tiers: Iterable[Any]) -> str:
    selected = [t for t in Tier if t in as_tier_selection(tiers)]
    if not selected:
        return "No tiers selected"
    if len(selected) == 1:
        return selected[0].label
    return f"{len(selected)} Tiers Combined"


def _card_style() -> Dict[str, str]:
    return {
        "border": "1px solid #1F2937",
        "borderRadius": "10px",
        "padding": "20px",
        "background": SURFACE,
    }


def _tier_checklist(checklist_id: str, value: List[str]) -> dcc.Checklist:
    options = [
        {
            "label": html.Span(
                [html.Span(className="tier-dot", style={"background": TIER_COLORS[t]}), t.short_label],
                className="tier-option",
            ),
            "value": t.value,
        }
        for t in Tier
    ]
    return dcc.Checklist(id=checklist_id, options=options, value=value, inline=True, className="tier-checklist")


def _stat_card(title: str, value: str, color: Optional[str] = None, caption: Optional[str] = None) -> html.Div:
    children = [
        html.Div(title, className="stat-title"),
        html.Div(value, className="stat-value", style={"color": color} if color else None),
    ]
    if caption:
        children.append(html.Div(caption, className="caption"))
    return html.Div(children, className="stat-card")


def _empty_figure(message: str) -> go.Figure:
    fig = go.Figure()
    fig.add_annotation(text=message, showarrow=False, font=dict(color=MUTED, size=16))
    fig.update_layout(
        template="plotly_dark",
        paper_bgcolor=SURFACE,
        plot_bgcolor=SURFACE,
        xaxis=dict(visible=False),
        yaxis=dict(visible=False),
    )
    return fig


# ----------------------------
# Hub Analytics figures / table
# ----------------------------

def ridership_bar_figure(hubs: List[Dict[str, Any]]) -> go.Figure:
    """Bar per hub, in the order given (callers pass hubs sorted by ridership)."""
    if not hubs:
        return _empty_figure("No hubs for the selected tiers")

    fig = go.Figure(
        go.Bar(
            x=[h["target_hub"] for h in hubs],
            y=[h["estimated_daily_ridership"] for h in hubs],
            marker_color=TIER_COLORS[Tier.TIER_1],
            hovertemplate="%{x}<br>%{y:,.0f} passengers/day<extra></extra>",
        )
    )
    fig.update_layout(
        template="plotly_dark",
        paper_bgcolor=SURFACE,
        plot_bgcolor=SURFACE,
        height=400,
        margin=dict(l=60, r=20, t=20, b=120),
        xaxis=dict(tickangle=-45, gridcolor=GRID),
        yaxis=dict(title="Daily Ridership", gridcolor=GRID),
    )
    return fig


def population_scatter_figure(hubs: List[Dict[str, Any]]) -> go.Figure:
    """Population served vs average feeder distance; marker size grows with population."""
    if not hubs:
        return _empty_figure("No hubs for the selected tiers")

    pop = np.array([h["total_population_served"] for h in hubs], dtype=np.float64)
    peak = float(pop.max()) if pop.size else 0.0
    sizes = 8.0 + 30.0 * np.sqrt(pop / peak) if peak > 0 else np.full(pop.shape, 8.0)

    fig = go.Figure(
        go.Scatter(
            x=[h["avg_feeder_distance"] for h in hubs],
            y=pop,
            mode="markers",
            customdata=[h["target_hub"] for h in hubs],
            marker=dict(
                size=sizes,
                color=TIER_COLORS[Tier.TIER_1],
                opacity=0.7,
                line=dict(color="#FFFFFF", width=1),
            ),
            hovertemplate="Hub: %{customdata}<br>%{x:.2f} km<br>%{y:,.0f} people<extra></extra>",
        )
    )
    fig.update_layout(
        template="plotly_dark",
        paper_bgcolor=SURFACE,
        plot_bgcolor=SURFACE,
        height=500,
        margin=dict(l=70, r=20, t=20, b=60),
        xaxis=dict(title="Average Feeder Distance (km)", gridcolor=GRID),
        yaxis=dict(title="Total Population Served", gridcolor=GRID),
    )
    return fig


def hub_table(hubs: List[Dict[str, Any]]) -> html.Table:
    header = html.Tr([
        html.Th("Target Hub"),
        html.Th("Feeder Routes", className="num"),
        html.Th("Population Served", className="num"),
        html.Th("Avg Distance (km)", className="num"),
        html.Th("Daily Ridership", className="num"),
    ])
    rows = [
        html.Tr(
            [
                html.Td(h["target_hub"], style={"fontWeight": 600}),
                html.Td(str(h["total_feeder_routes"]), className="num"),
                html.Td(_format_compact(h["total_population_served"]), className="num"),
                html.Td(f"{h['avg_feeder_distance']:.2f}", className="num"),
                html.Td(
                    _format_compact(h["estimated_daily_ridership"]),
                    className="num",
                    style={"color": TIER_COLORS[Tier.TIER_1], "fontWeight": 600},
                ),
            ],
            className="striped" if i % 2 == 0 else None,
        )
        for i, h in enumerate(hubs)
    ]
    return html.Table([html.Thead(header), html.Tbody(rows)], className="hub-table")


# ----------------------------
# Header / legend
# ----------------------------

def header_children(metrics: ExecutiveMetrics) -> List[Any]:
    return [
        html.H1("The Nairobi Transit & Socio-Economic Optimizer"),
        html.Div(
            [
                html.Span("Tier 1 Commute: ", className="muted"),
                html.B(f"{metrics.avg_tier1_commute_km:.2f} km", style={"color": TIER_COLORS[Tier.TIER_1]}),
                html.Span(" vs ", className="muted"),
                html.Span("Tier 3 Commute: ", className="muted"),
                html.B(f"{metrics.avg_tier3_commute_km:.2f} km", style={"color": TIER_COLORS[Tier.TIER_3]}),
                html.Span(f"{metrics.commute_penalty_multiplier:.2f}x Penalty", className="pill penalty"),
                html.Span(f"{metrics.total_network_km:,.1f} km network", className="pill"),
            ],
            className="kpis",
        ),
    ]


def _legend() -> html.Div:
    rows = []
    for item in legend_items():
        kind = item["kind"]
        swatch = {"borderColor": item["color"]} if kind == "dashed" else {"background": item["color"]}
        rows.append(
            html.Div(
                [html.Span(className=f"legend-{kind}", style=swatch), html.Span(item["label"], className="muted")],
                className="legend-row",
            )
        )
    return html.Div([html.H4("Legend"), *rows], className="legend")


# ----------------------------
# Dash app
# ----------------------------

app = Dash(__name__, title="Nairobi Transit Optimizer", assets_folder=str(ASSETS_DIR))
server = app.server

map_page = html.Div(
    className="map-page",
    children=[
        html.Div(id="map_container", className="map-container"),
        html.Div(
            className="map-sidebar",
            children=[
                html.H3("Select Tiers to Display"),
                _tier_checklist("map_tiers", ALL_TIER_VALUES),
                _legend(),
            ],
        ),
    ],
)

analytics_page = html.Div(
    className="page",
    children=[
        html.Div(
            className="page-title-row",
            children=[
                html.Div([
                    html.H2("Hub Analytics"),
                    html.Div("Data-driven insights into transit hub performance and connectivity", className="muted"),
                ]),
                _tier_checklist("hub_tiers", ALL_TIER_VALUES),
            ],
        ),
        html.Div(
            [
                html.H3("Estimated Daily Ridership by Target Hub"),
                html.Div("Hubs are sorted by ridership in descending order", className="caption"),
                dcc.Graph(id="ridership_bar", config={"displayModeBar": False}),
                html.Div(id="hub_stat_cards", className="stat-grid"),
            ],
            style=_card_style(),
        ),
        html.Div(
            [
                html.H3("Population Served vs Average Feeder Distance"),
                html.Div(
                    "Each point represents a target hub. Larger dots indicate higher total population served.",
                    className="caption",
                ),
                dcc.Graph(id="population_scatter", config={"displayModeBar": False}),
            ],
            style=_card_style(),
        ),
        html.Div(
            [
                html.Div(
                    [
                        html.H3("Detailed Hub Statistics"),
                        html.Button("Download hub table JSON", id="download_hubs_btn", className="btn"),
                    ],
                    className="page-title-row",
                ),
                html.Div(id="hub_table", className="table-wrap"),
            ],
            style=_card_style(),
        ),
    ],
)

simulator_page = html.Div(
    className="page",
    children=[
        html.Div(
            className="page-title-row",
            children=[
                html.Div([
                    html.H2("The Impact Simulator"),
                    html.Div("Calculate the human and economic value of transit transformation", className="muted"),
                ]),
                _tier_checklist("sim_tiers", [t.value for t in Tier if t in DEFAULT_SIMULATOR.selected_tiers]),
            ],
        ),
        html.Div(
            [
                html.H3("Simulator 1: Transit Adoption Rate"),
                html.Div("How many passengers will use the new transit system?", className="caption"),
                html.Div([html.Span("Adoption Rate", className="label"), html.Span(id="adoption_value", className="slider-value")],
                         className="slider-head"),
                dcc.Slider(
                    id="adoption_rate",
                    min=ADOPTION_RATE_BOUNDS[0], max=ADOPTION_RATE_BOUNDS[1], step=1,
                    value=DEFAULT_SIMULATOR.adoption_rate_percent,
                    marks={10: "10%", 100: "100%"},
                ),
                html.Div(id="adoption_results", className="stat-grid two"),
            ],
            style=_card_style(),
        ),
        html.Div(
            [
                html.H3("Simulator 2: The Time Machine"),
                html.Div("Compare current matatu commute times vs. proposed train speed", className="caption"),
                html.Div([html.Span("Current Matatu Speed", className="label"), html.Span(id="matatu_value", className="slider-value")],
                         className="slider-head"),
                dcc.Slider(
                    id="matatu_speed",
                    min=MATATU_SPEED_BOUNDS[0], max=MATATU_SPEED_BOUNDS[1], step=1,
                    value=DEFAULT_SIMULATOR.matatu_speed_kmh,
                    marks={5: "5 km/h", 30: "30 km/h"},
                ),
                html.Div([html.Span("Proposed Train Speed", className="label"), html.Span(id="train_value", className="slider-value")],
                         className="slider-head"),
                dcc.Slider(
                    id="train_speed",
                    min=TRAIN_SPEED_BOUNDS[0], max=TRAIN_SPEED_BOUNDS[1], step=1,
                    value=DEFAULT_SIMULATOR.train_speed_kmh,
                    marks={20: "20 km/h", 40: "Standard: 40", 160: "High-Speed: 160+", 300: "300 km/h"},
                ),
                html.Div(id="time_results"),
            ],
            style=_card_style(),
        ),
        html.Div(
            [html.H4("Calculation Methodology"), html.Div(id="methodology", className="methodology")],
            style=_card_style(),
        ),
    ],
)

app.layout = html.Div(
    [
        # Stores
        dcc.Store(id="dataset_status", data=None),  # {"ok": bool, ...}
        dcc.Download(id="download_hubs_json"),

        html.Div(
            id="loading_panel",
            className="fullscreen",
            children=[
                html.Div("Initializing Nairobi Transit Matrix...", className="loading-title"),
                html.Div("Loading network data", className="muted"),
            ],
        ),
        html.Div(
            id="error_panel",
            className="fullscreen",
            style={"display": "none"},
            children=html.Div(
                [
                    html.H2("Error Loading Data"),
                    html.P(id="error_message"),
                    html.Button("Retry", id="retry_btn", className="btn btn-primary"),
                ],
                className="error-card",
            ),
        ),
        html.Div(
            id="main_panel",
            style={"display": "none"},
            children=[
                html.Header(id="header", className="header"),
                dcc.Tabs(
                    id="page_tabs",
                    value="map",
                    className="tabs",
                    children=[
                        dcc.Tab(label="The Spatial Network", value="map", children=map_page),
                        dcc.Tab(label="Hub Analytics", value="analytics", children=analytics_page),
                        dcc.Tab(label="The Impact Simulator", value="simulator", children=simulator_page),
                    ],
                ),
            ],
        ),
    ]
)


# ----------------------------
# Dataset load (+ retry)
# ----------------------------

@app.callback(
    Output("dataset_status", "data"),
    Output("loading_panel", "style"),
    Output("error_panel", "style"),
    Output("error_message", "children"),
    Output("main_panel", "style"),
    Input("retry_btn", "n_clicks"),
)
def load_dataset(n_retry):
    if n_retry:
        get_snapshot_cached.cache_clear()

    hidden = {"display": "none"}
    try:
        get_snapshot()
    except (OSError, ValueError) as e:
        logger.exception("Failed to load dataset from %s", DATA_DIR)
        return {"ok": False, "error": str(e)}, hidden, {"display": "flex"}, str(e), hidden

    return {"ok": True, "data_dir": str(DATA_DIR), "attempt": int(n_retry or 0)}, hidden, hidden, "", {"display": "block"}


@app.callback(
    Output("header", "children"),
    Input("dataset_status", "data"),
)
def render_header(status):
    if not (status or {}).get("ok"):
        return no_update
    return header_children(get_snapshot().executive_metrics)


# ----------------------------
# The Spatial Network
# ----------------------------

@app.callback(
    Output("map_container", "children"),
    Input("map_tiers", "value"),
    Input("dataset_status", "data"),
)
def render_map(tiers, status):
    if not (status or {}).get("ok"):
        return no_update
    snap = get_snapshot()
    return network_map(
        residential_nodes=snap.residential_nodes_geojson,
        feeder_routes=snap.feeder_routes_geojson,
        heavy_rail=snap.heavy_rail_backbone_geojson,
        hubs_destinations=snap.hubs_destinations_geojson,
        neighborhood_hubs=snap.neighborhood_hubs_geojson,
        selected_tiers=as_tier_selection(tiers),
    )


# ----------------------------
# Hub Analytics
# ----------------------------

@app.callback(
    Output("ridership_bar", "figure"),
    Output("hub_stat_cards", "children"),
    Output("population_scatter", "figure"),
    Output("hub_table", "children"),
    Input("hub_tiers", "value"),
    Input("dataset_status", "data"),
)
def render_hub_analytics(tiers, status):
    if not (status or {}).get("ok"):
        return no_update, no_update, no_update, no_update

    out = compute_hub_analytics(get_snapshot(), as_tier_selection(tiers))
    hubs = out["hubs"]
    summary = out["summary"]

    cards = [
        _stat_card("Total Hubs" if out["all_tiers"] else "Selected Tier Hubs", str(summary["hub_count"])),
        _stat_card("Total Daily Ridership", _format_compact(summary["total_daily_ridership"]), TIER_COLORS[Tier.TIER_1]),
        _stat_card("Total Population Served", _format_compact(summary["total_population_served"]), TIER_COLORS[Tier.TIER_3]),
    ]
    return ridership_bar_figure(hubs), cards, population_scatter_figure(hubs), hub_table(hubs)


@app.callback(
    Output("download_hubs_json", "data"),
    Input("download_hubs_btn", "n_clicks"),
    State("hub_tiers", "value"),
    prevent_initial_call=True,
)
def download_hub_table(_n, tiers):
    try:
        snap = get_snapshot()
    except (OSError, ValueError):
        logger.exception("Hub table download requested but the dataset is unavailable")
        return no_update
    out = compute_hub_analytics(snap, as_tier_selection(tiers))
    return dict(content=json.dumps(out, indent=2), filename="hub_connectivity_stats.json")


# ----------------------------
# The Impact Simulator
# ----------------------------

def _time_results(sim: Dict[str, Any], tiers: Iterable[Any]) -> List[Any]:
    ts = sim["time_savings"]
    passengers = sim["total_daily_passengers"]
    trips = sim["constants"]["trips_per_day"]
    days = sim["constants"]["working_days_per_week"]

    return [
        html.Div(
            [
                html.Div(f"Average Commute Distance ({_tier_heading(tiers)})", className="stat-title"),
                html.Div(f"{sim['base_distance_km']:.2f} km", className="stat-value", style={"color": TIER_COLORS[Tier.TIER_1]}),
            ],
            className="stat-card highlight",
        ),
        html.Div(
            [
                _stat_card("Matatu Commute Time", f"{ts['matatu_time_minutes']:.1f}", TIER_COLORS[Tier.TIER_3], "minutes per trip"),
                _stat_card("Train Commute Time", f"{ts['train_time_minutes']:.1f}", GREEN, "minutes per trip"),
            ],
            className="stat-grid two",
        ),
        _stat_card(
            "Time Saved Per Trip",
            f"{ts['time_saved_per_trip_minutes']:.1f} minutes",
            GREEN,
            f"({ts['time_saved_per_trip_hours']:.2f} hours)",
        ),
        html.Div(
            [
                html.Div("The Massive Impact", className="kpi-eyebrow"),
                html.H4("Hours Saved Per Worker, Per Week"),
                html.Div(f"{ts['hours_saved_per_week']:.1f}", className="kpi-big"),
                html.Div(f"hours reclaimed every week for {_format_int(passengers)} workers across selected tiers"),
                html.Div(f"Based on {trips} trips/day × {days} days/week", className="caption"),
            ],
            className="kpi-hero",
        ),
        html.Div(
            [
                _stat_card("Weekly Time Saved", f"{ts['minutes_saved_per_week']:.0f} min"),
                _stat_card("Monthly Time Saved", f"{ts['hours_saved_per_month']:.1f} hrs"),
                _stat_card("Yearly Time Saved", f"{ts['hours_saved_per_year']:.0f} hrs", TIER_COLORS[Tier.TIER_1]),
            ],
            className="stat-grid",
        ),
    ]


def _methodology(sim: Dict[str, Any]) -> List[Any]:
    ts = sim["time_savings"]
    inp = sim["inputs"]
    d = sim["base_distance_km"]
    trips = sim["constants"]["trips_per_day"]
    days = sim["constants"]["working_days_per_week"]
    lines = [
        ("Total Daily Passengers =",
         f"{_format_int(sim['base_network_capacity'])} × ({inp['adoption_rate_percent']:g}% / 100) = "
         f"{_format_int(sim['total_daily_passengers'])}"),
        ("Matatu Time (hours) =",
         f"{d:.2f} km / {inp['matatu_speed_kmh']:g} km/h = {ts['matatu_time_hours']:.2f} hrs"),
        ("Train Time (hours) =",
         f"{d:.2f} km / {inp['train_speed_kmh']:g} km/h = {ts['train_time_hours']:.2f} hrs"),
        ("Hours Saved Per Week =",
         f"({ts['time_saved_per_trip_hours']:.2f} hrs × {trips}) × {days} = {ts['hours_saved_per_week']:.2f} hrs"),
    ]
    return [html.Div([html.Div(k, className="muted"), html.Code(v)], className="formula") for k, v in lines]


@app.callback(
    Output("adoption_value", "children"),
    Output("matatu_value", "children"),
    Output("train_value", "children"),
    Output("adoption_results", "children"),
    Output("time_results", "children"),
    Output("methodology", "children"),
    Input("adoption_rate", "value"),
    Input("matatu_speed", "value"),
    Input("train_speed", "value"),
    Input("sim_tiers", "value"),
    Input("dataset_status", "data"),
)
def render_simulator(adoption, matatu, train, tiers, status):
    if not (status or {}).get("ok"):
        return (no_update,) * 6

    inputs = _simulator_inputs_from_values(adoption, matatu, train, tiers)
    sim = run_impact_simulation(get_snapshot().executive_metrics, inputs)

    adoption_cards = [
        _stat_card("Base Network Capacity", _format_int(sim["base_network_capacity"]), None, "passengers per day (100%)"),
        _stat_card(
            "Total Daily Passengers",
            _format_int(sim["total_daily_passengers"]),
            TIER_COLORS[Tier.TIER_1],
            f"at {inputs.adoption_rate_percent:g}% adoption rate",
        ),
    ]
    return (
        f"{inputs.adoption_rate_percent:g}%",
        f"{inputs.matatu_speed_kmh:g} km/h",
        f"{inputs.train_speed_kmh:g} km/h",
        adoption_cards,
        _time_results(sim, inputs.selected_tiers),
        _methodology(sim),
    )


# ----------------------------
# Entry point
# ----------------------------

def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Nairobi transit network dashboard")
    ap.add_argument("--data-dir", default=str(DATA_DIR), help="Directory holding the exported CSV/GeoJSON files")
    ap.add_argument("--host", default=DEFAULT_HOST)
    ap.add_argument("--port", type=int, default=DEFAULT_PORT)
    ap.add_argument("--debug", action="store_true", help="Run the Dash dev server with hot reload")
    ap.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return ap.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    global DATA_DIR

    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    DATA_DIR = Path(args.data_dir).expanduser()
    logger.info("Serving dataset from %s", DATA_DIR)

    # Dash default is http://127.0.0.1:8050
    app.run(debug=args.debug, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
