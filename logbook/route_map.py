#!/usr/bin/env python3
"""
Render a PNG map of visited airports and the routes flown between them.

Airports and routes are deduplicated across the (optionally date-filtered)
logbook, then drawn as red markers and black lines on a plain
longitude/latitude plot.

Usage:
    python -m logbook.route_map --config config.ini
    python -m logbook.route_map --config config.ini --filter-date 2023 --no-routes
"""

import argparse
import math
from dataclasses import dataclass, field

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from .airports import load_airports
from .config import Config
from .errors import ConfigInvalid, RenderFailure
from .records import parse_rows
from .sources import fetch_rows
from .totals import TotalsRecord, fold

DPI = 100
MARKER_COLOR = (1.0, 0.0, 0.0)
MARKER_SIZE_PX = 16.0
ROUTE_COLOR = 'black'
ROUTE_WIDTH = 0.5
MAP_PADDING_DEG = 2.0


@dataclass
class MapSummary:
    airports: set = field(default_factory=set)
    routes: set = field(default_factory=set)
    # route key -> (first, second) airport codes
    endpoints: dict = field(default_factory=dict)
    totals: TotalsRecord = field(default_factory=TotalsRecord)


def route_key(departure, arrival):
    """Undirected route key: "A-B" with the two codes sorted."""
    first, second = sorted((departure, arrival))
    return f"{first}-{second}"


def build_map(records, date_filter='', include_routes=True):
    """Collect unique airports and routes from the logbook.

    Args:
        records: Iterable of FlightRecord.
        date_filter: Keep only records whose date contains this text
            ("2023", "2023-05"); empty keeps everything.
        include_routes: Whether to collect routes at all.

    Returns:
        MapSummary with airport codes, route keys and the totals of the
        included records.
    """
    summary = MapSummary()
    for record in records:
        if date_filter and date_filter not in record.date:
            continue

        departure = record.departure.place
        arrival = record.arrival.place
        summary.airports.add(departure)
        summary.airports.add(arrival)

        # Pattern work and local flights never draw a line
        if include_routes and departure != arrival:
            key = route_key(departure, arrival)
            summary.routes.add(key)
            summary.endpoints[key] = tuple(sorted((departure, arrival)))

        summary.totals = fold(summary.totals, record)
    return summary


def map_primitives(summary, airports):
    """Turn airport codes and route keys into drawable coordinates.

    Codes missing from the airport database are skipped.

    Returns:
        Tuple (markers, lines): markers are (code, lat, lon), lines are
        ((lat1, lon1), (lat2, lon2)).
    """
    markers = []
    for code in summary.airports:
        coords = airports.lookup(code)
        if coords is not None:
            markers.append((code, coords[0], coords[1]))

    lines = []
    for route in summary.routes:
        first, second = summary.endpoints[route]
        start = airports.lookup(first)
        end = airports.lookup(second)
        if start is not None and end is not None:
            lines.append((start, end))

    return markers, lines


def _extent(markers, lines):
    lats = [m[1] for m in markers] + [p[0] for line in lines for p in line]
    lons = [m[2] for m in markers] + [p[1] for line in lines for p in line]
    if not lats:
        return (-180.0, 180.0), (-90.0, 90.0)
    pad = MAP_PADDING_DEG
    return ((min(lons) - pad, max(lons) + pad),
            (max(min(lats) - pad, -90.0), min(max(lats) + pad, 90.0)))


def render_map(markers, lines, output_file, width=1920, height=1080):
    """Draw markers and route lines to a PNG file.

    Raises:
        RenderFailure: If the image cannot be written.
    """
    fig, ax = plt.subplots(figsize=(width / DPI, height / DPI), dpi=DPI)
    try:
        for (lat1, lon1), (lat2, lon2) in lines:
            ax.plot([lon1, lon2], [lat1, lat2], color=ROUTE_COLOR,
                    linewidth=ROUTE_WIDTH, zorder=1)

        if markers:
            ax.plot([m[2] for m in markers], [m[1] for m in markers], 'o',
                    color=MARKER_COLOR,
                    markersize=MARKER_SIZE_PX * 72 / DPI, zorder=2)

        (lon_min, lon_max), (lat_min, lat_max) = _extent(markers, lines)
        ax.set_xlim(lon_min, lon_max)
        ax.set_ylim(lat_min, lat_max)
        # Equirectangular look at the map's mean latitude
        mid_lat = math.radians((lat_min + lat_max) / 2)
        ax.set_aspect(1 / max(math.cos(mid_lat), 0.1), adjustable='datalim')
        ax.grid(True, color='#dddddd', linewidth=0.5)
        ax.set_xlabel('Longitude')
        ax.set_ylabel('Latitude')

        plt.tight_layout()
        try:
            fig.savefig(output_file, format='png', dpi=DPI)
        except (OSError, ValueError) as e:
            raise RenderFailure(f"Cannot save a map {output_file}: {e}") from e
    finally:
        plt.close(fig)


def print_summary(summary):
    print(f"Airports: {len(summary.airports)}")
    print(f"Routes: {len(summary.routes)}")
    print(f"Total time: {summary.totals.times.total.render_for_totals()}")
    print(f"Landings: {summary.totals.landings.day} day, "
          f"{summary.totals.landings.night} night")


def render_route_map(config, records=None):
    """Fetch the logbook and render the airports map.

    Args:
        config: Config with source and [map] settings.
        records: Already parsed records; fetched from the source when None.

    Returns:
        MapSummary.
    """
    try:
        airports = load_airports(config.custom_airports or None)
    except (OSError, ValueError, KeyError, TypeError) as e:
        raise ConfigInvalid(f"Cannot load airports database: {e}") from e

    if records is None:
        config.validate()
        rows = fetch_rows(config)
        records = parse_rows(rows, config.start_row)

    summary = build_map(records, config.filter_date,
                        include_routes=not config.filter_no_routes)
    print_summary(summary)

    markers, lines = map_primitives(summary, airports)
    render_map(markers, lines, config.map_output,
               config.map_width, config.map_height)
    print(f"Map has been saved to {config.map_output}")
    return summary


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='Render map of visited airports')
    parser.add_argument('--config', '-c', default='config.ini', help='Config file path')
    parser.add_argument('--filter-date', '-d', default=None,
                        help='Only map flights whose DATE contains this text')
    parser.add_argument('--no-routes', action='store_true', default=None,
                        help='Skip rendering routes on the map')
    args = parser.parse_args()
    cfg = Config.from_file(args.config)
    cfg.override(filter_date=args.filter_date, filter_no_routes=args.no_routes)
    render_route_map(cfg)
