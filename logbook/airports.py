"""
Airport coordinate database.

The bundled db/airports.json maps ICAO codes to coordinates:

    {"EGLL": {"name": "London Heathrow", "lat": 51.4706, "lon": -0.4619}, ...}

To add airports for your flying area, point custom_airports in config.ini
at a JSON file in either that shape or the short form:

    {"ICAO": [latitude, longitude], ...}
"""

import json
import os

BUNDLED_AIRPORTS = os.path.join(os.path.dirname(__file__), 'db', 'airports.json')


def _coords(entry):
    if isinstance(entry, dict):
        return float(entry['lat']), float(entry['lon'])
    lat, lon = entry
    return float(lat), float(lon)


def load_airports_file(filepath):
    """Load airports from a JSON file.

    Args:
        filepath: Path to JSON file with airport coordinates.

    Returns:
        Dict of ICAO code -> (lat, lon) tuples.
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        data = json.load(f)
    return {code.strip().upper(): _coords(v) for code, v in data.items()}


class AirportDatabase:
    """Read-only code -> (lat, lon) lookup."""

    def __init__(self, airports):
        self._airports = dict(airports)

    def lookup(self, code):
        """Return (lat, lon) for an airport code, or None if unknown."""
        if not code:
            return None
        return self._airports.get(code.strip().upper())

    def __contains__(self, code):
        return self.lookup(code) is not None

    def __len__(self):
        return len(self._airports)


def load_airports(custom_file=None):
    """Get combined airport database (bundled + custom).

    Args:
        custom_file: Optional path to JSON file with additional airports.
            Entries override bundled ones with the same code.

    Returns:
        AirportDatabase.
    """
    airports = load_airports_file(BUNDLED_AIRPORTS)
    if custom_file:
        airports.update(load_airports_file(custom_file))
    return AirportDatabase(airports)
