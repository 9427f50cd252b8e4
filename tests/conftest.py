"""Test configuration and fixtures."""

import pytest

from transit_directions.core.models import Coordinate, Waypoint
from transit_directions.core.options import RouteOptions


@pytest.fixture
def berlin_waypoints():
    """Two waypoints in central Berlin."""
    return [
        Waypoint(
            coordinate=Coordinate(latitude=52.5, longitude=13.4), name="Local-Name"
        ),
        Waypoint(coordinate=Coordinate(latitude=52.51, longitude=13.38)),
    ]


@pytest.fixture
def route_options(berlin_waypoints):
    """Default v5 route options between the Berlin waypoints."""
    return RouteOptions(waypoints=berlin_waypoints)


@pytest.fixture
def sample_v5_payload():
    """Sample v5 directions response."""
    return {
        "code": "Ok",
        "waypoints": [
            {"location": [13.4, 52.5], "name": "API-Name"},
            {"location": [13.38, 52.51], "name": "Potsdamer Platz"},
        ],
        "routes": [
            {
                "distance": 3412.6,
                "duration": 842.3,
                "geometry": "_dh_Ia~|pAlBbHxAfFvCnJ",
                "legs": [
                    {
                        "summary": "Leipziger Straße",
                        "distance": 3412.6,
                        "duration": 842.3,
                        "steps": [
                            {
                                "distance": 412.0,
                                "duration": 98.5,
                                "name": "Grunerstraße",
                                "maneuver": {
                                    "type": "depart",
                                    "instruction": "Head southwest on Grunerstraße",
                                },
                            }
                        ],
                    }
                ],
            }
        ],
    }


def _point(longitude, latitude, name=None):
    feature = {
        "type": "Feature",
        "geometry": {"type": "Point", "coordinates": [longitude, latitude]},
        "properties": {},
    }
    if name:
        feature["properties"]["name"] = name
    return feature


@pytest.fixture
def sample_v4_payload():
    """Sample v4 directions response."""
    return {
        "origin": _point(13.4, 52.5, "Alexanderplatz"),
        "destination": _point(13.38, 52.51, "Potsdamer Platz"),
        "waypoints": [_point(13.39, 52.505, "Spittelmarkt")],
        "routes": [
            {
                "distance": 3100.0,
                "duration": 780.0,
                "summary": "Leipziger Straße",
                "geometry": {"type": "LineString", "coordinates": [[13.4, 52.5], [13.38, 52.51]]},
                "steps": [
                    {
                        "distance": 3100.0,
                        "duration": 780.0,
                        "way_name": "Leipziger Straße",
                        "maneuver": {"type": "depart", "instruction": "Head west"},
                    }
                ],
            }
        ],
    }
