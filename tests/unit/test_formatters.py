"""Unit tests for CLI formatters."""

import json
from io import StringIO
from unittest.mock import patch

import pytest
from rich.console import Console

from transit_directions.cli.formatters import (
    format_distance,
    format_duration,
    format_options_table,
    format_request_json,
    format_request_table,
    format_response_detailed,
    format_response_json,
    format_response_table,
)
from transit_directions.core.options import MeasurementSystem
from transit_directions.core.request import build_params, build_path
from transit_directions.core.response import parse_response


class TestFormatters:
    """Test CLI formatters."""

    @pytest.fixture(autouse=True)
    def _setup(self, route_options, sample_v5_payload):
        """Set up test fixtures."""
        self.options = route_options
        self.response = parse_response(route_options, sample_v5_payload)

    @pytest.mark.parametrize(
        "seconds, expected",
        [(0, "00 min"), (59, "00 min"), (420, "07 min"), (842.3, "14 min"), (3900, "1 h 05 min")],
    )
    def test_format_duration(self, seconds, expected):
        """Test travel time formatting."""
        assert format_duration(seconds) == expected

    def test_format_distance(self):
        """Test distances in both measurement systems."""
        assert format_distance(412) == "412 m"
        assert format_distance(3412.6) == "3.4 km"
        assert format_distance(1609.344, MeasurementSystem.IMPERIAL) == "1.0 mi"

    def test_format_request_table(self):
        """Test request table output."""
        console = Console(file=StringIO(), width=200)
        with patch("transit_directions.cli.formatters.console", console):
            format_request_table(build_path(self.options), build_params(self.options))
            output = console.file.getvalue()

        assert "directions/v5/mapbox/driving" in output
        assert "continue_straight" in output
        assert "Query Parameters" in output

    def test_format_request_json(self):
        """Test request JSON output."""
        output = format_request_json(
            build_path(self.options), build_params(self.options), self.options
        )
        data = json.loads(output)
        assert data["path"].startswith("directions/v5/")
        assert {"name": "geometries", "value": "polyline"} in data["params"]
        assert data["options"]["profileIdentifier"] == "mapbox/driving"

    def test_format_options_table(self):
        """Test options table output."""
        console = Console(file=StringIO(), width=200)
        with patch("transit_directions.cli.formatters.console", console):
            format_options_table(self.options)
            output = console.file.getvalue()

        assert "Route Options (mapbox/driving)" in output
        assert "Local-Name" in output
        assert "simplified" in output

    def test_format_response_table(self):
        """Test response table output."""
        console = Console(file=StringIO(), width=200)
        with patch("transit_directions.cli.formatters.console", console):
            format_response_table(self.response, verbose=True)
            output = console.file.getvalue()

        assert "Waypoints" in output
        assert "Local-Name" in output
        assert "14 min" in output
        assert "3.4 km" in output
        assert "Head southwest on Grunerstraße" in output

    def test_format_response_table_without_routes(self):
        """Test a response that carried no routes."""
        self.response.routes = None
        console = Console(file=StringIO(), width=200)
        with patch("transit_directions.cli.formatters.console", console):
            format_response_table(self.response)
            output = console.file.getvalue()

        assert "No routes in response" in output

    def test_format_response_detailed(self):
        """Test detailed output."""
        console = Console(file=StringIO(), width=200)
        with patch("transit_directions.cli.formatters.console", console):
            format_response_detailed(self.response)
            output = console.file.getvalue()

        assert "Route 1 Summary" in output
        assert "Leg 1" in output
        assert "Leipziger Straße" in output

    def test_format_response_json(self):
        """Test response JSON output."""
        data = json.loads(format_response_json(self.response))
        assert data["waypoints"][0]["name"] == "Local-Name"
        assert data["routes"][0]["distance"] == 3412.6
        assert "route_options" not in data["routes"][0]
