"""Tests for MCP server functionality."""

import json

import pytest

from transit_directions.core.persistence import encode_options
from transit_directions.mcp.server import TransitDirectionsMCPServer


def _json_data(content):
    """Extract the JSON block from a tool result."""
    text = content.text
    assert text.startswith("JSON Data:")
    return json.loads(text[len("JSON Data:") :])


class TestTransitDirectionsMCPServer:
    """Test cases for TransitDirectionsMCPServer."""

    @pytest.fixture
    def server(self):
        """Create a TransitDirectionsMCPServer instance for testing."""
        return TransitDirectionsMCPServer()

    @pytest.fixture
    def waypoint_arguments(self):
        """Waypoints as tool arguments."""
        return [
            {"latitude": 52.5, "longitude": 13.4, "name": "Alexanderplatz"},
            {"latitude": 52.51, "longitude": 13.38},
        ]

    def test_tools(self, server):
        """Test the advertised tools."""
        names = [tool.name for tool in server.tools()]
        assert names == ["build_route_request", "parse_directions_response"]

    @pytest.mark.asyncio
    async def test_list_tools(self, server):
        """Test that server has registered handlers."""
        assert hasattr(server.server, "list_tools")
        assert callable(server.server.list_tools)

    @pytest.mark.asyncio
    async def test_build_route_request(self, server, waypoint_arguments):
        """Test building a v5 request."""
        result = await server._build_route_request(
            {
                "waypoints": waypoint_arguments,
                "profile_identifier": "mapbox/cycling",
                "includes_steps": True,
            }
        )

        assert len(result) == 2
        assert "v5 request for 2 waypoints" in result[0].text

        data = _json_data(result[1])
        assert data["path"] == "directions/v5/mapbox/cycling/13.4,52.5;13.38,52.51.json"
        assert data["params"]["steps"] == "true"
        assert data["params"]["continue_straight"] == "false"
        assert data["options"]["waypoints"][0]["name"] == "Alexanderplatz"

    @pytest.mark.asyncio
    async def test_build_v4_request(self, server, waypoint_arguments):
        """Test building a v4 request."""
        result = await server._build_route_request(
            {
                "waypoints": waypoint_arguments,
                "version": "v4",
                "includes_shapes": False,
            }
        )

        data = _json_data(result[1])
        assert data["path"].startswith("v4/directions/mapbox.driving/")
        assert data["params"] == {
            "alternatives": "false",
            "instructions": "text",
            "geometry": "false",
            "steps": "false",
        }

    @pytest.mark.asyncio
    async def test_build_request_too_few_waypoints(self, server, waypoint_arguments):
        """Test a single waypoint is reported, not raised."""
        result = await server._build_route_request({"waypoints": waypoint_arguments[:1]})
        assert len(result) == 1
        assert "Invalid waypoints" in result[0].text

    @pytest.mark.asyncio
    async def test_build_request_invalid_arguments(self, server, waypoint_arguments):
        """Test invalid option values are reported."""
        result = await server._build_route_request(
            {"waypoints": waypoint_arguments, "shape_format": "wkt"}
        )
        assert "Invalid arguments" in result[0].text

        result = await server._build_route_request({"waypoints": [{"latitude": 1}] * 2})
        assert "Invalid arguments" in result[0].text

    @pytest.mark.asyncio
    async def test_parse_directions_response(
        self, server, route_options, sample_v5_payload
    ):
        """Test decoding a v5 payload."""
        result = await server._parse_directions_response(
            {"options": encode_options(route_options), "payload": sample_v5_payload}
        )

        assert "Decoded 2 waypoints and 1 routes" in result[0].text
        assert "Local-Name" in result[0].text

        data = _json_data(result[1])
        assert data["waypoints"][1]["name"] == "Potsdamer Platz"
        assert data["routes"][0]["legs"][0]["name"] == "Leipziger Straße"

    @pytest.mark.asyncio
    async def test_parse_v4_response(self, server, route_options, sample_v4_payload):
        """Test decoding a v4 payload."""
        result = await server._parse_directions_response(
            {
                "options": encode_options(route_options),
                "payload": sample_v4_payload,
                "version": "v4",
            }
        )
        assert "Decoded 3 waypoints" in result[0].text

    @pytest.mark.asyncio
    async def test_parse_v4_missing_origin(self, server, route_options, sample_v4_payload):
        """Test a v4 payload without origin is reported as undecodable."""
        del sample_v4_payload["origin"]
        result = await server._parse_directions_response(
            {
                "options": encode_options(route_options),
                "payload": sample_v4_payload,
                "version": "v4",
            }
        )
        assert len(result) == 1
        assert "could not be decoded" in result[0].text

    @pytest.mark.asyncio
    async def test_parse_invalid_options(self, server, sample_v5_payload):
        """Test an undecodable options record."""
        result = await server._parse_directions_response(
            {"options": {"waypoints": []}, "payload": sample_v5_payload}
        )
        assert "Options record could not be decoded" in result[0].text

    @pytest.mark.asyncio
    async def test_parse_unknown_version(self, server, route_options, sample_v5_payload):
        """Test an unknown API version."""
        result = await server._parse_directions_response(
            {
                "options": encode_options(route_options),
                "payload": sample_v5_payload,
                "version": "v6",
            }
        )
        assert "Unknown API version" in result[0].text

    @pytest.mark.asyncio
    async def test_unknown_tool(self, server):
        """Test calling a tool that does not exist."""
        result = await server.call_tool("search_route", {})
        assert result[0].text == "Unknown tool: search_route"

    @pytest.mark.asyncio
    async def test_call_tool_dispatch(self, server, waypoint_arguments):
        """Test dispatching by tool name."""
        result = await server.call_tool(
            "build_route_request", {"waypoints": waypoint_arguments}
        )
        assert "Path: directions/v5/mapbox/driving/" in result[0].text
