"""MCP Server for Transit Directions.

This module implements a Model Context Protocol (MCP) server that exposes
route request building and directions response decoding.
"""

import asyncio
import json
import logging
from typing import Any

from mcp.server import NotificationOptions, Server
from mcp.server.models import InitializationOptions
from mcp.types import (
    TextContent,
    Tool,
)
from pydantic import ValidationError

from .. import __version__
from ..core.exceptions import WaypointCountError
from ..core.models import Coordinate, Waypoint
from ..core.options import (
    ApiVersion,
    InstructionFormat,
    ProfileIdentifier,
    RouteOptions,
    ShapeFormat,
    ShapeResolution,
    V4Options,
)
from ..core.persistence import decode_options, encode_options
from ..core.request import build_params, build_path
from ..core.response import parse_response

logger = logging.getLogger(__name__)


class TransitDirectionsMCPServer:
    """MCP Server for Transit Directions functionality."""

    def __init__(self) -> None:
        """Initialize the Transit Directions MCP Server."""
        self.server = Server("transit-directions")
        self._register_handlers()

    def _register_handlers(self) -> None:
        """Register MCP protocol handlers."""

        @self.server.list_tools()
        async def handle_list_tools() -> list[Tool]:
            """List available tools."""
            return self.tools()

        @self.server.call_tool()
        async def handle_call_tool(
            name: str, arguments: dict[str, Any]
        ) -> list[TextContent]:
            """Handle tool calls."""
            return await self.call_tool(name, arguments)

    def tools(self) -> list[Tool]:
        """Describe the tools this server offers."""
        return [
            Tool(
                name="build_route_request",
                description="Build the Directions API request path, query parameters and persisted options record for a route",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "waypoints": {
                            "type": "array",
                            "description": "Stops in visiting order, source first",
                            "minItems": 2,
                            "maxItems": 25,
                            "items": {
                                "type": "object",
                                "properties": {
                                    "latitude": {"type": "number"},
                                    "longitude": {"type": "number"},
                                    "name": {"type": "string"},
                                },
                                "required": ["latitude", "longitude"],
                            },
                        },
                        "profile_identifier": {
                            "type": "string",
                            "enum": [p.value for p in ProfileIdentifier],
                            "default": ProfileIdentifier.AUTOMOBILE.value,
                        },
                        "version": {
                            "type": "string",
                            "enum": [v.value for v in ApiVersion],
                            "default": ApiVersion.V5.value,
                        },
                        "includes_alternative_routes": {"type": "boolean", "default": False},
                        "includes_steps": {"type": "boolean", "default": False},
                        "shape_format": {
                            "type": "string",
                            "enum": [f.value for f in ShapeFormat],
                        },
                        "route_shape_resolution": {
                            "type": "string",
                            "enum": [r.value for r in ShapeResolution],
                        },
                        "locale": {
                            "type": "string",
                            "description": "Locale identifier, e.g. en_US",
                        },
                        "instruction_format": {
                            "type": "string",
                            "enum": [f.value for f in InstructionFormat],
                            "description": "Step instruction format (v4 only)",
                        },
                        "includes_shapes": {
                            "type": "boolean",
                            "description": "Whether geometry is returned (v4 only)",
                            "default": True,
                        },
                    },
                    "required": ["waypoints"],
                },
            ),
            Tool(
                name="parse_directions_response",
                description="Decode a Directions API JSON payload into waypoints and routes, given the persisted options record of the request",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "options": {
                            "type": "object",
                            "description": "Persisted options record from build_route_request",
                        },
                        "payload": {
                            "type": "object",
                            "description": "Raw JSON response of the Directions API",
                        },
                        "version": {
                            "type": "string",
                            "enum": [v.value for v in ApiVersion],
                            "default": ApiVersion.V5.value,
                        },
                    },
                    "required": ["options", "payload"],
                },
            ),
        ]

    async def call_tool(
        self, name: str, arguments: dict[str, Any]
    ) -> list[TextContent]:
        """Dispatch a tool call by name."""
        try:
            if name == "build_route_request":
                return await self._build_route_request(arguments)
            elif name == "parse_directions_response":
                return await self._parse_directions_response(arguments)
            else:
                return [TextContent(type="text", text=f"Unknown tool: {name}")]

        except Exception as e:
            logger.error(f"Error in tool {name}: {e}")
            return [TextContent(type="text", text=f"Error: {str(e)}")]

    async def _build_route_request(
        self, arguments: dict[str, Any]
    ) -> list[TextContent]:
        """Build a request from tool arguments."""
        try:
            waypoints = [
                Waypoint(
                    coordinate=Coordinate(
                        latitude=item["latitude"], longitude=item["longitude"]
                    ),
                    name=item.get("name") or None,
                )
                for item in arguments.get("waypoints", [])
            ]
            fields = {
                key: arguments[key]
                for key in (
                    "profile_identifier",
                    "includes_alternative_routes",
                    "includes_steps",
                    "shape_format",
                    "route_shape_resolution",
                    "locale",
                )
                if key in arguments
            }
            options = RouteOptions(
                waypoints=waypoints,
                version=arguments.get("version", ApiVersion.V5),
                v4=V4Options(
                    instruction_format=arguments.get(
                        "instruction_format", InstructionFormat.TEXT
                    ),
                    includes_shapes=arguments.get("includes_shapes", True),
                ),
                **fields,
            )
        except WaypointCountError as e:
            return [TextContent(type="text", text=f"Invalid waypoints: {e}")]
        except (KeyError, TypeError, ValidationError) as e:
            return [TextContent(type="text", text=f"Invalid arguments: {e}")]

        result = {
            "path": build_path(options),
            "params": dict(build_params(options)),
            "options": encode_options(options),
        }
        summary = (
            f"**{options.version} request for {len(options.waypoints)} waypoints "
            f"({options.profile_identifier})**\n\n"
            f"Path: {result['path']}"
        )
        return [
            TextContent(type="text", text=summary),
            TextContent(
                type="text",
                text=f"JSON Data:\n{json.dumps(result, ensure_ascii=False, indent=2)}",
            ),
        ]

    async def _parse_directions_response(
        self, arguments: dict[str, Any]
    ) -> list[TextContent]:
        """Decode a payload against persisted options."""
        options = decode_options(arguments.get("options"))
        if options is None:
            return [
                TextContent(
                    type="text", text="Options record could not be decoded"
                )
            ]

        version = ApiVersion.from_string(arguments.get("version", ApiVersion.V5.value))
        if version is None:
            return [
                TextContent(
                    type="text", text=f"Unknown API version: {arguments.get('version')}"
                )
            ]
        options.version = version

        response = parse_response(options, arguments.get("payload"))
        if response is None:
            return [
                TextContent(
                    type="text", text="Payload could not be decoded for these options"
                )
            ]

        result_text = f"**Decoded {len(response.waypoints)} waypoints"
        if response.routes is None:
            result_text += " and no routes**\n"
        else:
            result_text += f" and {len(response.routes)} routes**\n"

        for idx, waypoint in enumerate(response.waypoints, 1):
            result_text += f"   {idx}. {waypoint} ({waypoint.coordinate})\n"

        for idx, route in enumerate(response.routes or [], 1):
            result_text += (
                f"\nRoute {idx}: {route.distance:.0f} m, "
                f"{route.expected_travel_time:.0f} s, {len(route.legs)} legs"
            )

        return [
            TextContent(type="text", text=result_text),
            TextContent(
                type="text",
                text="JSON Data:\n"
                + json.dumps(
                    response.model_dump(mode="json"), ensure_ascii=False, indent=2
                ),
            ),
        ]


async def main() -> None:
    """Main entry point for the MCP server."""
    # Configure logging
    logging.basicConfig(level=logging.INFO)
    logger.info("Starting Transit Directions MCP Server")

    server_instance = TransitDirectionsMCPServer()

    from mcp.server.stdio import stdio_server

    async with stdio_server() as (read_stream, write_stream):
        logger.info("MCP Server running with stdio transport")
        await server_instance.server.run(
            read_stream,
            write_stream,
            InitializationOptions(
                server_name="transit-directions",
                server_version=__version__,
                capabilities=server_instance.server.get_capabilities(
                    notification_options=NotificationOptions(),
                    experimental_capabilities={},
                ),
            ),
        )


def main_sync() -> None:
    """Synchronous wrapper for the async main function - used as entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    main_sync()
