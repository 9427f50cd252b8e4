"""Mapping of raw directions payloads onto waypoints and routes."""

import logging
from collections.abc import Callable, Mapping
from typing import Any

from .models import Coordinate, Waypoint, non_empty_string
from .options import ApiVersion, RouteOptions
from .routes import DirectionsResponse, Route

logger = logging.getLogger(__name__)

RouteFactory = Callable[[Any, list[Waypoint], RouteOptions], Route | None]


def parse_response(options: RouteOptions, payload: Any) -> DirectionsResponse | None:
    """Decode a JSON payload answering the request described by ``options``.

    Malformed route entries are dropped one by one, and a malformed v5 waypoint
    is replaced by the requested waypoint at the same position. Returns None
    when the payload is not a JSON object, or when a v4 payload lacks a usable
    origin or destination.
    """
    if not isinstance(payload, Mapping):
        logger.debug("Directions payload is not a JSON object")
        return None

    if options.version is ApiVersion.V4:
        return _parse_v4_response(options, payload)
    return _parse_v5_response(options, payload)


def _parse_v5_response(
    options: RouteOptions, payload: Mapping
) -> DirectionsResponse:
    api_waypoints = payload.get("waypoints")
    if isinstance(api_waypoints, list):
        waypoints = []
        for api, local in zip(api_waypoints, options.waypoints):
            waypoint = _resolve_waypoint(api, local)
            if waypoint is None:
                logger.debug(f"Keeping requested waypoint for malformed record: {api!r}")
                waypoint = local
            waypoints.append(waypoint)
    else:
        waypoints = list(options.waypoints)

    routes = _parse_routes(payload.get("routes"), Route.from_json, waypoints, options)
    return DirectionsResponse(waypoints=waypoints, routes=routes)


def _parse_v4_response(
    options: RouteOptions, payload: Mapping
) -> DirectionsResponse | None:
    origin = Waypoint.from_geojson(payload.get("origin"))
    if origin is None:
        logger.debug("v4 payload is missing a usable origin")
        return None
    destination = Waypoint.from_geojson(payload.get("destination"))
    if destination is None:
        logger.debug("v4 payload is missing a usable destination")
        return None

    intermediates = []
    records = payload.get("waypoints")
    if isinstance(records, list):
        for record in records:
            waypoint = Waypoint.from_geojson(record)
            if waypoint is None:
                logger.debug(f"Dropping malformed v4 waypoint: {record!r}")
                continue
            intermediates.append(waypoint)

    waypoints = [origin, *intermediates, destination]
    routes = _parse_routes(
        payload.get("routes"), Route.from_v4_json, waypoints, options
    )
    return DirectionsResponse(waypoints=waypoints, routes=routes)


def _resolve_waypoint(api: Any, local: Waypoint) -> Waypoint | None:
    """Combine an API waypoint with the requested one; the local name wins."""
    if not isinstance(api, Mapping):
        return None
    coordinate = Coordinate.from_geojson(api.get("location"))
    if coordinate is None:
        return None
    name = non_empty_string(local.name) or non_empty_string(api.get("name"))
    return Waypoint(coordinate=coordinate, name=name)


def _parse_routes(
    records: Any,
    factory: RouteFactory,
    waypoints: list[Waypoint],
    options: RouteOptions,
) -> list[Route] | None:
    if not isinstance(records, list):
        return None

    routes = []
    for record in records:
        route = factory(record, waypoints, options)
        if route is None:
            logger.debug("Dropping malformed route record")
            continue
        routes.append(route)
    return routes
