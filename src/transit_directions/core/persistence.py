"""Persisted-state record format for route options.

A record is a plain dict keyed by field name, safe to store as JSON (for
example in a list of recent searches). Records carry a ``schemaVersion`` so
fields can be added later without breaking stored state; records written
before versioning are read as version 1.
"""

import json
import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from .models import Coordinate, Waypoint
from .options import (
    MAX_WAYPOINTS,
    MIN_WAYPOINTS,
    AttributeOption,
    MeasurementSystem,
    ProfileIdentifier,
    RoadClass,
    RouteOptions,
    ShapeFormat,
    ShapeResolution,
    default_measurement_system,
)

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1


def encode_options(options: RouteOptions) -> dict[str, Any]:
    """Encode options into a persisted record."""
    return {
        "schemaVersion": SCHEMA_VERSION,
        "waypoints": [_encode_waypoint(waypoint) for waypoint in options.waypoints],
        "allowsUTurnAtWaypoint": options.allows_u_turn_at_waypoint,
        "profileIdentifier": str(options.profile_identifier),
        "includesAlternativeRoutes": options.includes_alternative_routes,
        "includesSteps": options.includes_steps,
        "shapeFormat": str(options.shape_format),
        "routeShapeResolution": str(options.route_shape_resolution),
        "attributeOptions": AttributeOption.describe_set(options.attribute_options),
        "includesExitRoundaboutManeuver": options.includes_exit_roundabout_maneuver,
        "locale": options.locale,
        "includesSpokenInstructions": options.includes_spoken_instructions,
        "distanceMeasurementSystem": str(options.distance_measurement_system),
        "includesVisualInstructions": options.includes_visual_instructions,
        "roadClassesToAvoid": RoadClass.describe_set(options.road_classes_to_avoid),
    }


def decode_options(record: Any) -> RouteOptions | None:
    """Decode a persisted record back into options.

    Returns None when a required field is missing or unrecognized. An unknown
    measurement system falls back to the locale default and unparseable road
    classes fall back to an empty set.
    """
    if not isinstance(record, Mapping):
        logger.debug("Options record is not a mapping")
        return None

    schema_version = record.get("schemaVersion", 1)
    if not isinstance(schema_version, int) or schema_version > SCHEMA_VERSION:
        logger.debug(f"Unsupported options schema version: {schema_version!r}")
        return None

    waypoints = _decode_waypoints(record.get("waypoints"))
    if waypoints is None:
        logger.debug("Options record has missing or malformed waypoints")
        return None

    profile_identifier = ProfileIdentifier.from_string(record.get("profileIdentifier"))
    if profile_identifier is None:
        logger.debug("Options record has missing or unknown profileIdentifier")
        return None

    shape_format = ShapeFormat.from_string(record.get("shapeFormat"))
    if shape_format is None:
        logger.debug("Options record has unrecognized shapeFormat")
        return None

    route_shape_resolution = ShapeResolution.from_string(
        record.get("routeShapeResolution")
    )
    if route_shape_resolution is None:
        logger.debug("Options record has unrecognized routeShapeResolution")
        return None

    attribute_descriptions = record.get("attributeOptions")
    if not isinstance(attribute_descriptions, str):
        logger.debug("Options record has missing attributeOptions")
        return None
    attribute_options = AttributeOption.parse_set(attribute_descriptions)
    if attribute_options is None:
        logger.debug(f"Unparseable attributeOptions: {attribute_descriptions!r}")
        return None

    locale = record.get("locale")
    if not isinstance(locale, str) or not locale:
        locale = None

    distance_measurement_system = MeasurementSystem.from_string(
        record.get("distanceMeasurementSystem")
    )
    if distance_measurement_system is None:
        distance_measurement_system = default_measurement_system(locale)

    road_class_descriptions = record.get("roadClassesToAvoid")
    road_classes_to_avoid = None
    if isinstance(road_class_descriptions, str):
        road_classes_to_avoid = RoadClass.parse_set(road_class_descriptions)

    return RouteOptions(
        waypoints=waypoints,
        profile_identifier=profile_identifier,
        allows_u_turn_at_waypoint=_decode_bool(record, "allowsUTurnAtWaypoint"),
        includes_alternative_routes=_decode_bool(record, "includesAlternativeRoutes"),
        includes_steps=_decode_bool(record, "includesSteps"),
        shape_format=shape_format,
        route_shape_resolution=route_shape_resolution,
        attribute_options=attribute_options,
        includes_exit_roundabout_maneuver=_decode_bool(
            record, "includesExitRoundaboutManeuver"
        ),
        locale=locale,
        includes_spoken_instructions=_decode_bool(record, "includesSpokenInstructions"),
        distance_measurement_system=distance_measurement_system,
        includes_visual_instructions=_decode_bool(record, "includesVisualInstructions"),
        road_classes_to_avoid=road_classes_to_avoid or frozenset(),
    )


def dumps_options(options: RouteOptions) -> str:
    """Encode options into a JSON string."""
    return json.dumps(encode_options(options), ensure_ascii=False, indent=2)


def loads_options(text: str) -> RouteOptions | None:
    """Decode options from a JSON string, or None if it cannot be decoded."""
    try:
        record = json.loads(text)
    except json.JSONDecodeError as e:
        logger.debug(f"Options record is not valid JSON: {e}")
        return None
    return decode_options(record)


def _encode_waypoint(waypoint: Waypoint) -> dict[str, Any]:
    return {
        "latitude": waypoint.coordinate.latitude,
        "longitude": waypoint.coordinate.longitude,
        "name": waypoint.name,
        "coordinateAccuracy": waypoint.coordinate_accuracy,
    }


def _decode_waypoints(records: Any) -> list[Waypoint] | None:
    if not isinstance(records, list):
        return None
    if not MIN_WAYPOINTS <= len(records) <= MAX_WAYPOINTS:
        return None

    waypoints = []
    for record in records:
        if not isinstance(record, Mapping):
            return None
        try:
            coordinate = Coordinate(
                latitude=record["latitude"], longitude=record["longitude"]
            )
            waypoint = Waypoint(
                coordinate=coordinate,
                name=record.get("name"),
                coordinate_accuracy=record.get("coordinateAccuracy"),
            )
        except (KeyError, ValidationError):
            return None
        waypoints.append(waypoint)
    return waypoints


def _decode_bool(record: Mapping, key: str) -> bool:
    return record.get(key) is True
