"""Core route options, persistence and response mapping."""

from .exceptions import (
    DirectionsError,
    PayloadError,
    PreconditionError,
    WaypointCountError,
)
from .models import Coordinate, Location, Price, Waypoint
from .options import (
    ApiVersion,
    AttributeOption,
    InstructionFormat,
    MeasurementSystem,
    ProfileIdentifier,
    RoadClass,
    RouteOptions,
    ShapeFormat,
    ShapeResolution,
    V4Options,
    default_measurement_system,
)
from .persistence import decode_options, dumps_options, encode_options, loads_options
from .provider import FixtureDataProvider
from .request import build_params, build_path
from .response import parse_response
from .routes import DirectionsResponse, Route, RouteLeg, RouteStep

__all__ = [
    "ApiVersion",
    "AttributeOption",
    "Coordinate",
    "DirectionsError",
    "DirectionsResponse",
    "FixtureDataProvider",
    "InstructionFormat",
    "Location",
    "MeasurementSystem",
    "PayloadError",
    "PreconditionError",
    "Price",
    "ProfileIdentifier",
    "RoadClass",
    "Route",
    "RouteLeg",
    "RouteOptions",
    "RouteStep",
    "ShapeFormat",
    "ShapeResolution",
    "V4Options",
    "Waypoint",
    "WaypointCountError",
    "build_params",
    "build_path",
    "decode_options",
    "default_measurement_system",
    "dumps_options",
    "encode_options",
    "loads_options",
    "parse_response",
]
