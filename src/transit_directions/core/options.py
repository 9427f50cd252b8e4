"""Route request options and their enumerated option types."""

import re
from collections.abc import Iterable, Sequence
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .exceptions import WaypointCountError
from .models import Coordinate, Location, Waypoint

MIN_WAYPOINTS = 2
MAX_WAYPOINTS = 25

# Regions whose locale reports a non-metric measurement system
_IMPERIAL_REGIONS = frozenset({"US", "LR", "MM"})


class _TokenEnum(str, Enum):
    """Closed set of values with a canonical lowercase string token."""

    @classmethod
    def from_string(cls, token: Any) -> Any:
        """Look up a member by its canonical token, or None if unknown."""
        try:
            return cls(token)
        except (ValueError, TypeError):
            return None

    @classmethod
    def parse_set(cls, text: str) -> frozenset | None:
        """Parse a comma-joined token string into a set of members.

        Empty tokens are skipped. Returns None when any token is unknown.
        """
        members = set()
        for token in text.split(","):
            if not token:
                continue
            member = cls.from_string(token)
            if member is None:
                return None
            members.add(member)
        return frozenset(members)

    @classmethod
    def describe_set(cls, members: Iterable) -> str:
        """Join a set of members into tokens, in declaration order."""
        members = set(members)
        return ",".join(member.value for member in cls if member in members)

    def __str__(self) -> str:
        return self.value


class ShapeFormat(_TokenEnum):
    """Format of a route's shape in the raw response."""

    GEOJSON = "geojson"
    POLYLINE = "polyline"
    POLYLINE6 = "polyline6"


class ShapeResolution(_TokenEnum):
    """Level of detail of a route's shape, or whether it is present at all."""

    # The wire format predates this enum and still spells "no shape" as false
    NONE = "false"
    LOW = "simplified"
    FULL = "full"


class MeasurementSystem(_TokenEnum):
    """System of units for distances in spoken and visual instructions."""

    IMPERIAL = "imperial"
    METRIC = "metric"


class InstructionFormat(_TokenEnum):
    """Format of step instructions in v4 responses."""

    TEXT = "text"
    HTML = "html"


class ProfileIdentifier(_TokenEnum):
    """Primary mode of transportation for a route."""

    AUTOMOBILE = "mapbox/driving"
    AUTOMOBILE_AVOIDING_TRAFFIC = "mapbox/driving-traffic"
    CYCLING = "mapbox/cycling"
    WALKING = "mapbox/walking"

    @property
    def is_automobile(self) -> bool:
        return self in (
            ProfileIdentifier.AUTOMOBILE,
            ProfileIdentifier.AUTOMOBILE_AVOIDING_TRAFFIC,
        )


class AttributeOption(_TokenEnum):
    """Per-segment attribute requested alongside a route."""

    OPEN_STREET_MAP_NODE_IDENTIFIER = "nodes"
    DISTANCE = "distance"
    EXPECTED_TRAVEL_TIME = "duration"
    SPEED = "speed"
    CONGESTION_LEVEL = "congestion"


class RoadClass(_TokenEnum):
    """Class of road a route may be asked to avoid."""

    TOLL = "toll"
    RESTRICTED = "restricted"
    MOTORWAY = "motorway"
    FERRY = "ferry"
    TUNNEL = "tunnel"


class ApiVersion(_TokenEnum):
    """Directions API version a request is built for."""

    V5 = "v5"
    V4 = "v4"


DEFAULT_PROFILE = ProfileIdentifier.AUTOMOBILE
DEFAULT_SHAPE_FORMAT = ShapeFormat.POLYLINE
DEFAULT_SHAPE_RESOLUTION = ShapeResolution.LOW


def locale_region(locale: str) -> str | None:
    """Extract the region subtag from an identifier such as ``en_US`` or ``zh-Hans-CN``."""
    for part in re.split(r"[-_]", locale)[1:]:
        if len(part) == 2 and part.isalpha():
            return part.upper()
        if len(part) == 3 and part.isdigit():
            return part
    return None


def default_measurement_system(locale: str | None) -> MeasurementSystem:
    """Resolve the measurement system a locale uses by default.

    The locale is passed in rather than read from the process so the result is
    deterministic. Without a locale there is no measurement information and the
    imperial system is assumed.
    """
    if not locale:
        return MeasurementSystem.IMPERIAL
    if locale_region(locale) in _IMPERIAL_REGIONS:
        return MeasurementSystem.IMPERIAL
    return MeasurementSystem.METRIC


class V4Options(BaseModel):
    """Settings that only exist in Directions API v4 requests."""

    instruction_format: InstructionFormat = Field(
        InstructionFormat.TEXT, description="Format of step instructions"
    )
    includes_shapes: bool = Field(
        True, description="Whether routes and steps carry geometry"
    )


class RouteOptions(BaseModel):
    """Criteria for routes returned by the Directions API.

    Identity is defined by the waypoints, profile and output-shaping fields.
    ``version`` and ``v4`` select and configure the legacy v4 request shape and
    take no part in equality or persistence.
    """

    model_config = ConfigDict(validate_assignment=True)

    waypoints: list[Waypoint] = Field(
        ..., description="Stops to visit in order, source first"
    )
    profile_identifier: ProfileIdentifier = Field(
        DEFAULT_PROFILE, description="Mode of transportation"
    )
    allows_u_turn_at_waypoint: bool | None = Field(
        None, description="Derived from the profile when omitted"
    )
    includes_alternative_routes: bool = False
    includes_steps: bool = False
    shape_format: ShapeFormat = DEFAULT_SHAPE_FORMAT
    route_shape_resolution: ShapeResolution = DEFAULT_SHAPE_RESOLUTION
    attribute_options: frozenset[AttributeOption] = frozenset()
    includes_exit_roundabout_maneuver: bool = False
    locale: str | None = Field(
        None, description="Locale identifier for instruction language"
    )
    includes_spoken_instructions: bool = False
    distance_measurement_system: MeasurementSystem | None = Field(
        None, description="Derived from the locale when omitted"
    )
    includes_visual_instructions: bool = False
    road_classes_to_avoid: frozenset[RoadClass] = frozenset()

    version: ApiVersion = ApiVersion.V5
    v4: V4Options = Field(default_factory=V4Options)

    @field_validator("waypoints")
    @classmethod
    def _check_waypoint_count(cls, waypoints: list[Waypoint]) -> list[Waypoint]:
        if len(waypoints) < MIN_WAYPOINTS:
            raise WaypointCountError(
                "A route requires at least a source and destination."
            )
        if len(waypoints) > MAX_WAYPOINTS:
            raise WaypointCountError(
                f"A route may not have more than {MAX_WAYPOINTS} waypoints."
            )
        return waypoints

    @field_validator("locale")
    @classmethod
    def _normalize_locale(cls, locale: str | None) -> str | None:
        return locale or None

    @model_validator(mode="before")
    @classmethod
    def _derive_defaults(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if data.get("allows_u_turn_at_waypoint") is None:
            try:
                profile = ProfileIdentifier(
                    data.get("profile_identifier", DEFAULT_PROFILE)
                )
            except ValueError:
                # left for field validation to reject
                return data
            data["allows_u_turn_at_waypoint"] = not profile.is_automobile
        if data.get("distance_measurement_system") is None:
            data["distance_measurement_system"] = default_measurement_system(
                data.get("locale")
            )
        return data

    @classmethod
    def from_coordinates(
        cls, coordinates: Sequence[Coordinate], **kwargs: Any
    ) -> "RouteOptions":
        """Create options for unnamed waypoints at the given coordinates."""
        waypoints = [Waypoint(coordinate=coordinate) for coordinate in coordinates]
        return cls(waypoints=waypoints, **kwargs)

    @classmethod
    def from_locations(
        cls, locations: Sequence[Location], **kwargs: Any
    ) -> "RouteOptions":
        """Create options from location samples, keeping their accuracy radii."""
        waypoints = [Waypoint.from_location(location) for location in locations]
        return cls(waypoints=waypoints, **kwargs)

    @property
    def queries(self) -> list[str]:
        """Waypoint coordinates formatted for the request path."""
        return [waypoint.coordinate.to_query() for waypoint in self.waypoints]

    def identity(self) -> tuple:
        """Values that define equality between two sets of options."""
        return (
            list(self.waypoints),
            self.profile_identifier,
            self.allows_u_turn_at_waypoint,
            self.includes_alternative_routes,
            self.includes_steps,
            self.shape_format,
            self.route_shape_resolution,
            self.attribute_options,
            self.includes_exit_roundabout_maneuver,
            self.locale,
            self.includes_spoken_instructions,
            self.distance_measurement_system,
            self.includes_visual_instructions,
            self.road_classes_to_avoid,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RouteOptions):
            return NotImplemented
        return self.identity() == other.identity()

    def copy(self) -> "RouteOptions":
        """Return an independent copy with the same field values."""
        return self.model_copy(deep=True)
