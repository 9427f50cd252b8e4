"""Route models built from directions API responses."""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from .models import Price, Waypoint, non_empty_string
from .options import RouteOptions


class RouteStep(BaseModel):
    """A single maneuver along a route leg."""

    instructions: str = Field("", description="Instruction text for the maneuver")
    maneuver_type: str | None = Field(None, description="Maneuver type, e.g. 'turn'")
    name: str | None = Field(None, description="Name of the road being travelled")
    distance: float = Field(..., description="Distance in metres")
    expected_travel_time: float = Field(..., description="Duration in seconds")

    @classmethod
    def from_json(cls, record: Any) -> "RouteStep | None":
        """Parse a step record from either API version."""
        if not isinstance(record, Mapping):
            return None
        maneuver = record.get("maneuver")
        if not isinstance(maneuver, Mapping):
            maneuver = {}
        # v4 names the road "way_name"
        name = non_empty_string(record.get("name")) or non_empty_string(
            record.get("way_name")
        )
        try:
            return cls(
                instructions=maneuver.get("instruction") or "",
                maneuver_type=maneuver.get("type"),
                name=name,
                distance=record.get("distance"),
                expected_travel_time=record.get("duration"),
            )
        except ValidationError:
            return None

    def __str__(self) -> str:
        return self.instructions or (self.maneuver_type or "")


class RouteLeg(BaseModel):
    """The part of a route between two consecutive waypoints."""

    source: Waypoint
    destination: Waypoint
    name: str | None = Field(None, description="Summary of the main roads used")
    distance: float = Field(..., description="Distance in metres")
    expected_travel_time: float = Field(..., description="Duration in seconds")
    steps: list[RouteStep] = Field(default_factory=list)

    def __str__(self) -> str:
        return f"{self.source} → {self.destination}"


class Route(BaseModel):
    """A route between the waypoints of a request."""

    distance: float = Field(..., description="Distance in metres")
    expected_travel_time: float = Field(..., description="Duration in seconds")
    shape: Any = Field(None, description="Raw, undecoded route geometry")
    legs: list[RouteLeg] = Field(default_factory=list)
    waypoints: list[Waypoint] = Field(default_factory=list)
    price: Price | None = Field(None, description="Fare, when the provider has one")
    route_options: RouteOptions | None = Field(None, exclude=True, repr=False)

    @classmethod
    def from_json(
        cls, record: Any, waypoints: list[Waypoint], route_options: RouteOptions
    ) -> "Route | None":
        """Parse a v5 route record.

        Leg ``i`` runs from waypoint ``i`` to waypoint ``i + 1``. Legs without a
        matching pair of waypoints, and malformed legs, are dropped. Returns None
        when the route itself has no usable distance or duration.
        """
        if not isinstance(record, Mapping):
            return None

        legs = []
        leg_records = record.get("legs")
        if isinstance(leg_records, list):
            for index, leg_record in enumerate(leg_records):
                if index + 1 >= len(waypoints):
                    break
                leg = _parse_leg(leg_record, waypoints[index], waypoints[index + 1])
                if leg is not None:
                    legs.append(leg)

        return cls._build(record, legs, waypoints, route_options)

    @classmethod
    def from_v4_json(
        cls, record: Any, waypoints: list[Waypoint], route_options: RouteOptions
    ) -> "Route | None":
        """Parse a v4 route record, which has one leg with steps at the top level."""
        if not isinstance(record, Mapping) or not waypoints:
            return None

        leg_record = {
            "summary": record.get("summary"),
            "distance": record.get("distance"),
            "duration": record.get("duration"),
            "steps": record.get("steps"),
        }
        leg = _parse_leg(leg_record, waypoints[0], waypoints[-1])
        legs = [leg] if leg is not None else []
        return cls._build(record, legs, waypoints, route_options)

    @classmethod
    def _build(
        cls,
        record: Mapping,
        legs: list[RouteLeg],
        waypoints: list[Waypoint],
        route_options: RouteOptions,
    ) -> "Route | None":
        try:
            return cls(
                distance=record.get("distance"),
                expected_travel_time=record.get("duration"),
                shape=record.get("geometry"),
                legs=legs,
                waypoints=list(waypoints),
                price=Price.from_json(record.get("price")),
                route_options=route_options,
            )
        except ValidationError:
            return None

    def __str__(self) -> str:
        if not self.waypoints:
            return "Route"
        return f"{self.waypoints[0]} → {self.waypoints[-1]}"


class DirectionsResponse(BaseModel):
    """Waypoints and routes decoded from a directions response."""

    waypoints: list[Waypoint] = Field(default_factory=list)
    routes: list[Route] | None = Field(
        None, description="None when the response carried no routes"
    )


def _parse_leg(
    record: Any, source: Waypoint, destination: Waypoint
) -> RouteLeg | None:
    if not isinstance(record, Mapping):
        return None

    steps = []
    step_records = record.get("steps")
    if isinstance(step_records, list):
        for step_record in step_records:
            step = RouteStep.from_json(step_record)
            if step is not None:
                steps.append(step)

    try:
        return RouteLeg(
            source=source,
            destination=destination,
            name=non_empty_string(record.get("summary")),
            distance=record.get("distance"),
            expected_travel_time=record.get("duration"),
            steps=steps,
        )
    except ValidationError:
        return None
