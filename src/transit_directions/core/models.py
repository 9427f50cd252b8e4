"""Data models for transit directions."""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError


class Coordinate(BaseModel):
    """A geographic coordinate in WGS 84 degrees."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., description="Latitude in degrees")
    longitude: float = Field(..., description="Longitude in degrees")

    @classmethod
    def from_geojson(cls, position: Any) -> "Coordinate | None":
        """Build a coordinate from a GeoJSON position ``[longitude, latitude]``.

        Returns None when the position is not a pair of numbers.
        """
        if not isinstance(position, (list, tuple)) or len(position) < 2:
            return None
        longitude, latitude = position[0], position[1]
        if not all(_is_number(value) for value in (longitude, latitude)):
            return None
        return cls(latitude=latitude, longitude=longitude)

    def to_query(self) -> str:
        """Format as the ``longitude,latitude`` pair used in request paths."""
        return f"{self.longitude},{self.latitude}"

    def __str__(self) -> str:
        return f"{self.latitude:.5f}, {self.longitude:.5f}"


class Location(BaseModel):
    """A geolocation sample, as reported by a positioning device."""

    coordinate: Coordinate = Field(..., description="Measured position")
    horizontal_accuracy: float = Field(
        -1.0, description="Accuracy radius in metres; negative when unknown"
    )


class Waypoint(BaseModel):
    """A stop in a route request: source, intermediate or destination."""

    model_config = ConfigDict(frozen=True)

    coordinate: Coordinate = Field(..., description="Waypoint position")
    name: str | None = Field(None, description="Human-readable name")
    coordinate_accuracy: float | None = Field(
        None, description="Maximum allowed deviation in metres; None is unlimited"
    )

    @classmethod
    def from_location(cls, location: Location) -> "Waypoint":
        """Wrap a location sample, carrying over its accuracy radius."""
        accuracy = (
            location.horizontal_accuracy if location.horizontal_accuracy >= 0 else None
        )
        return cls(coordinate=location.coordinate, coordinate_accuracy=accuracy)

    @classmethod
    def from_geojson(cls, feature: Any) -> "Waypoint | None":
        """Parse a GeoJSON point feature as returned by the v4 API.

        Returns None for anything that is not a point feature with a position.
        """
        if not isinstance(feature, Mapping):
            return None
        geometry = feature.get("geometry")
        if not isinstance(geometry, Mapping) or geometry.get("type") != "Point":
            return None
        coordinate = Coordinate.from_geojson(geometry.get("coordinates"))
        if coordinate is None:
            return None

        properties = feature.get("properties")
        name = None
        if isinstance(properties, Mapping):
            name = non_empty_string(properties.get("name"))
        return cls(coordinate=coordinate, name=name)

    def __str__(self) -> str:
        return self.name or str(self.coordinate)


class Price(BaseModel):
    """Fare attached to a route."""

    amount: float = Field(..., description="Fare amount")
    currency: str = Field(..., description="ISO 4217 currency code")

    @classmethod
    def from_json(cls, record: Any) -> "Price | None":
        if not isinstance(record, Mapping):
            return None
        try:
            return cls.model_validate(record)
        except ValidationError:
            return None

    def __str__(self) -> str:
        return f"{self.amount:.2f} {self.currency}"


def non_empty_string(value: Any) -> str | None:
    """Return value if it is a non-empty string, otherwise None."""
    if isinstance(value, str) and value:
        return value
    return None


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)
