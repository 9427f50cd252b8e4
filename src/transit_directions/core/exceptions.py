"""Custom exceptions for transit directions."""


class DirectionsError(Exception):
    """Base exception for transit directions errors."""

    pass


class PreconditionError(DirectionsError):
    """Raised when a caller breaks a contract of the API (programmer error)."""

    pass


class WaypointCountError(PreconditionError):
    """Raised when a route request has too few or too many waypoints."""

    pass


class PayloadError(DirectionsError):
    """Raised when a payload or fixture file cannot be read as JSON."""

    pass
