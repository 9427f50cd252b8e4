"""Transit Directions Package

Typed route request options for a directions API, with persisted-state
encoding and response parsing into waypoints and routes.
"""

__version__ = "0.1.0"

from .core.models import Waypoint
from .core.options import RouteOptions
from .core.persistence import decode_options, encode_options
from .core.response import parse_response
from .core.routes import DirectionsResponse, Route

__all__ = [
    "DirectionsResponse",
    "Route",
    "RouteOptions",
    "Waypoint",
    "decode_options",
    "encode_options",
    "parse_response",
]
