"""Request path and query parameter construction for route options."""

from .exceptions import PreconditionError
from .options import ApiVersion, AttributeOption, RoadClass, RouteOptions


def build_path(options: RouteOptions) -> str:
    """Build the request path for the options' API version.

    Raises:
        PreconditionError: If the options carry no waypoint queries
    """
    queries = options.queries
    if not queries:
        raise PreconditionError("No query")

    query_component = ";".join(queries)
    if options.version is ApiVersion.V4:
        profile = str(options.profile_identifier).replace("/", ".")
        return f"v4/directions/{profile}/{query_component}.json"
    return f"directions/v5/{options.profile_identifier}/{query_component}.json"


def build_params(options: RouteOptions) -> list[tuple[str, str]]:
    """Build the ordered query parameters for the options' API version."""
    if options.version is ApiVersion.V4:
        return _build_v4_params(options)
    return _build_v5_params(options)


def _build_v5_params(options: RouteOptions) -> list[tuple[str, str]]:
    params = [
        ("geometries", str(options.shape_format)),
        ("overview", str(options.route_shape_resolution)),
        ("steps", _format_bool(options.includes_steps)),
        ("continue_straight", _format_bool(not options.allows_u_turn_at_waypoint)),
        ("alternatives", _format_bool(options.includes_alternative_routes)),
    ]

    if options.includes_exit_roundabout_maneuver:
        params.append(("roundabout_exits", "true"))
    if options.attribute_options:
        params.append(
            ("annotations", AttributeOption.describe_set(options.attribute_options))
        )
    if options.includes_spoken_instructions:
        params.append(("voice_instructions", "true"))
        params.append(("voice_units", str(options.distance_measurement_system)))
    if options.includes_visual_instructions:
        params.append(("banner_instructions", "true"))
    if options.locale:
        params.append(("language", options.locale))
    if options.road_classes_to_avoid:
        params.append(
            ("exclude", RoadClass.describe_set(options.road_classes_to_avoid))
        )

    if any(waypoint.name for waypoint in options.waypoints):
        names = [waypoint.name or "" for waypoint in options.waypoints]
        params.append(("waypoint_names", ";".join(names)))

    if any(waypoint.coordinate_accuracy is not None for waypoint in options.waypoints):
        radiuses = [
            _format_radius(waypoint.coordinate_accuracy)
            for waypoint in options.waypoints
        ]
        params.append(("radiuses", ";".join(radiuses)))

    return params


def _build_v4_params(options: RouteOptions) -> list[tuple[str, str]]:
    # v4 only understands these four; the remaining flags are not sent
    geometry = str(options.shape_format) if options.v4.includes_shapes else "false"
    return [
        ("alternatives", _format_bool(options.includes_alternative_routes)),
        ("instructions", str(options.v4.instruction_format)),
        ("geometry", geometry),
        ("steps", _format_bool(options.includes_steps)),
    ]


def _format_bool(value: bool | None) -> str:
    return "true" if value else "false"


def _format_radius(accuracy: float | None) -> str:
    if accuracy is None or accuracy < 0:
        return "unlimited"
    return f"{accuracy:g}"
