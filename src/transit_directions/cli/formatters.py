"""Output formatters for CLI display."""

import json

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..core.options import (
    AttributeOption,
    MeasurementSystem,
    RoadClass,
    RouteOptions,
)
from ..core.persistence import encode_options
from ..core.routes import DirectionsResponse

console = Console()

_METRES_PER_MILE = 1609.344


def format_duration(seconds: float) -> str:
    """Format a travel time as minutes, e.g. '07 min' or '1 h 05 min'."""
    interval = int(seconds)
    hours = interval // 3600
    minutes = (interval // 60) % 60
    if hours:
        return f"{hours} h {minutes:02d} min"
    return f"{minutes:02d} min"


def format_distance(
    metres: float, system: MeasurementSystem | None = MeasurementSystem.METRIC
) -> str:
    """Format a distance in the given measurement system."""
    if system is MeasurementSystem.IMPERIAL:
        return f"{metres / _METRES_PER_MILE:.1f} mi"
    if metres < 1000:
        return f"{metres:.0f} m"
    return f"{metres / 1000:.1f} km"


def format_request_table(path: str, params: list[tuple[str, str]]) -> None:
    """Display a request path and its query parameters."""
    console.print(f"[bold]Path:[/bold] {path}")

    table = Table(title="Query Parameters", show_header=True, header_style="bold magenta")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Value", style="green")
    for name, value in params:
        table.add_row(name, value)
    console.print(table)


def format_request_json(
    path: str, params: list[tuple[str, str]], options: RouteOptions | None = None
) -> str:
    """Format a request path and parameters as JSON."""
    data: dict = {
        "path": path,
        "params": [{"name": name, "value": value} for name, value in params],
    }
    if options is not None:
        data["options"] = encode_options(options)
    return json.dumps(data, ensure_ascii=False, indent=2)


def format_options_table(options: RouteOptions) -> None:
    """Display route options as a rich table."""
    table = Table(
        title=f"Route Options ({options.profile_identifier})",
        show_header=True,
        header_style="bold magenta",
    )
    table.add_column("Property", style="cyan", no_wrap=True)
    table.add_column("Value", style="green")

    table.add_row("Waypoints", " → ".join(str(w) for w in options.waypoints))
    table.add_row("U-turn at waypoints", str(options.allows_u_turn_at_waypoint))
    table.add_row("Alternative routes", str(options.includes_alternative_routes))
    table.add_row("Steps", str(options.includes_steps))
    table.add_row("Shape format", str(options.shape_format))
    table.add_row("Shape resolution", str(options.route_shape_resolution))
    table.add_row(
        "Attributes", AttributeOption.describe_set(options.attribute_options) or "-"
    )
    table.add_row(
        "Exit roundabout maneuver", str(options.includes_exit_roundabout_maneuver)
    )
    table.add_row("Locale", options.locale or "-")
    table.add_row("Spoken instructions", str(options.includes_spoken_instructions))
    table.add_row("Measurement system", str(options.distance_measurement_system))
    table.add_row("Visual instructions", str(options.includes_visual_instructions))
    table.add_row(
        "Avoid", RoadClass.describe_set(options.road_classes_to_avoid) or "-"
    )
    console.print(table)


def format_response_table(
    response: DirectionsResponse,
    system: MeasurementSystem | None = MeasurementSystem.METRIC,
    verbose: bool = False,
) -> None:
    """Display waypoints and routes as rich tables."""
    waypoint_table = Table(title="Waypoints", show_header=True, header_style="bold blue")
    waypoint_table.add_column("#", style="dim", no_wrap=True)
    waypoint_table.add_column("Name", style="cyan")
    waypoint_table.add_column("Coordinate", style="green")
    for idx, waypoint in enumerate(response.waypoints, 1):
        waypoint_table.add_row(str(idx), waypoint.name or "-", str(waypoint.coordinate))
    console.print(waypoint_table)

    if response.routes is None:
        console.print("[dim]No routes in response[/dim]")
        return
    if not response.routes:
        console.print("No routes found.")
        return

    for idx, route in enumerate(response.routes, 1):
        if len(response.routes) > 1:
            console.print(f"\n[bold cyan]Route {idx}:[/bold cyan]")

        table = Table(title=f"Route: {route}", show_header=True, header_style="bold magenta")
        table.add_column("Property", style="cyan", no_wrap=True)
        table.add_column("Value", style="green")
        table.add_row("Duration", format_duration(route.expected_travel_time))
        table.add_row("Distance", format_distance(route.distance, system))
        table.add_row("Legs", str(len(route.legs)))
        if route.price:
            table.add_row("Price", str(route.price))
        console.print(table)

        if verbose:
            for leg in route.legs:
                if not leg.steps:
                    continue
                step_table = Table(
                    title=f"Steps: {leg}", show_header=True, header_style="bold blue"
                )
                step_table.add_column("Instruction", style="cyan")
                step_table.add_column("Road", style="yellow")
                step_table.add_column("Distance", style="green")
                step_table.add_column("Duration", style="green")
                for step in leg.steps:
                    step_table.add_row(
                        str(step),
                        step.name or "-",
                        format_distance(step.distance, system),
                        format_duration(step.expected_travel_time),
                    )
                console.print(step_table)


def format_response_detailed(
    response: DirectionsResponse,
    system: MeasurementSystem | None = MeasurementSystem.METRIC,
) -> None:
    """Display routes with leg and step details in panels."""
    if not response.routes:
        console.print("No routes found.")
        return

    for idx, route in enumerate(response.routes, 1):
        summary_text = f"""[bold]From:[/bold] {route.waypoints[0] if route.waypoints else '-'}
[bold]To:[/bold] {route.waypoints[-1] if route.waypoints else '-'}
[bold]Duration:[/bold] {format_duration(route.expected_travel_time)}
[bold]Distance:[/bold] {format_distance(route.distance, system)}"""
        if route.price:
            summary_text += f"\n[bold]Price:[/bold] {route.price}"

        console.print(
            Panel(summary_text, title=f"Route {idx} Summary", border_style="blue")
        )

        for i, leg in enumerate(route.legs, 1):
            leg_text = f"""[cyan]{leg.source}[/cyan] → [cyan]{leg.destination}[/cyan]
[bold]Via:[/bold] {leg.name or '-'}
[bold]Duration:[/bold] {format_duration(leg.expected_travel_time)}
[bold]Distance:[/bold] {format_distance(leg.distance, system)}"""
            for step in leg.steps:
                leg_text += f"\n  • {step}"
            console.print(Panel(leg_text, title=f"Leg {i}", border_style="green"))


def format_response_json(response: DirectionsResponse) -> str:
    """Format a decoded response as JSON."""
    return json.dumps(response.model_dump(mode="json"), ensure_ascii=False, indent=2)
