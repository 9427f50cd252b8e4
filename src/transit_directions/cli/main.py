"""CLI main entry point for transit directions."""

import logging
import sys
from pathlib import Path

import click
from rich.console import Console

from .. import __version__
from ..core import (
    ApiVersion,
    AttributeOption,
    Coordinate,
    FixtureDataProvider,
    InstructionFormat,
    PayloadError,
    ProfileIdentifier,
    RoadClass,
    RouteOptions,
    ShapeFormat,
    ShapeResolution,
    V4Options,
    Waypoint,
    WaypointCountError,
    build_params,
    build_path,
    dumps_options,
    loads_options,
    parse_response,
)
from ..core.options import (
    DEFAULT_PROFILE,
    DEFAULT_SHAPE_FORMAT,
    DEFAULT_SHAPE_RESOLUTION,
    MAX_WAYPOINTS,
    MIN_WAYPOINTS,
)
from ..core.persistence import SCHEMA_VERSION
from ..core.provider import DEFAULT_FIXTURE, load_json
from .formatters import (
    format_options_table,
    format_request_json,
    format_request_table,
    format_response_detailed,
    format_response_json,
    format_response_table,
)

console = Console()
error_console = Console(stderr=True)


def _parse_waypoint(text: str) -> Waypoint:
    """Parse 'LAT,LON' or 'LAT,LON,NAME' into a waypoint."""
    parts = text.split(",", 2)
    if len(parts) < 2:
        raise click.BadParameter(f"'{text}' is not in LAT,LON[,NAME] form")
    try:
        coordinate = Coordinate(latitude=float(parts[0]), longitude=float(parts[1]))
    except ValueError as e:
        raise click.BadParameter(f"'{text}' has an invalid coordinate") from e
    name = parts[2].strip() if len(parts) == 3 and parts[2].strip() else None
    return Waypoint(coordinate=coordinate, name=name)


def _waypoints_callback(
    ctx: click.Context, param: click.Parameter, value: tuple[str, ...]
) -> list[Waypoint]:
    return [_parse_waypoint(text) for text in value]


def _token_set_callback(enum_cls: type) -> object:
    def callback(
        ctx: click.Context, param: click.Parameter, value: str | None
    ) -> frozenset:
        if not value:
            return frozenset()
        members = enum_cls.parse_set(value)
        if members is None:
            choices = ", ".join(member.value for member in enum_cls)
            raise click.BadParameter(f"'{value}' must be a comma list of: {choices}")
        return members

    return callback


def _load_options(path: str) -> RouteOptions:
    """Load persisted options or exit with an error."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        error_console.print(f"[red]Error:[/red] Failed to read {path}: {e}")
        sys.exit(1)

    options = loads_options(text)
    if options is None:
        error_console.print(
            f"[red]Error:[/red] No decodable route options in {path}"
        )
        sys.exit(1)
    return options


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Transit Directions - Build, store and decode directions API requests."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)


@cli.command()
@click.argument("waypoints", nargs=-1, required=True, callback=_waypoints_callback)
@click.option(
    "--profile",
    "-p",
    type=click.Choice([p.value for p in ProfileIdentifier]),
    default=DEFAULT_PROFILE.value,
    help="Mode of transportation",
)
@click.option("--v4", "legacy", is_flag=True, help="Build a Directions API v4 request")
@click.option("--alternatives", is_flag=True, help="Request alternative routes")
@click.option("--steps", is_flag=True, help="Request turn-by-turn steps")
@click.option(
    "--shape-format",
    type=click.Choice([f.value for f in ShapeFormat]),
    default=DEFAULT_SHAPE_FORMAT.value,
    help="Route shape format",
)
@click.option(
    "--resolution",
    type=click.Choice([r.value for r in ShapeResolution]),
    default=DEFAULT_SHAPE_RESOLUTION.value,
    help="Route shape resolution",
)
@click.option(
    "--instruction-format",
    type=click.Choice([f.value for f in InstructionFormat]),
    default=InstructionFormat.TEXT.value,
    help="Step instruction format (v4 only)",
)
@click.option("--no-shapes", is_flag=True, help="Omit geometry (v4 only)")
@click.option("--locale", "-l", help="Locale identifier, e.g. en_US")
@click.option(
    "--attributes",
    callback=_token_set_callback(AttributeOption),
    help="Comma-separated segment attributes to request",
)
@click.option(
    "--avoid",
    callback=_token_set_callback(RoadClass),
    help="Comma-separated road classes to avoid",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format",
)
@click.option(
    "--save",
    help="Save the persisted options record to a file",
    type=click.Path(dir_okay=False),
)
def request(
    waypoints: list[Waypoint],
    profile: str,
    legacy: bool,
    alternatives: bool,
    steps: bool,
    shape_format: str,
    resolution: str,
    instruction_format: str,
    no_shapes: bool,
    locale: str | None,
    attributes: frozenset,
    avoid: frozenset,
    output_format: str,
    save: str | None,
) -> None:
    """Build the request path and query parameters for a route.

    Waypoints are given as LAT,LON or LAT,LON,NAME.

    Examples:
        transit-directions request 52.5219,13.4132 52.5096,13.3759
        transit-directions request "52.52,13.41,Alex" 52.51,13.38 --profile mapbox/walking
        transit-directions request 52.52,13.41 52.51,13.38 --v4 --no-shapes --format json
    """
    try:
        options = RouteOptions(
            waypoints=waypoints,
            profile_identifier=profile,
            includes_alternative_routes=alternatives,
            includes_steps=steps,
            shape_format=shape_format,
            route_shape_resolution=resolution,
            locale=locale,
            attribute_options=attributes,
            road_classes_to_avoid=avoid,
            version=ApiVersion.V4 if legacy else ApiVersion.V5,
            v4=V4Options(
                instruction_format=instruction_format, includes_shapes=not no_shapes
            ),
        )
    except WaypointCountError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    path = build_path(options)
    params = build_params(options)

    if output_format == "json":
        click.echo(format_request_json(path, params, options))
    else:
        format_request_table(path, params)

    if save:
        Path(save).write_text(dumps_options(options), encoding="utf-8")
        error_console.print(f"[green]Saved route options to {save}[/green]")


@cli.command()
@click.argument("options_file", type=click.Path(exists=True, dir_okay=False))
def show(options_file: str) -> None:
    """Show route options saved with 'request --save'."""
    options = _load_options(options_file)
    format_options_table(options)


@cli.command()
@click.argument("payload_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--options",
    "-o",
    "options_file",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Persisted options the payload answers",
)
@click.option("--v4", "legacy", is_flag=True, help="Parse a Directions API v4 payload")
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["table", "json", "detailed"]),
    default="table",
    help="Output format",
)
@click.option("--steps", "show_steps", is_flag=True, help="Show route steps")
def parse(
    payload_file: str,
    options_file: str,
    legacy: bool,
    output_format: str,
    show_steps: bool,
) -> None:
    """Decode a saved directions payload into waypoints and routes.

    Examples:
        transit-directions parse response.json --options options.json
        transit-directions parse response.json -o options.json --format detailed
    """
    options = _load_options(options_file)
    if legacy:
        options.version = ApiVersion.V4

    try:
        payload = load_json(payload_file)
    except PayloadError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    response = parse_response(options, payload)
    if response is None:
        error_console.print(
            "[red]Error:[/red] Payload could not be decoded for these options"
        )
        sys.exit(1)

    _display_response(response, options, output_format, show_steps)


@cli.command()
@click.option(
    "--fixture",
    type=click.Path(exists=True, dir_okay=False),
    help="Fixture file with 'options' and 'response' keys",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["table", "json", "detailed"]),
    default="table",
    help="Output format",
)
@click.option("--steps", "show_steps", is_flag=True, help="Show route steps")
def sample(fixture: str | None, output_format: str, show_steps: bool) -> None:
    """Show routes from the bundled sample fixture (no network access)."""
    provider = FixtureDataProvider(fixture)
    try:
        options = provider.fixture_options()
        response = provider.search_for_routes(options)
    except PayloadError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    if response is None:
        error_console.print("[red]Error:[/red] Fixture payload could not be decoded")
        sys.exit(1)

    _display_response(response, options, output_format, show_steps)


def _display_response(response, options, output_format: str, show_steps: bool) -> None:
    if output_format == "json":
        click.echo(format_response_json(response))
    elif output_format == "detailed":
        format_response_detailed(response, options.distance_measurement_system)
    else:
        format_response_table(
            response, options.distance_measurement_system, verbose=show_steps
        )


@cli.group()
def config() -> None:
    """Configuration management."""
    pass


@config.command("show")
def show_config() -> None:
    """Show default settings."""
    console.print("[bold]Current Configuration:[/bold]")
    console.print(f"• Default profile: {DEFAULT_PROFILE}")
    console.print(f"• Default shape format: {DEFAULT_SHAPE_FORMAT}")
    console.print(f"• Default shape resolution: {DEFAULT_SHAPE_RESOLUTION}")
    console.print(f"• Waypoints per request: {MIN_WAYPOINTS}-{MAX_WAYPOINTS}")
    console.print(f"• Options schema version: {SCHEMA_VERSION}")
    console.print(f"• Sample fixture: {DEFAULT_FIXTURE}")


if __name__ == "__main__":
    cli()
