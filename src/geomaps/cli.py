"""CLI interface for geomaps"""

import json
import logging
from datetime import datetime, timezone as dt_timezone
from pathlib import Path
from typing import Any, List, Optional, Tuple

import click

from geomaps.domain.models.constants import Avoid, TravelMode
from geomaps.domain.models.location import LatLng, Size
from geomaps.infrastructure.config.config_manager import ConfigManager, ConfigurationError
from geomaps.infrastructure.http_client import backoff_policy_from_config
from geomaps.infrastructure.maps import (
    DirectionsOptions,
    DistanceMatrixOptions,
    GeocodeOptions,
    MapsClient,
    ReverseGeocodeOptions,
    StaticMapOptions,
    StreetViewOptions,
    directions,
    distance_matrix,
    elevation,
    geocode,
    reverse_geocode,
    snap_to_roads,
    static_map,
    street_view,
    timezone,
)

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Setup logging configuration"""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )
    logging.getLogger().setLevel(level)
    # urllib3 is chatty at DEBUG and would log request URLs with credentials
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def _die(message: str, verbose: bool = False, exc: Optional[Exception] = None) -> None:
    """Exit with a user-friendly error message"""
    if exc is not None:
        logger.error(message, exc_info=verbose)
    else:
        logger.error(message)
    raise click.ClickException(message)


def parse_latlng(value: str) -> LatLng:
    """Parse "lat,lng" into a LatLng

    Raises:
        click.BadParameter: If the value is not two comma-separated numbers
    """
    parts = value.split(",")
    if len(parts) != 2:
        raise click.BadParameter(f"expected LAT,LNG, got {value!r}")
    try:
        return LatLng(float(parts[0]), float(parts[1]))
    except ValueError as e:
        raise click.BadParameter(f"expected LAT,LNG, got {value!r}") from e


def parse_size(value: str) -> Size:
    """Parse "WIDTHxHEIGHT" into a Size"""
    try:
        width, height = value.lower().split("x")
        return Size(int(width), int(height))
    except ValueError as e:
        raise click.BadParameter(f"expected WIDTHxHEIGHT, got {value!r}") from e


def parse_location(value: str):
    """LAT,LNG becomes a LatLng, anything else stays an address"""
    try:
        return parse_latlng(value)
    except click.BadParameter:
        return value


def _create_client(ctx: click.Context) -> MapsClient:
    """Create maps client from config

    Args:
        ctx: Click context holding config path and verbosity

    Returns:
        MapsClient instance
    """
    verbose = ctx.obj.get("verbose", False)
    try:
        config_manager = ConfigManager(config_path=ctx.obj.get("config_path"))
    except ConfigurationError as e:
        _die(str(e), verbose=verbose, exc=e)

    maps_config = config_manager.get_maps_config()
    retry_config = config_manager.get_retry_config()
    ctx.obj["maps_config"] = maps_config

    try:
        return MapsClient(
            api_key=maps_config.api_key,
            client_id=maps_config.client_id,
            signing_key=maps_config.signing_key,
            base_url=maps_config.base_url,
            roads_base_url=maps_config.roads_base_url,
            timeout=maps_config.timeout,
            retry_policy=backoff_policy_from_config(retry_config),
        )
    except ValueError as e:
        _die(str(e), verbose=verbose, exc=e)


def _echo_json(value: Any) -> None:
    if isinstance(value, list):
        data = [item.model_dump(mode="json") for item in value]
    else:
        data = value.model_dump(mode="json")
    click.echo(json.dumps(data, indent=2, ensure_ascii=False))


def _run(ctx: click.Context, action) -> None:
    """Run ``action(client)`` and report failures as click errors"""
    verbose = ctx.obj.get("verbose", False)
    client = _create_client(ctx)
    try:
        with client:
            action(client)
    except click.ClickException:
        raise
    except ValueError as e:
        _die(f"Invalid request: {e}", verbose=verbose, exc=e)
    except Exception as e:
        _die(f"Request failed: {e}", verbose=verbose, exc=e)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option(
    "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to .geomaps.yml config file",
)
@click.pass_context
def cli(ctx, verbose: bool, config: Path):
    """geomaps - command line client for the Maps web services"""
    ctx.ensure_object(dict)
    setup_logging(verbose)
    ctx.obj["config_path"] = config
    ctx.obj["verbose"] = verbose


@cli.command("geocode")
@click.argument("address")
@click.option("--language", type=str, help="Result language. Overrides config.")
@click.option("--region", type=str, help="Region bias (ccTLD). Overrides config.")
@click.pass_context
def geocode_cmd(ctx, address: str, language: Optional[str], region: Optional[str]):
    """Convert an ADDRESS to coordinates."""

    def action(client: MapsClient) -> None:
        maps_config = ctx.obj["maps_config"]
        options = GeocodeOptions(
            address=address,
            language=language or maps_config.language,
            region=region or maps_config.region,
        )
        _echo_json(geocode(client, options))

    _run(ctx, action)


@cli.command("reverse")
@click.argument("latlng")
@click.option("--language", type=str, help="Result language. Overrides config.")
@click.pass_context
def reverse_cmd(ctx, latlng: str, language: Optional[str]):
    """Find addresses near LATLNG (e.g. 40.714224,-73.961452)."""
    point = parse_latlng(latlng)

    def action(client: MapsClient) -> None:
        options = ReverseGeocodeOptions(language=language or ctx.obj["maps_config"].language)
        _echo_json(reverse_geocode(client, point, options))

    _run(ctx, action)


@cli.command("directions")
@click.argument("origin")
@click.argument("destination")
@click.option(
    "--mode",
    type=click.Choice([m.value for m in TravelMode], case_sensitive=False),
    help="Travel mode (default: driving)",
)
@click.option("--alternatives", is_flag=True, help="Return alternative routes")
@click.option(
    "--avoid",
    multiple=True,
    type=click.Choice([a.value for a in Avoid], case_sensitive=False),
    help="Features to avoid (repeatable)",
)
@click.option("--departure-time", type=str, help="Unix timestamp or 'now'")
@click.pass_context
def directions_cmd(
    ctx,
    origin: str,
    destination: str,
    mode: Optional[str],
    alternatives: bool,
    avoid: Tuple[str, ...],
    departure_time: Optional[str],
):
    """Routes from ORIGIN to DESTINATION (addresses or LAT,LNG)."""

    def action(client: MapsClient) -> None:
        maps_config = ctx.obj["maps_config"]
        options = DirectionsOptions(
            mode=TravelMode(mode.lower()) if mode else None,
            alternatives=alternatives,
            avoid=[Avoid(a.lower()) for a in avoid],
            language=maps_config.language,
            region=maps_config.region,
            departure_time=departure_time,
        )
        _echo_json(directions(client, parse_location(origin), parse_location(destination), options))

    _run(ctx, action)


@cli.command("distance")
@click.option("--origin", "-o", "origins", multiple=True, required=True, help="Origin (repeatable)")
@click.option("--destination", "-d", "destinations", multiple=True, required=True, help="Destination (repeatable)")
@click.option("--mode", type=click.Choice([m.value for m in TravelMode], case_sensitive=False))
@click.pass_context
def distance_cmd(ctx, origins: Tuple[str, ...], destinations: Tuple[str, ...], mode: Optional[str]):
    """Travel distance and time between origins and destinations."""

    def action(client: MapsClient) -> None:
        options = DistanceMatrixOptions(
            mode=TravelMode(mode.lower()) if mode else None,
            language=ctx.obj["maps_config"].language,
        )
        result = distance_matrix(
            client,
            [parse_location(o) for o in origins],
            [parse_location(d) for d in destinations],
            options,
        )
        _echo_json(result)

    _run(ctx, action)


@cli.command("elevation")
@click.argument("locations", nargs=-1, required=True)
@click.pass_context
def elevation_cmd(ctx, locations: Tuple[str, ...]):
    """Elevation at LOCATIONS (LAT,LNG ...)."""
    points: List[LatLng] = [parse_latlng(value) for value in locations]
    _run(ctx, lambda client: _echo_json(elevation(client, points)))


@cli.command("timezone")
@click.argument("latlng")
@click.option("--timestamp", type=int, help="Unix timestamp (default: now)")
@click.pass_context
def timezone_cmd(ctx, latlng: str, timestamp: Optional[int]):
    """Time zone at LATLNG."""
    point = parse_latlng(latlng)
    when = timestamp if timestamp is not None else datetime.now(dt_timezone.utc)

    def action(client: MapsClient) -> None:
        _echo_json(timezone(client, point, when, language=ctx.obj["maps_config"].language))

    _run(ctx, action)


@cli.command("snap")
@click.argument("path", nargs=-1, required=True)
@click.option("--interpolate", is_flag=True, help="Add points along the full road geometry")
@click.pass_context
def snap_cmd(ctx, path: Tuple[str, ...], interpolate: bool):
    """Snap PATH (LAT,LNG ...) to roads."""
    points = [parse_latlng(value) for value in path]
    _run(ctx, lambda client: _echo_json(snap_to_roads(client, points, interpolate=interpolate)))


@cli.command("staticmap")
@click.argument("size")
@click.option("--center", type=str, required=True, help="Address or LAT,LNG")
@click.option("--zoom", type=click.IntRange(0, 21), help="Zoom level")
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), required=True)
@click.pass_context
def staticmap_cmd(ctx, size: str, center: str, zoom: Optional[int], output: Path):
    """Save a static map of SIZE (WIDTHxHEIGHT) to a file."""
    image_size = parse_size(size)

    def action(client: MapsClient) -> None:
        options = StaticMapOptions(center=parse_location(center), zoom=zoom, language=ctx.obj["maps_config"].language)
        content = static_map(client, image_size, options)
        output.write_bytes(content)
        click.echo(f"Saved {len(content)} bytes to {output}")

    _run(ctx, action)


@cli.command("streetview")
@click.argument("size")
@click.option("--location", type=str, required=True, help="Address or LAT,LNG")
@click.option("--heading", type=click.FloatRange(0, 360))
@click.option("--pitch", type=click.FloatRange(-90, 90), default=0.0)
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), required=True)
@click.pass_context
def streetview_cmd(ctx, size: str, location: str, heading: Optional[float], pitch: float, output: Path):
    """Save a street view image of SIZE (WIDTHxHEIGHT) to a file."""
    image_size = parse_size(size)

    def action(client: MapsClient) -> None:
        options = StreetViewOptions(location=parse_location(location), heading=heading, pitch=pitch)
        content = street_view(client, image_size, options)
        output.write_bytes(content)
        click.echo(f"Saved {len(content)} bytes to {output}")

    _run(ctx, action)


def main():
    """Main entry point"""
    cli(obj={})


if __name__ == "__main__":
    main()
