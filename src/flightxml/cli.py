"""CLI entry point for flightxml package."""
from __future__ import annotations

import asyncio
import json
import logging
import sys
from typing import Any, Dict, List, Optional, Tuple

import click
import requests

from .client import FlightXMLClient
from .config import ClientConfig
from .errors import FlightXMLError

# (endpoint, request fields) pairs exercised by `flightxml smoke`.
SMOKE_CALLS: List[Tuple[str, Dict[str, Any]]] = [
    ("AircraftType", {"type": "GALX"}),
    ("AirlineInfo", {"airlineCode": "UAL"}),
    ("AirportInfo", {"airportCode": "SFO"}),
    ("CountAirportOperations", {"airport": "KSFO"}),
    ("Arrived", {"airport": "KSFO", "howMany": 1}),
    ("FlightInfoEx", {"ident": "N415PW", "howMany": 1}),
    ("LatLongsToDistance", {"lat1": 37.3626667, "lon1": -121.9291111, "lat2": 33.9425003, "lon2": -118.4080736}),
    ("LatLongsToHeading", {"lat1": 37.3626667, "lon1": -121.9291111, "lat2": 33.9425003, "lon2": -118.4080736}),
    ("Metar", {"airport": "KSFO"}),
    ("RoutesBetweenAirports", {"origin": "KSFO", "destination": "KLAX"}),
    ("SearchCount", {"query": "-destination KLAX -prefix H"}),
    ("ZipcodeInfo", {"zipcode": "95060"}),
]


def _parse_params(pairs: Tuple[str, ...]) -> Dict[str, str]:
    params: Dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected key=value, got {pair!r}", param_hint="--param")
        params[key] = value
    return params


def _error_record(exc: BaseException) -> Dict[str, Any]:
    if isinstance(exc, FlightXMLError):
        return exc.to_dict()
    return {"error": f"{type(exc).__name__}: {exc}"}


def _run(client: FlightXMLClient, coro_factory) -> None:
    try:
        result = asyncio.run(coro_factory(client))
    except (FlightXMLError, requests.exceptions.RequestException) as exc:
        click.echo(json.dumps(_error_record(exc), indent=2, default=str), err=True)
        sys.exit(1)
    click.echo(json.dumps(result, indent=2))


@click.group()
@click.option("--username", "-u", help="FlightAware user name (default: $FLIGHTXML_USERNAME).")
@click.option("--api-key", "-k", help="FlightXML API key (default: $FLIGHTXML_API_KEY).")
@click.option("--raw", is_flag=True, help="Print the whole JSON envelope.")
@click.option("--strict", is_flag=True, help="Fail when the result field is missing.")
@click.option("--verbose", "-v", is_flag=True, help="Log requests at DEBUG level.")
@click.pass_context
def main(
    ctx: click.Context,
    username: Optional[str],
    api_key: Optional[str],
    raw: bool,
    strict: bool,
    verbose: bool,
) -> None:
    """FlightAware FlightXML2 command-line client."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    overrides: Dict[str, Any] = {"unwrap_results": not raw, "strict_envelope": strict}
    if username:
        overrides["username"] = username
    if api_key:
        overrides["api_key"] = api_key
    ctx.obj = FlightXMLClient(config=ClientConfig.from_env(**overrides))


@main.command("call")
@click.argument("method")
@click.option("--param", "-p", "params", multiple=True, help="Request field as key=value (repeatable).")
@click.pass_obj
def call_cmd(client: FlightXMLClient, method: str, params: Tuple[str, ...]) -> None:
    """Call any endpoint by its METHOD name, e.g. `call FlightInfo -p ident=N415PW`."""
    data = _parse_params(params)
    _run(client, lambda c: c.call(method, data))


@main.command("aircraft-type")
@click.argument("aircraft_type", metavar="TYPE")
@click.pass_obj
def aircraft_type_cmd(client: FlightXMLClient, aircraft_type: str) -> None:
    """Describe an aircraft TYPE code such as GALX."""
    _run(client, lambda c: c.aircraft_type(aircraft_type))


@main.command("metar")
@click.argument("airport")
@click.pass_obj
def metar_cmd(client: FlightXMLClient, airport: str) -> None:
    """Current METAR for AIRPORT."""
    _run(client, lambda c: c.metar(airport))


@main.command("search")
@click.option("--query", "-q", help="Literal query, e.g. '-destination KLAX'.")
@click.option("--param", "-p", "params", multiple=True, help="Search term as key=value (repeatable).")
@click.option("--how-many", "how_many", type=int, default=None, help="Maximum flights to return.")
@click.option("--count", is_flag=True, help="Only count matching flights.")
@click.pass_obj
def search_cmd(
    client: FlightXMLClient,
    query: Optional[str],
    params: Tuple[str, ...],
    how_many: Optional[int],
    count: bool,
) -> None:
    """Search airborne flights by query and/or key=value terms."""
    parameters = _parse_params(params)
    if count:
        _run(client, lambda c: c.search_count(query=query, parameters=parameters))
    else:
        _run(client, lambda c: c.search(query=query, parameters=parameters, how_many=how_many))


@main.command("smoke")
@click.pass_obj
def smoke_cmd(client: FlightXMLClient) -> None:
    """Run a fixed set of sample calls and report ok/error for each."""

    async def _smoke():
        failures = 0
        for method, data in SMOKE_CALLS:
            try:
                result = await client.call(method, data)
            except (FlightXMLError, requests.exceptions.RequestException) as exc:
                failures += 1
                click.echo(f"[ERROR] {method}: {json.dumps(_error_record(exc), default=str)}")
                continue
            preview = json.dumps(result)
            click.echo(f"[OK]    {method}: {preview[:120]}")
        return failures

    failures = asyncio.run(_smoke())
    click.echo(f"\n{len(SMOKE_CALLS) - failures}/{len(SMOKE_CALLS)} calls succeeded")
    if failures:
        sys.exit(1)


if __name__ == "__main__":
    main()
