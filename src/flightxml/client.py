"""flightxml.client

Asynchronous client for the FlightAware FlightXML2 JSON API.

Every public coroutine maps onto one remote endpoint: the request fields are
form-encoded and POSTed to ``<base_url>/<Endpoint>``, and the
``<Endpoint>Result`` member of the JSON reply is returned.

Example Usage:
    from flightxml import FlightXMLClient, FlightXMLError
    import asyncio

    client = FlightXMLClient("username", "api-key")

    async def main():
        aircraft = await client.aircraft_type("GALX")
        print(aircraft["manufacturer"], aircraft["type"])

        # The callback receives (error, result); errors are still raised.
        try:
            await client.search(parameters={"type": "B77*"}, how_many=1,
                                callback=lambda err, res: print(err or res))
        except FlightXMLError:
            pass

    asyncio.run(main())
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Dict, Mapping, Optional

import requests
import urllib3
from pydantic import ValidationError

from .auth import DeferredBasicAuth
from .config import ClientConfig
from .envelope import parse_body, unwrap
from .errors import FlightXMLError, ResultDecodeError, error_for_status
from .models import decode
from .queries import airline_insight_query, flight_schedule_query, search_query

__all__ = ["FlightXMLClient", "Callback"]

logger = logging.getLogger(__name__)

Callback = Callable[[Optional[BaseException], Any], None]
Params = Optional[Mapping[str, Any]]


def _fields(params: Params = None, **fields: Any) -> Dict[str, Any]:
    """Merge a positional params mapping with keyword fields (keywords win).

    None values are dropped from both, so an explicit None counts as unset.
    """
    out = {k: v for k, v in (params or {}).items() if v is not None}
    out.update({k: v for k, v in fields.items() if v is not None})
    return out


def _form(data: Mapping[str, Any]) -> Dict[str, Any]:
    form = {}
    for key, value in data.items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        form[key] = value
    return form


class FlightXMLClient:
    """Client for one FlightXML2 account.

    Credentials live on the client's own ClientConfig; separate clients
    never share them.  Requests run on worker threads, so several calls may
    be awaited concurrently with ``asyncio.gather``.
    """

    def __init__(
        self,
        username: Optional[str] = None,
        api_key: Optional[str] = None,
        *,
        config: Optional[ClientConfig] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config.model_copy() if config is not None else ClientConfig()
        if username is not None:
            self.config.username = username or None
        if api_key is not None:
            self.config.api_key = api_key or None
        self.session = session or requests.Session()

        if not self.config.verify_tls:
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

    # ── credentials ────────────────────────────────────────────

    @property
    def username(self) -> Optional[str]:
        return self.config.username

    @property
    def api_key(self) -> Optional[str]:
        return self.config.api_key

    def set_credentials(self, username: Optional[str] = None, api_key: Optional[str] = None) -> None:
        """Replace both credentials; falsy values leave the field unset (None)."""
        self.config.username = username or None
        self.config.api_key = api_key or None

    # ── transport ──────────────────────────────────────────────

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "FlightXMLClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _post(self, method: str, data: Mapping[str, Any], auth: DeferredBasicAuth) -> Any:
        """Issue one request and return its payload, raising the error record on failure.

        Network failures propagate as the ``requests`` exception raised by
        the session.
        """
        url = self.config.endpoint_url(method)
        logger.debug("POST %s %s", url, dict(data))
        response = self.session.post(
            url,
            data=_form(data),
            auth=auth,
            verify=self.config.verify_tls,
            timeout=self.config.timeout,
        )

        if response.status_code != 200:
            raise error_for_status(response.status_code, response.text)

        envelope = parse_body(response.text)
        if not self.config.unwrap_results:
            return envelope

        result = unwrap(envelope, method, strict=self.config.strict_envelope)
        if self.config.typed_results:
            try:
                result = decode(method, result)
            except ValidationError as exc:
                raise ResultDecodeError(exc, text=response.text) from exc
        return result

    async def call(self, method: str, data: Params = None, callback: Optional[Callback] = None) -> Any:
        """Call endpoint ``method`` with form fields ``data``.

        :param method: remote endpoint name, e.g. ``"AircraftType"``.
        :param data: request fields; None values are not sent.
        :param callback: optional ``callback(error, result)``, invoked exactly
            once before the coroutine returns or raises.
        :return: the unwrapped result payload.
        :raises FlightXMLError: on HTTP, envelope or decode errors.
        :raises requests.exceptions.RequestException: on network errors.
        """
        # Credentials are captured now, before the request leaves this thread.
        auth = DeferredBasicAuth(self.config.username, self.config.api_key)
        try:
            result = await asyncio.to_thread(self._post, method, dict(data or {}), auth)
        except (FlightXMLError, requests.exceptions.RequestException) as exc:
            logger.warning("%s failed: %r", method, exc)
            if callback is not None:
                callback(exc, None)
            raise

        logger.debug("%s completed", method)
        if callback is not None:
            callback(None, result)
        return result

    # ── operations ─────────────────────────────────────────────

    async def aircraft_type(self, aircraft_type: str, callback: Optional[Callback] = None) -> Any:
        """Look up an aircraft type code such as ``GALX``.

        Returns an AircraftTypeStruct: manufacturer (``"IAI"``), type
        (``"Gulfstream G200"``) and description (``"twin-jet"``).
        """
        return await self.call("AircraftType", {"type": aircraft_type}, callback)

    async def airline_flight_info(self, fa_flight_id: str, callback: Optional[Callback] = None) -> Any:
        """Gate, baggage claim and meal service details for a commercial flight.

        ``fa_flight_id`` is a FlightAware flight id (see get_flight_id,
        flight_info_ex, in_flight_info) or ``"ident@departureTime"``.  Only
        some carriers and flights have this information.
        """
        return await self.call("AirlineFlightInfo", {"faFlightID": fa_flight_id}, callback)

    async def airline_flight_schedules(
        self,
        params: Params = None,
        *,
        start_date: Optional[int] = None,
        end_date: Optional[int] = None,
        origin: Optional[str] = None,
        destination: Optional[str] = None,
        airline: Optional[str] = None,
        flightno: Optional[str] = None,
        how_many: Optional[int] = None,
        offset: Optional[int] = None,
        callback: Optional[Callback] = None,
    ) -> Any:
        """Scheduled flights in a time window (epoch seconds).

        ``startDate`` defaults to now and ``endDate`` to one day after
        ``startDate``.
        """
        data = _fields(
            params,
            startDate=start_date,
            endDate=end_date,
            origin=origin,
            destination=destination,
            airline=airline,
            flightno=flightno,
            howMany=how_many,
            offset=offset,
        )
        return await self.call("AirlineFlightSchedules", flight_schedule_query(data), callback)

    async def airline_info(self, airline_code: str, callback: Optional[Callback] = None) -> Any:
        """Name, callsign, location and contact details for an airline ICAO code."""
        return await self.call("AirlineInfo", {"airlineCode": airline_code}, callback)

    async def airline_insight(
        self,
        params: Params = None,
        *,
        origin: Optional[str] = None,
        destination: Optional[str] = None,
        report_type: Optional[int] = None,
        callback: Optional[Callback] = None,
    ) -> Any:
        """Carrier statistics for a route.

        ``reportType`` is an AirlineInsightReportType and defaults to
        PERCENTAGE_SCHEDULED_ACTUALLY_FLOWN.
        """
        data = _fields(params, origin=origin, destination=destination, reportType=report_type)
        return await self.call("AirlineInsight", airline_insight_query(data), callback)

    async def airport_info(self, airport_code: str, callback: Optional[Callback] = None) -> Any:
        """Name, location, coordinates and timezone of an airport."""
        return await self.call("AirportInfo", {"airportCode": airport_code}, callback)

    async def all_airlines(self, callback: Optional[Callback] = None) -> Any:
        """ICAO codes of every airline known to FlightXML."""
        return await self.call("AllAirlines", {}, callback)

    async def all_airports(self, callback: Optional[Callback] = None) -> Any:
        """Codes of every airport known to FlightXML."""
        return await self.call("AllAirports", {}, callback)

    async def arrived(
        self,
        params: Params = None,
        *,
        airport: Optional[str] = None,
        how_many: Optional[int] = None,
        filter: Optional[str] = None,
        offset: Optional[int] = None,
        callback: Optional[Callback] = None,
    ) -> Any:
        """Flights that have recently arrived at ``airport``."""
        data = _fields(params, airport=airport, howMany=how_many, filter=filter, offset=offset)
        return await self.call("Arrived", data, callback)

    async def block_ident_check(self, ident: str, callback: Optional[Callback] = None) -> Any:
        """1 if the tail number is on the FAA blocked list, else 0."""
        return await self.call("BlockIdentCheck", {"ident": ident}, callback)

    async def count_airport_operations(self, airport: str, callback: Optional[Callback] = None) -> Any:
        """Counts of enroute, departed and scheduled flights for an airport."""
        return await self.call("CountAirportOperations", {"airport": airport}, callback)

    async def count_all_enroute_airline_operations(self, callback: Optional[Callback] = None) -> Any:
        """Number of airborne flights for every airline."""
        return await self.call("CountAllEnrouteAirlineOperations", {}, callback)

    async def decode_flight_route(self, fa_flight_id: str, callback: Optional[Callback] = None) -> Any:
        """Waypoints of the filed route of a flight."""
        return await self.call("DecodeFlightRoute", {"faFlightID": fa_flight_id}, callback)

    async def decode_route(
        self,
        params: Params = None,
        *,
        origin: Optional[str] = None,
        route: Optional[str] = None,
        destination: Optional[str] = None,
        callback: Optional[Callback] = None,
    ) -> Any:
        """Waypoints of an arbitrary route string, e.g. ``"SJC V334 SAC SWR"``."""
        data = _fields(params, origin=origin, route=route, destination=destination)
        return await self.call("DecodeRoute", data, callback)

    async def delete_alert(self, alert_id: Any, callback: Optional[Callback] = None) -> Any:
        """Delete a flight alert.

        With a falsy ``alert_id`` no request is made and ``callback`` is
        never called; the coroutine just returns None.
        """
        if not alert_id:
            logger.warning("DeleteAlert called without an alert id; nothing sent")
            return None
        return await self.call("DeleteAlert", {"alert_id": alert_id}, callback)

    async def departed(
        self,
        params: Params = None,
        *,
        airport: Optional[str] = None,
        how_many: Optional[int] = None,
        filter: Optional[str] = None,
        offset: Optional[int] = None,
        callback: Optional[Callback] = None,
    ) -> Any:
        """Flights that have recently departed from ``airport``."""
        data = _fields(params, airport=airport, howMany=how_many, filter=filter, offset=offset)
        return await self.call("Departed", data, callback)

    async def enroute(
        self,
        params: Params = None,
        *,
        airport: Optional[str] = None,
        how_many: Optional[int] = None,
        filter: Optional[str] = None,
        offset: Optional[int] = None,
        callback: Optional[Callback] = None,
    ) -> Any:
        """Flights currently en route to ``airport``."""
        data = _fields(params, airport=airport, howMany=how_many, filter=filter, offset=offset)
        return await self.call("Enroute", data, callback)

    async def fleet_arrived(
        self,
        params: Params = None,
        *,
        fleet: Optional[str] = None,
        how_many: Optional[int] = None,
        offset: Optional[int] = None,
        callback: Optional[Callback] = None,
    ) -> Any:
        """Recently arrived flights of an airline's fleet."""
        data = _fields(params, fleet=fleet, howMany=how_many, offset=offset)
        return await self.call("FleetArrived", data, callback)

    async def fleet_scheduled(
        self,
        params: Params = None,
        *,
        fleet: Optional[str] = None,
        how_many: Optional[int] = None,
        offset: Optional[int] = None,
        callback: Optional[Callback] = None,
    ) -> Any:
        """Scheduled flights of an airline's fleet."""
        data = _fields(params, fleet=fleet, howMany=how_many, offset=offset)
        return await self.call("FleetScheduled", data, callback)

    async def flight_info(
        self,
        params: Params = None,
        *,
        ident: Optional[str] = None,
        how_many: Optional[int] = None,
        callback: Optional[Callback] = None,
    ) -> Any:
        data = _fields(params, ident=ident, howMany=how_many)
        return await self.call("FlightInfo", data, callback)

    async def flight_info_ex(
        self,
        params: Params = None,
        *,
        ident: Optional[str] = None,
        how_many: Optional[int] = None,
        offset: Optional[int] = None,
        callback: Optional[Callback] = None,
    ) -> Any:
        """Like flight_info, with FlightAware flight ids and paging."""
        data = _fields(params, ident=ident, howMany=how_many, offset=offset)
        return await self.call("FlightInfoEx", data, callback)

    async def get_alerts(self, callback: Optional[Callback] = None) -> Any:
        """Alerts registered to the authenticated account."""
        return await self.call("GetAlerts", {}, callback)

    async def get_flight_id(
        self,
        params: Params = None,
        *,
        ident: Optional[str] = None,
        departure_time: Optional[int] = None,
        callback: Optional[Callback] = None,
    ) -> Any:
        """FlightAware flight id for an ident and departure time."""
        data = _fields(params, ident=ident, departureTime=departure_time)
        return await self.call("GetFlightID", data, callback)

    async def get_historical_track(self, fa_flight_id: str, callback: Optional[Callback] = None) -> Any:
        return await self.call("GetHistoricalTrack", {"faFlightID": fa_flight_id}, callback)

    async def get_last_track(self, ident: str, callback: Optional[Callback] = None) -> Any:
        return await self.call("GetLastTrack", {"ident": ident}, callback)

    async def inbound_flight_info(self, fa_flight_id: str, callback: Optional[Callback] = None) -> Any:
        """The flight operated by the same aircraft immediately before this one."""
        return await self.call("InboundFlightInfo", {"faFlightID": fa_flight_id}, callback)

    async def in_flight_info(self, ident: str, callback: Optional[Callback] = None) -> Any:
        """Latest position and flight plan for an airborne ident."""
        return await self.call("InFlightInfo", {"ident": ident}, callback)

    async def lat_longs_to_distance(
        self,
        params: Params = None,
        *,
        lat1: Optional[float] = None,
        lon1: Optional[float] = None,
        lat2: Optional[float] = None,
        lon2: Optional[float] = None,
        callback: Optional[Callback] = None,
    ) -> Any:
        """Great-circle distance in statute miles between two points."""
        data = _fields(params, lat1=lat1, lon1=lon1, lat2=lat2, lon2=lon2)
        return await self.call("LatLongsToDistance", data, callback)

    async def lat_longs_to_heading(
        self,
        params: Params = None,
        *,
        lat1: Optional[float] = None,
        lon1: Optional[float] = None,
        lat2: Optional[float] = None,
        lon2: Optional[float] = None,
        callback: Optional[Callback] = None,
    ) -> Any:
        """Initial great-circle heading in degrees from point 1 to point 2."""
        data = _fields(params, lat1=lat1, lon1=lon1, lat2=lat2, lon2=lon2)
        return await self.call("LatLongsToHeading", data, callback)

    async def map_flight(
        self,
        params: Params = None,
        *,
        ident: Optional[str] = None,
        map_height: Optional[int] = None,
        map_width: Optional[int] = None,
        callback: Optional[Callback] = None,
    ) -> Any:
        """Base64-encoded GIF map of a flight's position and track."""
        data = _fields(params, ident=ident, mapHeight=map_height, mapWidth=map_width)
        return await self.call("MapFlight", data, callback)

    async def map_flight_ex(
        self,
        params: Params = None,
        *,
        fa_flight_id: Optional[str] = None,
        map_height: Optional[int] = None,
        map_width: Optional[int] = None,
        layer_on: Optional[str] = None,
        layer_off: Optional[str] = None,
        show_data_blocks: Optional[bool] = None,
        show_airports: Optional[bool] = None,
        airports_expand_view: Optional[bool] = None,
        latlon_box: Optional[str] = None,
        callback: Optional[Callback] = None,
    ) -> Any:
        """Base64-encoded map image with layer and viewport control."""
        data = _fields(
            params,
            faFlightID=fa_flight_id,
            mapHeight=map_height,
            mapWidth=map_width,
            layer_on=layer_on,
            layer_off=layer_off,
            show_data_blocks=show_data_blocks,
            show_airports=show_airports,
            airports_expand_view=airports_expand_view,
            latlon_box=latlon_box,
        )
        return await self.call("MapFlightEx", data, callback)

    async def metar(self, airport: str, callback: Optional[Callback] = None) -> Any:
        """Raw METAR observation for an airport."""
        return await self.call("Metar", {"airport": airport}, callback)

    async def metar_ex(
        self,
        params: Params = None,
        *,
        airport: Optional[str] = None,
        start_time: Optional[int] = None,
        how_many: Optional[int] = None,
        offset: Optional[int] = None,
        callback: Optional[Callback] = None,
    ) -> Any:
        """Decoded METAR observations, newest first."""
        data = _fields(params, airport=airport, startTime=start_time, howMany=how_many, offset=offset)
        return await self.call("MetarEx", data, callback)

    async def ntaf(self, airport: str, callback: Optional[Callback] = None) -> Any:
        """Terminal area forecast split into lines."""
        return await self.call("NTaf", {"airport": airport}, callback)

    async def register_alert_endpoint(
        self,
        params: Params = None,
        *,
        address: Optional[str] = None,
        format_type: Optional[str] = None,
        callback: Optional[Callback] = None,
    ) -> Any:
        """Set the URL alerts are POSTed to, e.g. ``format_type="json/post"``."""
        data = _fields(params, address=address, format_type=format_type)
        return await self.call("RegisterAlertEndpoint", data, callback)

    async def routes_between_airports(
        self,
        params: Params = None,
        *,
        origin: Optional[str] = None,
        destination: Optional[str] = None,
        callback: Optional[Callback] = None,
    ) -> Any:
        data = _fields(params, origin=origin, destination=destination)
        return await self.call("RoutesBetweenAirports", data, callback)

    async def routes_between_airports_ex(
        self,
        params: Params = None,
        *,
        origin: Optional[str] = None,
        destination: Optional[str] = None,
        how_many: Optional[int] = None,
        offset: Optional[int] = None,
        max_departure_age: Optional[str] = None,
        max_file_age: Optional[str] = None,
        callback: Optional[Callback] = None,
    ) -> Any:
        data = _fields(
            params,
            origin=origin,
            destination=destination,
            howMany=how_many,
            offset=offset,
            maxDepartureAge=max_departure_age,
            maxFileAge=max_file_age,
        )
        return await self.call("RoutesBetweenAirportsEx", data, callback)

    async def scheduled(
        self,
        params: Params = None,
        *,
        airport: Optional[str] = None,
        how_many: Optional[int] = None,
        filter: Optional[str] = None,
        offset: Optional[int] = None,
        callback: Optional[Callback] = None,
    ) -> Any:
        """Flights scheduled to depart from ``airport`` that have not yet left."""
        data = _fields(params, airport=airport, howMany=how_many, filter=filter, offset=offset)
        return await self.call("Scheduled", data, callback)

    async def search(
        self,
        params: Params = None,
        *,
        query: Optional[str] = None,
        parameters: Optional[Mapping[str, Any]] = None,
        how_many: Optional[int] = None,
        offset: Optional[int] = None,
        callback: Optional[Callback] = None,
    ) -> Any:
        """Search airborne flights.

        Either pass a ready ``query`` such as ``"-destination KLAX -prefix H"``
        or a ``parameters`` mapping (``{"destination": "KLAX", "prefix": "H"}``);
        parameter terms are appended after any query text.
        """
        data = _fields(params, query=query, parameters=parameters, howMany=how_many, offset=offset)
        return await self.call("Search", search_query(data), callback)

    async def search_birdseye_in_flight(
        self,
        params: Params = None,
        *,
        query: Optional[str] = None,
        how_many: Optional[int] = None,
        offset: Optional[int] = None,
        callback: Optional[Callback] = None,
    ) -> Any:
        """Search airborne flights with the birdseye grammar, e.g. ``"{< alt 100} {> gs 200}"``."""
        data = _fields(params, query=query, howMany=how_many, offset=offset)
        return await self.call("SearchBirdseyeInFlight", data, callback)

    async def search_birdseye_positions(
        self,
        params: Params = None,
        *,
        query: Optional[str] = None,
        unique_flights: Optional[bool] = None,
        how_many: Optional[int] = None,
        offset: Optional[int] = None,
        callback: Optional[Callback] = None,
    ) -> Any:
        """Search individual flight positions with the birdseye grammar."""
        data = _fields(params, query=query, uniqueFlights=unique_flights, howMany=how_many, offset=offset)
        return await self.call("SearchBirdseyePositions", data, callback)

    async def search_count(
        self,
        params: Params = None,
        *,
        query: Optional[str] = None,
        parameters: Optional[Mapping[str, Any]] = None,
        callback: Optional[Callback] = None,
    ) -> Any:
        """Number of flights a search would match; same query rules as search()."""
        data = _fields(params, query=query, parameters=parameters)
        return await self.call("SearchCount", search_query(data), callback)

    async def set_alert(
        self,
        params: Params = None,
        *,
        alert_id: Optional[int] = None,
        ident: Optional[str] = None,
        origin: Optional[str] = None,
        destination: Optional[str] = None,
        aircrafttype: Optional[str] = None,
        date_start: Optional[int] = None,
        date_end: Optional[int] = None,
        channels: Optional[str] = None,
        enabled: Optional[bool] = None,
        max_weekly: Optional[int] = None,
        callback: Optional[Callback] = None,
    ) -> Any:
        """Create (``alert_id=0``) or update a flight alert; returns its id."""
        data = _fields(
            params,
            alert_id=alert_id,
            ident=ident,
            origin=origin,
            destination=destination,
            aircrafttype=aircrafttype,
            date_start=date_start,
            date_end=date_end,
            channels=channels,
            enabled=enabled,
            max_weekly=max_weekly,
        )
        return await self.call("SetAlert", data, callback)

    async def set_maximum_result_size(self, max_size: int, callback: Optional[Callback] = None) -> Any:
        """Raise or lower the account's cap on records per result."""
        return await self.call("SetMaximumResultSize", {"max_size": max_size}, callback)

    async def taf(self, airport: str, callback: Optional[Callback] = None) -> Any:
        return await self.call("Taf", {"airport": airport}, callback)

    async def tail_owner(self, ident: str, callback: Optional[Callback] = None) -> Any:
        """Registered owner of an aircraft by tail number."""
        return await self.call("TailOwner", {"ident": ident}, callback)

    async def zipcode_info(self, zipcode: str, callback: Optional[Callback] = None) -> Any:
        return await self.call("ZipcodeInfo", {"zipcode": zipcode}, callback)
