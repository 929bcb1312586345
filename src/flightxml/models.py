"""flightxml.models

Pydantic schemas for the result structures FlightXML2 returns.

These are only applied when the client is configured with
``typed_results=True``.  Every field is optional and unknown fields are
kept, so a schema never rejects a payload just because the service added
or omitted something.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

__all__ = ["RESULT_TYPES", "decode"]


class _Struct(BaseModel):
    model_config = ConfigDict(extra="allow")


# ── reference data ─────────────────────────────────────────────

class AircraftTypeStruct(_Struct):
    manufacturer: Optional[str] = None
    type: Optional[str] = None
    description: Optional[str] = None


class AirlineInfoStruct(_Struct):
    name: Optional[str] = None
    shortname: Optional[str] = None
    callsign: Optional[str] = None
    location: Optional[str] = None
    country: Optional[str] = None
    url: Optional[str] = None
    phone: Optional[str] = None


class AirportInfoStruct(_Struct):
    name: Optional[str] = None
    location: Optional[str] = None
    longitude: Optional[float] = None
    latitude: Optional[float] = None
    timezone: Optional[str] = None


class ArrayOfString(_Struct):
    data: List[str] = Field(default_factory=list)


class TailOwnerStruct(_Struct):
    owner: Optional[str] = None
    location: Optional[str] = None
    location2: Optional[str] = None
    website: Optional[str] = None


class ZipcodeInfoStruct(_Struct):
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    city: Optional[str] = None
    state: Optional[str] = None
    county: Optional[str] = None


# ── flights ────────────────────────────────────────────────────

class _Endpoints(_Struct):
    origin: Optional[str] = None
    destination: Optional[str] = None
    originName: Optional[str] = None
    originCity: Optional[str] = None
    destinationName: Optional[str] = None
    destinationCity: Optional[str] = None


class AirlineFlightInfoStruct(_Struct):
    faFlightID: Optional[str] = None
    ident: Optional[str] = None
    codeshares: List[str] = Field(default_factory=list)
    tailnumber: Optional[str] = None
    meal_service: Optional[str] = None
    gate_orig: Optional[str] = None
    gate_dest: Optional[str] = None
    terminal_orig: Optional[str] = None
    terminal_dest: Optional[str] = None
    bag_claim: Optional[str] = None
    seats_cabin_first: Optional[int] = None
    seats_cabin_business: Optional[int] = None
    seats_cabin_coach: Optional[int] = None


class FlightStruct(_Endpoints):
    ident: Optional[str] = None
    aircrafttype: Optional[str] = None
    filed_ete: Optional[str] = None
    filed_time: Optional[int] = None
    filed_departuretime: Optional[int] = None
    filed_airspeed_kts: Optional[int] = None
    filed_airspeed_mach: Optional[Any] = None
    filed_altitude: Optional[int] = None
    route: Optional[str] = None
    actualdeparturetime: Optional[int] = None
    estimatedarrivaltime: Optional[int] = None
    actualarrivaltime: Optional[int] = None
    diverted: Optional[str] = None


class FlightExStruct(FlightStruct):
    faFlightID: Optional[str] = None


class FlightInfoStruct(_Struct):
    next_offset: Optional[int] = None
    flights: List[FlightStruct] = Field(default_factory=list)


class FlightInfoExStruct(_Struct):
    next_offset: Optional[int] = None
    flights: List[FlightExStruct] = Field(default_factory=list)


class ArrivalFlightStruct(_Endpoints):
    ident: Optional[str] = None
    aircrafttype: Optional[str] = None
    actualdeparturetime: Optional[int] = None
    actualarrivaltime: Optional[int] = None


class DepartureFlightStruct(_Endpoints):
    ident: Optional[str] = None
    aircrafttype: Optional[str] = None
    actualdeparturetime: Optional[int] = None
    estimatedarrivaltime: Optional[int] = None
    actualarrivaltime: Optional[int] = None


class EnrouteFlightStruct(_Endpoints):
    ident: Optional[str] = None
    aircrafttype: Optional[str] = None
    actualdeparturetime: Optional[int] = None
    estimatedarrivaltime: Optional[int] = None
    filed_departuretime: Optional[int] = None


class ScheduledFlightStruct(_Endpoints):
    ident: Optional[str] = None
    aircrafttype: Optional[str] = None
    filed_departuretime: Optional[int] = None
    estimatedarrivaltime: Optional[int] = None


class ArrivalStruct(_Struct):
    next_offset: Optional[int] = None
    arrivals: List[ArrivalFlightStruct] = Field(default_factory=list)


class DepartureStruct(_Struct):
    next_offset: Optional[int] = None
    departures: List[DepartureFlightStruct] = Field(default_factory=list)


class EnrouteStruct(_Struct):
    next_offset: Optional[int] = None
    enroute: List[EnrouteFlightStruct] = Field(default_factory=list)


class ScheduledStruct(_Struct):
    next_offset: Optional[int] = None
    scheduled: List[ScheduledFlightStruct] = Field(default_factory=list)


class FleetArrivedStruct(ArrivalStruct):
    pass


class FleetScheduledStruct(ScheduledStruct):
    pass


class AirlineFlightScheduleStruct(_Struct):
    ident: Optional[str] = None
    actual_ident: Optional[str] = None
    departuretime: Optional[int] = None
    arrivaltime: Optional[int] = None
    origin: Optional[str] = None
    destination: Optional[str] = None
    aircrafttype: Optional[str] = None
    meal_service: Optional[str] = None
    seats_cabin_first: Optional[int] = None
    seats_cabin_business: Optional[int] = None
    seats_cabin_coach: Optional[int] = None


class ArrayOfAirlineFlightScheduleStruct(_Struct):
    next_offset: Optional[int] = None
    data: List[AirlineFlightScheduleStruct] = Field(default_factory=list)


class AirlineInsightStruct(_Struct):
    origin: Optional[str] = None
    destination: Optional[str] = None
    carrier: Optional[str] = None


class ArrayOfAirlineInsightStruct(_Struct):
    start_date: Optional[Any] = None
    end_date: Optional[Any] = None
    data: List[AirlineInsightStruct] = Field(default_factory=list)


# ── positions and routes ───────────────────────────────────────

class TrackStruct(_Struct):
    timestamp: Optional[int] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    groundspeed: Optional[int] = None
    altitude: Optional[int] = None
    altitudeStatus: Optional[str] = None
    updateType: Optional[str] = None
    altitudeChange: Optional[str] = None


class TrackExStruct(TrackStruct):
    faFlightID: Optional[str] = None


class ArrayOfTrackStruct(_Struct):
    data: List[TrackStruct] = Field(default_factory=list)


class ArrayOfTrackExStruct(_Struct):
    next_offset: Optional[int] = None
    data: List[TrackExStruct] = Field(default_factory=list)


class FlightRouteStruct(_Struct):
    name: Optional[str] = None
    type: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class ArrayOfFlightRouteStruct(_Struct):
    next_offset: Optional[int] = None
    data: List[FlightRouteStruct] = Field(default_factory=list)


class InFlightAircraftStruct(_Struct):
    faFlightID: Optional[str] = None
    ident: Optional[str] = None
    prefix: Optional[str] = None
    type: Optional[str] = None
    suffix: Optional[str] = None
    origin: Optional[str] = None
    destination: Optional[str] = None
    timeout: Optional[str] = None
    timestamp: Optional[int] = None
    departureTime: Optional[int] = None
    firstPositionTime: Optional[int] = None
    arrivalTime: Optional[int] = None
    longitude: Optional[float] = None
    latitude: Optional[float] = None
    lowLongitude: Optional[float] = None
    lowLatitude: Optional[float] = None
    highLongitude: Optional[float] = None
    highLatitude: Optional[float] = None
    groundspeed: Optional[int] = None
    altitude: Optional[int] = None
    heading: Optional[int] = None
    altitudeStatus: Optional[str] = None
    updateType: Optional[str] = None
    altitudeChange: Optional[str] = None
    waypoints: Optional[str] = None


class InFlightStruct(_Struct):
    next_offset: Optional[int] = None
    aircraft: List[InFlightAircraftStruct] = Field(default_factory=list)


class RoutesBetweenAirportsStruct(_Struct):
    count: Optional[int] = None
    route: Optional[str] = None
    filedAltitude: Optional[int] = None


class RoutesBetweenAirportsExStruct(_Struct):
    count: Optional[int] = None
    route: Optional[str] = None
    filedAltitude_min: Optional[int] = None
    filedAltitude_max: Optional[int] = None
    last_departuretime: Optional[int] = None


class ArrayOfRoutesBetweenAirportsExStruct(_Struct):
    next_offset: Optional[int] = None
    data: List[RoutesBetweenAirportsExStruct] = Field(default_factory=list)


# ── weather ────────────────────────────────────────────────────

class MetarStruct(_Struct):
    airport: Optional[str] = None
    time: Optional[int] = None
    cloud_friendly: Optional[str] = None
    cloud_altitude: Optional[int] = None
    cloud_type: Optional[str] = None
    conditions: Optional[str] = None
    pressure: Optional[float] = None
    temp_air: Optional[int] = None
    temp_dewpoint: Optional[int] = None
    temp_relhum: Optional[int] = None
    visibility: Optional[float] = None
    wind_friendly: Optional[str] = None
    wind_direction: Optional[int] = None
    wind_speed: Optional[int] = None
    wind_speed_gust: Optional[int] = None
    raw_data: Optional[str] = None


class ArrayOfMetarStruct(_Struct):
    next_offset: Optional[int] = None
    metar: List[MetarStruct] = Field(default_factory=list)


class TafStruct(_Struct):
    airport: Optional[str] = None
    timestamp: Optional[str] = None
    forecast: List[str] = Field(default_factory=list)


# ── counts and alerts ──────────────────────────────────────────

class CountAirportOperationsStruct(_Struct):
    enroute: Optional[int] = None
    departed: Optional[int] = None
    scheduled_departures: Optional[int] = None
    scheduled_arrivals: Optional[int] = None


class CountAirlineOperationsStruct(_Struct):
    icao: Optional[str] = None
    name: Optional[str] = None
    enroute: Optional[int] = None


class FlightAlertEntry(_Struct):
    alert_id: Optional[int] = None
    alert_created: Optional[int] = None
    alert_changed: Optional[int] = None
    type: Optional[str] = None
    description: Optional[str] = None
    ident: Optional[str] = None
    aircrafttype: Optional[str] = None
    origin: Optional[str] = None
    destination: Optional[str] = None
    date_start: Optional[int] = None
    date_end: Optional[int] = None
    channels: Optional[Any] = None
    enabled: Optional[bool] = None
    user_ident: Optional[str] = None


class FlightAlertListing(_Struct):
    num_alerts: Optional[int] = None
    alerts: List[FlightAlertEntry] = Field(default_factory=list)


RESULT_TYPES: Dict[str, Any] = {
    "AircraftType": AircraftTypeStruct,
    "AirlineFlightInfo": AirlineFlightInfoStruct,
    "AirlineFlightSchedules": ArrayOfAirlineFlightScheduleStruct,
    "AirlineInfo": AirlineInfoStruct,
    "AirlineInsight": ArrayOfAirlineInsightStruct,
    "AirportInfo": AirportInfoStruct,
    "AllAirlines": ArrayOfString,
    "AllAirports": ArrayOfString,
    "Arrived": ArrivalStruct,
    "BlockIdentCheck": int,
    "CountAirportOperations": CountAirportOperationsStruct,
    "CountAllEnrouteAirlineOperations": List[CountAirlineOperationsStruct],
    "DecodeFlightRoute": ArrayOfFlightRouteStruct,
    "DecodeRoute": ArrayOfFlightRouteStruct,
    "DeleteAlert": int,
    "Departed": DepartureStruct,
    "Enroute": EnrouteStruct,
    "FleetArrived": FleetArrivedStruct,
    "FleetScheduled": FleetScheduledStruct,
    "FlightInfo": FlightInfoStruct,
    "FlightInfoEx": FlightInfoExStruct,
    "GetAlerts": FlightAlertListing,
    "GetFlightID": str,
    "GetHistoricalTrack": ArrayOfTrackStruct,
    "GetLastTrack": ArrayOfTrackStruct,
    "InboundFlightInfo": FlightExStruct,
    "InFlightInfo": InFlightAircraftStruct,
    "LatLongsToDistance": int,
    "LatLongsToHeading": int,
    "MapFlight": str,
    "MapFlightEx": str,
    "Metar": str,
    "MetarEx": ArrayOfMetarStruct,
    "NTaf": TafStruct,
    "RegisterAlertEndpoint": int,
    "RoutesBetweenAirports": List[RoutesBetweenAirportsStruct],
    "RoutesBetweenAirportsEx": ArrayOfRoutesBetweenAirportsExStruct,
    "Scheduled": ScheduledStruct,
    "Search": InFlightStruct,
    "SearchBirdseyeInFlight": InFlightStruct,
    "SearchBirdseyePositions": ArrayOfTrackExStruct,
    "SearchCount": int,
    "SetAlert": int,
    "SetMaximumResultSize": int,
    "Taf": str,
    "TailOwner": TailOwnerStruct,
    "ZipcodeInfo": ZipcodeInfoStruct,
}


@lru_cache(maxsize=None)
def _adapter(method: str) -> TypeAdapter:
    return TypeAdapter(RESULT_TYPES[method])


def decode(method: str, payload: Any) -> Any:
    """Validate ``payload`` against the schema registered for ``method``.

    Payloads of unknown methods, and ``None`` payloads, pass through as is.
    Raises ``pydantic.ValidationError`` when the payload does not fit.
    """
    if payload is None or method not in RESULT_TYPES:
        return payload
    return _adapter(method).validate_python(payload)
