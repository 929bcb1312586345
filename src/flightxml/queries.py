"""flightxml.queries

Per-operation request shaping: default values and the search query grammar.

None of these functions mutate the mapping they are given.
"""
from __future__ import annotations

import time
from enum import IntEnum
from typing import Any, Dict, Mapping, Optional

__all__ = [
    "AirlineInsightReportType",
    "ONE_DAY",
    "flight_schedule_query",
    "airline_insight_query",
    "search_query_string",
    "search_query",
]

ONE_DAY = 24 * 60 * 60


class AirlineInsightReportType(IntEnum):
    ALTERNATE_ROUTE_POPULARITY = 1
    PERCENTAGE_SCHEDULED_ACTUALLY_FLOWN = 2
    PASSENGER_LOAD_FACTOR_ACTUALLY_FLOWN = 3
    CARRIERS_BY_CARGO_WEIGHT = 4


def flight_schedule_query(query: Mapping[str, Any], now: Optional[float] = None) -> Dict[str, Any]:
    """Fill in a one-day window starting now for AirlineFlightSchedules.

    ``endDate`` defaults relative to ``startDate``, so a caller-supplied
    start with no end still gets a one-day window.
    """
    out = dict(query)
    if out.get("startDate") is None:
        out["startDate"] = int(time.time() if now is None else now)
    if out.get("endDate") is None:
        out["endDate"] = out["startDate"] + ONE_DAY
    return out


def airline_insight_query(query: Mapping[str, Any]) -> Dict[str, Any]:
    out = dict(query)
    if out.get("reportType") is None:
        out["reportType"] = int(AirlineInsightReportType.PERCENTAGE_SCHEDULED_ACTUALLY_FLOWN)
    return out


def search_query_string(query: Optional[str] = None, parameters: Optional[Mapping[str, Any]] = None) -> str:
    """Build the ``-key value`` search grammar used by Search and SearchCount.

    >>> search_query_string("-a b", {"c": "d"})
    '-a b -c d'
    >>> search_query_string(parameters={"type": "B77*"})
    ' -type B77*'
    """
    text = query or ""
    for key, value in (parameters or {}).items():
        text += f" -{key} {value}"
    return text


def search_query(params: Mapping[str, Any]) -> Dict[str, Any]:
    """Replace ``query``/``parameters`` in a Search request with one query string."""
    out = dict(params)
    parameters = out.pop("parameters", None)
    if parameters:
        out["query"] = search_query_string(out.get("query"), parameters)
    return out
