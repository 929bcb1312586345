# noqa: D104
"""Top-level package for flightxml."""
from __future__ import annotations

__version__ = "0.1.0"
__all__ = [
    "FlightXMLClient",
    "ClientConfig",
    "FlightXMLError",
    "AirlineInsightReportType",
]


def __getattr__(name):  # type: ignore[override]
    if name == "FlightXMLClient":
        from .client import FlightXMLClient

        return FlightXMLClient
    if name == "ClientConfig":
        from .config import ClientConfig

        return ClientConfig
    if name == "FlightXMLError":
        from .errors import FlightXMLError

        return FlightXMLError
    if name == "AirlineInsightReportType":
        from .queries import AirlineInsightReportType

        return AirlineInsightReportType
    raise AttributeError(name)
