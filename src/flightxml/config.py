"""flightxml.config

Connection settings for the FlightXML2 client.
"""
from __future__ import annotations

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

__all__ = [
    "ClientConfig",
    "DEFAULT_HOST",
    "DEFAULT_BASE_PATH",
    "MAX_RECORDS",
    "MAX_RETRIES",
]

DEFAULT_HOST = "flightxml.flightaware.com"
DEFAULT_BASE_PATH = "/json/FlightXML2/"

MAX_RECORDS = 15
# Declared for parity with the service documentation; requests are never retried.
MAX_RETRIES = 3

_TRUE = {"1", "true", "yes", "on"}


def _env(name: str) -> Optional[str]:
    value = os.environ.get(name, "").strip()
    return value or None


class ClientConfig(BaseModel):
    """Configuration options for a FlightXMLClient."""

    username: Optional[str] = Field(
        default=None,
        description="FlightAware account name",
    )
    api_key: Optional[str] = Field(
        default=None,
        description="FlightXML API key, used as the basic auth password",
    )
    scheme: str = Field(default="http")
    host: str = Field(default=DEFAULT_HOST)
    base_path: str = Field(default=DEFAULT_BASE_PATH)
    verify_tls: bool = Field(
        default=False,
        description="Validate the remote certificate (off by default)",
    )
    timeout: Optional[float] = Field(
        default=None,
        description="Per-request timeout in seconds; None leaves it to the transport",
    )
    unwrap_results: bool = Field(
        default=True,
        description="Return the '<Method>Result' field instead of the whole envelope",
    )
    strict_envelope: bool = Field(
        default=False,
        description="Treat a missing '<Method>Result' field as an error",
    )
    typed_results: bool = Field(
        default=False,
        description="Decode payloads into the pydantic schemas in flightxml.models",
    )

    @property
    def base_url(self) -> str:
        return f"{self.scheme}://{self.host}{self.base_path}"

    def endpoint_url(self, method: str) -> str:
        return self.base_url + method

    @classmethod
    def from_env(cls, dotenv: bool = True, **overrides) -> "ClientConfig":
        """Build a config from FLIGHTXML_* environment variables.

        A ``.env`` file in the working directory is loaded first when
        ``dotenv`` is true; variables already set in the environment win.
        Explicit keyword ``overrides`` win over both.
        """
        if dotenv:
            load_dotenv()

        values = {}
        if _env("FLIGHTXML_USERNAME"):
            values["username"] = _env("FLIGHTXML_USERNAME")
        if _env("FLIGHTXML_API_KEY"):
            values["api_key"] = _env("FLIGHTXML_API_KEY")
        if _env("FLIGHTXML_HOST"):
            values["host"] = _env("FLIGHTXML_HOST")
        if _env("FLIGHTXML_TIMEOUT"):
            values["timeout"] = float(_env("FLIGHTXML_TIMEOUT"))
        if _env("FLIGHTXML_VERIFY_TLS"):
            values["verify_tls"] = _env("FLIGHTXML_VERIFY_TLS").lower() in _TRUE
        values.update(overrides)
        return cls(**values)
