"""flightxml.errors

Error records produced by the transport layer.

Every failed call yields exactly one of these (or, for network failures,
the ``requests`` exception itself).  Each carries the same three fields the
service's error envelope is described with: ``error`` (a fixed tag or the
underlying exception), ``code`` (HTTP status, when there is one) and
``text`` (the raw response body).
"""
from __future__ import annotations

from typing import Any, Dict, Optional, Union

__all__ = [
    "FlightXMLError",
    "UnauthorizedError",
    "InvalidRequestURIError",
    "BadRequestError",
    "EnvelopeParseError",
    "MissingResultError",
    "ResultDecodeError",
    "error_for_status",
]


class FlightXMLError(Exception):
    """Base class for errors reported by FlightXMLClient."""

    tag: str = "error"

    def __init__(
        self,
        error: Union[str, BaseException, None] = None,
        code: Optional[int] = None,
        text: Optional[str] = None,
    ) -> None:
        self.error = error if error is not None else self.tag
        self.code = code
        self.text = text
        super().__init__(self._message())

    def _message(self) -> str:
        msg = str(self.error)
        if self.code is not None:
            msg = f"{msg} (HTTP {self.code})"
        return msg

    def to_dict(self) -> Dict[str, Any]:
        record: Dict[str, Any] = {"error": self.error}
        if self.code is not None:
            record["code"] = self.code
        if self.text is not None:
            record["text"] = self.text
        return record

    def __repr__(self) -> str:
        return f"{type(self).__name__}(error={self.error!r}, code={self.code!r})"


class UnauthorizedError(FlightXMLError):
    tag = "unauthorized"


class InvalidRequestURIError(FlightXMLError):
    tag = "invalid request URI"


class BadRequestError(FlightXMLError):
    tag = "bad request"


class EnvelopeParseError(FlightXMLError):
    """A 200 response whose body is not valid JSON."""

    tag = "invalid JSON"


class MissingResultError(FlightXMLError):
    """The envelope lacks its ``<Method>Result`` field (strict mode only)."""

    tag = "missing result"


class ResultDecodeError(FlightXMLError):
    """A payload that does not fit its result schema (typed mode only)."""

    tag = "invalid result"


_STATUS_ERRORS = {
    401: UnauthorizedError,
    410: InvalidRequestURIError,
}


def error_for_status(code: int, text: Optional[str]) -> FlightXMLError:
    """Classify a non-200 HTTP status into an error record."""
    cls = _STATUS_ERRORS.get(code, BadRequestError)
    return cls(code=code, text=text)
