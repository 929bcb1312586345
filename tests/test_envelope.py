import json

import pytest

from flightxml.envelope import MISSING, extract_field, parse_body, result_field, unwrap
from flightxml.errors import EnvelopeParseError, MissingResultError, error_for_status


def test_result_field_name():
    assert result_field("AircraftType") == "AircraftTypeResult"


def test_extract_present_field():
    assert extract_field({"MetarResult": "KSFO 1953Z"}, "MetarResult") == "KSFO 1953Z"


def test_extract_keeps_json_null_distinct_from_missing():
    assert extract_field({"XResult": None}, "XResult") is None
    assert extract_field({}, "XResult") is MISSING


@pytest.mark.parametrize("envelope", [42, "text", [1, 2], None])
def test_extract_from_non_object(envelope):
    assert extract_field(envelope, "XResult") is MISSING


def test_unwrap_missing_is_none_by_default():
    assert unwrap({"error": "oops"}, "FlightInfo") is None


def test_unwrap_missing_strict():
    with pytest.raises(MissingResultError) as info:
        unwrap({"error": "oops"}, "FlightInfo", strict=True)
    assert info.value.error == "missing result"
    assert json.loads(info.value.text) == {"error": "oops"}


def test_parse_body_error_keeps_text():
    with pytest.raises(EnvelopeParseError) as info:
        parse_body("<html>nope</html>")
    assert isinstance(info.value.error, ValueError)
    assert info.value.text == "<html>nope</html>"
    assert info.value.code is None


@pytest.mark.parametrize(
    "code, tag",
    [(401, "unauthorized"), (410, "invalid request URI"), (500, "bad request"), (404, "bad request")],
)
def test_status_classification(code, tag):
    err = error_for_status(code, "body text")
    assert err.to_dict() == {"error": tag, "code": code, "text": "body text"}
