import json

import pytest
import requests
from click.testing import CliRunner

from flightxml import cli
from flightxml.client import FlightXMLClient
from flightxml.errors import UnauthorizedError


@pytest.fixture
def calls(monkeypatch):
    recorded = []

    async def fake_call(self, method, data=None, callback=None):
        recorded.append((method, dict(data or {}), self.username, self.config.unwrap_results))
        if method == "AirportInfo":
            raise UnauthorizedError(code=401, text="denied")
        if method == "Metar":
            raise requests.exceptions.ConnectionError("offline")
        return {"method": method}

    monkeypatch.setattr(FlightXMLClient, "call", fake_call)
    return recorded


def _invoke(*args):
    runner = CliRunner()
    return runner.invoke(cli.main, list(args), env={"FLIGHTXML_USERNAME": "envuser", "FLIGHTXML_API_KEY": "envkey"})


def test_call_command(calls):
    result = _invoke("call", "FlightInfo", "-p", "ident=N415PW", "-p", "howMany=1")
    assert result.exit_code == 0
    assert json.loads(result.output) == {"method": "FlightInfo"}
    assert calls == [("FlightInfo", {"ident": "N415PW", "howMany": "1"}, "envuser", True)]


def test_username_option_wins_over_env(calls):
    _invoke("--username", "cliuser", "--raw", "aircraft-type", "GALX")
    assert calls == [("AircraftType", {"type": "GALX"}, "cliuser", False)]


def test_search_builds_query(calls):
    result = _invoke("search", "-p", "type=B77*", "--how-many", "1")
    assert result.exit_code == 0
    assert calls[0][:2] == ("Search", {"query": " -type B77*", "howMany": 1})


def test_search_count(calls):
    _invoke("search", "--query=-destination KLAX", "--count")
    assert calls[0][:2] == ("SearchCount", {"query": "-destination KLAX"})


def test_bad_param_rejected(calls):
    result = _invoke("call", "FlightInfo", "-p", "ident")
    assert result.exit_code != 0
    assert calls == []


def test_error_record_printed(calls):
    result = _invoke("call", "AirportInfo", "-p", "airportCode=SFO")
    assert result.exit_code == 1
    assert '"unauthorized"' in result.output


def test_smoke_reports_failures(calls):
    result = _invoke("smoke")
    assert result.exit_code == 1
    assert "[ERROR] Metar" in result.output
    assert "[ERROR] AirportInfo" in result.output
    assert f"{len(cli.SMOKE_CALLS) - 2}/{len(cli.SMOKE_CALLS)} calls succeeded" in result.output
