from flightxml.config import ClientConfig
from flightxml.models import CountAirlineOperationsStruct, decode


def test_default_urls():
    cfg = ClientConfig()
    assert cfg.base_url == "http://flightxml.flightaware.com/json/FlightXML2/"
    assert cfg.endpoint_url("Metar") == "http://flightxml.flightaware.com/json/FlightXML2/Metar"
    assert cfg.verify_tls is False
    assert cfg.username is None and cfg.api_key is None


def test_from_env(monkeypatch):
    monkeypatch.setenv("FLIGHTXML_USERNAME", "envuser")
    monkeypatch.setenv("FLIGHTXML_API_KEY", "envkey")
    monkeypatch.setenv("FLIGHTXML_TIMEOUT", "2.5")
    monkeypatch.setenv("FLIGHTXML_VERIFY_TLS", "yes")
    cfg = ClientConfig.from_env(dotenv=False)
    assert (cfg.username, cfg.api_key) == ("envuser", "envkey")
    assert cfg.timeout == 2.5
    assert cfg.verify_tls is True


def test_from_env_empty_values_are_unset(monkeypatch):
    monkeypatch.setenv("FLIGHTXML_USERNAME", "  ")
    monkeypatch.delenv("FLIGHTXML_API_KEY", raising=False)
    cfg = ClientConfig.from_env(dotenv=False)
    assert cfg.username is None
    assert cfg.api_key is None


def test_from_env_overrides_win(monkeypatch):
    monkeypatch.setenv("FLIGHTXML_USERNAME", "envuser")
    cfg = ClientConfig.from_env(dotenv=False, username="explicit", strict_envelope=True)
    assert cfg.username == "explicit"
    assert cfg.strict_envelope is True


def test_decode_list_result():
    rows = decode("CountAllEnrouteAirlineOperations", [{"icao": "UAL", "name": "United", "enroute": 512}])
    assert rows == [CountAirlineOperationsStruct(icao="UAL", name="United", enroute=512)]


def test_decode_passthrough():
    assert decode("NoSuchMethod", {"a": 1}) == {"a": 1}
    assert decode("AircraftType", None) is None
