import asyncio
import base64
import json

import requests
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict

from flightxml.auth import DeferredBasicAuth
from flightxml.client import FlightXMLClient
from flightxml.config import ClientConfig


def _prepared(headers=None):
    req = requests.Request("POST", "http://example.test/json/FlightXML2/Metar", data={"airport": "KSFO"}, headers=headers)
    return req.prepare()


def _response(status, request, challenge=None):
    r = requests.Response()
    r.status_code = status
    r.headers = CaseInsensitiveDict()
    if challenge:
        r.headers["WWW-Authenticate"] = challenge
    r._content = b""
    r._content_consumed = True
    r.request = request
    return r


class FakeConnection:
    def __init__(self):
        self.sent = []

    def send(self, prep, **kwargs):
        self.sent.append(prep)
        return _response(200, prep)


def _expected_header(user, password):
    token = base64.b64encode(f"{user}:{password}".encode()).decode()
    return f"Basic {token}"


def test_first_attempt_has_no_authorization_header():
    prep = DeferredBasicAuth("user", "key")(_prepared())
    assert "Authorization" not in prep.headers
    assert prep.hooks["response"]


def test_challenge_is_answered_once():
    auth = DeferredBasicAuth("user", "key")
    r = _response(401, _prepared(), challenge='Basic realm="FlightXML"')
    r.connection = FakeConnection()

    retried = auth.handle_401(r)

    assert retried.status_code == 200
    assert retried.history == [r]
    [sent] = r.connection.sent
    assert sent.headers["Authorization"] == _expected_header("user", "key")
    assert sent.body == "airport=KSFO"


def test_success_passes_through():
    auth = DeferredBasicAuth("user", "key")
    r = _response(200, _prepared())
    assert auth.handle_401(r) is r


def test_non_basic_challenge_passes_through():
    auth = DeferredBasicAuth("user", "key")
    r = _response(401, _prepared(), challenge='Digest realm="x"')
    assert auth.handle_401(r) is r


def test_rejected_credentials_are_not_retried_again():
    auth = DeferredBasicAuth("user", "key")
    request = _prepared(headers={"Authorization": _expected_header("user", "key")})
    r = _response(401, request, challenge="Basic")
    r.connection = FakeConnection()
    assert auth.handle_401(r) is r
    assert r.connection.sent == []


def test_unset_credentials_sent_empty():
    auth = DeferredBasicAuth(None, None)
    r = _response(401, _prepared(), challenge="Basic")
    r.connection = FakeConnection()
    auth.handle_401(r)
    assert r.connection.sent[0].headers["Authorization"] == _expected_header("", "")


def test_digest_challenge_mentioning_basic_passes_through():
    auth = DeferredBasicAuth("user", "key")
    r = _response(401, _prepared(), challenge='Digest realm="basic-users", nonce="abc"')
    r.connection = FakeConnection()
    assert auth.handle_401(r) is r
    assert r.connection.sent == []


def test_challenge_scheme_is_case_insensitive():
    auth = DeferredBasicAuth("user", "key")
    r = _response(401, _prepared(), challenge='BASIC realm="FlightXML"')
    r.connection = FakeConnection()
    assert auth.handle_401(r).status_code == 200


class ChallengingAdapter(BaseAdapter):
    """Answers 401 + Basic challenge until the request carries credentials."""

    def __init__(self):
        super().__init__()
        self.sent = []

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        self.sent.append({"request": request, "timeout": timeout, "verify": verify})
        if "Authorization" in request.headers:
            r = _response(200, request)
            r._content = json.dumps({"MetarResult": "KSFO 1953Z"}).encode()
            r.encoding = "utf-8"
        else:
            r = _response(401, request, challenge='Basic realm="FlightXML"')
        r.url = request.url
        r.connection = self
        return r

    def close(self):
        pass


def test_session_retry_keeps_verify_and_timeout():
    adapter = ChallengingAdapter()
    session = requests.Session()
    session.mount("http://", adapter)
    client = FlightXMLClient(config=ClientConfig(username="user", api_key="key", timeout=2.5), session=session)

    assert asyncio.run(client.metar("KSFO")) == "KSFO 1953Z"

    first, second = adapter.sent
    assert "Authorization" not in first["request"].headers
    assert second["request"].headers["Authorization"] == _expected_header("user", "key")
    assert [(s["timeout"], s["verify"]) for s in adapter.sent] == [(2.5, False), (2.5, False)]
