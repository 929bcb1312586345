import json

import pytest

from flightxml.client import FlightXMLClient
from flightxml.config import ClientConfig


class FakeResponse:
    def __init__(self, status_code=200, text=""):
        self.status_code = status_code
        self.text = text


class FakeSession:
    """Stands in for requests.Session; records every post() call."""

    def __init__(self, status_code=200, body=None, text=None, exc=None):
        self.calls = []
        self.status_code = status_code
        self.text = text if text is not None else json.dumps(body if body is not None else {})
        self.exc = exc
        self.closed = False

    def post(self, url, **kwargs):
        self.calls.append({"url": url, **kwargs})
        if self.exc is not None:
            raise self.exc
        return FakeResponse(self.status_code, self.text)

    def close(self):
        self.closed = True

    @property
    def last(self):
        return self.calls[-1]


@pytest.fixture
def make_client():
    def _make(session=None, **config):
        session = session or FakeSession()
        cfg = ClientConfig(username="user", api_key="key", **config)
        return FlightXMLClient(config=cfg, session=session), session

    return _make
