"""flightxml.auth

HTTP Basic auth that waits for the server to ask for it.

``requests.auth.HTTPBasicAuth`` attaches the Authorization header to the very
first request.  FlightXML clients have historically sent the first attempt
bare and answered the server's ``401`` challenge instead, so this handler
follows the same response-hook pattern ``HTTPDigestAuth`` uses.
"""
from __future__ import annotations

import logging
from typing import Optional

from requests.auth import AuthBase, HTTPBasicAuth
from requests.cookies import extract_cookies_to_jar

__all__ = ["DeferredBasicAuth"]

logger = logging.getLogger(__name__)


class DeferredBasicAuth(AuthBase):
    """Send basic credentials only in reply to a ``WWW-Authenticate: Basic`` challenge."""

    def __init__(self, username: Optional[str], password: Optional[str]) -> None:
        # Snapshot taken when the request is issued; later credential
        # changes on the client do not affect a request already in flight.
        self.username = username or ""
        self.password = password or ""

    def __eq__(self, other) -> bool:
        return (self.username, self.password) == (
            getattr(other, "username", None),
            getattr(other, "password", None),
        )

    def __ne__(self, other) -> bool:
        return not self == other

    def handle_401(self, r, **kwargs):
        if r.status_code != 401:
            return r

        challenge = r.headers.get("www-authenticate", "")
        if challenge.strip().split(" ", 1)[0].lower() != "basic":
            return r
        if "Authorization" in r.request.headers:
            # Already answered once; let the caller see the rejection.
            return r

        logger.debug("Answering basic auth challenge for %s", r.request.url)

        # Consume content and release the original connection so it can be reused.
        r.content
        r.close()
        prep = r.request.copy()
        extract_cookies_to_jar(prep._cookies, r.request, r.raw)
        prep.prepare_cookies(prep._cookies)
        prep = HTTPBasicAuth(self.username, self.password)(prep)

        _r = r.connection.send(prep, **kwargs)
        _r.history.append(r)
        _r.request = prep
        return _r

    def __call__(self, r):
        r.register_hook("response", self.handle_401)
        return r
