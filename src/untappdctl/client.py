"""HTTP plumbing for the Untappd APIv4.

The Client signs every request with the application credentials, makes
the call through a requests Session and peels the ``response`` member out
of the JSON envelope. The per-resource accessors live in
:mod:`untappdctl.services` and hang off the client as attributes::

    c = Client(client_id, client_secret)
    user, res = c.user.info("mdlayher")
    print(res.headers.get("X-Ratelimit-Remaining"))
"""
import logging

import requests

from untappdctl.errors import APIError, ConfigurationError
from untappdctl.services import BeerService, BreweryService, UserService, VenueService

BASE_URL = "https://api.untappd.com/v4"
RATELIMIT_LIMIT = "X-Ratelimit-Limit"
RATELIMIT_REMAINING = "X-Ratelimit-Remaining"

_SECRET_PARAMS = ("client_secret", "access_token")


class Client(object):
    """A connection to Untappd on behalf of one registered application.

    Either ``access_token`` or both ``client_id`` and ``client_secret`` must
    be set, otherwise ConfigurationError is raised. ``session`` defaults to
    a fresh requests.Session, ``logger`` to the module logger.
    """

    def __init__(self, client_id, client_secret, session=None, baseurl=BASE_URL,
                 access_token=None, timeout=None, logger=None):
        self.log = logger or logging.getLogger(__name__)
        if access_token:
            self.auth = {"access_token": access_token}
        else:
            if not client_id:
                raise ConfigurationError("no client ID")
            if not client_secret:
                raise ConfigurationError("no client secret")
            self.auth = {"client_id": client_id, "client_secret": client_secret}
        self.s = session if session is not None else requests.Session()
        self.baseurl = baseurl.rstrip("/")
        self.timeout = timeout

        self.user = UserService(self)
        self.beer = BeerService(self)
        self.brewery = BreweryService(self)
        self.venue = VenueService(self)

    def request(self, method, verb="GET", params=None, data=None):
        """Make any arbitrary call to the Untappd API.

        method = the Untappd method to call (subpath of the URL)
        verb = the HTTP verb, GET or POST
        params = querystring parameters; credentials are added here
        data = form body for POST

        Returns ``(body, response)`` where body is the envelope's
        ``response`` member. Raises APIError on a non-200 status or a
        malformed envelope; transport errors propagate from requests.
        """
        query = dict(params or {})
        query.update(self.auth)
        url = "{0}/{1}".format(self.baseurl, method.strip("/"))
        self.log.debug("request: {0} {1} with params {2}".format(verb, url, self._masked(query)))
        if verb == "GET":
            r = self.s.get(url, params=query, timeout=self.timeout)
        elif verb == "POST":
            r = self.s.post(url, params=query, data=data, timeout=self.timeout)
        else:
            raise ValueError("unsupported HTTP verb: {0}".format(verb))

        if r.headers.get(RATELIMIT_LIMIT) and r.headers.get(RATELIMIT_REMAINING):
            self.log.debug("request: Rate limit: {0}, remaining: {1}".format(
                r.headers[RATELIMIT_LIMIT], r.headers[RATELIMIT_REMAINING]))

        if r.status_code != requests.codes.ok:
            raise self._error(r)

        self.log.debug("request: {0} returned {1} bytes".format(url, len(r.content or b"")))
        try:
            body = r.json()
        except requests.exceptions.JSONDecodeError:
            self.log.info("request: No JSON returned, only: {0}".format(r.text))
            raise APIError("malformed response envelope from {0}".format(method),
                           code=r.status_code, response=r)
        if not isinstance(body, dict) or "response" not in body:
            raise APIError("malformed response envelope from {0}".format(method),
                           code=r.status_code, response=r)
        return body["response"], r

    def get(self, method, params=None):
        return self.request(method, verb="GET", params=params)

    def _error(self, r):
        """Build an APIError from the ``meta`` block of a failed call."""
        self.log.warning("request: Untappd didn't like our request, status code {0}.".format(r.status_code))
        meta = {}
        try:
            body = r.json()
            if isinstance(body, dict):
                meta = body.get("meta") or {}
        except requests.exceptions.JSONDecodeError:
            self.log.info("request: No JSON returned, only: {0}".format(r.text))
        err = APIError(
            "{0}: {1}".format(r.status_code, r.reason or "request failed"),
            code=r.status_code,
            error_type=meta.get("error_type", ""),
            error_detail=meta.get("error_detail", ""),
            developer_friendly=meta.get("developer_friendly", ""),
            response=r,
        )
        self.log.debug("request: Type: {0}".format(err.error_type))
        self.log.debug("request: Detail: {0}".format(err.error_detail))
        return err

    @staticmethod
    def _masked(params):
        return {k: ("***" if k in _SECRET_PARAMS else v) for k, v in params.items()}
