"""Typed accessors for each family of Untappd endpoints.

Each service wraps a Client and returns ``(result, response)`` so callers
can look at headers such as the remaining rate limit.
"""
import logging

from untappdctl.errors import APIError
from untappdctl.models import Badge, Beer, Brewery, Checkin, User, Venue

mylog = logging.getLogger(__name__)

# Largest max_id accepted by the API, used to ask for "the most recent".
MAX_INT32 = 2 ** 31 - 1
DEFAULT_CHECKIN_LIMIT = 25

paths = {
    "user": {
        "info": "user/info/",
        "friends": "user/friends/",
        "badges": "user/badges/",
        "beers": "user/beers/",
        "wishlist": "user/wishlist/",
        "checkins": "user/checkins/",
    },
    "beer": {
        "info": "beer/info/",
        "checkins": "beer/checkins/",
        "search": "search/beer",
    },
    "brewery": {
        "info": "brewery/info/",
        "checkins": "brewery/checkins/",
        "search": "search/brewery",
    },
    "venue": {
        "info": "venue/info/",
        "checkins": "venue/checkins/",
    },
}


def unwrap(body, *keys):
    """Walk down ``keys`` in a response body, raising APIError if one is missing."""
    val = body
    for key in keys:
        if not isinstance(val, dict) or key not in val:
            raise APIError("response is missing {0!r}".format(".".join(keys)))
        val = val[key]
    return val


def paging(offset=0, limit=0, sort=None):
    """Querystring for offset/limit/sort, leaving out anything unset."""
    params = {}
    if offset:
        params["offset"] = offset
    if limit:
        params["limit"] = limit
    if sort:
        params["sort"] = str(sort)
    return params


def get_checkins(client, path, min_id, max_id, limit):
    """Fetch one page of checkins from any ``*/checkins/`` endpoint.

    No check is made against the 50 checkin ceiling, Untappd rejects an
    over-limit request itself.
    """
    params = {"min_id": min_id, "max_id": max_id, "limit": limit}
    body, res = client.get(path, params=params)
    checkins = [Checkin.from_json(c) for c in unwrap(body, "checkins", "items")]
    mylog.debug("get_checkins: {0} returned {1} checkins".format(path, len(checkins)))
    return checkins, res


class Service(object):
    family = ""

    def __init__(self, client):
        self.client = client

    def path(self, action, val=""):
        return "{0}{1}".format(paths[self.family][action], val)


class UserService(Service):
    """Endpoints under ``user/``, keyed by username."""
    family = "user"

    def info(self, username):
        mylog.debug("user.info: trying to get user: {0}".format(username))
        body, res = self.client.get(self.path("info", username))
        return User.from_json(unwrap(body, "user")), res

    def friends(self, username, offset=0, limit=25):
        body, res = self.client.get(self.path("friends", username),
                                    params=paging(offset, limit))
        return [User.from_json(unwrap(i, "user")) for i in unwrap(body, "items")], res

    def badges(self, username, offset=0, limit=50):
        body, res = self.client.get(self.path("badges", username),
                                    params=paging(offset, limit))
        return [Badge.from_json(i) for i in unwrap(body, "items")], res

    def beers(self, username, offset=0, limit=25, sort=None):
        """Distinct beers a user has had, optionally ordered by ``sort``."""
        body, res = self.client.get(self.path("beers", username),
                                    params=paging(offset, limit, sort))
        return [Beer.from_json(unwrap(i, "beer"), brewery=i.get("brewery")) for i in unwrap(body, "beers", "items")], res

    def wishlist(self, username, offset=0, limit=25, sort=None):
        body, res = self.client.get(self.path("wishlist", username),
                                    params=paging(offset, limit, sort))
        return [Beer.from_json(unwrap(i, "beer"), brewery=i.get("brewery")) for i in unwrap(body, "beers", "items")], res

    def checkins(self, username):
        """Up to 25 of the user's most recent checkins.

        Use checkins_min_max_id_limit to page through older ones.
        """
        return self.checkins_min_max_id_limit(username, 0, MAX_INT32, DEFAULT_CHECKIN_LIMIT)

    def checkins_min_max_id_limit(self, username, min_id, max_id, limit):
        """Checkins with IDs between min_id and max_id, at most 50 per call."""
        return get_checkins(self.client, self.path("checkins", username), min_id, max_id, limit)


class BeerService(Service):
    family = "beer"

    def info(self, beer_id):
        body, res = self.client.get(self.path("info", beer_id))
        return Beer.from_json(unwrap(body, "beer")), res

    def search(self, query, offset=0, limit=25):
        params = paging(offset, limit)
        params["q"] = query
        body, res = self.client.get(self.path("search"), params=params)
        beers = [Beer.from_json(unwrap(i, "beer"), brewery=i.get("brewery")) for i in unwrap(body, "beers", "items")]
        mylog.debug("beer.search: Found {0} beers for {1!r}".format(len(beers), query))
        return beers, res

    def checkins(self, beer_id):
        return self.checkins_min_max_id_limit(beer_id, 0, MAX_INT32, DEFAULT_CHECKIN_LIMIT)

    def checkins_min_max_id_limit(self, beer_id, min_id, max_id, limit):
        return get_checkins(self.client, self.path("checkins", beer_id), min_id, max_id, limit)


class BreweryService(Service):
    family = "brewery"

    def info(self, brewery_id):
        body, res = self.client.get(self.path("info", brewery_id))
        return Brewery.from_json(unwrap(body, "brewery")), res

    def search(self, query, offset=0, limit=25):
        params = paging(offset, limit)
        params["q"] = query
        body, res = self.client.get(self.path("search"), params=params)
        breweries = [Brewery.from_json(unwrap(i, "brewery")) for i in unwrap(body, "brewery", "items")]
        mylog.debug("brewery.search: Found {0} breweries for {1!r}".format(len(breweries), query))
        return breweries, res

    def checkins(self, brewery_id):
        return self.checkins_min_max_id_limit(brewery_id, 0, MAX_INT32, DEFAULT_CHECKIN_LIMIT)

    def checkins_min_max_id_limit(self, brewery_id, min_id, max_id, limit):
        return get_checkins(self.client, self.path("checkins", brewery_id), min_id, max_id, limit)


class VenueService(Service):
    family = "venue"

    def info(self, venue_id):
        body, res = self.client.get(self.path("info", venue_id))
        return Venue.from_json(unwrap(body, "venue")), res

    def checkins(self, venue_id):
        return self.checkins_min_max_id_limit(venue_id, 0, MAX_INT32, DEFAULT_CHECKIN_LIMIT)

    def checkins_min_max_id_limit(self, venue_id, min_id, max_id, limit):
        return get_checkins(self.client, self.path("checkins", venue_id), min_id, max_id, limit)
