"""Typed records decoded from Untappd APIv4 JSON.

Every record is a frozen dataclass built with ``from_json``. The API is
loose about which fields it sends back for a given endpoint: a beer inside
a user's checkin list is missing most of what ``beer/info`` returns, a
checkin without a venue carries ``"venue": []`` and so on. Anything absent
decodes to an empty default instead of failing, so a record built from a
stub is still printable.
"""
import datetime
import logging
from dataclasses import dataclass, field
from typing import Optional, Tuple

mylog = logging.getLogger(__name__)

# Sat, 21 Aug 2010 22:17:06 +0000
TIME_FORMAT = "%a, %d %b %Y %H:%M:%S %z"


def parse_time(value):
    """Parse an Untappd timestamp, returning None for empty or odd input."""
    if not value:
        return None
    try:
        return datetime.datetime.strptime(value, TIME_FORMAT)
    except (TypeError, ValueError):
        mylog.debug("parse_time: can't parse timestamp {0!r}".format(value))
        return None


def _items(json, key):
    """Pull ``json[key]["items"]`` out of the count/items wrapper."""
    wrapper = json.get(key) or {}
    if not isinstance(wrapper, dict):
        return []
    return wrapper.get("items") or []


def _str(value):
    return "" if value is None else str(value)


def _int(value):
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


def _float(value):
    try:
        return float(value or 0)
    except (TypeError, ValueError):
        return 0.0


@dataclass(frozen=True)
class UserStats:
    total_checkins: int = 0
    total_badges: int = 0
    total_beers: int = 0
    total_friends: int = 0
    total_followings: int = 0
    total_photos: int = 0
    total_created_beers: int = 0

    @classmethod
    def from_json(cls, json):
        json = json or {}
        return cls(
            total_checkins=_int(json.get("total_checkins")),
            total_badges=_int(json.get("total_badges")),
            total_beers=_int(json.get("total_beers")),
            total_friends=_int(json.get("total_friends")),
            total_followings=_int(json.get("total_followings")),
            total_photos=_int(json.get("total_photos")),
            total_created_beers=_int(json.get("total_created_beers")),
        )


@dataclass(frozen=True)
class User:
    """An Untappd user.

    ``stats`` is only fully populated by ``user/info``; friend lists and
    checkins carry a stub user with zeroed stats.
    """
    id: int
    user_name: str
    first_name: str = ""
    last_name: str = ""
    avatar: str = ""
    location: str = ""
    bio: str = ""
    url: str = ""
    untappd_url: str = ""
    is_private: bool = False
    stats: UserStats = field(default_factory=UserStats)

    @classmethod
    def from_json(cls, json):
        json = json or {}
        mylog.debug("user: Init user object from json: {0}".format(json.get("user_name")))
        return cls(
            id=_int(json.get("uid")),
            user_name=_str(json.get("user_name")),
            first_name=_str(json.get("first_name")),
            last_name=_str(json.get("last_name")),
            avatar=_str(json.get("user_avatar")),
            location=_str(json.get("location")),
            bio=_str(json.get("bio")),
            url=_str(json.get("url")),
            untappd_url=_str(json.get("untappd_url")),
            is_private=bool(json.get("is_private")),
            stats=UserStats.from_json(json.get("stats")),
        )


@dataclass(frozen=True)
class Location:
    city: str = ""
    state: str = ""
    country: str = ""
    address: str = ""
    latitude: float = 0.0
    longitude: float = 0.0

    @classmethod
    def from_json(cls, json, prefix, country=""):
        """Decode a location block.

        Breweries name their fields ``brewery_city``/``brewery_state`` and
        keep the country on the brewery itself, venues use ``venue_city``,
        ``venue_state`` and ``venue_country``.
        """
        if not isinstance(json, dict):
            json = {}
        return cls(
            city=_str(json.get(prefix + "_city")),
            state=_str(json.get(prefix + "_state")),
            country=_str(json.get(prefix + "_country", country)),
            address=_str(json.get(prefix + "_address")),
            latitude=_float(json.get("lat")),
            longitude=_float(json.get("lng")),
        )


@dataclass(frozen=True)
class Brewery:
    id: int
    name: str
    slug: str = ""
    label: str = ""
    country: str = ""
    location: Location = field(default_factory=Location)
    beer_count: int = 0
    in_production: bool = True

    @classmethod
    def from_json(cls, json):
        json = json or {}
        mylog.debug("brewery: Init brewery object from json: {0}".format(json.get("brewery_name")))
        country = _str(json.get("country_name"))
        return cls(
            id=_int(json.get("brewery_id")),
            name=_str(json.get("brewery_name")),
            slug=_str(json.get("brewery_slug")),
            label=_str(json.get("brewery_label")),
            country=country,
            location=Location.from_json(json.get("location"), "brewery", country),
            beer_count=_int(json.get("beer_count")),
            in_production=bool(json.get("brewery_in_production", 1)),
        )


@dataclass(frozen=True)
class Beer:
    """A beer, and the brewery that makes it when the API told us."""
    id: int
    name: str
    label: str = ""
    style: str = ""
    abv: float = 0.0
    ibu: int = 0
    description: str = ""
    slug: str = ""
    rating_count: int = 0
    rating_score: float = 0.0
    in_production: bool = True
    is_homebrew: bool = False
    brewery: Optional[Brewery] = None

    @classmethod
    def from_json(cls, json, brewery=None):
        """Decode a beer.

        ``brewery`` is the sibling brewery object for endpoints that list
        ``{"beer": ..., "brewery": ...}`` pairs. A brewery nested inside the
        beer itself wins over it.
        """
        json = json or {}
        mylog.debug("beer: Init beer object from json: {0}".format(json.get("beer_name")))
        if json.get("brewery"):
            brewery = json["brewery"]
        return cls(
            id=_int(json.get("bid")),
            name=_str(json.get("beer_name")),
            label=_str(json.get("beer_label")),
            style=_str(json.get("beer_style")),
            abv=_float(json.get("beer_abv")),
            ibu=_int(json.get("beer_ibu")),
            description=_str(json.get("beer_description")),
            slug=_str(json.get("beer_slug")),
            rating_count=_int(json.get("rating_count")),
            rating_score=_float(json.get("rating_score")),
            in_production=bool(json.get("is_in_production", 1)),
            is_homebrew=bool(json.get("is_homebrew")),
            brewery=Brewery.from_json(brewery) if brewery else None,
        )


@dataclass(frozen=True)
class Badge:
    """A badge earned by a user.

    ``levels`` holds the tiers of a levelled badge. Levels never carry
    levels of their own.
    """
    id: int
    name: str
    user_badge_id: int = 0
    description: str = ""
    earned: Optional[datetime.datetime] = None
    checkin_id: int = 0
    levels: Tuple["Badge", ...] = ()

    @classmethod
    def from_json(cls, json, nested=False):
        json = json or {}
        mylog.debug("badge: Init badge object from json: {0}".format(json.get("badge_name")))
        levels = ()
        if not nested:
            levels = tuple(cls.from_json(b, nested=True) for b in _items(json, "levels"))
            if levels:
                mylog.debug("badge: Badge {0} has {1} levels earned.".format(
                    json.get("badge_name"), len(levels)))
        return cls(
            id=_int(json.get("badge_id")),
            name=_str(json.get("badge_name")),
            user_badge_id=_int(json.get("user_badge_id")),
            description=_str(json.get("badge_description")),
            earned=parse_time(json.get("created_at")),
            checkin_id=_int(json.get("checkin_id")),
            levels=levels,
        )


@dataclass(frozen=True)
class Toast:
    id: int
    user: Optional[User] = None

    @classmethod
    def from_json(cls, json):
        json = json or {}
        return cls(
            id=_int(json.get("like_id")),
            user=User.from_json(json["user"]) if json.get("user") else None,
        )


@dataclass(frozen=True)
class Comment:
    id: int
    comment: str = ""
    user: Optional[User] = None

    @classmethod
    def from_json(cls, json):
        json = json or {}
        return cls(
            id=_int(json.get("comment_id")),
            comment=_str(json.get("comment")),
            user=User.from_json(json["user"]) if json.get("user") else None,
        )


@dataclass(frozen=True)
class Venue:
    id: int
    name: str
    category: str = ""
    public: bool = False
    location: Location = field(default_factory=Location)
    foursquare_id: str = ""

    @classmethod
    def from_json(cls, json):
        json = json or {}
        mylog.debug("venue: Init venue object from json: {0}".format(json.get("venue_name")))
        foursquare = json.get("foursquare") or {}
        return cls(
            id=_int(json.get("venue_id")),
            name=_str(json.get("venue_name")),
            category=_str(json.get("primary_category")),
            public=bool(json.get("public_venue")),
            location=Location.from_json(json.get("location"), "venue"),
            foursquare_id=_str(foursquare.get("foursquare_id")) if isinstance(foursquare, dict) else "",
        )


@dataclass(frozen=True)
class Checkin:
    """One checkin, with the beer, brewery and (maybe) venue it names."""
    id: int
    beer: Beer
    brewery: Brewery
    user_rating: float = 0.0
    comment: str = ""
    created: Optional[datetime.datetime] = None
    user: Optional[User] = None
    venue: Optional[Venue] = None
    badges: Tuple[Badge, ...] = ()
    toasts: Tuple[Toast, ...] = ()
    comments: Tuple[Comment, ...] = ()

    @classmethod
    def from_json(cls, json):
        json = json or {}
        mylog.debug("checkin: Init checkin object from json: {0}".format(json.get("checkin_id")))
        brewery = json.get("brewery") or {}
        # Untappd sends an empty list instead of null when there's no venue
        venue = json.get("venue")
        return cls(
            id=_int(json.get("checkin_id")),
            beer=Beer.from_json(json.get("beer"), brewery=brewery),
            brewery=Brewery.from_json(brewery),
            user_rating=_float(json.get("rating_score")),
            comment=_str(json.get("checkin_comment")),
            created=parse_time(json.get("created_at")),
            user=User.from_json(json["user"]) if json.get("user") else None,
            venue=Venue.from_json(venue) if isinstance(venue, dict) and venue else None,
            badges=tuple(Badge.from_json(b) for b in _items(json, "badges")),
            toasts=tuple(Toast.from_json(t) for t in _items(json, "toasts")),
            comments=tuple(Comment.from_json(c) for c in _items(json, "comments")),
        )
