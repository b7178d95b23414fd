"""Untappd APIv4 client library and the untappdctl command line tool."""
__version__ = "0.1.0"

from untappdctl.client import BASE_URL, Client
from untappdctl.errors import (APIError, CommandError, ConfigurationError,
                               InvalidSortError, UntappdError)
from untappdctl.models import (Badge, Beer, Brewery, Checkin, Comment, Location,
                               Toast, User, UserStats, Venue)
from untappdctl.services import MAX_INT32
from untappdctl.sort import Sort, sorts
