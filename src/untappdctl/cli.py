"""untappdctl: query and display information from Untappd APIv4.

    untappdctl [--client_id ID] [--client_secret SECRET] <family> <action> ARG

Tables go to stdout, everything else (errors, the remaining rate limit,
debug output with -v) goes to stderr so stdout can be piped.
"""
import argparse
import logging
import os
import sys

import requests

from untappdctl import __version__, printer
from untappdctl.client import BASE_URL, RATELIMIT_REMAINING, Client
from untappdctl.config import DEFAULT_CONFIG, AuthConfig
from untappdctl.errors import CommandError, UntappdError
from untappdctl.services import DEFAULT_CHECKIN_LIMIT, MAX_INT32
from untappdctl.sort import Sort, sorts

APP_NAME = "untappdctl"

EXIT_OK = 0
EXIT_FATAL = 1
EXIT_BROKEN_PIPE = 32


def setup_logging(verbosity=0, stream=None):
    """Build the application logger, writing ``untappdctl> message`` lines to stderr.

    0 = INFO, 1 = DEBUG, 2 = DEBUG for urllib3 as well.
    """
    log = logging.getLogger(APP_NAME)
    for h in list(log.handlers):
        log.removeHandler(h)
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(APP_NAME + "> %(message)s"))
    log.addHandler(handler)
    log.propagate = False

    if verbosity <= 0:
        log.setLevel(logging.INFO)
        logging.getLogger("urllib3").setLevel(logging.CRITICAL)
    elif verbosity == 1:
        log.setLevel(logging.DEBUG)
        logging.getLogger("urllib3").setLevel(logging.CRITICAL)
    else:
        log.setLevel(logging.DEBUG)
        logging.getLogger("urllib3").setLevel(logging.DEBUG)
    return log


def untappd_client(options, log):
    """Create a Client from flags, environment and the config file, in that order.

    The file's access token is only used when neither a client ID nor a
    secret came from a flag or the environment.
    """
    auth = AuthConfig(options.config)
    token = auth.token
    if options.client_id or options.client_secret:
        token = None
    return Client(
        options.client_id or auth.clientid,
        options.client_secret or auth.clientsecret,
        baseurl=auth.baseurl or BASE_URL,
        access_token=token,
        timeout=auth.timeout,
        logger=log.getChild("client"),
    )


def print_rate_limit(res, log):
    """Log the remaining rate limit header of a response, if it has one."""
    v = res.headers.get(RATELIMIT_REMAINING) if res is not None else None
    if v:
        log.info("{0}: {1}".format(RATELIMIT_REMAINING, v))


def must_string_arg(options, name):
    a = getattr(options, name, "")
    if a == "" or a is None:
        raise CommandError("missing argument: {0}".format(name))
    return a


def offset_limit_sort(options):
    """Return the (offset, limit, sort) triple accepted by the API.

    An empty sort is passed through unchecked so Untappd's default applies.
    Anything else must be one of the Sort tokens exactly.
    """
    offset, limit = options.offset, options.limit
    sort = getattr(options, "sort", "") or ""
    if sort == "":
        return offset, limit, None
    return offset, limit, Sort.parse(sort)


def checkin_bounds(options):
    """None when no paging flag was given, else (min_id, max_id, limit)."""
    if options.min_id is None and options.max_id is None and options.limit is None:
        return None
    return (
        options.min_id if options.min_id is not None else 0,
        options.max_id if options.max_id is not None else MAX_INT32,
        options.limit if options.limit is not None else DEFAULT_CHECKIN_LIMIT,
    )


def user_info(c, options, out):
    u, res = c.user.info(must_string_arg(options, "username"))
    printer.print_users([u], info=options.info, out=out)
    return res


def user_friends(c, options, out):
    offset, limit, _ = offset_limit_sort(options)
    users, res = c.user.friends(must_string_arg(options, "username"), offset, limit)
    printer.print_users(users, info=options.info, out=out)
    return res


def user_badges(c, options, out):
    offset, limit, _ = offset_limit_sort(options)
    badges, res = c.user.badges(must_string_arg(options, "username"), offset, limit)
    printer.print_badges(badges, out=out)
    return res


def user_beers(c, options, out):
    username = must_string_arg(options, "username")
    offset, limit, sort = offset_limit_sort(options)
    beers, res = c.user.beers(username, offset, limit, sort)
    printer.print_beers(beers, out=out)
    return res


def user_wishlist(c, options, out):
    username = must_string_arg(options, "username")
    offset, limit, sort = offset_limit_sort(options)
    beers, res = c.user.wishlist(username, offset, limit, sort)
    printer.print_beers(beers, out=out)
    return res


def checkins_command(family, argname):
    """Build the ``checkins`` action for one service family."""
    def run(c, options, out):
        service = getattr(c, family)
        arg = must_string_arg(options, argname)
        bounds = checkin_bounds(options)
        if bounds is None:
            checkins, res = service.checkins(arg)
        else:
            checkins, res = service.checkins_min_max_id_limit(arg, *bounds)
        printer.print_checkins(checkins, out=out)
        return res
    return run


def beer_info(c, options, out):
    b, res = c.beer.info(options.id)
    printer.print_beers([b], out=out)
    return res


def beer_search(c, options, out):
    offset, limit, _ = offset_limit_sort(options)
    beers, res = c.beer.search(must_string_arg(options, "query"), offset, limit)
    printer.print_beers(beers, out=out)
    return res


def brewery_info(c, options, out):
    b, res = c.brewery.info(options.id)
    printer.print_breweries([b], out=out)
    return res


def brewery_search(c, options, out):
    offset, limit, _ = offset_limit_sort(options)
    breweries, res = c.brewery.search(must_string_arg(options, "query"), offset, limit)
    printer.print_breweries(breweries, out=out)
    return res


def venue_info(c, options, out):
    v, res = c.venue.info(options.id)
    printer.print_venues([v], out=out)
    return res


def _paging_flags(p, sort=False):
    p.add_argument("--offset", type=int, default=0,
                   help="offset into the list of results")
    p.add_argument("--limit", type=int, default=0,
                   help="number of results to return (server default if unset)")
    if sort:
        p.add_argument("--sort", type=str, default="",
                       help="sort order, one of: {0}".format(", ".join(sorts())))


def _info_flag(p):
    p.add_argument("-i", "--info", action="store_true",
                   help="show extended information (checkin, badge and beer totals)")


def _checkin_flags(p):
    p.add_argument("--min_id", type=int, default=None, help="only checkins with a higher ID")
    p.add_argument("--max_id", type=int, default=None, help="only checkins up to this ID")
    p.add_argument("--limit", type=int, default=None, help="number of checkins, at most 50")


def _action(actions, name, func, arg, helptext, argtype=str, aliases=()):
    p = actions.add_parser(name, aliases=list(aliases), help=helptext)
    p.add_argument(arg, type=argtype)
    p.set_defaults(func=func)
    return p


def build_parser():
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="query and display information from Untappd APIv4",
    )
    parser.add_argument("--client_id", type=str, default=os.environ.get("UNTAPPD_ID"),
                        help="client ID parameter for Untappd APIv4 [$UNTAPPD_ID]")
    parser.add_argument("--client_secret", type=str, default=os.environ.get("UNTAPPD_SECRET"),
                        help="client secret parameter for Untappd APIv4 [$UNTAPPD_SECRET]")
    parser.add_argument("-c", "--config", type=str, default=DEFAULT_CONFIG,
                        help="auth configuration INI file")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="more logging on stderr, repeat for HTTP internals")
    parser.add_argument("--version", action="version",
                        version="%(prog)s {0}".format(__version__))
    families = parser.add_subparsers(dest="family", metavar="command")
    families.required = True

    user = families.add_parser("user", aliases=["u"], help="query for information about users")
    actions = user.add_subparsers(dest="action", metavar="action")
    actions.required = True
    _info_flag(_action(actions, "info", user_info, "username",
                       "information about a user", aliases=["i"]))
    p = _action(actions, "friends", user_friends, "username", "a user's friends", aliases=["f"])
    _paging_flags(p)
    _info_flag(p)
    _paging_flags(_action(actions, "badges", user_badges, "username",
                          "badges a user has earned", aliases=["ba"]))
    _paging_flags(_action(actions, "beers", user_beers, "username",
                          "distinct beers a user has had", aliases=["b"]), sort=True)
    _paging_flags(_action(actions, "wishlist", user_wishlist, "username",
                          "beers on a user's wish list", aliases=["w"]), sort=True)
    _checkin_flags(_action(actions, "checkins", checkins_command("user", "username"), "username",
                           "a user's recent checkins", aliases=["c"]))

    beer = families.add_parser("beer", aliases=["b"], help="query for information about beers")
    actions = beer.add_subparsers(dest="action", metavar="action")
    actions.required = True
    _action(actions, "info", beer_info, "id", "information about a beer", argtype=int, aliases=["i"])
    _checkin_flags(_action(actions, "checkins", checkins_command("beer", "id"), "id",
                           "recent checkins of a beer", argtype=int, aliases=["c"]))
    _paging_flags(_action(actions, "search", beer_search, "query", "search beers by name", aliases=["s"]))

    brewery = families.add_parser("brewery", aliases=["br"], help="query for information about breweries")
    actions = brewery.add_subparsers(dest="action", metavar="action")
    actions.required = True
    _action(actions, "info", brewery_info, "id", "information about a brewery", argtype=int, aliases=["i"])
    _checkin_flags(_action(actions, "checkins", checkins_command("brewery", "id"), "id",
                           "recent checkins of a brewery's beers", argtype=int, aliases=["c"]))
    _paging_flags(_action(actions, "search", brewery_search, "query", "search breweries by name", aliases=["s"]))

    venue = families.add_parser("venue", aliases=["v"], help="query for information about venues")
    actions = venue.add_subparsers(dest="action", metavar="action")
    actions.required = True
    _action(actions, "info", venue_info, "id", "information about a venue", argtype=int, aliases=["i"])
    _checkin_flags(_action(actions, "checkins", checkins_command("venue", "id"), "id",
                           "recent checkins at a venue", argtype=int, aliases=["c"]))

    return parser


def main(argv=None):
    """Run one command and return the process exit status."""
    options = build_parser().parse_args(argv)
    log = setup_logging(options.verbose)
    try:
        c = untappd_client(options, log)
        res = options.func(c, options, sys.stdout)
        print_rate_limit(res, log)
    except BrokenPipeError:
        return EXIT_BROKEN_PIPE
    except (UntappdError, requests.RequestException, OSError) as e:
        log.critical(str(e))
        return EXIT_FATAL
    log.debug("we are done.")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
