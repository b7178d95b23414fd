"""Human-friendly tables of Untappd records, one function per record type.

Every function writes a header row followed by one row per record into a
TabWriter and flushes it. Errors while flushing are not caught here.
"""
import sys

from untappdctl.tabwriter import TabWriter


def tab_writer(out=None):
    """A TabWriter set up for tabular output on ``out`` (stdout by default)."""
    return TabWriter(out if out is not None else sys.stdout, 0, 8, 2, "\t")


def format_date(d):
    if d is None:
        return ""
    return "{0:04d}-{1:02d}-{2:02d}".format(d.year, d.month, d.day)


def brewery_location(b):
    """Country alone, or "city, state, country" when both are known."""
    if b.location.city != "" and b.location.state != "":
        return "{0}, {1}, {2}".format(b.location.city, b.location.state, b.country)
    return b.country


def print_badges(badges, out=None):
    tw = tab_writer(out)
    tw.write("ID\tName\tEarned\tCheckinID\n")

    def print_badge(b):
        tw.write("{0:d}\t{1}\t{2}\t{3:d}\n".format(
            b.id,
            b.name,
            format_date(b.earned),
            b.checkin_id,
        ))

    for b in badges:
        print_badge(b)
        for level in b.levels:
            print_badge(level)

    tw.flush()


def print_beers(beers, out=None):
    tw = tab_writer(out)
    tw.write("ID\tName\tBrewery\tStyle\tABV\tIBU\n")
    for b in beers:
        tw.write("{0:d}\t{1}\t{2}\t{3}\t{4:0.1f}\t{5:03d}\n".format(
            b.id,
            b.name,
            b.brewery.name if b.brewery else "",
            b.style,
            b.abv,
            b.ibu,
        ))
    tw.flush()


def print_breweries(breweries, out=None):
    tw = tab_writer(out)
    tw.write("ID\tName\tLocation\n")
    for b in breweries:
        tw.write("{0:d}\t{1}\t{2}\n".format(b.id, b.name, brewery_location(b)))
    tw.flush()


def print_checkins(checkins, out=None):
    tw = tab_writer(out)
    tw.write("ID\tName\tBrewery\tRating\tBadges\tToasts\tComments\tComment\n")
    for c in checkins:
        tw.write("{0:d}\t{1}\t{2}\t{3:0.2f}\t{4:d}\t{5:d}\t{6:d}\t{7}\n".format(
            c.id,
            c.beer.name,
            c.brewery.name,
            c.user_rating,
            len(c.badges),
            len(c.toasts),
            len(c.comments),
            c.comment,
        ))
    tw.flush()


def print_users(users, info=False, out=None):
    """Print users; ``info`` adds their checkin, badge and beer totals."""
    tw = tab_writer(out)
    header = "ID\tUserName\tName"
    if info:
        header += "\tCheckins\tBadges\tBeers"
    tw.write(header + "\n")

    for u in users:
        tw.write("{0:d}\t{1}\t{2} {3}".format(u.id, u.user_name, u.first_name, u.last_name))
        if info:
            tw.write("\t{0:d}\t{1:d}\t{2:d}".format(
                u.stats.total_checkins,
                u.stats.total_badges,
                u.stats.total_beers,
            ))
        tw.write("\n")
    tw.flush()


def print_venues(venues, out=None):
    tw = tab_writer(out)
    tw.write("ID\tName\tCategory\tPublic\tLocation\n")
    for v in venues:
        tw.write("{0:d}\t{1}\t{2}\t{3}\t{4}, {5}, {6}\n".format(
            v.id,
            v.name,
            v.category,
            "true" if v.public else "false",
            v.location.city,
            v.location.state,
            v.location.country,
        ))
    tw.flush()
