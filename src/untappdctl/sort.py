"""Sort orders accepted by the Untappd beer list endpoints."""
import enum

from untappdctl.errors import InvalidSortError


class Sort(enum.Enum):
    DATE = "date"
    CHECKIN = "checkin"
    HIGHEST_RATED = "highest_rated"
    LOWEST_RATED = "lowest_rated"
    HIGHEST_RATED_YOU = "highest_rated_you"
    LOWEST_RATED_YOU = "lowest_rated_you"
    HIGHEST_ABV = "highest_abv"
    LOWEST_ABV = "lowest_abv"

    def __str__(self):
        return self.value

    @classmethod
    def parse(cls, value):
        """Return the Sort whose token is exactly ``value``.

        Matching is case sensitive, no prefixes or fuzzy matches. Raises
        InvalidSortError listing every valid token otherwise.
        """
        for s in cls:
            if s.value == value:
                return s
        raise InvalidSortError(value, sorts())


def sorts():
    """All valid sort tokens, in API documentation order."""
    return [s.value for s in Sort]
