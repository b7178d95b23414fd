"""Exceptions raised by the untappdctl library and CLI."""


class UntappdError(Exception):
    """Base class for everything untappdctl raises on purpose."""


class ConfigurationError(UntappdError):
    """Client credentials are missing or unusable."""


class CommandError(UntappdError):
    """Bad input on the command line that argparse cannot catch."""


class APIError(UntappdError):
    """The Untappd API answered with an error, or an envelope we can't read.

    The meta fields mirror what Untappd sends back in ``meta`` on failure:
    ``error_type``, ``error_detail`` and ``developer_friendly``.
    """

    def __init__(self, message, code=0, error_type="", error_detail="",
                 developer_friendly="", response=None):
        super().__init__(message)
        self.code = code
        self.error_type = error_type
        self.error_detail = error_detail
        self.developer_friendly = developer_friendly
        self.response = response

    def __str__(self):
        if self.developer_friendly:
            return "{0}: {1}".format(self.code, self.developer_friendly)
        if self.error_detail:
            return "{0}: {1}".format(self.code, self.error_detail)
        return super().__str__()


class InvalidSortError(UntappdError, ValueError):
    def __init__(self, value, options):
        self.value = value
        self.options = list(options)
        super().__init__("invalid sort type \"{0}\" (options: {1})".format(
            value, ", ".join(self.options)))
