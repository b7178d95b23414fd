"""INI file settings for untappdctl.

The file is optional and looks like::

    [Authorization]
    clientid = "..."
    clientsecret = "..."
    ;access_token = "..."

    [Connection]
    baseurl = https://api.untappd.com/v4
    timeout = 10

Command-line flags and the UNTAPPD_ID/UNTAPPD_SECRET environment variables
override whatever the file says.
"""
import configparser
import logging

from untappdctl.errors import ConfigurationError

mylog = logging.getLogger(__name__)

DEFAULT_CONFIG = "auth.ini"


def _unquote(value):
    if value is None:
        return None
    value = value.strip().strip('"').strip("'")
    return value or None


class AuthConfig(object):
    def __init__(self, config=DEFAULT_CONFIG):
        self.name = config
        self.clientid = None
        self.clientsecret = None
        self.token = None
        self.baseurl = None
        self.timeout = None

        parser = configparser.ConfigParser()
        try:
            found = parser.read(config)
        except configparser.Error as e:
            raise ConfigurationError("can't read {0}: {1}".format(config, e))
        if not found:
            mylog.debug("AuthConfig: no configuration file {0}, using flags and environment only".format(config))
            return
        mylog.debug("AuthConfig: Initializing from {0}".format(config))

        if parser.has_section("Authorization"):
            section = parser["Authorization"]
            self.clientid = _unquote(section.get("clientid"))
            self.clientsecret = _unquote(section.get("clientsecret"))
            self.token = _unquote(section.get("access_token"))
            mylog.debug("AuthConfig: Set Clientid to {0}".format(self.clientid))
        else:
            mylog.warning("AuthConfig: No Authorization section found in {0}".format(config))

        if parser.has_section("Connection"):
            section = parser["Connection"]
            self.baseurl = _unquote(section.get("baseurl"))
            try:
                self.timeout = section.getfloat("timeout", fallback=None)
            except ValueError:
                raise ConfigurationError("{0}: timeout must be a number of seconds".format(config))
