import pytest

from untappdctl.config import AuthConfig
from untappdctl.errors import ConfigurationError


class TestAuthConfig:
    def test_missing_file(self, tmp_path):
        auth = AuthConfig(str(tmp_path / "nope.ini"))
        assert auth.clientid is None
        assert auth.clientsecret is None
        assert auth.baseurl is None

    def test_quotes_are_stripped(self, tmp_path):
        path = tmp_path / "auth.ini"
        path.write_text('[Authorization]\nClientID = "abc"\nclientsecret = \'def\'\naccess_token =\n')
        auth = AuthConfig(str(path))
        assert auth.clientid == "abc"
        assert auth.clientsecret == "def"
        assert auth.token is None

    def test_access_token(self, tmp_path):
        path = tmp_path / "auth.ini"
        path.write_text("[Authorization]\naccess_token = tok\n")
        assert AuthConfig(str(path)).token == "tok"

    def test_connection_section(self, tmp_path):
        path = tmp_path / "auth.ini"
        path.write_text("[Connection]\nbaseurl = http://localhost/v4\ntimeout = 3\n")
        auth = AuthConfig(str(path))
        assert auth.baseurl == "http://localhost/v4"
        assert auth.timeout == 3.0

    def test_bad_timeout(self, tmp_path):
        path = tmp_path / "auth.ini"
        path.write_text("[Connection]\ntimeout = soon\n")
        with pytest.raises(ConfigurationError):
            AuthConfig(str(path))

    def test_unparseable_file(self, tmp_path):
        path = tmp_path / "auth.ini"
        path.write_text("clientid = no section header\n")
        with pytest.raises(ConfigurationError):
            AuthConfig(str(path))
