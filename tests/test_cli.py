import argparse
from unittest.mock import patch

import pytest
import requests

from conftest import fixture_path, load_fixture, make_response
from untappdctl import cli
from untappdctl.cli import main, offset_limit_sort
from untappdctl.errors import InvalidSortError
from untappdctl.services import MAX_INT32, UserService
from untappdctl.sort import Sort, sorts

CREDS = ["--client_id", "id", "--client_secret", "secret"]


def options(**kwargs):
    values = {"offset": 0, "limit": 0, "sort": ""}
    values.update(kwargs)
    return argparse.Namespace(**values)


class TestOffsetLimitSort:
    @pytest.mark.parametrize("token", sorts())
    def test_valid_sort_passes_through(self, token):
        offset, limit, sort = offset_limit_sort(options(offset=5, limit=10, sort=token))
        assert (offset, limit) == (5, 10)
        assert sort is Sort(token)
        assert sort.value == token

    def test_empty_sort_is_not_checked(self):
        assert offset_limit_sort(options()) == (0, 0, None)

    def test_no_sort_flag_at_all(self):
        assert offset_limit_sort(argparse.Namespace(offset=1, limit=2)) == (1, 2, None)

    @pytest.mark.parametrize("token", ["bogus", "Date", "highest"])
    def test_invalid_sort_lists_options(self, token):
        with pytest.raises(InvalidSortError) as e:
            offset_limit_sort(options(sort=token))
        for valid in sorts():
            assert valid in str(e.value)


class TestUserInfo:
    def test_golden_output(self, capsys):
        res = make_response(load_fixture("user_info.json"), headers={"X-Ratelimit-Remaining": "99"})
        with patch.object(requests.Session, "get", return_value=res) as get:
            rc = main(CREDS + ["user", "info", "--info", "mdlayher"])

        assert rc == 0
        assert get.call_args[0][0] == "https://api.untappd.com/v4/user/info/mdlayher"
        out, err = capsys.readouterr()
        with open(fixture_path("user_info.golden")) as f:
            assert out == f.read()
        assert "untappdctl> X-Ratelimit-Remaining: 99" in err

    def test_without_info_flag(self, capsys):
        res = make_response(load_fixture("user_info.json"))
        with patch.object(requests.Session, "get", return_value=res):
            rc = main(CREDS + ["u", "i", "mdlayher"])
        assert rc == 0
        out, err = capsys.readouterr()
        assert out == "ID\tUserName\tName\n1\tmdlayher\tMatt Layher\n"
        assert "X-Ratelimit-Remaining" not in err

    def test_missing_argument_is_usage_error(self, capsys):
        with pytest.raises(SystemExit) as e:
            main(CREDS + ["user", "info"])
        assert e.value.code == 2
        assert "usage" in capsys.readouterr().err

    def test_empty_argument(self, capsys):
        with patch.object(requests.Session, "get") as get:
            rc = main(CREDS + ["user", "info", ""])
        assert rc == 1
        assert not get.called
        assert "untappdctl> missing argument: username" in capsys.readouterr().err

    def test_api_error_is_fatal(self, capsys):
        res = make_response(load_fixture("error_invalid_auth.json"), status=500)
        with patch.object(requests.Session, "get", return_value=res):
            rc = main(CREDS + ["user", "info", "mdlayher"])
        assert rc == 1
        out, err = capsys.readouterr()
        assert out == ""
        assert "client_secret you provided is invalid" in err

    def test_transport_error_is_fatal(self, capsys):
        with patch.object(requests.Session, "get", side_effect=requests.ConnectionError("refused")):
            rc = main(CREDS + ["user", "info", "mdlayher"])
        assert rc == 1
        assert "refused" in capsys.readouterr().err

    def test_broken_pipe(self):
        res = make_response(load_fixture("user_info.json"))
        with patch.object(requests.Session, "get", return_value=res), \
                patch("untappdctl.printer.print_users", side_effect=BrokenPipeError):
            rc = main(CREDS + ["user", "info", "mdlayher"])
        assert rc == 32

    def test_output_failure_is_fatal(self, capsys):
        res = make_response(load_fixture("user_info.json"))
        with patch.object(requests.Session, "get", return_value=res), \
                patch("untappdctl.printer.print_users", side_effect=OSError("No space left on device")):
            rc = main(CREDS + ["user", "info", "mdlayher"])
        assert rc == 1
        assert "No space left on device" in capsys.readouterr().err


class TestCredentials:
    def test_no_credentials(self, capsys):
        with patch.object(requests.Session, "get") as get:
            rc = main(["user", "info", "mdlayher"])
        assert rc == 1
        assert not get.called
        assert "untappdctl> no client ID" in capsys.readouterr().err

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("UNTAPPD_ID", "envid")
        monkeypatch.setenv("UNTAPPD_SECRET", "envsecret")
        res = make_response(load_fixture("user_info.json"))
        with patch.object(requests.Session, "get", return_value=res) as get:
            assert main(["user", "info", "mdlayher"]) == 0
        params = get.call_args[1]["params"]
        assert params["client_id"] == "envid"
        assert params["client_secret"] == "envsecret"

    def test_flag_beats_environment(self, monkeypatch):
        monkeypatch.setenv("UNTAPPD_ID", "envid")
        monkeypatch.setenv("UNTAPPD_SECRET", "envsecret")
        res = make_response(load_fixture("user_info.json"))
        with patch.object(requests.Session, "get", return_value=res) as get:
            assert main(["--client_id", "flagid", "user", "info", "mdlayher"]) == 0
        params = get.call_args[1]["params"]
        assert params["client_id"] == "flagid"
        assert params["client_secret"] == "envsecret"

    def test_config_file(self, isolated_cwd):
        (isolated_cwd / "auth.ini").write_text(
            '[Authorization]\nclientid = "fileid"\nclientsecret = \'filesecret\'\n'
            "[Connection]\nbaseurl = http://localhost:9999/v4\ntimeout = 2.5\n")
        res = make_response(load_fixture("user_info.json"))
        with patch.object(requests.Session, "get", return_value=res) as get:
            assert main(["user", "info", "mdlayher"]) == 0
        assert get.call_args[0][0] == "http://localhost:9999/v4/user/info/mdlayher"
        assert get.call_args[1]["params"]["client_id"] == "fileid"
        assert get.call_args[1]["params"]["client_secret"] == "filesecret"
        assert get.call_args[1]["timeout"] == 2.5

    def test_flags_beat_file_access_token(self, isolated_cwd):
        (isolated_cwd / "auth.ini").write_text('[Authorization]\naccess_token = "filetoken"\n')
        res = make_response(load_fixture("user_info.json"))
        with patch.object(requests.Session, "get", return_value=res) as get:
            assert main(CREDS + ["user", "info", "mdlayher"]) == 0
        params = get.call_args[1]["params"]
        assert params["client_id"] == "id"
        assert params["client_secret"] == "secret"
        assert "access_token" not in params

    def test_file_access_token_without_flags(self, isolated_cwd):
        (isolated_cwd / "auth.ini").write_text('[Authorization]\naccess_token = "filetoken"\n')
        res = make_response(load_fixture("user_info.json"))
        with patch.object(requests.Session, "get", return_value=res) as get:
            assert main(["user", "info", "mdlayher"]) == 0
        assert get.call_args[1]["params"] == {"access_token": "filetoken"}


class TestMalformedResponses:
    def test_item_missing_member_is_fatal(self, capsys):
        res = make_response({"response": {"beers": {"items": [{"brewery": {}}]}}})
        with patch.object(requests.Session, "get", return_value=res):
            rc = main(CREDS + ["user", "beers", "mdlayher"])
        assert rc == 1
        out, err = capsys.readouterr()
        assert out == ""
        assert "untappdctl> response is missing 'beer'" in err

    def test_html_body_is_fatal(self, capsys):
        res = make_response("<html>maintenance</html>")
        with patch.object(requests.Session, "get", return_value=res):
            rc = main(CREDS + ["user", "info", "mdlayher"])
        assert rc == 1
        assert "malformed response envelope" in capsys.readouterr().err


class TestCommands:
    def test_invalid_sort_is_fatal(self, capsys):
        with patch.object(requests.Session, "get") as get:
            rc = main(CREDS + ["user", "beers", "--sort", "bogus", "mdlayher"])
        assert rc == 1
        assert not get.called
        err = capsys.readouterr().err
        assert 'invalid sort type "bogus"' in err
        assert "highest_abv" in err

    def test_beers_with_sort(self, capsys):
        res = make_response(load_fixture("user_beers.json"))
        with patch.object(requests.Session, "get", return_value=res) as get:
            rc = main(CREDS + ["user", "beers", "--sort", "highest_abv", "--limit", "2", "mdlayher"])
        assert rc == 0
        params = get.call_args[1]["params"]
        assert params["sort"] == "highest_abv"
        assert params["limit"] == 2
        assert "Hopslam Ale" in capsys.readouterr().out

    def test_checkins_default(self):
        res = make_response({"response": {}})
        with patch.object(UserService, "checkins", return_value=([], res)) as default, \
                patch.object(UserService, "checkins_min_max_id_limit", return_value=([], res)) as paged:
            assert main(CREDS + ["user", "checkins", "mdlayher"]) == 0
        default.assert_called_once_with("mdlayher")
        assert not paged.called

    @pytest.mark.parametrize("flags,bounds", [
        (["--limit", "50"], (0, MAX_INT32, 50)),
        (["--max_id", "1000"], (0, 1000, 25)),
        (["--min_id", "10", "--max_id", "20", "--limit", "5"], (10, 20, 5)),
    ])
    def test_checkins_paged(self, flags, bounds):
        res = make_response({"response": {}})
        with patch.object(UserService, "checkins_min_max_id_limit", return_value=([], res)) as paged:
            assert main(CREDS + ["user", "checkins"] + flags + ["mdlayher"]) == 0
        paged.assert_called_once_with("mdlayher", *bounds)

    def test_user_checkins_table(self, capsys):
        res = make_response(load_fixture("user_checkins.json"))
        with patch.object(requests.Session, "get", return_value=res):
            assert main(CREDS + ["user", "checkins", "mdlayher"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 3
        assert lines[1].startswith("1002\t")

    def test_badges(self, capsys):
        res = make_response(load_fixture("user_badges.json"))
        with patch.object(requests.Session, "get", return_value=res):
            assert main(CREDS + ["user", "badges", "mdlayher"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert [l.split("\t")[0] for l in lines[1:]] == ["301", "302", "303", "1"]

    def test_brewery_search(self, capsys):
        res = make_response(load_fixture("search_brewery.json"))
        with patch.object(requests.Session, "get", return_value=res) as get:
            assert main(CREDS + ["brewery", "search", "--offset", "25", "Sierra Nevada"]) == 0
        assert get.call_args[1]["params"]["q"] == "Sierra Nevada"
        assert get.call_args[1]["params"]["offset"] == 25
        assert "Chico, CA, United States" in capsys.readouterr().out

    def test_beer_info_needs_numeric_id(self):
        with pytest.raises(SystemExit) as e:
            main(CREDS + ["beer", "info", "two-hearted"])
        assert e.value.code == 2

    def test_venue_checkins(self):
        res = make_response(load_fixture("user_checkins.json"))
        with patch.object(requests.Session, "get", return_value=res) as get:
            assert main(CREDS + ["venue", "checkins", "9917"]) == 0
        assert get.call_args[0][0].endswith("/venue/checkins/9917")

    def test_verbose_logs_requests(self, capsys):
        res = make_response(load_fixture("user_info.json"))
        with patch.object(requests.Session, "get", return_value=res):
            assert main(CREDS + ["-v", "user", "info", "mdlayher"]) == 0
        err = capsys.readouterr().err
        assert "untappdctl> request: GET https://api.untappd.com/v4/user/info/mdlayher" in err
        assert "'client_secret': '***'" in err

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as e:
            main(["--version"])
        assert e.value.code == 0
        assert cli.APP_NAME in capsys.readouterr().out
