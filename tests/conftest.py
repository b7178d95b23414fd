import json
import os
import sys
from unittest.mock import Mock

import pytest
import requests

# Run against the source tree without an install
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "src"))

from untappdctl.client import Client

FIXTURES = os.path.join(os.path.dirname(os.path.abspath(__file__)), "fixtures")


def fixture_path(name):
    return os.path.join(FIXTURES, name)


def load_fixture(name):
    with open(fixture_path(name)) as f:
        return json.load(f)


def make_response(payload, status=200, headers=None, url="https://api.untappd.com/v4/test"):
    """A real requests.Response carrying ``payload`` as its body."""
    r = requests.Response()
    r.status_code = status
    r.reason = "OK" if status == 200 else "Internal Server Error"
    r.url = url
    if isinstance(payload, (dict, list)):
        r._content = json.dumps(payload).encode("utf-8")
        r.headers["Content-Type"] = "application/json"
    else:
        r._content = payload.encode("utf-8")
    r.encoding = "utf-8"
    for k, v in (headers or {}).items():
        r.headers[k] = v
    return r


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """Keep a stray auth.ini or UNTAPPD_* variable out of every test."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("UNTAPPD_ID", raising=False)
    monkeypatch.delenv("UNTAPPD_SECRET", raising=False)
    return tmp_path


@pytest.fixture
def session():
    return Mock(spec=requests.Session)


@pytest.fixture
def client(session):
    return Client("id", "secret", session=session)
