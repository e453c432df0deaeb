import json

import pytest
import requests

from app import create_app
from config import TestingConfig


PLAYERS = [
    {"uid": "u1", "name": "Nottingham", "wagered": {"today": 5, "this_week": 1500.5, "this_month": 9000, "all_time": 20000}},
    {"uid": "u2", "name": "bob", "wagered": {"today": 0, "this_week": 300, "this_month": 12000, "all_time": 15000}},
    {"uid": "u3", "name": "alexander", "wagered": {"today": 1, "this_week": 0, "this_month": 50, "all_time": 60}},
    {"uid": "u4", "name": "Highroller99", "wagered": {"today": 9, "this_week": 25000, "this_month": 25000, "all_time": 99999}},
]


def make_response(body=None, status=200, url="https://referral.test/x", raw=None):
    r = requests.Response()
    r.status_code = status
    r.url = url
    r.encoding = "utf-8"
    r._content = raw if raw is not None else json.dumps(body).encode("utf-8")
    return r


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    yield app
    app.extensions["leaderboard_feed"].stop()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def runner(app):
    return app.test_cli_runner()


@pytest.fixture
def upstream(monkeypatch):
    """
    Stub requests.get. Set `.response` to a Response or `.exc` to an exception;
    every call is recorded in `.calls` as (url, kwargs).
    """
    class Upstream:
        response = make_response({"success": True, "data": PLAYERS})
        exc = None
        calls = []

        def get(self, url, **kwargs):
            self.calls.append((url, kwargs))
            if self.exc is not None:
                raise self.exc
            return self.response

    stub = Upstream()
    stub.calls = []
    monkeypatch.setattr(requests, "get", stub.get)
    return stub
