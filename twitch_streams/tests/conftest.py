from __future__ import annotations

import io

import pytest
import requests
from requests.adapters import BaseAdapter

from twitch_streams.config import Settings
from twitch_streams.http import HttpClient


class FakeResponse(requests.Response):
    def __init__(self):
        super().__init__()
        self.close_calls = 0

    def close(self):
        self.close_calls += 1
        super().close()


class BrokenBody:
    """Raw stream that dies mid-read."""

    def read(self, amt=None):
        raise OSError("connection reset by peer")

    def close(self):
        pass


class FakeAdapter(BaseAdapter):
    """Answers every request with a canned status/body and records what it saw."""

    def __init__(self, *, status: int = 200, body: bytes = b"", raw=None, exc: Exception | None = None):
        super().__init__()
        self.status = status
        self.body = body
        self.raw = raw
        self.exc = exc
        self.requests: list[requests.PreparedRequest] = []
        self.timeouts: list = []
        self.responses: list[FakeResponse] = []
        self.close_calls = 0

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        self.requests.append(request)
        self.timeouts.append(timeout)
        if self.exc is not None:
            raise self.exc
        resp = FakeResponse()
        resp.status_code = self.status
        resp.raw = self.raw if self.raw is not None else io.BytesIO(self.body)
        resp.url = request.url
        resp.request = request
        self.responses.append(resp)
        return resp

    def close(self):
        self.close_calls += 1


def make_http(adapter: FakeAdapter, *, timeout_s: float | None = 5.0) -> HttpClient:
    session = requests.Session()
    session.trust_env = False
    session.mount("https://", adapter)
    return HttpClient(session=session, timeout_s=timeout_s)


@pytest.fixture
def settings():
    return Settings(env={})


@pytest.fixture
def fake_http():
    def _make(*, timeout_s: float | None = 5.0, **kwargs) -> tuple[FakeAdapter, HttpClient]:
        adapter = FakeAdapter(**kwargs)
        return adapter, make_http(adapter, timeout_s=timeout_s)

    return _make


@pytest.fixture
def broken_body():
    return BrokenBody()
