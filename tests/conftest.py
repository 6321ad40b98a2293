"""Shared pytest fixtures for the session tests."""

import json

import httpx
import pytest

from storefront_session.auth_client import AuthClient
from storefront_session.storage import MemoryStore

BASE_URL = "http://auth.test"


class StubAuthApi:
    """Programmable stand-in for the Auth API, served through httpx.MockTransport."""

    def __init__(self):
        self.responses = {}
        self.calls = []

    def reply(self, path, status_code, body):
        self.responses[path] = (status_code, body)

    def fail(self, path):
        self.responses[path] = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append((request.url.path, json.loads(request.content or b"{}")))
        if request.url.path not in self.responses:
            return httpx.Response(404, json={"msg": "Not found"})
        entry = self.responses[request.url.path]
        if entry is None:
            raise httpx.ConnectError("connection refused", request=request)
        status_code, body = entry
        if isinstance(body, str):
            return httpx.Response(status_code, text=body)
        return httpx.Response(status_code, json=body)


@pytest.fixture
def stub_api():
    return StubAuthApi()


@pytest.fixture
def auth_client(stub_api):
    return AuthClient(BASE_URL, timeout_sec=1.0, transport=httpx.MockTransport(stub_api.handler))


@pytest.fixture
def store():
    return MemoryStore()
