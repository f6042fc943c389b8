"""Shared test fixtures for cloudservers."""

from __future__ import annotations

from unittest.mock import MagicMock

import httpx
import pytest

from cloudservers.api.client import AUTH_URL, APIResponse, CloudServersClient
from cloudservers.api.models import Server
from cloudservers.api.session import Session

MANAGEMENT_URL = "https://servers.api.example.com/v1.0/123456"

AUTH_HEADERS = {
    "X-Auth-Token": "token-1",
    "X-Server-Management-Url": MANAGEMENT_URL,
}


class Recorder:
    """Routes requests to the auth stub or a test handler and records them."""

    def __init__(self, handler, auth=None) -> None:
        self.handler = handler
        self.auth = auth
        self.auth_calls: list[httpx.Request] = []
        self.api_calls: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if str(request.url) == AUTH_URL:
            self.auth_calls.append(request)
            if self.auth is not None:
                return self.auth(request)
            return httpx.Response(204, headers=AUTH_HEADERS)
        self.api_calls.append(request)
        return self.handler(request)


@pytest.fixture
def session():
    return Session("demo-user", "demo-key")


@pytest.fixture
def make_client(session):
    """Build a real client over httpx.MockTransport.

    Returns ``(client, recorder)``; ``handler`` answers management requests
    and ``auth`` optionally overrides the auth endpoint reply.
    """
    def _make(handler, auth=None):
        recorder = Recorder(handler, auth)
        client = CloudServersClient(session, transport=httpx.MockTransport(recorder))
        return client, recorder
    return _make


@pytest.fixture
def authenticated_session(session):
    session.set_token("token-1", MANAGEMENT_URL)
    return session


@pytest.fixture
def mock_client(authenticated_session):
    """A CloudServersClient with mocked HTTP verb methods."""
    client = CloudServersClient(authenticated_session)
    client.get = MagicMock()
    client.post = MagicMock(return_value=APIResponse(202))
    client.put = MagicMock(return_value=APIResponse(202))
    client.delete = MagicMock(return_value=APIResponse(202))
    return client


@pytest.fixture
def sample_server_data():
    """Raw server API response data."""
    return {
        "id": 1234,
        "name": "web01",
        "imageId": 2,
        "flavorId": 1,
        "hostId": "e4d909c290d0fb1ca068ffaddf22cbd0",
        "progress": 100,
        "status": "ACTIVE",
        "addresses": {
            "public": ["67.23.10.132", "67.23.10.131"],
            "private": ["10.176.42.16"],
        },
        "metadata": {"Server Name": "web01"},
        "sharedIpGroupId": 1234,
    }


@pytest.fixture
def sample_server(sample_server_data):
    return Server(**sample_server_data)


@pytest.fixture
def server_xml():
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<server xmlns="http://docs.rackspacecloud.com/servers/api/v1.0" '
        'id="5678" name="web02" imageId="2" flavorId="1" '
        'hostId="e4d909c290d0fb1ca068ffaddf22cbd0" progress="0" '
        'status="BUILD" adminPass="GFf1j9aP">'
        "<metadata><meta key=\"Server Name\">web02</meta></metadata>"
        "<addresses>"
        '<public><ip addr="67.23.10.138"/></public>'
        '<private><ip addr="10.176.42.19"/></private>'
        "</addresses>"
        "</server>"
    )
