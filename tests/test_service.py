"""Tests for the service facade."""

from __future__ import annotations

import httpx

from cloudservers.api.endpoints.servers import ServersAPI
from cloudservers.api.service import CloudServersService
from cloudservers.config import AuthConfig, CloudServersConfig, HTTPConfig

AUTH_HEADERS = {
    "X-Auth-Token": "token-1",
    "X-Server-Management-Url": "https://servers.api.example.com/v1.0/1",
}


def provider(request: httpx.Request) -> httpx.Response:
    if request.url.host == "auth.api.rackspacecloud.com":
        return httpx.Response(204, headers=AUTH_HEADERS)
    if request.url.path.endswith("/flavors"):
        return httpx.Response(200, json={"flavors": [{"id": 1, "name": "256 server"}]})
    return httpx.Response(404)


class TestCloudServersService:
    def test_endpoints_share_one_client(self, session):
        cs = CloudServersService(session)
        assert isinstance(cs.servers, ServersAPI)
        assert cs.servers._client is cs.images._client is cs.client
        assert cs.session is session

    def test_end_to_end(self, session):
        with CloudServersService(
            session, transport=httpx.MockTransport(provider)
        ) as cs:
            flavors = cs.flavors.list()
        assert flavors[0].name == "256 server"
        assert session.auth_token == "token-1"
        assert 1 in session.cache.flavors

    def test_from_config(self):
        config = CloudServersConfig(auth=AuthConfig(api_user="u", api_key="k"))
        cs = CloudServersService.from_config(
            config, transport=httpx.MockTransport(provider)
        )
        assert cs.authenticate() == "token-1"
        assert cs.session.api_user == "u"
        cs.close()

    def test_from_config_carries_auth_url_and_user_agent(self):
        config = CloudServersConfig(
            auth=AuthConfig(
                api_user="u", api_key="k", auth_url="https://auth.example.com/v1.0"
            ),
            http=HTTPConfig(timeout=5.0, user_agent="agent/2.0"),
        )
        with CloudServersService.from_config(config) as cs:
            assert cs.client._auth_url == "https://auth.example.com/v1.0"
            assert cs.client._get_client().headers["User-Agent"] == "agent/2.0"
            assert cs.client._get_client().timeout.read == 5.0
