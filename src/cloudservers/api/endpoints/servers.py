"""Server API endpoints."""

from __future__ import annotations

import base64
import logging
import re
from typing import Any

from cloudservers.api.client import CloudServersClient
from cloudservers.api.exceptions import (
    CloudServersConflictError,
    CloudServersValidationError,
)
from cloudservers.api.models import Addresses, RebootType, Server
from cloudservers.api.xmlcodec import parse_server

logger = logging.getLogger(__name__)

# The provider drops anything else from server names, so do it up front
_NAME_STRIP = re.compile(r"[^a-zA-Z0-9 ]")


class ServersAPI:
    def __init__(self, client: CloudServersClient) -> None:
        self._client = client

    @property
    def _cache(self):
        return self._client.session.cache

    def list(self, detail: bool = False) -> list[Server] | None:
        response = self._client.get("/servers/detail" if detail else "/servers")
        if not response.expect(200, 203):
            return None
        servers = [Server(**s) for s in response.data.get("servers", [])]
        self._cache.servers = {s.id: s for s in servers}
        return servers

    def get(self, server_id: int) -> Server | None:
        response = self._client.get(f"/servers/{int(server_id)}")
        if not response.expect(200, 203) or "server" not in response.data:
            return None
        server = Server(**response.data["server"])
        self._cache.servers[server.id] = server
        return server

    def add_file(self, path: str, contents: str) -> dict[str, str]:
        """Queue a personality file for the next :meth:`create` call."""
        return self._client.session.add_personality_file(path, contents)

    def create(
        self,
        name: str,
        image_id: int,
        flavor_id: int,
        *,
        shared_ip_group_id: int | None = None,
        metadata: dict[str, str] | None = None,
        personality: dict[str, str] | None = None,
    ) -> Server | None:
        """Boot a new server.

        Fails with :class:`CloudServersConflictError` when a cached server
        already carries the same name, compared case-insensitively. The
        server cache is populated first unless it already holds a named
        server; id-only placeholders left by other calls are not enough.
        """
        name = _NAME_STRIP.sub("", str(name))
        named = [s for s in self._cache.servers.values() if s.name]
        if not named:
            self.list()
            named = [s for s in self._cache.servers.values() if s.name]
        for server in named:
            if server.name.lower() == name.lower():
                raise CloudServersConflictError(
                    f"Server with name: {name} already exists!"
                )

        files = {**self._client.session.personality, **(personality or {})}
        body: dict[str, Any] = {
            "name": name,
            "imageId": int(image_id),
            "flavorId": int(flavor_id),
            "metadata": {"Server Name": name, **(metadata or {})},
            "personality": [
                {
                    "path": path,
                    "contents": base64.b64encode(contents.encode()).decode("ascii"),
                }
                for path, contents in files.items()
            ],
        }
        if shared_ip_group_id is not None:
            body["sharedIpGroupId"] = int(shared_ip_group_id)

        response = self._client.post(
            "/servers.xml", json={"server": body}, accept="application/xml"
        )
        if not response.expect(202):
            return None
        self._client.session.clear_personality()
        server = parse_server(response.content)
        self._cache.servers[server.id] = server
        logger.info("Created server %s (%s)", server.id, server.name)
        return server

    def update(self, server_id: int, name: str, admin_pass: str) -> Server | None:
        """Rename a server and reset its root password."""
        payload = {"server": {"name": str(name), "adminPass": str(admin_pass)}}
        response = self._client.put(f"/servers/{int(server_id)}", json=payload)
        if not response.expect(202, 204):
            return None
        server = self._cache.ensure_server(int(server_id))
        server.name = str(name)
        server.admin_pass = str(admin_pass)
        return server

    def delete(self, server_id: int) -> bool:
        response = self._client.delete(f"/servers/{int(server_id)}")
        if not response.expect(202):
            return False
        self._cache.servers.pop(int(server_id), None)
        return True

    def _action(self, server_id: int, body: dict[str, Any], *codes: int) -> bool:
        response = self._client.post(f"/servers/{int(server_id)}/action", json=body)
        return response.expect(*(codes or (202,)))

    def rebuild(self, server_id: int, image_id: int) -> bool:
        if not self._action(server_id, {"rebuild": {"imageId": int(image_id)}}):
            return False
        if int(server_id) in self._cache.servers:
            self._cache.servers[int(server_id)].image_id = int(image_id)
        return True

    def resize(self, server_id: int, flavor_id: int) -> bool:
        if not self._action(server_id, {"resize": {"flavorId": int(flavor_id)}}):
            return False
        if int(server_id) in self._cache.servers:
            self._cache.servers[int(server_id)].flavor_id = int(flavor_id)
        return True

    def confirm_resize(self, server_id: int) -> bool:
        return self._action(server_id, {"confirmResize": None}, 202, 204)

    def revert_resize(self, server_id: int) -> bool:
        return self._action(server_id, {"revertResize": None})

    def reboot(self, server_id: int, type: str = "soft") -> bool:
        try:
            reboot_type = RebootType(str(type).upper())
        except ValueError:
            raise CloudServersValidationError(
                f"Unsupported reboot type: {type}"
            ) from None
        return self._action(server_id, {"reboot": {"type": reboot_type.value}})

    def get_ips(self, server_id: int, kind: str | None = None) -> Addresses | None:
        """Fetch public and/or private addresses and refresh the cached server."""
        if kind not in (None, "public", "private"):
            raise CloudServersValidationError(f"Unsupported address type: {kind}")
        path = f"/servers/{int(server_id)}/ips" + (f"/{kind}" if kind else "")
        response = self._client.get(path)
        if not response.expect(200, 203):
            return None
        returned = response.data.get("addresses", response.data)
        server = self._cache.ensure_server(int(server_id))
        for key in ("public", "private"):
            if returned.get(key) is not None:
                setattr(server.addresses, key, [str(ip) for ip in returned[key]])
        return server.addresses

    def share_ip(
        self,
        server_id: int,
        address: str,
        shared_ip_group_id: int,
        configure: bool = False,
    ) -> bool:
        """Share a public IP from a shared IP group onto this server."""
        payload = {
            "shareIp": {
                "sharedIpGroupId": int(shared_ip_group_id),
                "configureServer": bool(configure),
            }
        }
        response = self._client.put(
            f"/servers/{int(server_id)}/ips/public/{address}", json=payload
        )
        if not response.expect(201, 202):
            return False
        if int(server_id) in self._cache.servers:
            self._cache.servers[int(server_id)].shared_ip_group_id = int(
                shared_ip_group_id
            )
        return True

    def unshare_ip(self, server_id: int, address: str) -> bool:
        response = self._client.delete(
            f"/servers/{int(server_id)}/ips/public/{address}"
        )
        return response.expect(202)
