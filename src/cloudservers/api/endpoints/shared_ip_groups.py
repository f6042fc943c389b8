"""Shared IP group API endpoints."""

from __future__ import annotations

from cloudservers.api.client import CloudServersClient
from cloudservers.api.models import SharedIpGroup


class SharedIpGroupsAPI:
    def __init__(self, client: CloudServersClient) -> None:
        self._client = client

    @property
    def _cache(self):
        return self._client.session.cache

    def list(self, detail: bool = False) -> list[SharedIpGroup] | None:
        """List groups; with ``detail`` each group also names its servers."""
        path = "/shared_ip_groups/detail" if detail else "/shared_ip_groups"
        response = self._client.get(path)
        if not response.expect(200, 203):
            return None
        groups = [SharedIpGroup(**g) for g in response.data.get("sharedIpGroups", [])]
        self._cache.shared_ip_groups = {g.id: g for g in groups}
        return groups

    def get(self, group_id: int) -> SharedIpGroup | None:
        response = self._client.get(f"/shared_ip_groups/{int(group_id)}")
        if not response.expect(200, 203) or "sharedIpGroup" not in response.data:
            return None
        group = SharedIpGroup(**response.data["sharedIpGroup"])
        self._cache.shared_ip_groups[group.id] = group
        return group

    def create(self, name: str, server_id: int) -> int | None:
        """Create a group seeded with one server and return the new group id."""
        payload = {"sharedIpGroup": {"name": str(name), "server": int(server_id)}}
        response = self._client.post("/shared_ip_groups", json=payload)
        if not response.expect(201) or "sharedIpGroup" not in response.data:
            return None
        data = {"name": name, **response.data["sharedIpGroup"]}
        data.setdefault("servers", [int(server_id)])
        group = SharedIpGroup(**data)
        self._cache.shared_ip_groups[group.id] = group
        self._cache.ensure_server(int(server_id)).shared_ip_group_id = group.id
        return group.id

    def delete(self, group_id: int) -> bool:
        response = self._client.delete(f"/shared_ip_groups/{int(group_id)}")
        if not response.expect(204):
            return False
        self._cache.shared_ip_groups.pop(int(group_id), None)
        return True
