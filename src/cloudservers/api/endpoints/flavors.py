"""Flavor API endpoints."""

from __future__ import annotations

from cloudservers.api.client import CloudServersClient
from cloudservers.api.models import Flavor


class FlavorsAPI:
    def __init__(self, client: CloudServersClient) -> None:
        self._client = client

    @property
    def _cache(self):
        return self._client.session.cache

    def list(self, detail: bool = False) -> list[Flavor] | None:
        response = self._client.get("/flavors/detail" if detail else "/flavors")
        if not response.expect(200, 203):
            return None
        flavors = [Flavor(**f) for f in response.data.get("flavors", [])]
        self._cache.flavors = {f.id: f for f in flavors}
        return flavors

    def get(self, flavor_id: int) -> Flavor | None:
        response = self._client.get(f"/flavors/{int(flavor_id)}")
        if not response.expect(200, 203) or "flavor" not in response.data:
            return None
        flavor = Flavor(**response.data["flavor"])
        self._cache.flavors[flavor.id] = flavor
        return flavor
