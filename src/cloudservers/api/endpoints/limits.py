"""Account limits API endpoint."""

from __future__ import annotations

from cloudservers.api.client import CloudServersClient
from cloudservers.api.models import Limits


class LimitsAPI:
    def __init__(self, client: CloudServersClient) -> None:
        self._client = client

    def get(self) -> Limits | None:
        response = self._client.get("/limits")
        if not response.expect(200, 203):
            return None
        limits = Limits(**response.data.get("limits", {}))
        self._client.session.cache.limits = limits
        return limits
