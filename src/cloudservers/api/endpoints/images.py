"""Image API endpoints."""

from __future__ import annotations

from cloudservers.api.client import CloudServersClient
from cloudservers.api.models import Image


class ImagesAPI:
    def __init__(self, client: CloudServersClient) -> None:
        self._client = client

    @property
    def _cache(self):
        return self._client.session.cache

    def list(self, detail: bool = False) -> list[Image] | None:
        response = self._client.get("/images/detail" if detail else "/images")
        if not response.expect(200, 203):
            return None
        images = [Image(**i) for i in response.data.get("images", [])]
        self._cache.images = {i.id: i for i in images}
        return images

    def get(self, image_id: int) -> Image | None:
        response = self._client.get(f"/images/{int(image_id)}")
        if not response.expect(200, 203) or "image" not in response.data:
            return None
        image = Image(**response.data["image"])
        self._cache.images[image.id] = image
        return image

    def create(self, name: str, server_id: int) -> Image | None:
        """Snapshot a server into a new image."""
        payload = {"image": {"serverId": int(server_id), "name": str(name)}}
        response = self._client.post("/images", json=payload)
        if not response.expect(200, 202) or "image" not in response.data:
            return None
        image = Image(**response.data["image"])
        self._cache.images[image.id] = image
        return image

    def delete(self, image_id: int) -> bool:
        response = self._client.delete(f"/images/{int(image_id)}")
        if not response.expect(204):
            return False
        self._cache.images.pop(int(image_id), None)
        return True
