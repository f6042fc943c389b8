"""Authentication state and resource caches owned by the caller."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from cloudservers.api.exceptions import CloudServersAuthenticationError
from cloudservers.api.models import (
    Flavor,
    Image,
    Limits,
    Server,
    SharedIpGroup,
)

if TYPE_CHECKING:
    from cloudservers.config import CloudServersConfig


@dataclass
class ResourceCache:
    """Best-effort mirror of provider state, keyed by numeric id.

    List calls replace a whole map, single-record calls overwrite one entry
    and actions patch entries that are already present.
    """

    servers: dict[int, Server] = field(default_factory=dict)
    images: dict[int, Image] = field(default_factory=dict)
    flavors: dict[int, Flavor] = field(default_factory=dict)
    shared_ip_groups: dict[int, SharedIpGroup] = field(default_factory=dict)
    limits: Limits | None = None

    def ensure_server(self, server_id: int) -> Server:
        """Return the cached server, inserting an id-only placeholder if absent."""
        server = self.servers.get(server_id)
        if server is None:
            server = Server(id=server_id)
            self.servers[server_id] = server
        return server

    def clear(self) -> None:
        self.servers.clear()
        self.images.clear()
        self.flavors.clear()
        self.shared_ip_groups.clear()
        self.limits = None


class Session:
    """Credentials, the current token and the discovered management URL.

    A session is created by the caller and handed to a client. Tokens are
    kept until the provider answers 401, at which point the client calls
    :meth:`invalidate` and authenticates again.
    """

    def __init__(self, api_user: str, api_key: str) -> None:
        if not api_user or not api_key:
            raise CloudServersAuthenticationError(
                "Please provide valid API credentials"
            )
        self._api_user = api_user
        self._api_key = api_key
        self.auth_token: str | None = None
        self.management_url: str | None = None
        self.cache = ResourceCache()
        self.personality: dict[str, str] = {}

    @classmethod
    def from_config(cls, config: CloudServersConfig) -> Session:
        return cls(config.auth.api_user, config.auth.api_key)

    @property
    def api_user(self) -> str:
        return self._api_user

    @property
    def api_key(self) -> str:
        return self._api_key

    @property
    def is_authenticated(self) -> bool:
        return bool(self.auth_token and self.management_url)

    def set_token(self, token: str, management_url: str | None = None) -> None:
        """Install a token obtained elsewhere, e.g. one persisted between runs."""
        self.auth_token = token
        if management_url is not None:
            self.management_url = management_url.rstrip("/")

    def invalidate(self) -> None:
        self.auth_token = None

    def add_personality_file(self, path: str, contents: str) -> dict[str, str]:
        """Queue a file to inject into the next server created."""
        self.personality[str(path)] = str(contents)
        return dict(self.personality)

    def clear_personality(self) -> None:
        self.personality.clear()
