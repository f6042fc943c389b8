"""One-stop facade bundling every endpoint around a single client."""

from __future__ import annotations

from typing import Any

from cloudservers.api.client import CloudServersClient
from cloudservers.api.endpoints.backup_schedules import BackupSchedulesAPI
from cloudservers.api.endpoints.flavors import FlavorsAPI
from cloudservers.api.endpoints.images import ImagesAPI
from cloudservers.api.endpoints.limits import LimitsAPI
from cloudservers.api.endpoints.servers import ServersAPI
from cloudservers.api.endpoints.shared_ip_groups import SharedIpGroupsAPI
from cloudservers.api.session import Session
from cloudservers.config import CloudServersConfig, load_config


class CloudServersService:
    """Entry point for scripts::

        session = Session("user", "key")
        with CloudServersService(session) as cs:
            for flavor in cs.flavors.list():
                print(flavor.id, flavor.name)
    """

    def __init__(
        self,
        session: Session | None = None,
        *,
        client: CloudServersClient | None = None,
        **client_kwargs: Any,
    ) -> None:
        if client is None:
            if session is None:
                raise TypeError("CloudServersService needs a session or a client")
            client = CloudServersClient(session, **client_kwargs)
        self.client = client
        self.flavors = FlavorsAPI(self.client)
        self.images = ImagesAPI(self.client)
        self.servers = ServersAPI(self.client)
        self.shared_ip_groups = SharedIpGroupsAPI(self.client)
        self.backup_schedules = BackupSchedulesAPI(self.client)
        self.limits = LimitsAPI(self.client)

    @classmethod
    def from_config(
        cls, config: CloudServersConfig | None = None, **client_kwargs: Any
    ) -> CloudServersService:
        """Build a service from the user config file (or an explicit config)."""
        return cls(
            client=CloudServersClient.from_config(
                config or load_config(), **client_kwargs
            )
        )

    @property
    def session(self) -> Session:
        return self.client.session

    def authenticate(self) -> str:
        return self.client.authenticate()

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> CloudServersService:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
