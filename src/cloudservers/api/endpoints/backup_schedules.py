"""Backup schedule API endpoints."""

from __future__ import annotations

from cloudservers.api.client import CloudServersClient
from cloudservers.api.exceptions import CloudServersValidationError
from cloudservers.api.models import BackupSchedule, DailyBackup, WeeklyBackup


class BackupSchedulesAPI:
    def __init__(self, client: CloudServersClient) -> None:
        self._client = client

    @property
    def _cache(self):
        return self._client.session.cache

    def _path(self, server_id: int) -> str:
        return f"/servers/{int(server_id)}/backup_schedule"

    def get(self, server_id: int) -> BackupSchedule | None:
        response = self._client.get(self._path(server_id))
        if not response.expect(200, 203) or "backupSchedule" not in response.data:
            return None
        schedule = BackupSchedule(**response.data["backupSchedule"])
        self._cache.ensure_server(int(server_id)).backup_schedule = schedule
        return schedule

    def create(
        self,
        server_id: int,
        weekly: str,
        daily: str,
        enabled: bool = True,
    ) -> bool:
        """Create or replace the schedule of a server.

        ``weekly`` is a day name or DISABLED, ``daily`` a window such as
        H_0400_0600 or DISABLED. Both are case-insensitive and are rejected
        before any request is made when unknown.
        """
        try:
            weekly_value = WeeklyBackup(str(weekly).upper())
        except ValueError:
            raise CloudServersValidationError(
                f"Unsupported weekly backup value: {weekly}"
            ) from None
        try:
            daily_value = DailyBackup(str(daily).upper())
        except ValueError:
            raise CloudServersValidationError(
                f"Unsupported daily backup value: {daily}"
            ) from None

        schedule = BackupSchedule(
            enabled=enabled, weekly=weekly_value, daily=daily_value
        )
        payload = {
            "backupSchedule": {
                "enabled": schedule.enabled,
                "weekly": schedule.weekly.value,
                "daily": schedule.daily.value,
            }
        }
        response = self._client.post(self._path(server_id), json=payload)
        if not response.expect(204):
            return False
        self._cache.ensure_server(int(server_id)).backup_schedule = schedule
        return True

    def delete(self, server_id: int) -> bool:
        response = self._client.delete(self._path(server_id))
        if not response.expect(204):
            return False
        server = self._cache.servers.get(int(server_id))
        if server is not None:
            server.backup_schedule = None
        return True
