"""Pydantic models for Cloud Servers API responses."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class _CloudModel(BaseModel):
    """Base model mapping camelCase wire names onto snake_case attributes.

    Extra fields from the API are ignored so new provider attributes never
    break decoding.
    """
    model_config = ConfigDict(
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
    )


def _none_to_list(v: list | None) -> list:
    """Coerce None to empty list for API fields that may return null."""
    return v if v is not None else []


def _none_to_dict(v: dict | None) -> dict:
    return v if v is not None else {}


class WeeklyBackup(str, Enum):
    """Day of the week a weekly backup runs on."""

    DISABLED = "DISABLED"
    SUNDAY = "SUNDAY"
    MONDAY = "MONDAY"
    TUESDAY = "TUESDAY"
    WEDNESDAY = "WEDNESDAY"
    THURSDAY = "THURSDAY"
    FRIDAY = "FRIDAY"
    SATURDAY = "SATURDAY"


class DailyBackup(str, Enum):
    """Two hour window (GMT) a daily backup runs in."""

    DISABLED = "DISABLED"
    H_0000_0200 = "H_0000_0200"
    H_0200_0400 = "H_0200_0400"
    H_0400_0600 = "H_0400_0600"
    H_0600_0800 = "H_0600_0800"
    H_0800_1000 = "H_0800_1000"
    H_1000_1200 = "H_1000_1200"
    H_1200_1400 = "H_1200_1400"
    H_1400_1600 = "H_1400_1600"
    H_1600_1800 = "H_1600_1800"
    H_1800_2000 = "H_1800_2000"
    H_2000_2200 = "H_2000_2200"
    H_2200_0000 = "H_2200_0000"


class RebootType(str, Enum):
    SOFT = "SOFT"
    HARD = "HARD"


class BackupSchedule(_CloudModel):
    enabled: bool = False
    weekly: WeeklyBackup = WeeklyBackup.DISABLED
    daily: DailyBackup = DailyBackup.DISABLED

    @field_validator("enabled", mode="before")
    @classmethod
    def _coerce_enabled(cls, v):
        return bool(v)

    @field_validator("weekly", "daily", mode="before")
    @classmethod
    def _upper(cls, v):
        if v is None:
            return "DISABLED"
        return v.upper() if isinstance(v, str) else v


class Addresses(_CloudModel):
    public: list[str] = Field(default_factory=list)
    private: list[str] = Field(default_factory=list)

    @field_validator("public", "private", mode="before")
    @classmethod
    def _coerce_lists(cls, v):
        return _none_to_list(v)


class Server(_CloudModel):
    id: int
    name: str = ""
    image_id: int | None = None
    flavor_id: int | None = None
    host_id: str | None = None
    progress: int | None = None
    status: str | None = None
    addresses: Addresses = Field(default_factory=Addresses)
    metadata: dict[str, str] = Field(default_factory=dict)
    shared_ip_group_id: int | None = None
    admin_pass: str | None = None
    backup_schedule: BackupSchedule | None = None

    @field_validator("addresses", mode="before")
    @classmethod
    def _coerce_addresses(cls, v):
        return _none_to_dict(v)

    @field_validator("metadata", mode="before")
    @classmethod
    def _coerce_metadata(cls, v):
        return {str(k): str(val) for k, val in _none_to_dict(v).items()}


class Image(_CloudModel):
    id: int
    name: str = ""
    server_id: int | None = None
    status: str | None = None
    progress: int | None = None
    created: str | None = None
    updated: str | None = None


class Flavor(_CloudModel):
    id: int
    name: str = ""
    ram: int | None = None
    disk: int | None = None


class SharedIpGroup(_CloudModel):
    id: int
    name: str = ""
    servers: list[int] = Field(default_factory=list)

    @field_validator("servers", mode="before")
    @classmethod
    def _coerce_lists(cls, v):
        return _none_to_list(v)


class Limits(_CloudModel):
    rate: list[dict[str, Any]] = Field(default_factory=list)
    absolute: dict[str, Any] = Field(default_factory=dict)

    @field_validator("rate", mode="before")
    @classmethod
    def _coerce_rate(cls, v):
        return _none_to_list(v)

    @field_validator("absolute", mode="before")
    @classmethod
    def _coerce_absolute(cls, v):
        return _none_to_dict(v)
