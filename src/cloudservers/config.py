"""Configuration management for cloudservers.

Reads and writes TOML config at ~/.config/cloudservers/config.toml.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

import tomli_w

CONFIG_DIR = Path.home() / ".config" / "cloudservers"
CONFIG_PATH = CONFIG_DIR / "config.toml"

DEFAULT_AUTH_URL = "https://auth.api.rackspacecloud.com/v1.0"


@dataclass
class AuthConfig:
    api_user: str = ""
    api_key: str = ""
    auth_url: str = DEFAULT_AUTH_URL


@dataclass
class HTTPConfig:
    timeout: float = 30.0
    user_agent: str = "python-cloudservers"


@dataclass
class CloudServersConfig:
    auth: AuthConfig = field(default_factory=AuthConfig)
    http: HTTPConfig = field(default_factory=HTTPConfig)


def load_config() -> CloudServersConfig:
    """Load config from TOML file, returning defaults if missing or corrupt."""
    if not CONFIG_PATH.exists():
        return CloudServersConfig()
    try:
        with open(CONFIG_PATH, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError):
        return CloudServersConfig()

    auth_data = data.get("auth", {})
    http_data = data.get("http", {})

    return CloudServersConfig(
        auth=AuthConfig(
            api_user=auth_data.get("api_user", ""),
            api_key=auth_data.get("api_key", ""),
            auth_url=auth_data.get("auth_url", DEFAULT_AUTH_URL),
        ),
        http=HTTPConfig(
            timeout=float(http_data.get("timeout", 30.0)),
            user_agent=http_data.get("user_agent", "python-cloudservers"),
        ),
    )


def save_config(config: CloudServersConfig) -> None:
    """Write config to TOML file."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    os.chmod(CONFIG_DIR, 0o700)

    data = {
        "auth": {
            "api_user": config.auth.api_user,
            "api_key": config.auth.api_key,
            "auth_url": config.auth.auth_url,
        },
        "http": {
            "timeout": config.http.timeout,
            "user_agent": config.http.user_agent,
        },
    }

    with open(CONFIG_PATH, "wb") as f:
        tomli_w.dump(data, f)
    os.chmod(CONFIG_PATH, 0o600)


def has_credentials() -> bool:
    """Quick check if an API user and key are configured."""
    config = load_config()
    return bool(config.auth.api_user and config.auth.api_key)
