"""
Configuration management for apcupsd-exporter.

This module uses Pydantic's BaseSettings to manage configuration
through environment variables. CLI flags default to these values.
"""
from typing import Tuple

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings.

    These settings are loaded from environment variables.
    """

    # apcupsd Network Information Server
    APCUPSD_ADDR: str = ":3551"
    TIMEOUT: float = 5.0  # seconds, per scrape

    # Metrics endpoint
    TELEMETRY_ADDR: str = ":9162"
    TELEMETRY_PATH: str = "/metrics"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "text"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        env_prefix="APCUPSD_EXPORTER_",
    )

    @field_validator("TIMEOUT")
    @classmethod
    def _positive_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("TIMEOUT must be greater than zero")
        return v

    @field_validator("TELEMETRY_PATH")
    @classmethod
    def _absolute_path(cls, v: str) -> str:
        if not v.startswith("/"):
            raise ValueError("TELEMETRY_PATH must start with '/'")
        return v


def parse_addr(addr: str, default_host: str) -> Tuple[str, int]:
    """
    Split a 'host:port' address.

    An empty host (':3551') falls back to default_host. IPv6 hosts must be
    bracketed ('[::1]:3551').
    """
    host, sep, port = addr.rpartition(":")
    if not sep:
        raise ValueError(f"Address {addr!r} is missing a port")
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    try:
        port_num = int(port)
    except ValueError:
        raise ValueError(f"Address {addr!r} has an invalid port") from None
    if not 0 < port_num < 65536:
        raise ValueError(f"Address {addr!r} has an out of range port")
    return host or default_host, port_num


settings = Settings()
