"""etcd connection configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from urllib.parse import urlsplit

from .errors import RegistryConfigurationError

DEFAULT_TIMEOUT = 5.0


def _get_env_path(key: str) -> str | None:
    """Get a file path from the environment; empty counts as unset."""
    value = os.getenv(key, "").strip()
    return value or None


def _get_env_float(key: str, default: float) -> float:
    value = os.getenv(key, "").strip()
    if not value:
        return default
    try:
        timeout = float(value)
    except ValueError as exc:
        raise RegistryConfigurationError(
            f"Invalid float env var {key}={value!r}") from exc
    if timeout <= 0:
        raise RegistryConfigurationError(
            f"{key} must be positive, got {value!r}")
    return timeout


@dataclass(frozen=True, slots=True)
class EtcdConnectionConfig:
    """Where and how to reach one etcd seed member."""

    # host[:port] of the seed member
    host: str

    # Key prefix for every registry entry
    base_path: str = ""

    # Client certificate (PEM)
    cert_file: str | None = field(
        default_factory=lambda: _get_env_path("ETCD_CERT_FILE")
    )

    # Client private key (PEM)
    key_file: str | None = field(
        default_factory=lambda: _get_env_path("ETCD_KEY_FILE")
    )

    # CA certificate; its presence switches every URL to https
    ca_cert_file: str | None = field(
        default_factory=lambda: _get_env_path("ETCD_CA_CERT_FILE")
    )

    # Transport timeout in seconds
    timeout: float = field(
        default_factory=lambda: _get_env_float("ETCD_TIMEOUT", DEFAULT_TIMEOUT)
    )

    @property
    def scheme(self) -> str:
        return "https" if self.ca_cert_file else "http"

    @property
    def endpoint(self) -> str:
        return f"{self.scheme}://{self.host}"

    @property
    def mutual_tls(self) -> bool:
        return bool(self.ca_cert_file and self.cert_file and self.key_file)


def load_config(uri: str) -> EtcdConnectionConfig:
    """Build connection config from an adapter URI and the environment.

    The URI host names the seed member and its path becomes the base key
    prefix, e.g. ``etcd2://10.0.0.5:2379/services``.
    """
    try:
        parsed = urlsplit(uri)
        # Touch the port so a malformed one fails here, not on first request.
        _ = parsed.port
    except ValueError as exc:
        raise RegistryConfigurationError(f"Invalid registry URI: {uri!r}") from exc
    # Userinfo never reaches the endpoint or the logs.
    host = parsed.netloc.rpartition("@")[2]
    if not host:
        raise RegistryConfigurationError(f"Registry URI has no host: {uri!r}")
    return EtcdConnectionConfig(host=host, base_path=parsed.path)
