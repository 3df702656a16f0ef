"""Service registry error definitions."""

from __future__ import annotations


class ServiceRegistryError(Exception):
    """Base exception for service registry errors."""


class RegistryConfigurationError(ServiceRegistryError):
    """Connection parameters or TLS material are unusable.

    Raised only while building an adapter; no adapter exists afterwards.
    """


class ServiceRegistryConnectionError(ServiceRegistryError):
    """Error connecting to service registry."""


class EtcdClusterError(ServiceRegistryConnectionError):
    """No etcd member could be reached."""

    def __init__(self, message: str, *, machines: tuple[str, ...]) -> None:
        super().__init__(message)
        self.machines = machines


class EtcdError(ServiceRegistryError):
    """Error body returned by the etcd v2 API."""

    def __init__(
        self,
        message: str,
        *,
        error_code: int,
        cause: str | None = None,
        index: int = 0,
        status_code: int | None = None,
    ) -> None:
        super().__init__(f"{error_code}: {message} ({cause}) [{index}]")
        self.message = message
        self.error_code = error_code
        self.cause = cause
        self.index = index
        self.status_code = status_code


class EtcdKeyNotFoundError(EtcdError):
    """etcd error code 100."""


class AdapterRegistrationError(ServiceRegistryError):
    """A factory is already registered for the scheme."""


class AdapterNotFoundError(ServiceRegistryError):
    """No factory is registered for the scheme."""
