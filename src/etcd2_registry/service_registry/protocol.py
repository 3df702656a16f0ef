"""Registry adapter protocol definitions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable


@dataclass(frozen=True, slots=True)
class Service:
    """A service instance as handed over by the bridge."""

    service_id: str
    name: str
    ip: str
    port: int
    # Seconds; 0 means the entry never expires
    ttl: int = 0
    tags: tuple[str, ...] = field(default_factory=tuple)
    attrs: dict[str, str] = field(default_factory=dict)


@runtime_checkable
class RegistryAdapterProtocol(Protocol):
    """Interface the bridge drives for every service lifecycle event.

    Failures are raised to the caller, which owns retry and backoff.
    """

    def ping(self) -> None:
        """Check the backend is reachable.

        Raises:
            ServiceRegistryError: If the backend does not answer
        """
        ...

    def register(self, service: Service) -> None:
        """Publish a service entry.

        Args:
            service: Service to publish

        Raises:
            ServiceRegistryError: If the write fails
        """
        ...

    def deregister(self, service: Service) -> None:
        """Remove a service entry.

        Args:
            service: Service to remove

        Raises:
            ServiceRegistryError: If the delete fails
        """
        ...

    def refresh(self, service: Service) -> None:
        """Re-assert a service entry and its TTL."""
        ...

    def services(self) -> list[Service]:
        """List services known to the backend."""
        ...


@runtime_checkable
class RegistryAdapterFactoryProtocol(Protocol):
    """Builds an adapter from a connection URI."""

    def new(self, uri: str) -> RegistryAdapterProtocol:
        """Create an adapter.

        Raises:
            RegistryConfigurationError: If the URI or TLS material is unusable
        """
        ...
