"""Scheme-keyed map of registry adapter factories."""

from __future__ import annotations

from collections.abc import Iterable
from threading import RLock
from urllib.parse import urlsplit

from .errors import AdapterNotFoundError, AdapterRegistrationError
from .protocol import RegistryAdapterFactoryProtocol, RegistryAdapterProtocol


class AdapterRegistry:
    """Maps URI schemes to adapter factories.

    Populated explicitly by the composition root; see
    ``build_adapter_registry``.
    """

    def __init__(self) -> None:
        self._factories: dict[str, RegistryAdapterFactoryProtocol] = {}
        self._lock = RLock()

    def register(
        self, scheme: str, factory: RegistryAdapterFactoryProtocol
    ) -> None:
        with self._lock:
            if scheme in self._factories:
                raise AdapterRegistrationError(
                    f"adapter already registered for scheme: {scheme}")
            self._factories[scheme] = factory

    def get(self, scheme: str) -> RegistryAdapterFactoryProtocol:
        with self._lock:
            try:
                return self._factories[scheme]
            except KeyError as exc:
                raise AdapterNotFoundError(
                    f"unrecognized adapter scheme: {scheme}") from exc

    def schemes(self) -> Iterable[str]:
        with self._lock:
            return tuple(self._factories)

    def create(self, uri: str) -> RegistryAdapterProtocol:
        """Build an adapter with the factory registered for ``uri``'s scheme."""
        return self.get(urlsplit(uri).scheme).new(uri)
