"""Adapter factory for ``etcd2://`` URIs and the default composition root."""

from __future__ import annotations

from typing import ClassVar, override

import httpx

from .adapters import AdapterRegistry
from .config import load_config
from .impl.client_builder import build_client
from .impl.etcd_registry import EtcdRegistry
from .protocol import RegistryAdapterFactoryProtocol


class EtcdAdapterFactory(RegistryAdapterFactoryProtocol):
    """Creates ``EtcdRegistry`` instances.

    TLS file paths come from ``ETCD_CERT_FILE``, ``ETCD_KEY_FILE`` and
    ``ETCD_CA_CERT_FILE``. Construction either returns a working adapter
    or raises ``RegistryConfigurationError``.
    """

    scheme: ClassVar[str] = "etcd2"

    def __init__(self, *, transport: httpx.BaseTransport | None = None) -> None:
        self._transport = transport

    @override
    def new(self, uri: str) -> EtcdRegistry:
        config = load_config(uri)
        client = build_client(config, transport=self._transport)
        return EtcdRegistry(client, config.base_path)


def build_adapter_registry(
    *,
    transport: httpx.BaseTransport | None = None,
) -> AdapterRegistry:
    registry = AdapterRegistry()
    registry.register(EtcdAdapterFactory.scheme,
                      EtcdAdapterFactory(transport=transport))
    return registry
