"""etcd v2 registry adapter."""

from __future__ import annotations

import logging
from typing import override

from etcd2_registry.logging import get_event_logger

from ..protocol import RegistryAdapterProtocol, Service
from .etcd_client import EtcdClient

_LOGGER = logging.getLogger(__name__)
_EVENT_LOGGER = get_event_logger()


def build_service_key(base_path: str, service: Service) -> str:
    """Registry key ``<base_path>/<name>/<service_id>``."""
    return f"{base_path}/{service.name}/{service.service_id}"


def build_service_address(service: Service) -> str:
    """``ip:port``, with IPv6 addresses bracketed."""
    if ":" in service.ip:
        return f"[{service.ip}]:{service.port}"
    return f"{service.ip}:{service.port}"


class EtcdRegistry(RegistryAdapterProtocol):
    """Publishes services as TTL'd keys in etcd v2.

    Each call syncs the cluster member list first, then issues exactly one
    request. Failures are logged and re-raised unchanged; the bridge owns
    retries.

    Example:
        >>> registry = EtcdAdapterFactory().new("etcd2://127.0.0.1:2379/services")
        >>> registry.register(Service("web-1", "web", "10.0.0.5", 8080, ttl=30))
    """

    _client: EtcdClient
    _base_path: str

    def __init__(self, client: EtcdClient, base_path: str = "") -> None:
        self._client = client
        self._base_path = base_path

    @property
    def client(self) -> EtcdClient:
        return self._client

    @property
    def base_path(self) -> str:
        return self._base_path

    def service_key(self, service: Service) -> str:
        return build_service_key(self._base_path, service)

    @override
    def ping(self) -> None:
        self._sync_cluster()
        try:
            self._client.version()
        except Exception as e:
            _EVENT_LOGGER.error("etcd: ping failed: %s", e, logger=_LOGGER)
            raise

    @override
    def register(self, service: Service) -> None:
        self._sync_cluster()
        key = self.service_key(service)
        try:
            self._client.set(key, build_service_address(service), service.ttl)
        except Exception as e:
            _EVENT_LOGGER.error(
                "etcd: failed to register service: %s", e, logger=_LOGGER)
            raise
        _EVENT_LOGGER.debug(
            "Registered service %s key=%s ttl=%s",
            service.service_id,
            key,
            service.ttl,
            logger=_LOGGER,
        )

    @override
    def deregister(self, service: Service) -> None:
        self._sync_cluster()
        key = self.service_key(service)
        try:
            self._client.delete(key, recursive=False)
        except Exception as e:
            _EVENT_LOGGER.error(
                "etcd: failed to deregister service: %s", e, logger=_LOGGER)
            raise
        _EVENT_LOGGER.debug(
            "Deregistered service %s key=%s",
            service.service_id,
            key,
            logger=_LOGGER,
        )

    @override
    def refresh(self, service: Service) -> None:
        self.register(service)

    @override
    def services(self) -> list[Service]:
        # Enumeration is not supported by this adapter.
        return []

    def close(self) -> None:
        self._client.close()

    def _sync_cluster(self) -> None:
        if not self._client.sync_cluster():
            _EVENT_LOGGER.warning(
                "etcd: sync cluster was unsuccessful", logger=_LOGGER)
