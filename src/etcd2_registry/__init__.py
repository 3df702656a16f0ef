"""Public API entry point for etcd2_registry.

Use this module for supported imports. Subpackages are internal.
"""

from .logging import configure_logging, get_event_logger
from .service_registry import (
    AdapterNotFoundError,
    AdapterRegistrationError,
    AdapterRegistry,
    EtcdAdapterFactory,
    EtcdClient,
    EtcdClusterError,
    EtcdConnectionConfig,
    EtcdError,
    EtcdKeyNotFoundError,
    EtcdRegistry,
    RegistryAdapterFactoryProtocol,
    RegistryAdapterProtocol,
    RegistryConfigurationError,
    Service,
    ServiceRegistryConnectionError,
    ServiceRegistryError,
    build_adapter_registry,
    build_client,
    load_config,
)

__all__ = [
    "configure_logging",
    "get_event_logger",
    "AdapterRegistry",
    "EtcdAdapterFactory",
    "EtcdClient",
    "EtcdConnectionConfig",
    "EtcdRegistry",
    "RegistryAdapterFactoryProtocol",
    "RegistryAdapterProtocol",
    "Service",
    "build_adapter_registry",
    "build_client",
    "load_config",
    "ServiceRegistryError",
    "RegistryConfigurationError",
    "ServiceRegistryConnectionError",
    "EtcdClusterError",
    "EtcdError",
    "EtcdKeyNotFoundError",
    "AdapterRegistrationError",
    "AdapterNotFoundError",
]
