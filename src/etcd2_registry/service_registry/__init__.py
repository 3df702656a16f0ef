from .adapters import AdapterRegistry
from .config import EtcdConnectionConfig, load_config
from .errors import (
    AdapterNotFoundError,
    AdapterRegistrationError,
    EtcdClusterError,
    EtcdError,
    EtcdKeyNotFoundError,
    RegistryConfigurationError,
    ServiceRegistryConnectionError,
    ServiceRegistryError,
)
from .factory import EtcdAdapterFactory, build_adapter_registry
from .impl.client_builder import build_client, build_ssl_context
from .impl.etcd_client import EtcdClient
from .impl.etcd_registry import (
    EtcdRegistry,
    build_service_address,
    build_service_key,
)
from .protocol import (
    RegistryAdapterFactoryProtocol,
    RegistryAdapterProtocol,
    Service,
)

__all__ = [
    # Config
    "EtcdConnectionConfig",
    "load_config",
    # Protocol
    "RegistryAdapterProtocol",
    "RegistryAdapterFactoryProtocol",
    "Service",
    # Implementation
    "AdapterRegistry",
    "EtcdAdapterFactory",
    "EtcdClient",
    "EtcdRegistry",
    "build_adapter_registry",
    "build_client",
    "build_ssl_context",
    "build_service_address",
    "build_service_key",
    # Errors
    "ServiceRegistryError",
    "RegistryConfigurationError",
    "ServiceRegistryConnectionError",
    "EtcdClusterError",
    "EtcdError",
    "EtcdKeyNotFoundError",
    "AdapterRegistrationError",
    "AdapterNotFoundError",
]
