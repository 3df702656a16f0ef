"""Build an etcd client handle, with optional TLS, from connection config."""

from __future__ import annotations

import logging
import ssl

import httpx

from ..config import EtcdConnectionConfig
from ..errors import RegistryConfigurationError
from .etcd_client import EtcdClient

logger = logging.getLogger(__name__)


def _load_ca_context(ca_cert_file: str) -> ssl.SSLContext:
    try:
        return ssl.create_default_context(cafile=ca_cert_file)
    except (OSError, ValueError) as e:
        raise RegistryConfigurationError(
            f"etcd: failed to load CA certificate {ca_cert_file}: {e}") from e


def build_ssl_context(config: EtcdConnectionConfig) -> ssl.SSLContext | None:
    """SSL context for ``config``, or None when no CA cert is configured.

    With a client certificate and key the context also authenticates the
    client (mutual TLS); otherwise it only verifies the server.

    Raises:
        RegistryConfigurationError: If any certificate or key fails to load
    """
    if not config.ca_cert_file:
        return None
    context = _load_ca_context(config.ca_cert_file)
    if config.mutual_tls:
        try:
            context.load_cert_chain(config.cert_file, config.key_file)
        except (OSError, ValueError) as e:
            raise RegistryConfigurationError(
                f"etcd: failure to load client certificate "
                f"{config.cert_file} / key {config.key_file}: {e}") from e
    return context


def build_client(
    config: EtcdConnectionConfig,
    *,
    transport: httpx.BaseTransport | None = None,
) -> EtcdClient:
    """Build the client handle for one seed member.

    The TLS context and transport are fully assembled before the client
    exists. ``transport`` replaces the network transport (tests inject
    ``httpx.MockTransport``); TLS material is still loaded and validated.

    Raises:
        RegistryConfigurationError: If TLS material cannot be loaded
    """
    context = build_ssl_context(config)
    headers: dict[str, str] = {}
    if context is not None and not config.mutual_tls:
        headers["Accept-Encoding"] = "identity"

    if transport is None:
        transport = httpx.HTTPTransport(
            verify=context if context is not None else True
        )
    http_client = httpx.Client(
        transport=transport,
        headers=headers,
        timeout=config.timeout,
        trust_env=False,
    )
    logger.info(
        "etcd client ready endpoint=%s tls=%s mutual_tls=%s",
        config.endpoint,
        context is not None,
        config.mutual_tls,
    )
    return EtcdClient([config.endpoint], http_client)
