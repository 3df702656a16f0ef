"""Command line entry point: run one adapter operation against a registry."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from dotenv import load_dotenv

from .logging import configure_logging
from .service_registry import (
    RegistryAdapterProtocol,
    Service,
    ServiceRegistryError,
    build_adapter_registry,
)

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_OPERATION_FAILED = 1
EXIT_CONFIG_ERROR = 2


def _add_service_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--name", required=True, help="service name")
    parser.add_argument("--id", dest="service_id", required=True,
                        help="service instance id")
    parser.add_argument("--ip", required=True)
    parser.add_argument("--port", type=int, required=True)
    parser.add_argument("--ttl", type=int, default=0,
                        help="entry TTL in seconds (0: never expires)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="etcd2-registry",
        description="Publish or remove service entries in etcd v2.",
    )
    parser.add_argument(
        "uri", help="registry URI, e.g. etcd2://127.0.0.1:2379/services")
    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("ping", help="check the store answers /version")
    commands.add_parser("services", help="list registered services")
    for name in ("register", "deregister", "refresh"):
        _add_service_arguments(commands.add_parser(name))
    return parser


def _service_from_args(args: argparse.Namespace) -> Service:
    return Service(
        service_id=args.service_id,
        name=args.name,
        ip=args.ip,
        port=args.port,
        ttl=args.ttl,
    )


def run_command(adapter: RegistryAdapterProtocol, args: argparse.Namespace) -> None:
    if args.command == "ping":
        adapter.ping()
    elif args.command == "services":
        for service in adapter.services():
            print(f"{service.name}/{service.service_id} {service.ip}:{service.port}")
    elif args.command == "register":
        adapter.register(_service_from_args(args))
    elif args.command == "deregister":
        adapter.deregister(_service_from_args(args))
    elif args.command == "refresh":
        adapter.refresh(_service_from_args(args))


def main(argv: Sequence[str] | None = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    configure_logging()

    try:
        adapter = build_adapter_registry().create(args.uri)
    except ServiceRegistryError as e:
        # Unknown scheme or unusable connection config.
        logger.error("Cannot build registry adapter: %s", e)
        return EXIT_CONFIG_ERROR

    try:
        run_command(adapter, args)
    except ServiceRegistryError as e:
        logger.error("%s failed: %s", args.command, e)
        return EXIT_OPERATION_FAILED
    finally:
        close = getattr(adapter, "close", None)
        if close is not None:
            close()
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
