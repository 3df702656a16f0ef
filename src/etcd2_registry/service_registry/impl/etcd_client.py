"""Minimal synchronous etcd v2 HTTP client."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from types import TracebackType
from typing import ClassVar, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from ..errors import EtcdClusterError, EtcdError, EtcdKeyNotFoundError
from ..models import EtcdErrorBody, EtcdMembers, EtcdResponse, EtcdVersion

logger = logging.getLogger(__name__)

ERROR_CODE_KEY_NOT_FOUND = 100

_M = TypeVar("_M", bound=BaseModel)


def _normalize_machines(machines: Iterable[str]) -> tuple[str, ...]:
    return tuple(m.strip().rstrip("/") for m in machines if m.strip())


class EtcdClient:
    """Client handle over one or more etcd members.

    Every request walks the member list in order and moves to the next
    member on transport errors. The member list only changes through
    ``sync_cluster``.

    Example:
        >>> client = EtcdClient(["http://127.0.0.1:2379"], httpx.Client())
        >>> client.set("/services/web/web-1", "10.0.0.5:8080", ttl=30)
    """

    API_PREFIX: ClassVar[str] = "/v2"

    _machines: tuple[str, ...]
    _http: httpx.Client

    def __init__(self, machines: Iterable[str], http_client: httpx.Client) -> None:
        normalized = _normalize_machines(machines)
        if not normalized:
            raise ValueError("at least one etcd machine URL is required")
        self._machines = normalized
        self._http = http_client

    @property
    def machines(self) -> tuple[str, ...]:
        """Currently known member URLs."""
        return self._machines

    @property
    def http_client(self) -> httpx.Client:
        return self._http

    def sync_cluster(self) -> bool:
        """Refresh the member list from the cluster.

        Returns:
            True if some member answered with a non-empty member list;
            False otherwise, in which case the known list is kept.
        """
        for machine in self._machines:
            try:
                members = self._fetch_members(machine)
            except httpx.TransportError as e:
                logger.debug("Cluster sync via %s failed: %s", machine, e)
                continue
            if not members:
                continue
            self._machines = members
            logger.debug("Synced etcd machines: %s", ", ".join(members))
            return True
        return False

    def version(self) -> EtcdVersion:
        response = self._send("GET", "/version")
        self._raise_for_error(response)
        try:
            return EtcdVersion.model_validate_json(response.content)
        except ValidationError:
            # etcd before 2.1 answers with plain text
            return EtcdVersion(etcdserver=response.text.strip())

    def get(self, key: str) -> EtcdResponse:
        return self._keys_request("GET", key)

    def set(self, key: str, value: str, ttl: int = 0) -> EtcdResponse:
        """Create or overwrite ``key``; ``ttl`` <= 0 means no expiration."""
        data = {"value": value}
        if ttl > 0:
            data["ttl"] = str(ttl)
        return self._keys_request("PUT", key, data=data)

    def delete(self, key: str, *, recursive: bool = False) -> EtcdResponse:
        params = {"recursive": "true" if recursive else "false"}
        return self._keys_request("DELETE", key, params=params)

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "EtcdClient":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    @classmethod
    def key_path(cls, key: str) -> str:
        """URL path for ``key``; empty segments are dropped."""
        segments = [quote(part, safe="") for part in key.split("/") if part]
        return f"{cls.API_PREFIX}/keys/" + "/".join(segments)

    def _fetch_members(self, machine: str) -> tuple[str, ...]:
        response = self._http.get(f"{machine}{self.API_PREFIX}/members")
        if response.status_code == httpx.codes.OK:
            try:
                members = EtcdMembers.model_validate_json(response.content)
            except ValidationError:
                return ()
            return _normalize_machines(members.client_urls())

        # Fall back to the pre-2.0 endpoint.
        response = self._http.get(f"{machine}{self.API_PREFIX}/machines")
        if response.status_code != httpx.codes.OK:
            return ()
        return _normalize_machines(response.text.split(","))

    def _keys_request(
        self,
        method: str,
        key: str,
        *,
        params: Mapping[str, str] | None = None,
        data: Mapping[str, str] | None = None,
    ) -> EtcdResponse:
        response = self._send(method, self.key_path(key), params=params, data=data)
        self._raise_for_error(response)
        return self._parse(EtcdResponse, response)

    def _send(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, str] | None = None,
        data: Mapping[str, str] | None = None,
    ) -> httpx.Response:
        machines = self._machines
        last_error: httpx.TransportError | None = None
        for machine in machines:
            try:
                return self._http.request(
                    method, f"{machine}{path}", params=params, data=data
                )
            except httpx.TransportError as e:
                logger.debug("etcd request %s %s via %s failed: %s",
                             method, path, machine, e)
                last_error = e
        raise EtcdClusterError(
            f"etcd cluster is unavailable or misconfigured: {last_error}",
            machines=machines,
        ) from last_error

    @staticmethod
    def _raise_for_error(response: httpx.Response) -> None:
        if response.is_success:
            return
        try:
            body = EtcdErrorBody.model_validate_json(response.content)
        except ValidationError:
            raise EtcdError(
                response.text.strip() or response.reason_phrase,
                error_code=0,
                status_code=response.status_code,
            ) from None
        error_cls = (
            EtcdKeyNotFoundError
            if body.errorCode == ERROR_CODE_KEY_NOT_FOUND
            else EtcdError
        )
        raise error_cls(
            body.message,
            error_code=body.errorCode,
            cause=body.cause,
            index=body.index,
            status_code=response.status_code,
        )

    @staticmethod
    def _parse(model: type[_M], response: httpx.Response) -> _M:
        try:
            return model.model_validate_json(response.content)
        except ValidationError as e:
            raise EtcdError(
                f"malformed etcd response: {e}",
                error_code=0,
                status_code=response.status_code,
            ) from e
