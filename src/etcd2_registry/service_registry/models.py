"""Pydantic models for etcd v2 JSON bodies."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class EtcdNode(BaseModel):
    key: Optional[str] = None
    value: Optional[str] = None
    dir: bool = False
    ttl: Optional[int] = None
    expiration: Optional[str] = None
    modifiedIndex: int = 0
    createdIndex: int = 0
    nodes: list["EtcdNode"] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class EtcdResponse(BaseModel):
    """Body of a successful ``/v2/keys`` call."""

    action: str
    node: Optional[EtcdNode] = None
    prevNode: Optional[EtcdNode] = None
    etcdIndex: int = 0

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class EtcdErrorBody(BaseModel):
    errorCode: int
    message: str = ""
    cause: Optional[str] = None
    index: int = 0

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class EtcdMember(BaseModel):
    id: str = ""
    name: str = ""
    peerURLs: list[str] = Field(default_factory=list)
    clientURLs: list[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class EtcdMembers(BaseModel):
    members: list[EtcdMember] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    def client_urls(self) -> list[str]:
        return [url for member in self.members for url in member.clientURLs]


class EtcdVersion(BaseModel):
    etcdserver: str = ""
    etcdcluster: str = ""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)
