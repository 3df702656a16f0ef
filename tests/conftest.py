from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from ipaddress import ip_address
from pathlib import Path
from urllib.parse import parse_qs

import httpx
import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.x509.oid import ExtendedKeyUsageOID, NameOID

ETCD_ENV_VARS = (
    "ETCD_CERT_FILE",
    "ETCD_KEY_FILE",
    "ETCD_CA_CERT_FILE",
    "ETCD_TIMEOUT",
)


@pytest.fixture(autouse=True)
def _clean_etcd_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ETCD_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class FakeEtcd:
    """In-memory etcd v2 key space served through ``httpx.MockTransport``."""

    def __init__(self, machines: tuple[str, ...] = ("http://etcd.test:2379",)) -> None:
        self.now = 0.0
        self.index = 0
        self.entries: dict[str, tuple[str, int | None, float | None]] = {}
        self.requests: list[httpx.Request] = []
        self.client_urls = list(machines)
        self.members_enabled = True
        self.machines_enabled = False
        self.unreachable: set[str] = set()
        self.version_status = 200
        # Plain-text body as served by etcd before 2.1; None serves JSON.
        self.version_text: str | None = None

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def paths(self) -> list[str]:
        return [request.url.path for request in self.requests]

    def lookup(self, key: str) -> tuple[str, int | None] | None:
        entry = self.entries.get(key)
        if entry is None:
            return None
        value, ttl, expires_at = entry
        if expires_at is not None and self.now >= expires_at:
            del self.entries[key]
            return None
        return value, ttl

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        origin = f"{request.url.scheme}://{request.url.netloc.decode('ascii')}"
        if origin in self.unreachable:
            raise httpx.ConnectError("connection refused", request=request)

        path = request.url.path
        if path == "/version":
            if self.version_text is not None:
                return httpx.Response(self.version_status, text=self.version_text)
            return httpx.Response(self.version_status, json={
                "etcdserver": "2.3.8", "etcdcluster": "2.3.0"})
        if path == "/v2/members" and self.members_enabled:
            return httpx.Response(200, json={"members": [{
                "id": "8e9e05c52164694d",
                "name": "etcd0",
                "peerURLs": ["http://etcd.test:2380"],
                "clientURLs": self.client_urls,
            }]})
        if path == "/v2/machines" and self.machines_enabled:
            return httpx.Response(200, text=", ".join(self.client_urls))
        if path.startswith("/v2/keys/"):
            return self._keys(request, path[len("/v2/keys"):])
        return httpx.Response(404, text="404 page not found\n")

    def _keys(self, request: httpx.Request, key: str) -> httpx.Response:
        if request.method == "PUT":
            form = parse_qs(request.content.decode("utf-8"))
            value = form["value"][0]
            ttl = int(form["ttl"][0]) if "ttl" in form else None
            existed = self.lookup(key) is not None
            self.index += 1
            expires_at = self.now + ttl if ttl is not None else None
            self.entries[key] = (value, ttl, expires_at)
            return httpx.Response(
                200 if existed else 201,
                json={"action": "set", "node": self._node(key, value, ttl)},
            )

        found = self.lookup(key)
        if found is None:
            return httpx.Response(404, json={
                "errorCode": 100,
                "message": "Key not found",
                "cause": key,
                "index": self.index,
            })
        value, ttl = found
        if request.method == "GET":
            return httpx.Response(
                200, json={"action": "get", "node": self._node(key, value, ttl)})
        if request.method == "DELETE":
            del self.entries[key]
            self.index += 1
            return httpx.Response(200, json={
                "action": "delete",
                "node": {"key": key, "modifiedIndex": self.index},
                "prevNode": self._node(key, value, ttl),
            })
        return httpx.Response(405)

    def _node(self, key: str, value: str, ttl: int | None) -> dict[str, object]:
        node: dict[str, object] = {
            "key": key,
            "value": value,
            "modifiedIndex": self.index,
            "createdIndex": self.index,
        }
        if ttl is not None:
            node["ttl"] = ttl
        return node


@pytest.fixture
def fake_etcd() -> FakeEtcd:
    return FakeEtcd()


@dataclass(frozen=True, slots=True)
class Pki:
    ca_cert: Path
    server_cert: Path
    server_key: Path
    client_cert: Path
    client_key: Path
    rogue_ca_cert: Path
    rogue_server_cert: Path
    rogue_server_key: Path


def _name(common_name: str) -> x509.Name:
    return x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, common_name)])


def _key_usage(*, ca: bool) -> x509.KeyUsage:
    return x509.KeyUsage(
        digital_signature=True,
        content_commitment=False,
        key_encipherment=False,
        data_encipherment=False,
        key_agreement=False,
        key_cert_sign=ca,
        crl_sign=ca,
        encipher_only=False,
        decipher_only=False,
    )


def _make_ca(common_name: str) -> tuple[x509.Certificate, ec.EllipticCurvePrivateKey]:
    key = ec.generate_private_key(ec.SECP256R1())
    now = datetime.now(timezone.utc)
    cert = (
        x509.CertificateBuilder()
        .subject_name(_name(common_name))
        .issuer_name(_name(common_name))
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - timedelta(minutes=5))
        .not_valid_after(now + timedelta(days=1))
        .add_extension(x509.BasicConstraints(ca=True, path_length=None),
                       critical=True)
        .add_extension(_key_usage(ca=True), critical=True)
        .add_extension(x509.SubjectKeyIdentifier.from_public_key(key.public_key()),
                       critical=False)
        .sign(key, hashes.SHA256())
    )
    return cert, key


def _make_leaf(
    common_name: str,
    ca_cert: x509.Certificate,
    ca_key: ec.EllipticCurvePrivateKey,
    *,
    client: bool,
) -> tuple[x509.Certificate, ec.EllipticCurvePrivateKey]:
    key = ec.generate_private_key(ec.SECP256R1())
    now = datetime.now(timezone.utc)
    usage = ExtendedKeyUsageOID.CLIENT_AUTH if client else ExtendedKeyUsageOID.SERVER_AUTH
    builder = (
        x509.CertificateBuilder()
        .subject_name(_name(common_name))
        .issuer_name(ca_cert.subject)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - timedelta(minutes=5))
        .not_valid_after(now + timedelta(days=1))
        .add_extension(x509.BasicConstraints(ca=False, path_length=None),
                       critical=True)
        .add_extension(_key_usage(ca=False), critical=True)
        .add_extension(x509.ExtendedKeyUsage([usage]), critical=False)
        .add_extension(x509.SubjectKeyIdentifier.from_public_key(key.public_key()),
                       critical=False)
        .add_extension(
            x509.AuthorityKeyIdentifier.from_issuer_public_key(ca_key.public_key()),
            critical=False,
        )
    )
    if not client:
        builder = builder.add_extension(
            x509.SubjectAlternativeName([
                x509.DNSName("localhost"),
                x509.IPAddress(ip_address("127.0.0.1")),
            ]),
            critical=False,
        )
    return builder.sign(ca_key, hashes.SHA256()), key


def _write_cert(path: Path, cert: x509.Certificate) -> Path:
    path.write_bytes(cert.public_bytes(serialization.Encoding.PEM))
    return path


def _write_key(path: Path, key: ec.EllipticCurvePrivateKey) -> Path:
    path.write_bytes(key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    ))
    return path


@pytest.fixture(scope="session")
def pki(tmp_path_factory: pytest.TempPathFactory) -> Pki:
    root = tmp_path_factory.mktemp("pki")
    ca_cert, ca_key = _make_ca("etcd-test-ca")
    server_cert, server_key = _make_leaf("etcd-server", ca_cert, ca_key, client=False)
    client_cert, client_key = _make_leaf("etcd-client", ca_cert, ca_key, client=True)
    rogue_ca_cert, rogue_ca_key = _make_ca("rogue-ca")
    rogue_cert, rogue_key = _make_leaf(
        "rogue-server", rogue_ca_cert, rogue_ca_key, client=False)
    return Pki(
        ca_cert=_write_cert(root / "ca.pem", ca_cert),
        server_cert=_write_cert(root / "server.pem", server_cert),
        server_key=_write_key(root / "server-key.pem", server_key),
        client_cert=_write_cert(root / "client.pem", client_cert),
        client_key=_write_key(root / "client-key.pem", client_key),
        rogue_ca_cert=_write_cert(root / "rogue-ca.pem", rogue_ca_cert),
        rogue_server_cert=_write_cert(root / "rogue-server.pem", rogue_cert),
        rogue_server_key=_write_key(root / "rogue-server-key.pem", rogue_key),
    )


