from __future__ import annotations

import hashlib
import json

import httpx
import pytest

from csaf_checker.adapters.openpgp import ARMOR_HEADER, Verification
from csaf_checker.core.config import CheckerSettings
from csaf_checker.core.services.processor import Processor

FINGERPRINT = "A" * 24 + "0123456789ABCDEF"
GOOD_SIGNATURE = b"good-signature"


class FakeKeyring:
    """Keyring stand-in: keys carry their fingerprint in an `FP:` line."""

    def __init__(self) -> None:
        self.closed = False
        self.imported: list[str] = []

    def import_key(self, armored: str) -> list[str]:
        fingerprints = [
            line.split(":", 1)[1].strip().upper() for line in armored.splitlines() if line.startswith("FP:")
        ]
        self.imported.extend(fingerprints)
        return fingerprints

    def verify(self, signature: bytes, data: bytes) -> Verification:
        if signature.strip() == GOOD_SIGNATURE:
            return Verification(valid=True, fingerprint=FINGERPRINT, status="signature valid")
        return Verification(valid=False, status="signature bad")

    def close(self) -> None:
        self.closed = True


class Site:
    """In-memory web site served through `httpx.MockTransport`."""

    def __init__(self) -> None:
        self.routes: dict[str, tuple] = {}
        self.requests: list[str] = []
        self.resolved: dict[str, list[str]] = {}
        self.keyrings: list[FakeKeyring] = []

    def add(self, url: str, body: bytes | str | dict = b"", *, status: int = 200, headers: dict | None = None) -> None:
        self.routes[url] = ("response", status, body, headers)

    def redirect(self, url: str, location: str, *, status: int = 301) -> None:
        self.routes[url] = ("redirect", location, status)

    def fail(self, url: str, message: str = "connection refused") -> None:
        self.routes[url] = ("error", message)

    def handle(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.requests.append(url)
        route = self.routes.get(url)
        if route is None:
            return httpx.Response(404, text="not found")
        if route[0] == "error":
            raise httpx.ConnectError(route[1], request=request)
        if route[0] == "redirect":
            return httpx.Response(route[2], headers={"Location": route[1]})
        _, status, body, headers = route
        if isinstance(body, dict):
            return httpx.Response(status, json=body, headers=headers)
        if isinstance(body, str):
            body = body.encode("utf-8")
        return httpx.Response(status, content=body, headers=headers)

    def resolver(self, name: str) -> list[str]:
        return self.resolved.get(name, [])

    def keyring(self) -> FakeKeyring:
        keyring = FakeKeyring()
        self.keyrings.append(keyring)
        return keyring

    def processor(self, **settings) -> Processor:
        return Processor(
            CheckerSettings(_env_file=None, **settings),
            transport=httpx.MockTransport(self.handle),
            resolver=self.resolver,
            keyring_factory=self.keyring,
        )

    def publish_compliant(self, host: str = "example.org") -> dict:
        """Publish a provider that satisfies every implemented requirement."""

        origin = f"https://{host}"
        directory = f"{origin}/.well-known/csaf/white/"
        metadata = provider_metadata(host)
        self.add(f"{origin}/.well-known/csaf/provider-metadata.json", metadata)
        self.add(
            f"{origin}/.well-known/security.txt",
            f"Contact: mailto:psirt@{host}\nCSAF: {origin}/.well-known/csaf/provider-metadata.json\n",
        )
        self.resolved[f"csaf.data.security.{host}"] = ["192.0.2.10"]
        self.add(f"https://csaf.data.security.{host}/", metadata)
        self.add(f"{origin}/.well-known/csaf/openpgp/key.asc", f"{ARMOR_HEADER}\nFP:{FINGERPRINT}\n")

        entry = "2023/esa-2023-0001.json"
        self.add(f"{directory}index.txt", f"{entry}\n")
        self.add(f"{directory}changes.csv", f'"{entry}","2023-03-01T00:00:00Z"\n')
        self.publish_advisory(directory, entry, "2023-03-01T00:00:00Z")
        return metadata

    def publish_advisory(self, directory: str, entry: str, released: str) -> bytes:
        url = directory + entry
        filename = entry.rsplit("/", 1)[-1]
        content = json.dumps(
            {"document": {"tracking": {"id": filename, "initial_release_date": released}}}
        ).encode("utf-8")
        self.add(url, content)
        self.add(f"{url}.sha256", f"{hashlib.sha256(content).hexdigest()}  {filename}\n")
        self.add(f"{url}.sha512", f"{hashlib.sha512(content).hexdigest()}  {filename}\n")
        self.add(f"{url}.asc", GOOD_SIGNATURE)
        return content


def provider_metadata(host: str = "example.org", **overrides) -> dict:
    origin = f"https://{host}"
    document = {
        "canonical_url": f"{origin}/.well-known/csaf/provider-metadata.json",
        "distributions": [{"directory_url": f"{origin}/.well-known/csaf/white/"}],
        "last_updated": "2023-03-01T10:00:00Z",
        "list_on_CSAF_aggregators": True,
        "metadata_version": "2.0",
        "mirror_on_CSAF_aggregators": True,
        "public_openpgp_keys": [
            {"fingerprint": FINGERPRINT, "url": f"{origin}/.well-known/csaf/openpgp/key.asc"}
        ],
        "publisher": {"category": "vendor", "name": "Example Corp", "namespace": origin},
        "role": "csaf_trusted_provider",
    }
    document.update(overrides)
    return document


@pytest.fixture
def site() -> Site:
    return Site()
