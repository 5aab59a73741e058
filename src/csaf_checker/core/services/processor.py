"""Orquestación de checks.

El processor pasa cada dominio por la fase `run` de todos los checks, luego
por la fase `report` de todos, y limpia el estado por dominio antes del
siguiente. También es dueño de la evidencia compartida entre checks
(redirecciones, documentos descargados, provider metadata, claves publicadas):
cada URL se descarga como mucho una vez por dominio.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from functools import partial
from typing import Any, Callable, Sequence
from urllib.parse import urljoin, urlsplit

import httpx

from csaf_checker.adapters.dns_resolver import DNSResolver
from csaf_checker.adapters.http_client import (
    CheckerClient,
    FetchResult,
    RedirectTracker,
    build_client,
    negotiated_tls_version,
)
from csaf_checker.adapters.openpgp import Keyring, is_armored_public_key
from csaf_checker.core.config import CheckerSettings
from csaf_checker.core.domain.models import Domain, Report
from csaf_checker.core.errors import CheckError, InvalidInputError, KeyringError
from csaf_checker.core.interfaces.check import Check

logger = logging.getLogger(__name__)

WELL_KNOWN_METADATA = "/.well-known/csaf/provider-metadata.json"

Resolver = Callable[[str], list[str]]
KeyringFactory = Callable[[], Keyring]


def base_url(domain: str) -> str:
    """Origen (`scheme://host[:port]`) de un dominio dado como host o URL."""

    value = domain.strip().rstrip("/")
    if "://" not in value:
        value = f"https://{value}"
    parts = urlsplit(value)
    return f"{parts.scheme}://{parts.netloc}"


def host_of(domain: str) -> str:
    return urlsplit(base_url(domain)).hostname or domain


def parse_index(text: str) -> list[str]:
    """Entradas de un `index.txt`: una ruta relativa por línea no vacía."""

    return [line.strip() for line in text.splitlines() if line.strip()]


@dataclass
class MetadataLookup:
    """El provider metadata well-known de un dominio, o por qué no sirve."""

    url: str
    fetched: FetchResult
    document: dict[str, Any] | None = None
    error: str | None = None


@dataclass
class AdvisoryDirectory:
    """Una distribución por directorio y las entradas de su `index.txt`."""

    url: str
    index: FetchResult
    entries: list[str] = field(default_factory=list)

    def file_url(self, entry: str) -> str:
        return urljoin(self.url, entry)


@dataclass
class PublishedKey:
    """Una clave pública OpenPGP anunciada en el provider metadata."""

    url: str
    declared_fingerprint: str | None = None
    fingerprints: list[str] = field(default_factory=list)
    error: str | None = None


class Processor:
    """Ejecuta checks contra dominios y es dueño del estado compartido por dominio."""

    def __init__(
        self,
        settings: CheckerSettings | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
        resolver: Resolver | None = None,
        keyring_factory: KeyringFactory | None = None,
    ) -> None:
        self.settings = settings or CheckerSettings()
        self._tracker = RedirectTracker()
        self._client = build_client(self.settings, tracker=self._tracker, transport=transport)
        self._resolver = resolver or DNSResolver(timeout_seconds=self.settings.dns_timeout_seconds)
        self._keyring_factory = keyring_factory or partial(Keyring, gpg_binary=self.settings.gpg_binary)

        self._fetched: dict[str, FetchResult] = {}
        self._metadata: dict[str, MetadataLookup] = {}
        self._directories: dict[str, list[AdvisoryDirectory]] = {}
        self._keys: dict[str, list[PublishedKey]] = {}
        self._keyring: Keyring | None = None

    @property
    def client(self) -> CheckerClient:
        return self._client

    @property
    def redirects(self) -> dict[str, str]:
        """Redirecciones observadas en el dominio actual: URL destino -> cadena de saltos."""

        return self._tracker.redirects

    # -- orquestación ---------------------------------------------------------

    def run(self, checks: Sequence[Check], domains: Sequence[str]) -> Report:
        """Verifica cada dominio con cada check y arma el reporte.

        Un `CheckError` lanzado por cualquier `run` aborta la corrida completa;
        no se devuelve un reporte parcial.
        """

        checks = list(checks)
        domains = list(domains)
        self._validate(checks, domains)

        report = Report()
        for name in domains:
            logger.info("Checking %s", name)
            try:
                for check in checks:
                    check.run(self, name)
                domain = Domain(name=name)
                for check in checks:
                    check.report(self, domain)
            finally:
                self.clean(checks)
            report.domains.append(domain)
        return report

    def clean(self, checks: Sequence[Check] = ()) -> None:
        """Reinicia el estado por dominio: redirecciones, caches, keyring y estado de los checks."""

        self._tracker.clear()
        self._fetched.clear()
        self._metadata.clear()
        self._directories.clear()
        self._keys.clear()
        if self._keyring is not None:
            self._keyring.close()
            self._keyring = None
        for check in checks:
            reset = getattr(check, "reset", None)
            if callable(reset):
                reset()

    def close(self) -> None:
        self.clean()
        self._client.close()

    def __enter__(self) -> Processor:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @staticmethod
    def _validate(checks: list[Check], domains: list[str]) -> None:
        if not checks:
            raise InvalidInputError("No checks to run")
        seen: set[int] = set()
        for check in checks:
            if not isinstance(check, Check):
                raise InvalidInputError(f"{check!r} is not a check")
            if check.num in seen:
                raise InvalidInputError(f"Duplicate requirement number {check.num}")
            seen.add(check.num)
        for name in domains:
            if not isinstance(name, str) or not name.strip():
                raise InvalidInputError(f"Invalid domain {name!r}")

    # -- evidencia compartida -------------------------------------------------

    def fetch(self, url: str) -> FetchResult:
        """GET de `url` una vez por dominio; los errores de transporte quedan en `FetchResult.error`."""

        cached = self._fetched.get(url)
        if cached is not None:
            return cached

        try:
            response = self._client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.debug("Fetching %s failed: %s", url, exc)
            result = FetchResult(url=url, error=f"{type(exc).__name__}: {exc}")
        else:
            result = FetchResult(
                url=url,
                status_code=response.status_code,
                content=response.content,
                final_url=str(response.url),
                headers=dict(response.headers),
                tls_version=negotiated_tls_version(response),
            )
        self._fetched[url] = result
        return result

    def resolve(self, name: str) -> list[str]:
        return self._resolver(name)

    def keyring(self) -> Keyring:
        """Keyring del dominio actual, creado en el primer uso."""

        if self._keyring is None:
            try:
                self._keyring = self._keyring_factory()
            except KeyringError as exc:
                raise CheckError(str(exc)) from exc
        return self._keyring

    def limit(self, entries: list[str]) -> list[str]:
        """Aplica `settings.advisory_limit` a una lista de entradas del índice."""

        limit = self.settings.advisory_limit
        return entries[:limit] if limit else entries

    def provider_metadata(self, domain: str) -> MetadataLookup:
        lookup = self._metadata.get(domain)
        if lookup is not None:
            return lookup

        url = base_url(domain) + WELL_KNOWN_METADATA
        fetched = self.fetch(url)
        lookup = MetadataLookup(url=url, fetched=fetched)
        if not fetched.ok:
            lookup.error = fetched.failure()
        else:
            try:
                document = json.loads(fetched.content)
            except (ValueError, RecursionError) as exc:
                lookup.error = f"{url} is not valid JSON: {exc}"
            else:
                if isinstance(document, dict):
                    lookup.document = document
                else:
                    lookup.error = f"{url} does not contain a JSON object"
        self._metadata[domain] = lookup
        return lookup

    def directories(self, domain: str) -> list[AdvisoryDirectory]:
        """Distribuciones por directorio anunciadas en el provider metadata."""

        cached = self._directories.get(domain)
        if cached is not None:
            return cached

        lookup = self.provider_metadata(domain)
        directories: list[AdvisoryDirectory] = []
        distributions = lookup.document.get("distributions") if lookup.document else None
        for dist in distributions if isinstance(distributions, list) else []:
            directory_url = dist.get("directory_url") if isinstance(dist, dict) else None
            if not isinstance(directory_url, str) or not directory_url:
                continue
            url = urljoin(lookup.url, directory_url)
            if not url.endswith("/"):
                url += "/"
            index = self.fetch(urljoin(url, "index.txt"))
            entries = parse_index(index.text) if index.ok else []
            directories.append(AdvisoryDirectory(url=url, index=index, entries=entries))

        self._directories[domain] = directories
        return directories

    def openpgp_keys(self, domain: str) -> list[PublishedKey]:
        """Claves públicas anunciadas en el provider metadata, importadas al keyring."""

        cached = self._keys.get(domain)
        if cached is not None:
            return cached

        lookup = self.provider_metadata(domain)
        keys: list[PublishedKey] = []
        entries = lookup.document.get("public_openpgp_keys") if lookup.document else None
        for entry in entries if isinstance(entries, list) else []:
            raw_url = entry.get("url") if isinstance(entry, dict) else None
            if not isinstance(raw_url, str) or not raw_url:
                keys.append(PublishedKey(url="", error="Key entry without url"))
                continue
            fingerprint = entry.get("fingerprint")
            key = PublishedKey(
                url=urljoin(lookup.url, raw_url),
                declared_fingerprint=fingerprint.upper() if isinstance(fingerprint, str) else None,
            )
            fetched = self.fetch(key.url)
            if not fetched.ok:
                key.error = fetched.failure()
            elif not is_armored_public_key(fetched.text):
                key.error = f"{key.url} does not contain an ASCII-armored public key"
            else:
                key.fingerprints = self.keyring().import_key(fetched.text)
                if not key.fingerprints:
                    key.error = f"{key.url} could not be imported as a public key"
            keys.append(key)

        self._keys[domain] = keys
        return keys
