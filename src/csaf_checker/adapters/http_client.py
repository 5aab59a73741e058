"""Wrapper de httpx con seguimiento de redirecciones y política TLS.

Por qué un wrapper:
- Estandariza timeouts, headers y el modo TLS inseguro para todos los checks.
- Sigue las redirecciones por su cuenta: cada salto pasa por `RedirectTracker`
  antes de tomarse y el límite de saltos vive en un solo lugar.
- Facilita testeo: se puede enchufar un `httpx.MockTransport`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

import httpx

from csaf_checker.core.config import CheckerSettings

logger = logging.getLogger(__name__)

MAX_REDIRECTS = 10


class RedirectTracker:
    """Asocia cada URL alcanzada por redirección con la cadena que llevó a ella.

    Pertenece al processor y se limpia antes de cada dominio.
    """

    def __init__(self, max_redirects: int = MAX_REDIRECTS) -> None:
        self.max_redirects = max_redirects
        self.redirects: dict[str, str] = {}

    def check_redirect(self, request: httpx.Request, via: Sequence[httpx.Request]) -> None:
        """Registra el salto hacia `request`; `via` son las requests ya enviadas, la más antigua primero."""

        target = str(request.url)
        self.redirects[target] = ", ".join(str(v.url) for v in via)
        logger.debug("Redirect %s (hop %d)", target, len(via))

        if len(via) > self.max_redirects:
            raise httpx.TooManyRedirects("Too many redirections", request=request)

    def clear(self) -> None:
        self.redirects.clear()


class CheckerClient:
    """Cliente HTTP síncrono que informa cada redirección a un tracker."""

    def __init__(self, client: httpx.Client, tracker: RedirectTracker) -> None:
        self._client = client
        self._tracker = tracker

    @property
    def tracker(self) -> RedirectTracker:
        return self._tracker

    def get(self, url: str) -> httpx.Response:
        """GET de `url`, siguiendo las redirecciones a través del tracker.

        Los errores de transporte (DNS, conexiones rechazadas, handshakes TLS,
        timeouts, `TooManyRedirects`) se propagan sin cambios.
        """

        request = self._client.build_request("GET", url)
        via: list[httpx.Request] = []
        while True:
            logger.debug("GET %s", request.url)
            response = self._client.send(request, follow_redirects=False)
            next_request = response.next_request
            if next_request is None:
                return response
            response.close()
            via.append(request)
            self._tracker.check_redirect(next_request, via)
            request = next_request

    def close(self) -> None:
        self._client.close()


def build_client(
    settings: CheckerSettings | None = None,
    *,
    tracker: RedirectTracker,
    transport: httpx.BaseTransport | None = None,
) -> CheckerClient:
    """Crea el cliente que usan todos los checks de un processor.

    Por qué un builder:
    - Todos los checks comparten timeouts, headers y política TLS.
    - `settings.insecure` es la única forma de desactivar la validación de certificados.
    """

    settings = settings or CheckerSettings()
    if settings.insecure:
        logger.warning("TLS certificate validation is disabled (insecure mode)")

    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json, text/plain;q=0.9, */*;q=0.8",
    }
    client = httpx.Client(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=False,
        headers=headers,
        verify=not settings.insecure,
        transport=transport,
    )
    return CheckerClient(client, tracker)


def negotiated_tls_version(response: httpx.Response) -> str | None:
    """Versión TLS de la conexión que sirvió `response`, si se conoce."""

    stream = response.extensions.get("network_stream")
    if stream is None:
        return None
    try:
        ssl_object = stream.get_extra_info("ssl_object")
    except Exception:  # pragma: no cover - depende del backend
        return None
    if ssl_object is None:
        return None
    return ssl_object.version()


@dataclass
class FetchResult:
    """Resultado de un GET, reducido a lo que necesitan los checks."""

    url: str
    status_code: int | None = None
    content: bytes = b""
    final_url: str | None = None
    headers: dict[str, str] = field(default_factory=dict)
    tls_version: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.status_code == 200

    @property
    def redirected(self) -> bool:
        return self.final_url is not None and self.final_url != self.url

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")

    def failure(self) -> str:
        """Motivo legible por el que el fetch no es utilizable."""

        if self.error is not None:
            return f"Fetching {self.url} failed: {self.error}"
        return f"Fetching {self.url} returned HTTP {self.status_code}"
