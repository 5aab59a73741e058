"""Requisito 6: se informa cada redirección tomada al sondear un dominio."""

from __future__ import annotations

from typing import TYPE_CHECKING

from csaf_checker.adapters.checks.base import BaseCheck
from csaf_checker.core.domain.models import Domain
from csaf_checker.core.services.processor import base_url, host_of

if TYPE_CHECKING:
    from csaf_checker.core.services.processor import Processor


def plain_http_entry_point(domain: str) -> str:
    """URL `http://.../.well-known/csaf` sin cifrar del dominio.

    Un origen `http://` explícito conserva su puerto; cualquier otro origen
    se prueba en el puerto 80.
    """

    origin = base_url(domain)
    if not origin.startswith("http://"):
        origin = f"http://{host_of(domain)}"
    return f"{origin}/.well-known/csaf"


class RedirectsCheck(BaseCheck):
    num = 6
    description = "Redirects"

    def run(self, processor: Processor, domain: str) -> None:
        processor.fetch(plain_http_entry_point(domain))

    def report(self, processor: Processor, domain: Domain) -> None:
        redirects = processor.redirects
        self.messages = [f"Redirect {target}: {redirects[target]}" for target in sorted(redirects)]
        super().report(processor, domain)
