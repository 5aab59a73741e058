"""Requisito 3: el sitio se sirve por TLS con un protocolo aceptable."""

from __future__ import annotations

from typing import TYPE_CHECKING
from urllib.parse import urlsplit

from csaf_checker.adapters.checks.base import BaseCheck

if TYPE_CHECKING:
    from csaf_checker.core.services.processor import Processor

WEAK_PROTOCOLS = frozenset({"SSLv2", "SSLv3", "TLSv1", "TLSv1.1"})


class TLSCheck(BaseCheck):
    num = 3
    description = "Usage of TLS"

    def run(self, processor: Processor, domain: str) -> None:
        lookup = processor.provider_metadata(domain)
        if urlsplit(lookup.url).scheme != "https":
            self.add(f"{lookup.url} is not served over https")
            return

        fetched = lookup.fetched
        if fetched.error is not None:
            self.add(f"TLS connection to {lookup.url} failed: {fetched.error}")
            return
        if fetched.final_url and urlsplit(fetched.final_url).scheme != "https":
            self.add(f"{lookup.url} redirects to unencrypted {fetched.final_url}")
        if fetched.tls_version in WEAK_PROTOCOLS:
            self.add(f"{lookup.url} negotiated outdated protocol {fetched.tls_version}")
