"""Requisito 10: `csaf.data.security.<domain>` sirve el provider metadata."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from csaf_checker.adapters.checks.base import BaseCheck
from csaf_checker.adapters.dns_resolver import DNSLookupError
from csaf_checker.core.services.processor import host_of

if TYPE_CHECKING:
    from csaf_checker.core.services.processor import Processor

DNS_PREFIX = "csaf.data.security."


class DNSPathCheck(BaseCheck):
    num = 10
    description = "DNS path"

    def run(self, processor: Processor, domain: str) -> None:
        name = DNS_PREFIX + host_of(domain)
        try:
            addresses = processor.resolve(name)
        except DNSLookupError as exc:
            self.add(f"Resolving {name} failed: {exc}")
            return
        if not addresses:
            self.add(f"DNS name {name} does not resolve")
            return

        fetched = processor.fetch(f"https://{name}")
        if not fetched.ok:
            self.add(fetched.failure())
            return
        try:
            document = json.loads(fetched.content)
        except (ValueError, RecursionError) as exc:
            self.add(f"https://{name} does not serve JSON: {exc}")
            return

        well_known = processor.provider_metadata(domain)
        if well_known.document is not None and document != well_known.document:
            self.add(f"https://{name} serves a different document than {well_known.url}")
