"""Requisito 9: el provider metadata se sirve directamente en la URL well-known."""

from __future__ import annotations

from typing import TYPE_CHECKING

from csaf_checker.adapters.checks.base import BaseCheck

if TYPE_CHECKING:
    from csaf_checker.core.services.processor import Processor


class WellknownMetadataCheck(BaseCheck):
    num = 9
    description = "/.well-known/csaf/provider-metadata.json"

    def run(self, processor: Processor, domain: str) -> None:
        lookup = processor.provider_metadata(domain)
        if lookup.fetched.redirected:
            self.add(f"{lookup.url} is only reachable via redirect to {lookup.fetched.final_url}")
        if lookup.error is not None:
            self.add(lookup.error)
