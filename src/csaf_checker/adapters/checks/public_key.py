"""Requisito 20: el proveedor publica su(s) clave(s) pública(s) OpenPGP."""

from __future__ import annotations

from typing import TYPE_CHECKING

from csaf_checker.adapters.checks.base import BaseCheck

if TYPE_CHECKING:
    from csaf_checker.core.services.processor import Processor


class PublicPGPKeyCheck(BaseCheck):
    num = 20
    description = "Public PGP Key"

    def run(self, processor: Processor, domain: str) -> None:
        lookup = processor.provider_metadata(domain)
        if lookup.document is None:
            self.add(f"No public OpenPGP key found: {lookup.error}")
            return

        keys = processor.openpgp_keys(domain)
        if not keys:
            self.add("No public OpenPGP key listed in provider metadata")
            return

        for key in keys:
            if key.error is not None:
                self.add(key.error)
            elif key.declared_fingerprint and key.declared_fingerprint not in key.fingerprints:
                self.add(f"{key.url} does not contain the key with fingerprint {key.declared_fingerprint}")
