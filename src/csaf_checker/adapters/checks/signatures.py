"""Requisito 19: los advisories llevan firmas OpenPGP separadas y válidas."""

from __future__ import annotations

from typing import TYPE_CHECKING

from csaf_checker.adapters.checks.base import DirectoryCheck

if TYPE_CHECKING:
    from csaf_checker.core.services.processor import AdvisoryDirectory, Processor


class SignaturesCheck(DirectoryCheck):
    num = 19
    description = "Signatures"

    def __init__(self) -> None:
        super().__init__()
        self._verify = False

    def run(self, processor: Processor, domain: str) -> None:
        self._verify = any(key.fingerprints for key in processor.openpgp_keys(domain))
        if not self._verify:
            self.add("No usable public OpenPGP key to verify signatures with")
        super().run(processor, domain)

    def check_directory(self, processor: Processor, directory: AdvisoryDirectory) -> None:
        for entry in processor.limit(directory.entries):
            url = directory.file_url(entry)
            advisory = processor.fetch(url)
            if not advisory.ok:
                continue
            signature = processor.fetch(f"{url}.asc")
            if not signature.ok:
                self.add(f"No signature for {url}: {signature.failure()}")
                continue
            if not self._verify:
                continue
            verification = processor.keyring().verify(signature.content, advisory.content)
            if not verification.valid:
                self.add(f"Invalid signature for {url}: {verification.status or 'unknown status'}")

    def reset(self) -> None:
        super().reset()
        self._verify = False
