"""Requisito 18: los hashes publicados coinciden con sus advisories."""

from __future__ import annotations

import hashlib
from typing import TYPE_CHECKING

from csaf_checker.adapters.checks.base import DirectoryCheck

if TYPE_CHECKING:
    from csaf_checker.core.services.processor import AdvisoryDirectory, Processor

ALGORITHMS = ("sha256", "sha512")


class IntegrityCheck(DirectoryCheck):
    num = 18
    description = "Integrity"

    def check_directory(self, processor: Processor, directory: AdvisoryDirectory) -> None:
        for entry in processor.limit(directory.entries):
            url = directory.file_url(entry)
            advisory = processor.fetch(url)
            if not advisory.ok:
                continue

            found = False
            for algorithm in ALGORITHMS:
                hashed = processor.fetch(f"{url}.{algorithm}")
                if not hashed.ok:
                    continue
                found = True
                tokens = hashed.text.split()
                if not tokens:
                    self.add(f"{hashed.url} is empty")
                    continue
                if tokens[0].lower() != hashlib.new(algorithm, advisory.content).hexdigest():
                    self.add(f"{algorithm} of {url} does not match {hashed.url}")
                filename = entry.rsplit("/", 1)[-1]
                if len(tokens) > 1 and tokens[1].lstrip("*") != filename:
                    self.add(f"{hashed.url} names {tokens[1]} instead of {filename}")

            if not found:
                self.add(f"No .sha256 or .sha512 file for {url}")
