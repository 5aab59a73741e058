"""Requisito 12: cada directorio de distribución publica un `index.txt` coherente."""

from __future__ import annotations

from typing import TYPE_CHECKING

from csaf_checker.adapters.checks.base import DirectoryCheck

if TYPE_CHECKING:
    from csaf_checker.core.services.processor import AdvisoryDirectory, Processor


class IndexCheck(DirectoryCheck):
    num = 12
    description = "index.txt"

    def check_directory(self, processor: Processor, directory: AdvisoryDirectory) -> None:
        index = directory.index
        if not index.ok:
            self.add(index.failure())
            return
        if not directory.entries:
            self.add(f"{index.url} is empty")
            return

        for entry in directory.entries:
            if not entry.endswith(".json"):
                self.add(f"{index.url} lists {entry}, which is not a JSON file")

        for entry in processor.limit(directory.entries):
            fetched = processor.fetch(directory.file_url(entry))
            if not fetched.ok:
                self.add(f"{entry} is listed in {index.url} but not retrievable: {fetched.failure()}")
