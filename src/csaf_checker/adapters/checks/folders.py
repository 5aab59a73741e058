"""Requisito 11: los advisories viven en una carpeta por año de publicación inicial."""

from __future__ import annotations

import json
import re
from typing import TYPE_CHECKING

from csaf_checker.adapters.checks.base import DirectoryCheck

if TYPE_CHECKING:
    from csaf_checker.core.services.processor import AdvisoryDirectory, Processor

YEAR_FOLDER = re.compile(r"^\d{4}$")


def initial_release_year(content: bytes) -> str | None:
    """Año de `document.tracking.initial_release_date`, si el advisory lo tiene."""

    try:
        document = json.loads(content)
        date = document["document"]["tracking"]["initial_release_date"]
    except (ValueError, RecursionError, KeyError, TypeError):
        return None
    if not isinstance(date, str) or len(date) < 4:
        return None
    return date[:4]


class OneFolderPerYearCheck(DirectoryCheck):
    num = 11
    description = "One folder per year"

    def check_directory(self, processor: Processor, directory: AdvisoryDirectory) -> None:
        in_year_folders: list[str] = []
        for entry in directory.entries:
            parts = entry.split("/")
            if len(parts) != 2 or not YEAR_FOLDER.match(parts[0]):
                self.add(f"{directory.file_url(entry)} is not in a folder named after a year")
            else:
                in_year_folders.append(entry)

        for entry in processor.limit(in_year_folders):
            fetched = processor.fetch(directory.file_url(entry))
            if not fetched.ok:
                continue
            year = initial_release_year(fetched.content)
            folder = entry.split("/", 1)[0]
            if year is not None and year != folder:
                self.add(f"{directory.file_url(entry)} was initially released in {year} but is stored in {folder}/")
