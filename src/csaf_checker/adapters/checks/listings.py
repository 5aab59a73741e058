"""Requisito 14: ninguna carpeta de distribución expone un listado automático."""

from __future__ import annotations

from typing import TYPE_CHECKING

from bs4 import BeautifulSoup

from csaf_checker.adapters.checks.base import DirectoryCheck
from csaf_checker.adapters.http_client import FetchResult

if TYPE_CHECKING:
    from csaf_checker.core.services.processor import AdvisoryDirectory, Processor

LISTING_MARKERS = ("index of", "directory listing")


def looks_like_listing(fetched: FetchResult) -> bool:
    """Heurística: página HTML cuyo título o primer encabezado parece un autoindex."""

    content_type = fetched.headers.get("content-type", "")
    if "html" not in content_type.lower() and not fetched.text.lstrip().startswith("<"):
        return False

    soup = BeautifulSoup(fetched.text, "html.parser")
    candidates: list[str] = []
    if soup.title and soup.title.string:
        candidates.append(soup.title.string)
    heading = soup.find("h1")
    if heading:
        candidates.append(heading.get_text())
    return any(c.strip().lower().startswith(LISTING_MARKERS) for c in candidates)


class DirectoryListingsCheck(DirectoryCheck):
    num = 14
    description = "Directory listings"

    def check_directory(self, processor: Processor, directory: AdvisoryDirectory) -> None:
        folders = sorted({entry.split("/", 1)[0] for entry in directory.entries if "/" in entry})
        for url in [directory.url, *(directory.file_url(f"{folder}/") for folder in folders)]:
            fetched = processor.fetch(url)
            if fetched.ok and looks_like_listing(fetched):
                self.add(f"{url} exposes a directory listing")
