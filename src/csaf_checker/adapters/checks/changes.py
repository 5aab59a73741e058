"""Requisito 13: `changes.csv` existe y es coherente con `index.txt`."""

from __future__ import annotations

import csv
import io
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from csaf_checker.adapters.checks.base import DirectoryCheck

if TYPE_CHECKING:
    from csaf_checker.core.services.processor import AdvisoryDirectory, Processor


def parse_timestamp(value: str) -> datetime:
    """Parsea un timestamp ISO 8601; sin zona horaria se asume UTC."""

    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class ChangesCheck(DirectoryCheck):
    num = 13
    description = "changes.csv"

    def check_directory(self, processor: Processor, directory: AdvisoryDirectory) -> None:
        fetched = processor.fetch(directory.file_url("changes.csv"))
        if not fetched.ok:
            self.add(fetched.failure())
            return

        indexed = set(directory.entries)
        listed: set[str] = set()
        previous: datetime | None = None
        unsorted = False
        reader = csv.reader(io.StringIO(fetched.text))
        try:
            for row in reader:
                lineno = reader.line_num
                if not row:
                    continue
                if len(row) != 2:
                    self.add(f"{fetched.url} line {lineno}: expected 2 columns, got {len(row)}")
                    continue
                path, stamp = (column.strip() for column in row)
                try:
                    changed = parse_timestamp(stamp)
                except ValueError:
                    self.add(f"{fetched.url} line {lineno}: invalid timestamp {stamp!r}")
                    continue
                if previous is not None and changed > previous:
                    unsorted = True
                previous = changed
                listed.add(path)
                if directory.index.ok and path not in indexed:
                    self.add(f"{fetched.url} line {lineno}: {path} is not listed in index.txt")
        except csv.Error as exc:
            # El resto del archivo no se puede leer de forma fiable.
            self.add(f"{fetched.url} line {reader.line_num}: {exc}")
            return

        if unsorted:
            self.add(f"{fetched.url} is not sorted newest first")
        if directory.index.ok:
            for entry in directory.entries:
                if entry not in listed:
                    self.add(f"{entry} is missing from {fetched.url}")
