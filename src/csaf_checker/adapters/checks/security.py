"""Requisito 8: `security.txt` anuncia el provider metadata con campos `CSAF:`."""

from __future__ import annotations

from typing import TYPE_CHECKING

from csaf_checker.adapters.checks.base import BaseCheck
from csaf_checker.core.services.processor import base_url

if TYPE_CHECKING:
    from csaf_checker.core.services.processor import Processor

LOCATIONS = ("/.well-known/security.txt", "/security.txt")


def csaf_fields(text: str) -> list[str]:
    """Valores de todos los campos `CSAF:` de un security.txt, en orden de aparición."""

    values: list[str] = []
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or ":" not in line:
            continue
        key, value = line.split(":", 1)
        if key.strip().lower() == "csaf":
            values.append(value.strip())
    return values


class SecurityCheck(BaseCheck):
    num = 8
    description = "security.txt"

    def run(self, processor: Processor, domain: str) -> None:
        failures: list[str] = []
        for path in LOCATIONS:
            fetched = processor.fetch(base_url(domain) + path)
            if fetched.ok:
                break
            failures.append(fetched.failure())
        else:
            for failure in failures:
                self.add(failure)
            return

        values = csaf_fields(fetched.text)
        if not values:
            self.add(f"No CSAF field in {fetched.url}")
        for value in values:
            if not value.startswith("https://"):
                self.add(f"CSAF field {value} is not an https URL")
            elif not value.endswith("provider-metadata.json"):
                self.add(f"CSAF field {value} does not point to a provider-metadata.json")
