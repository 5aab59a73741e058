"""Requisito 7: `provider-metadata.json` existe, se puede parsear y es coherente."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import ValidationError

from csaf_checker.adapters.checks.base import BaseCheck
from csaf_checker.core.domain.provider_metadata import ProviderMetadata

if TYPE_CHECKING:
    from csaf_checker.core.services.processor import Processor


def format_validation_error(exc: ValidationError) -> list[str]:
    """Una línea por campo inválido: `ubicación: mensaje`."""

    lines: list[str] = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "document"
        lines.append(f"{location}: {error['msg']}")
    return lines


class ProviderMetadataCheck(BaseCheck):
    num = 7
    description = "provider-metadata.json"

    def run(self, processor: Processor, domain: str) -> None:
        lookup = processor.provider_metadata(domain)
        if lookup.document is None:
            self.add(lookup.error or f"No provider metadata found at {lookup.url}")
            return

        try:
            metadata = ProviderMetadata.model_validate(lookup.document)
        except ValidationError as exc:
            for line in format_validation_error(exc):
                self.add(f"Invalid provider metadata: {line}")
            return

        served_at = lookup.fetched.final_url or lookup.url
        if metadata.canonical_url != served_at:
            self.add(f"canonical_url {metadata.canonical_url} differs from the URL it was served at ({served_at})")

        directories = [d.directory_url for d in metadata.distributions if d.directory_url]
        if metadata.role in ("csaf_provider", "csaf_trusted_provider") and not metadata.distributions:
            self.add(f"Role {metadata.role} requires at least one distribution")
        for directory_url in directories:
            if not directory_url.startswith("https://"):
                self.add(f"Distribution directory {directory_url} is not an https URL")

        if metadata.role == "csaf_trusted_provider" and not metadata.public_openpgp_keys:
            self.add("Role csaf_trusted_provider requires public_openpgp_keys")
