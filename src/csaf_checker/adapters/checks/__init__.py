"""Checks concretos.

Por qué un paquete:
- Un módulo por requisito.
- Cada módulo implementa `csaf_checker.core.interfaces.check.Check`.
"""

from __future__ import annotations

from typing import Iterable

from csaf_checker.adapters.checks.base import BaseCheck
from csaf_checker.adapters.checks.changes import ChangesCheck
from csaf_checker.adapters.checks.dns_path import DNSPathCheck
from csaf_checker.adapters.checks.folders import OneFolderPerYearCheck
from csaf_checker.adapters.checks.index import IndexCheck
from csaf_checker.adapters.checks.integrity import IntegrityCheck
from csaf_checker.adapters.checks.listings import DirectoryListingsCheck
from csaf_checker.adapters.checks.provider_metadata import ProviderMetadataCheck
from csaf_checker.adapters.checks.public_key import PublicPGPKeyCheck
from csaf_checker.adapters.checks.redirects import RedirectsCheck
from csaf_checker.adapters.checks.security import SecurityCheck
from csaf_checker.adapters.checks.signatures import SignaturesCheck
from csaf_checker.adapters.checks.tls import TLSCheck
from csaf_checker.adapters.checks.wellknown import WellknownMetadataCheck
from csaf_checker.core.errors import InvalidInputError

ALL_CHECKS: tuple[type[BaseCheck], ...] = (
    TLSCheck,
    RedirectsCheck,
    ProviderMetadataCheck,
    SecurityCheck,
    WellknownMetadataCheck,
    DNSPathCheck,
    OneFolderPerYearCheck,
    IndexCheck,
    ChangesCheck,
    DirectoryListingsCheck,
    IntegrityCheck,
    SignaturesCheck,
    PublicPGPKeyCheck,
)


def build_checks(only: Iterable[int] | None = None) -> list[BaseCheck]:
    """Instancias nuevas de los checks en orden de requisito, opcionalmente limitadas a `only`."""

    if only is None:
        return [check() for check in ALL_CHECKS]

    wanted = set(only)
    known = {check.num for check in ALL_CHECKS}
    unknown = sorted(wanted - known)
    if unknown:
        raise InvalidInputError(f"Unknown requirement number(s): {', '.join(map(str, unknown))}")
    return [check() for check in ALL_CHECKS if check.num in wanted]


__all__ = [
    "ALL_CHECKS",
    "BaseCheck",
    "ChangesCheck",
    "DNSPathCheck",
    "DirectoryListingsCheck",
    "IndexCheck",
    "IntegrityCheck",
    "OneFolderPerYearCheck",
    "ProviderMetadataCheck",
    "PublicPGPKeyCheck",
    "RedirectsCheck",
    "SecurityCheck",
    "SignaturesCheck",
    "TLSCheck",
    "WellknownMetadataCheck",
    "build_checks",
]
