"""Resolución DNS para la convención de descubrimiento por DNS (dnspython)."""

from __future__ import annotations

import logging

import dns.exception
import dns.resolver

logger = logging.getLogger(__name__)


class DNSLookupError(Exception):
    """El nombre no se pudo resolver por un motivo distinto de "no existe"."""


class DNSResolver:
    """Resuelve los registros A/AAAA de un nombre de host."""

    def __init__(self, *, timeout_seconds: float = 5.0, configure: bool = True) -> None:
        self._timeout = float(timeout_seconds)
        self._configure = configure
        self._resolver: dns.resolver.Resolver | None = None

    def _get_resolver(self) -> dns.resolver.Resolver:
        if self._resolver is None:
            resolver = dns.resolver.Resolver(configure=self._configure)
            resolver.timeout = self._timeout
            resolver.lifetime = self._timeout
            self._resolver = resolver
        return self._resolver

    def __call__(self, name: str) -> list[str]:
        """Direcciones de `name`; lista vacía si el nombre no existe."""

        addresses: list[str] = []
        try:
            resolver = self._get_resolver()
            for rtype in ("A", "AAAA"):
                answer = resolver.resolve(name, rtype, raise_on_no_answer=False)
                if answer.rrset:
                    addresses.extend(str(r) for r in answer)
        except dns.resolver.NXDOMAIN:
            logger.debug("%s does not exist", name)
            return []
        except dns.resolver.NoNameservers as exc:
            raise DNSLookupError(f"no name server answered for {name}: {exc}") from exc
        except dns.exception.Timeout as exc:
            raise DNSLookupError(f"timed out resolving {name}") from exc
        except dns.exception.DNSException as exc:
            raise DNSLookupError(f"{type(exc).__name__}: {exc}") from exc
        return addresses
