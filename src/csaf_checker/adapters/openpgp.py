"""Keyring OpenPGP sobre GnuPG (python-gnupg).

Cada keyring vive en su propio home temporal de GnuPG: las claves importadas
para un dominio nunca verifican firmas de otro.
"""

from __future__ import annotations

import logging
import tempfile
from dataclasses import dataclass
from pathlib import Path

import gnupg

from csaf_checker.core.errors import KeyringError

logger = logging.getLogger(__name__)

ARMOR_HEADER = "-----BEGIN PGP PUBLIC KEY BLOCK-----"


@dataclass
class Verification:
    valid: bool
    fingerprint: str | None = None
    status: str | None = None


class Keyring:
    """Keyring GnuPG temporal."""

    def __init__(self, *, gpg_binary: str = "gpg") -> None:
        self._home = tempfile.TemporaryDirectory(prefix="csaf-checker-gnupg-")
        try:
            self._gpg = gnupg.GPG(gnupghome=self._home.name, gpgbinary=gpg_binary)
        except (OSError, ValueError) as exc:
            self._home.cleanup()
            raise KeyringError(f"GnuPG is not usable ({gpg_binary}): {exc}") from exc

    def import_key(self, armored: str) -> list[str]:
        """Importa una clave pública armored y devuelve los fingerprints que contenía."""

        result = self._gpg.import_keys(armored)
        fingerprints = [fp.upper() for fp in result.fingerprints if fp]
        logger.debug("Imported %d key(s)", len(fingerprints))
        return fingerprints

    def verify(self, signature: bytes, data: bytes) -> Verification:
        """Verifica una firma separada sobre `data`."""

        sig_path = Path(self._home.name) / "detached.asc"
        sig_path.write_bytes(signature)
        try:
            verified = self._gpg.verify_data(str(sig_path), data)
        finally:
            sig_path.unlink(missing_ok=True)
        fingerprint = verified.fingerprint.upper() if verified.fingerprint else None
        return Verification(valid=bool(verified.valid), fingerprint=fingerprint, status=verified.status)

    def close(self) -> None:
        self._home.cleanup()


def is_armored_public_key(text: str) -> bool:
    return ARMOR_HEADER in text
