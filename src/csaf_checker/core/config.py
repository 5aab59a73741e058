"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP/DNS/OpenPGP) lean config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "csaf-checker"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "csaf-checker"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "csaf-checker"
    return Path.home() / ".config" / "csaf-checker"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class CheckerSettings(BaseSettings):
    """Configuración central de una corrida del checker.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) y no dentro de los checks.
    - Un único contrato de configuración para CLI/processor/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="CSAF_CHECKER_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    insecure: bool = Field(
        default=False,
        description="Disable TLS certificate validation (self-signed or broken setups).",
    )
    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout per request (seconds).",
    )
    dns_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        description="Timeout per DNS lookup (seconds).",
    )
    user_agent: str = Field(
        default="csaf-checker/0.1",
        min_length=1,
        description="User-Agent sent with every request.",
    )
    advisory_limit: int = Field(
        default=100,
        ge=0,
        description="Advisories probed per distribution directory (0 = all).",
    )
    gpg_binary: str = Field(
        default="gpg",
        min_length=1,
        description="GnuPG executable used to import keys and verify signatures.",
    )
