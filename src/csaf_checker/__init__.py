"""Verificador de sitios de distribución CSAF (trusted providers)."""

__version__ = "0.1.0"
